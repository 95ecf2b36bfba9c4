"""
Test Suite for the Settlement Engine
====================================
Scenarios:
- A: 10 on Straight(17), ball on 17  -> won 350, lost 0
- B: 10 on Red, ball on 22 (black)   -> won 0, lost 10
- C: 5 on Dozen(1) + 5 on Column(2), ball on 5 -> won 20, lost 0
Properties:
- every wager appears once, as either win or loss
- settle() is pure and idempotent
"""

import random

from engine.roulette_rules import (
    BetCategory, Wager, RED, BLACK, EVEN, ODD, LOW, HIGH,
    settle, is_winner, payout_multiplier
)
from engine.wheel import Outcome


def make_wagers(*pairs):
    return [Wager(wager_id=f"R1-{i + 1}", round_no=1, category=cat, stake=stake)
            for i, (cat, stake) in enumerate(pairs)]


def test_scenario_a_straight_hit():
    result = settle(make_wagers((BetCategory.straight(17), 10)), Outcome(17))
    assert result.total_won == 350
    assert result.total_lost == 0
    assert result.wagers[0].won and result.wagers[0].payout == 350


def test_scenario_b_red_on_black():
    result = settle(make_wagers((RED, 10)), Outcome(22))
    assert result.total_won == 0
    assert result.total_lost == 10
    assert not result.wagers[0].won and result.wagers[0].payout == 0


def test_scenario_c_dozen_and_column():
    wagers = make_wagers((BetCategory.dozen(1), 5), (BetCategory.column(2), 5))
    result = settle(wagers, Outcome(5))
    assert [w.payout for w in result.wagers] == [10, 10]
    assert result.total_won == 20
    assert result.total_lost == 0
    assert result.net == 20


def test_zero_sweeps_outside_bets():
    wagers = make_wagers((RED, 10), (BLACK, 10), (EVEN, 5), (ODD, 5), (LOW, 1), (HIGH, 1),
                         (BetCategory.straight(0), 2))
    result = settle(wagers, Outcome(0))
    assert result.total_won == 70
    assert result.total_lost == 32
    assert len(result.winning_wagers) == 1


def test_settlement_does_not_touch_wagers():
    wagers = make_wagers((RED, 10))
    settle(wagers, Outcome(1))
    assert wagers[0].payout is None


def test_conservation_and_idempotence_random_tables():
    print("\n" + "="*70)
    print("TEST: Conservation over random tables")
    print("="*70)

    rng = random.Random(1234)
    cats = ([BetCategory.straight(p) for p in range(37)] + [RED, BLACK, EVEN, ODD, LOW, HIGH]
            + [BetCategory.dozen(k) for k in (1, 2, 3)] + [BetCategory.column(k) for k in (1, 2, 3)])

    for trial in range(300):
        pairs = [(rng.choice(cats), rng.choice([1, 5, 10, 25])) for _ in range(rng.randint(0, 12))]
        wagers = make_wagers(*pairs)
        outcome = Outcome(rng.randint(0, 36))
        result = settle(wagers, outcome)

        # every wager exactly once, in order
        assert [s.wager_id for s in result.wagers] == [w.wager_id for w in wagers]

        expected_won = sum(w.stake * payout_multiplier(w.category) for w in wagers if is_winner(w, outcome))
        expected_lost = sum(w.stake for w in wagers if not is_winner(w, outcome))
        assert result.total_won == expected_won
        assert result.total_lost == expected_lost
        assert sum(s.stake for s in result.losing_wagers) == result.total_lost
        assert result.total_staked == sum(w.stake for w in wagers)

        assert settle(wagers, outcome) == result

    print("✓ 300 random tables reconciled")


def test_empty_wager_set():
    result = settle([], Outcome(12))
    assert result.wagers == ()
    assert result.total_won == 0 and result.total_lost == 0


if __name__ == "__main__":
    test_scenario_a_straight_hit()
    test_scenario_b_red_on_black()
    test_scenario_c_dozen_and_column()
    test_zero_sweeps_outside_bets()
    test_settlement_does_not_touch_wagers()
    test_conservation_and_idempotence_random_tables()
    test_empty_wager_set()
