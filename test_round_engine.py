"""
Test Suite for the Round State Machine
======================================
OPEN -> spin() -> RESOLVING -> reveal() -> OPEN

- D: balance 100, bet 150          -> InsufficientFunds, balance stays 100
- E: spin() with nothing on felt   -> InvalidRoundState, still OPEN
- stakes leave on spin, winnings arrive on reveal
- no bets, spins or reveals out of phase
- balance never negative over long random sessions
- wagers, history and the ledger journal stay inside the history window
"""

import dataclasses
import random

import pytest

from engine.exceptions import InsufficientFunds, InvalidRoundState, InvalidStake, InvalidBetCategory, TopUpNotAllowed
from engine.roulette_rules import BetCategory, RED, BLACK, EVEN
from engine.round_engine import RouletteTable, RoundPhase
from engine.table_params import TableParams
from engine.wheel import Outcome


class ScriptedWheel:
    """Outcome source that lands on a fixed list of pockets"""
    def __init__(self, *pockets):
        self.pockets = list(pockets)
        self.draws = 0

    def draw(self):
        self.draws += 1
        return Outcome(self.pockets.pop(0))


def create_table(balance=1000, *pockets, **params):
    return RouletteTable(TableParams(starting_balance=balance, **params), outcome_source=ScriptedWheel(*pockets))


def test_scenario_d_insufficient_funds():
    table = create_table(100)
    with pytest.raises(InsufficientFunds):
        table.place_bet(RED, 150)
    assert table.current_balance() == 100
    assert table.active_wagers == []


def test_scenario_e_spin_without_wagers():
    table = create_table(100, 5)
    with pytest.raises(InvalidRoundState):
        table.spin()
    assert table.phase == RoundPhase.OPEN
    assert table.outcome_source.draws == 0
    assert table.current_balance() == 100


def test_last_settlement_starts_empty():
    table = create_table(1000, 0)
    assert table.last_outcome is None
    assert table.last_settlement is None


def test_full_round_straight_hit():
    print("\n" + "="*70)
    print("TEST: Full round, straight up on 17")
    print("="*70)

    table = create_table(1000, 17)
    wager = table.place_bet(BetCategory.straight(17), 10)
    assert wager.round_no == 1 and wager.payout is None
    assert table.current_balance() == 1000  # placement does not move money

    outcome = table.spin()
    assert outcome.pocket == 17
    assert table.phase == RoundPhase.RESOLVING
    assert table.current_balance() == 990

    settlement = table.reveal()
    assert settlement.total_won == 350
    assert settlement.total_lost == 0
    assert table.current_balance() == 1340
    assert wager.payout == 350

    assert table.phase == RoundPhase.OPEN
    assert table.round_no == 2
    assert table.active_wagers == []
    assert table.last_outcome == Outcome(17)
    assert table.last_settlement is settlement
    assert table.ledger.reconciled
    print(f"  Balance after round: €{table.current_balance()}")


def test_losing_round_keeps_stake():
    table = create_table(100, 22)
    table.place_bet(RED, 10)
    table.spin()
    settlement = table.reveal()
    assert settlement.total_lost == 10
    assert table.current_balance() == 90


def test_cumulative_stake_is_checked():
    table = create_table(100)
    table.place_bet(RED, 50)
    table.place_bet(BLACK, 50)
    with pytest.raises(InsufficientFunds):
        table.place_bet(EVEN, 1)
    assert table.pending_stake == 100
    assert len(table.active_wagers) == 2


def test_no_bets_once_locked():
    table = create_table(1000, 3)
    table.place_bet(RED, 10)
    table.spin()
    with pytest.raises(InvalidRoundState):
        table.place_bet(BLACK, 10)
    with pytest.raises(InvalidRoundState):
        table.clear_bets()
    with pytest.raises(InvalidRoundState):
        table.spin()
    assert len(table.active_wagers) == 1
    assert table.outcome_source.draws == 1


def test_reveal_only_once():
    table = create_table(1000, 3)
    with pytest.raises(InvalidRoundState):
        table.reveal()
    table.place_bet(RED, 10)
    table.spin()
    settlement = table.reveal()
    with pytest.raises(InvalidRoundState):
        table.reveal()
    assert len(table.history) == 1
    assert settlement.total_won == 10
    # Winnings only: the 10 staked left at spin and does not come back
    assert table.current_balance() == 1000


def test_stake_validation():
    table = create_table(1000, chip_values=(5, 25))
    for bad in (0, -5, 3, 7.5, '10', True):
        with pytest.raises(InvalidStake):
            table.place_bet(RED, bad)
    table.place_bet(RED, 5)
    table.place_bet(RED, 50)
    with pytest.raises(InvalidBetCategory):
        table.place_bet('straight_99', 5)
    assert table.stake_on(RED) == 55


def test_grid_helpers_and_clear():
    table = create_table(30)
    table.place_bet('straight_0', 10)
    table.place_bet(BetCategory.straight(0), 5)
    table.place_bet(RED, 5)
    assert table.stake_on(BetCategory.straight(0)) == 15
    assert table.stakes_by_cell() == {'straight_0': 15, 'red': 5}
    assert table.affordable_chips() == [1, 5, 10, 25]

    assert table.clear_bets() == 20
    assert table.active_wagers == []
    assert table.current_balance() == 30


def test_top_up_rules():
    table = create_table(150, 22)
    with pytest.raises(TopUpNotAllowed) as err:
        table.top_up()
    assert err.value.balance == 150
    assert err.value.threshold == 100
    assert table.current_balance() == 150

    table.place_bet(RED, 100)
    table.spin()
    with pytest.raises(InvalidRoundState):
        table.top_up()
    table.reveal()
    assert table.current_balance() == 50
    assert table.can_top_up

    table.top_up()
    assert table.current_balance() == 550
    assert len(table.history) == 1
    assert table.history.latest.total_won == 0


def test_balance_never_negative_over_long_session():
    print("\n" + "="*70)
    print("TEST: 2000 random rounds")
    print("="*70)

    rng = random.Random(99)
    table = RouletteTable(TableParams(starting_balance=200), seed=99)
    cats = [BetCategory.straight(p) for p in range(37)] + [RED, BLACK, EVEN,
            BetCategory.dozen(2), BetCategory.column(3)]

    for _ in range(2000):
        for _ in range(rng.randint(1, 5)):
            chip = rng.choice(table.params.chip_values)
            try:
                table.place_bet(rng.choice(cats), chip)
            except InsufficientFunds:
                pass
            assert table.current_balance() >= 0
        if not table.active_wagers:
            if table.can_top_up:
                table.top_up()
            continue
        table.spin()
        assert table.current_balance() >= 0
        settlement = table.reveal()
        assert table.current_balance() >= 0
        assert len(settlement.wagers) == len(table.wagers_for_round(table.round_no - 1))

    assert table.ledger.reconciled
    assert len(table.history) == 100
    print(f"  Rounds played: {table.round_no - 1} | Final balance: €{table.current_balance()}")



def test_wager_is_frozen_after_placement():
    table = create_table(1000, 5)
    wager = table.place_bet(RED, 10)
    with pytest.raises(dataclasses.FrozenInstanceError):
        wager.stake = 99
    with pytest.raises(dataclasses.FrozenInstanceError):
        wager.category = BLACK
    assert table.pending_stake == 10

    table.spin()
    table.reveal()
    assert wager.is_settled and wager.payout == 10
    with pytest.raises(AssertionError):
        wager.mark_settled(0)
    assert wager.payout == 10


def test_wagers_kept_for_every_round_history_shows():
    table = create_table(1000, *range(1, 7), history_limit=5)
    for _ in range(5):
        table.place_bet(RED, 10)
        table.spin()
        table.reveal()

    # Five rounds played, all five still on show
    assert table.recent_history(10)[-1].sequence_id == 1
    assert len(table.wagers_for_round(1)) == 1

    table.place_bet(RED, 10)
    table.spin()
    table.reveal()
    assert table.recent_history(10)[-1].sequence_id == 2
    assert table.wagers_for_round(1) == []
    assert len(table.wagers_for_round(2)) == 1


def test_ledger_journal_bounded_over_long_session():
    table = create_table(1000, *([0] * 50), history_limit=10)
    for _ in range(50):
        table.place_bet(BetCategory.straight(0), 1)
        table.spin()
        table.reveal()

    assert len(table.ledger.entries) == 20
    assert table.ledger.entries[-1].round_no == 50
    assert table.current_balance() == 1000 + 50 * 34
    assert table.ledger.reconciled
    assert len(table.history) == 10


if __name__ == "__main__":
    test_last_settlement_starts_empty()
    test_scenario_d_insufficient_funds()
    test_scenario_e_spin_without_wagers()
    test_full_round_straight_hit()
    test_losing_round_keeps_stake()
    test_cumulative_stake_is_checked()
    test_no_bets_once_locked()
    test_reveal_only_once()
    test_stake_validation()
    test_grid_helpers_and_clear()
    test_top_up_rules()
    test_balance_never_negative_over_long_session()
    test_wager_is_frozen_after_placement()
    test_wagers_kept_for_every_round_history_shows()
    test_ledger_journal_bounded_over_long_session()
