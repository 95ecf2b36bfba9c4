from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Optional, Tuple, Union

from engine.exceptions import InvalidBetCategory
from engine.wheel import MAX_POCKET, Outcome, PocketColor, is_valid_pocket


class BetKind(Enum):
    # Inside
    STRAIGHT = auto()
    # Even money
    RED = auto()
    BLACK = auto()
    EVEN = auto()
    ODD = auto()
    LOW = auto()
    HIGH = auto()
    # 2 to 1
    DOZEN = auto()
    COLUMN = auto()


# Payout Table ("to 1": winnings only, the stake is not part of it)
PAYOUT_MULTIPLIERS = {
    BetKind.STRAIGHT: 35,
    BetKind.RED: 1,
    BetKind.BLACK: 1,
    BetKind.EVEN: 1,
    BetKind.ODD: 1,
    BetKind.LOW: 1,
    BetKind.HIGH: 1,
    BetKind.DOZEN: 2,
    BetKind.COLUMN: 2,
}

_INDEXED_KINDS = (BetKind.DOZEN, BetKind.COLUMN)


@dataclass(frozen=True)
class BetCategory:
    """
    A cell on the felt.

    `number` is the pocket for STRAIGHT, the 1-3 index for DOZEN and COLUMN,
    and None for every even-money bet.
    """
    kind: BetKind
    number: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.kind, BetKind):
            raise InvalidBetCategory(f"Unknown bet kind {self.kind!r}")

        if self.kind == BetKind.STRAIGHT:
            if not is_valid_pocket(self.number):
                raise InvalidBetCategory(f"Straight pocket {self.number!r} out of range 0-{MAX_POCKET}")
        elif self.kind in _INDEXED_KINDS:
            if type(self.number) is not int or self.number not in (1, 2, 3):
                raise InvalidBetCategory(f"{self.kind.name.title()} index {self.number!r} must be 1, 2 or 3")
        elif self.number is not None:
            raise InvalidBetCategory(f"{self.kind.name.title()} bet takes no number, got {self.number!r}")

    # --- Constructors ---

    @classmethod
    def straight(cls, pocket: int) -> "BetCategory":
        return cls(BetKind.STRAIGHT, pocket)

    @classmethod
    def dozen(cls, index: int) -> "BetCategory":
        return cls(BetKind.DOZEN, index)

    @classmethod
    def column(cls, index: int) -> "BetCategory":
        return cls(BetKind.COLUMN, index)

    @classmethod
    def from_key(cls, key: str) -> "BetCategory":
        """Parse a grid key such as 'straight_17', 'red' or 'dozen_2'."""
        if not isinstance(key, str) or not key:
            raise InvalidBetCategory(f"Bad bet key {key!r}")
        name, _, raw_number = key.partition('_')
        try:
            kind = BetKind[name.upper()]
        except KeyError:
            raise InvalidBetCategory(f"Unknown bet key {key!r}") from None

        number = None
        if raw_number:
            try:
                number = int(raw_number)
            except ValueError:
                raise InvalidBetCategory(f"Bad number in bet key {key!r}") from None
        return cls(kind, number)

    @property
    def key(self) -> str:
        if self.number is None:
            return self.kind.name.lower()
        return f"{self.kind.name.lower()}_{self.number}"

    @property
    def label(self) -> str:
        if self.kind == BetKind.STRAIGHT:
            return str(self.number)
        if self.kind == BetKind.LOW:
            return '1-18'
        if self.kind == BetKind.HIGH:
            return '19-36'
        if self.kind == BetKind.DOZEN:
            return f"{12 * (self.number - 1) + 1}-{12 * self.number}"
        if self.kind == BetKind.COLUMN:
            return f"Col {self.number}"
        return self.kind.name.title()

    def __str__(self):
        return self.key


RED = BetCategory(BetKind.RED)
BLACK = BetCategory(BetKind.BLACK)
EVEN = BetCategory(BetKind.EVEN)
ODD = BetCategory(BetKind.ODD)
LOW = BetCategory(BetKind.LOW)
HIGH = BetCategory(BetKind.HIGH)

OUTSIDE_EVEN_MONEY = (RED, BLACK, EVEN, ODD, LOW, HIGH)
DOZENS = tuple(BetCategory.dozen(k) for k in (1, 2, 3))
COLUMNS = tuple(BetCategory.column(k) for k in (1, 2, 3))


@dataclass(frozen=True)
class Wager:
    """
    A chip committed to a category for one round.

    Frozen at placement. `payout` goes from None to the settled amount
    exactly once, through mark_settled().
    """
    wager_id: str
    round_no: int
    category: BetCategory
    stake: int
    payout: Optional[int] = None

    @property
    def is_settled(self) -> bool:
        return self.payout is not None

    def mark_settled(self, payout: int):
        assert self.payout is None, f"Wager {self.wager_id} settled twice"
        assert payout >= 0, f"Negative payout {payout} for wager {self.wager_id}"
        object.__setattr__(self, 'payout', payout)


# ============================================================================
# BET EVALUATOR
# ============================================================================

def payout_multiplier(category: BetCategory) -> int:
    return PAYOUT_MULTIPLIERS[category.kind]


def is_winner(bet: Union[BetCategory, Wager], outcome: Outcome) -> bool:
    """Decide a category (or a wager's category) against the outcome. Total over all pairs."""
    category = bet.category if isinstance(bet, Wager) else bet
    number = outcome.pocket
    kind = category.kind

    if kind == BetKind.STRAIGHT:
        return number == category.number
    if kind == BetKind.RED:
        return outcome.color == PocketColor.RED
    if kind == BetKind.BLACK:
        return outcome.color == PocketColor.BLACK
    if kind == BetKind.EVEN:
        return number != 0 and number % 2 == 0
    if kind == BetKind.ODD:
        return number != 0 and number % 2 == 1
    if kind == BetKind.LOW:
        return 1 <= number <= 18
    if kind == BetKind.HIGH:
        return 19 <= number <= 36
    if kind == BetKind.DOZEN:
        k = category.number
        return 12 * (k - 1) + 1 <= number <= 12 * k
    if kind == BetKind.COLUMN:
        return number > 0 and (number - category.number) % 3 == 0

    raise AssertionError(f"Unhandled bet kind {kind}")


def winning_pockets(category: BetCategory) -> frozenset:
    """Every pocket this category wins on."""
    return frozenset(p for p in range(MAX_POCKET + 1) if is_winner(category, Outcome(p)))


def calculate_payout(category: BetCategory, stake: int) -> int:
    return stake * payout_multiplier(category)


# ============================================================================
# SETTLEMENT ENGINE
# ============================================================================

@dataclass(frozen=True)
class SettledWager:
    wager_id: str
    round_no: int
    category: BetCategory
    stake: int
    won: bool
    payout: int


@dataclass(frozen=True)
class RoundSettlement:
    outcome: Outcome
    wagers: Tuple[SettledWager, ...]
    total_won: int
    total_lost: int

    @property
    def winning_wagers(self) -> Tuple[SettledWager, ...]:
        return tuple(w for w in self.wagers if w.won)

    @property
    def losing_wagers(self) -> Tuple[SettledWager, ...]:
        return tuple(w for w in self.wagers if not w.won)

    @property
    def total_staked(self) -> int:
        return sum(w.stake for w in self.wagers)

    @property
    def net(self) -> int:
        return self.total_won - self.total_lost


def settle(wagers: Iterable[Wager], outcome: Outcome) -> RoundSettlement:
    """
    Classify every wager once against the outcome.

    Pure: wagers are not touched and the ledger is not involved. Winners pay
    stake x multiplier into total_won, losers put their stake into total_lost.
    """
    settled = []
    total_won = 0
    total_lost = 0

    for w in wagers:
        assert w.stake > 0, f"Wager {w.wager_id} has non-positive stake {w.stake}"
        won = is_winner(w.category, outcome)
        if won:
            payout = calculate_payout(w.category, w.stake)
            total_won += payout
        else:
            payout = 0
            total_lost += w.stake
        settled.append(SettledWager(
            wager_id=w.wager_id, round_no=w.round_no, category=w.category,
            stake=w.stake, won=won, payout=payout,
        ))

    return RoundSettlement(outcome=outcome, wagers=tuple(settled), total_won=total_won, total_lost=total_lost)
