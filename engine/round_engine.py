"""
Round state machine for one roulette table.

    OPEN --spin()--> LOCKED --(sample)--> RESOLVING --reveal()--> SETTLED --> OPEN

spin() debits the stakes and samples the wheel once; reveal() is called by
the presentation layer when its wheel animation ends and settles the round.
There is no abort path between the two.
"""

import logging
import threading
from enum import Enum, auto
from typing import Dict, List, Optional

from engine.exceptions import InvalidRoundState, InvalidStake, TopUpNotAllowed
from engine.history import HistoryEntry, HistoryLog
from engine.ledger import BalanceLedger
from engine.roulette_rules import BetCategory, RoundSettlement, Wager, settle
from engine.table_params import TableParams
from engine.wheel import Outcome, OutcomeSource

logger = logging.getLogger(__name__)


class RoundPhase(Enum):
    OPEN = auto()
    LOCKED = auto()
    RESOLVING = auto()
    SETTLED = auto()


class RouletteTable:
    def __init__(self, params: Optional[TableParams] = None, outcome_source=None, seed: Optional[int] = None):
        self.params = params or TableParams()
        # One debit and at most one credit per round
        self.ledger = BalanceLedger(self.params.starting_balance, journal_limit=2 * self.params.history_limit)
        self.history = HistoryLog(self.params.history_limit)
        self.outcome_source = outcome_source or OutcomeSource(seed)

        self.phase = RoundPhase.OPEN
        self.round_no = 1
        # Wager arena: round number -> wagers of that round
        self._arena: Dict[int, List[Wager]] = {self.round_no: []}
        self._outcome: Optional[Outcome] = None
        self.last_outcome: Optional[Outcome] = None
        self.last_settlement: Optional[RoundSettlement] = None

        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    def current_balance(self) -> int:
        return self.ledger.balance

    @property
    def active_wagers(self) -> List[Wager]:
        return list(self._arena[self.round_no])

    @property
    def pending_stake(self) -> int:
        return sum(w.stake for w in self._arena[self.round_no])

    def stake_on(self, category: BetCategory) -> int:
        """Total stake on one felt cell this round."""
        return sum(w.stake for w in self._arena[self.round_no] if w.category == category)

    def stakes_by_cell(self) -> Dict[str, int]:
        cells: Dict[str, int] = {}
        for w in self._arena[self.round_no]:
            cells[w.category.key] = cells.get(w.category.key, 0) + w.stake
        return cells

    def affordable_chips(self) -> List[int]:
        return [c for c in self.params.chip_values if c <= self.ledger.balance]

    def wagers_for_round(self, round_no: int) -> List[Wager]:
        return list(self._arena.get(round_no, []))

    def recent_history(self, n: int) -> List[HistoryEntry]:
        return self.history.recent(n)

    @property
    def can_top_up(self) -> bool:
        return self.phase == RoundPhase.OPEN and self.ledger.balance < self.params.top_up_threshold

    # ------------------------------------------------------------------
    # Betting (OPEN only)
    # ------------------------------------------------------------------

    def place_bet(self, category: BetCategory, stake: int) -> Wager:
        with self._lock:
            self._require(RoundPhase.OPEN, 'place bet')
            if not isinstance(category, BetCategory):
                category = BetCategory.from_key(category)
            if not self.params.is_valid_stake(stake):
                raise InvalidStake(stake, self.params.chip_values)

            # Whole bet or nothing
            self.ledger.reserve_check(self.pending_stake + stake)

            wagers = self._arena[self.round_no]
            wager = Wager(
                wager_id=f"R{self.round_no}-{len(wagers) + 1}",
                round_no=self.round_no,
                category=category,
                stake=stake,
            )
            wagers.append(wager)
            logger.debug(f"Round {self.round_no}: {stake} on {category.key} (pending {self.pending_stake})")
            return wager

    def clear_bets(self) -> int:
        """Take every pending chip back off the felt. Returns the stake removed."""
        with self._lock:
            self._require(RoundPhase.OPEN, 'clear bets')
            removed = self.pending_stake
            self._arena[self.round_no] = []
            return removed

    # ------------------------------------------------------------------
    # Round lifecycle
    # ------------------------------------------------------------------

    def spin(self) -> Outcome:
        with self._lock:
            self._require(RoundPhase.OPEN, 'spin')
            wagers = self._arena[self.round_no]
            if not wagers:
                raise InvalidRoundState('spin', self.phase, 'no wagers on the table')

            total = self.pending_stake
            self.ledger.reserve_check(total)

            # OPEN -> LOCKED: stakes are now at risk
            self.ledger.debit(total, self.round_no)
            self.phase = RoundPhase.LOCKED

            # LOCKED -> RESOLVING: exactly one draw per round
            assert self._outcome is None, f"Round {self.round_no} already has an outcome"
            self._outcome = self.outcome_source.draw()
            self.phase = RoundPhase.RESOLVING

            logger.info(f"Round {self.round_no}: {len(wagers)} wagers, {total} staked, ball lands {self._outcome}")
            return self._outcome

    def reveal(self) -> RoundSettlement:
        with self._lock:
            self._require(RoundPhase.RESOLVING, 'reveal')
            assert self._outcome is not None, f"Round {self.round_no} resolving without an outcome"

            wagers = self._arena[self.round_no]
            settlement = settle(wagers, self._outcome)
            assert len(settlement.wagers) == len(wagers)

            for w, s in zip(wagers, settlement.wagers):
                w.mark_settled(s.payout)

            self.ledger.credit(settlement.total_won, self.round_no)
            self.history.record(HistoryEntry.from_settlement(self.round_no, settlement))
            self.phase = RoundPhase.SETTLED

            logger.info(
                f"Round {self.round_no} settled on {settlement.outcome}: "
                f"won {settlement.total_won}, lost {settlement.total_lost}, balance {self.ledger.balance}"
            )

            self.last_outcome = self._outcome
            self.last_settlement = settlement
            self._open_next_round()
            return settlement

    def _open_next_round(self):
        # SETTLED -> OPEN
        self._outcome = None
        self.round_no += 1
        self._arena[self.round_no] = []
        # Keep only the rounds history can still show
        for old in [r for r in self._arena if r < self.round_no - self.params.history_limit]:
            del self._arena[old]
        self.phase = RoundPhase.OPEN

    # ------------------------------------------------------------------
    # Out-of-band credit
    # ------------------------------------------------------------------

    def top_up(self) -> int:
        with self._lock:
            self._require(RoundPhase.OPEN, 'top up')
            if self.ledger.balance >= self.params.top_up_threshold:
                raise TopUpNotAllowed(self.ledger.balance, self.params.top_up_threshold)
            return self.ledger.top_up(self.params.top_up_amount)

    # ------------------------------------------------------------------

    def _require(self, phase: RoundPhase, operation: str):
        if self.phase != phase:
            logger.warning(f"Rejected '{operation}' in phase {self.phase.name}")
            raise InvalidRoundState(operation, self.phase)
