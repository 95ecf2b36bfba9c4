"""
Balance ledger: the single source of truth for the player's funds.

Only four things move money:
- reserve_check: read-only, rejects a stake the balance cannot cover
- debit:         stakes leave when the wheel is spun
- credit:        winnings come back at settlement
- top_up:        out-of-band house credit, never part of a round
"""

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Optional

from engine.exceptions import InsufficientFunds

logger = logging.getLogger(__name__)


class LedgerOp(Enum):
    DEBIT = "debit"
    CREDIT = "credit"
    TOP_UP = "top_up"


@dataclass(frozen=True)
class LedgerEntry:
    op: LedgerOp
    amount: int
    balance_after: int
    round_no: int = 0


class BalanceLedger:
    def __init__(self, opening_balance: int = 0, journal_limit: Optional[int] = None):
        if opening_balance < 0:
            raise ValueError(f"Opening balance cannot be negative, got {opening_balance}")
        self.opening_balance = opening_balance
        self._balance = opening_balance
        # Journal keeps the newest entries only; totals cover the whole session
        self.entries: Deque[LedgerEntry] = deque(maxlen=journal_limit)
        self._totals = {op: 0 for op in LedgerOp}

    @property
    def balance(self) -> int:
        return self._balance

    # --- Read-only check ---

    def can_cover(self, amount: int) -> bool:
        return 0 <= amount <= self._balance

    def reserve_check(self, amount: int):
        """Raise InsufficientFunds if `amount` cannot be covered. Never mutates."""
        if not self.can_cover(amount):
            raise InsufficientFunds(amount, self._balance)

    # --- Mutations ---

    def debit(self, amount: int, round_no: int = 0) -> int:
        # Callers run reserve_check first; getting here with too little is an engine bug
        assert amount > 0, f"Debit must be positive, got {amount}"
        assert amount <= self._balance, f"Debit {amount} would overdraw balance {self._balance}"
        self._balance -= amount
        self._record(LedgerOp.DEBIT, amount, round_no)
        return self._balance

    def credit(self, amount: int, round_no: int = 0) -> int:
        assert amount >= 0, f"Credit cannot be negative, got {amount}"
        if amount == 0:
            return self._balance
        self._balance += amount
        self._record(LedgerOp.CREDIT, amount, round_no)
        return self._balance

    def top_up(self, amount: int) -> int:
        """House credit outside any round (the 'borrow' button)."""
        if amount <= 0:
            raise ValueError(f"Top-up must be positive, got {amount}")
        self._balance += amount
        self._record(LedgerOp.TOP_UP, amount, 0)
        logger.info(f"Ledger topped up by {amount}, balance now {self._balance}")
        return self._balance

    def _record(self, op: LedgerOp, amount: int, round_no: int):
        assert self._balance >= 0, f"Ledger went negative: {self._balance}"
        self.entries.append(LedgerEntry(op=op, amount=amount, balance_after=self._balance, round_no=round_no))
        self._totals[op] += amount

    # --- Reporting ---

    def total(self, op: LedgerOp) -> int:
        return self._totals[op]

    @property
    def reconciled(self) -> bool:
        """Opening + credits + top-ups - debits equals the current balance."""
        expected = (self.opening_balance + self.total(LedgerOp.CREDIT)
                    + self.total(LedgerOp.TOP_UP) - self.total(LedgerOp.DEBIT))
        return expected == self._balance
