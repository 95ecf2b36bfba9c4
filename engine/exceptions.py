"""
Table exceptions.

Everything here is a recoverable condition handed back to the caller
(usually the table page, which turns it into a notification).
Broken engine invariants are asserted instead and never land here.
"""


class RouletteError(Exception):
    """Base class for all rejected table operations"""
    pass


# ============ Bet related ============

class InvalidBetCategory(RouletteError):
    """Malformed bet category (pocket or index out of range, unknown key)"""
    pass


class InvalidStake(RouletteError):
    """Stake is not a positive multiple of an allowed chip value"""
    def __init__(self, stake, chip_values):
        self.stake = stake
        self.chip_values = tuple(chip_values)
        super().__init__(
            f"Stake {stake!r} is not a positive multiple of any chip in {self.chip_values}"
        )


# ============ Ledger related ============

class InsufficientFunds(RouletteError):
    """Stake (or cumulative stake) exceeds the available balance"""
    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(f"Requested {requested} but only {available} available")


# ============ Round related ============

class InvalidRoundState(RouletteError):
    """Operation not allowed in the current round phase"""
    def __init__(self, operation: str, phase, reason: str = ""):
        self.operation = operation
        self.phase = phase
        self.reason = reason
        msg = f"Cannot {operation} while round is {getattr(phase, 'name', phase)}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class TopUpNotAllowed(RouletteError):
    """House credit refused: balance is not below the top-up threshold"""
    def __init__(self, balance: int, threshold: int):
        self.balance = balance
        self.threshold = threshold
        super().__init__(f"Top-up only below €{threshold}, balance is €{balance}")
