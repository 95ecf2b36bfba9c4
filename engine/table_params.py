from dataclasses import dataclass, field, fields
from typing import Tuple

# --- TABLE DEFAULTS ---
STARTING_BALANCE = 1000
CHIP_VALUES = (1, 5, 10, 25, 50, 100)
HISTORY_LIMIT = 100
TOP_UP_AMOUNT = 500        # "Borrow from the house" credit
TOP_UP_THRESHOLD = 100     # Offered only below this balance
REVEAL_DELAY_S = 4.5       # Wheel animation length on the table page


@dataclass
class TableParams:
    starting_balance: int = STARTING_BALANCE
    chip_values: Tuple[int, ...] = field(default_factory=lambda: CHIP_VALUES)
    history_limit: int = HISTORY_LIMIT
    top_up_amount: int = TOP_UP_AMOUNT
    top_up_threshold: int = TOP_UP_THRESHOLD
    reveal_delay_s: float = REVEAL_DELAY_S

    def __post_init__(self):
        self.chip_values = tuple(sorted(int(c) for c in self.chip_values))
        if not self.chip_values or self.chip_values[0] <= 0:
            raise ValueError(f"Chip values must be positive, got {self.chip_values}")
        if self.starting_balance < 0:
            raise ValueError(f"Starting balance cannot be negative, got {self.starting_balance}")
        if self.history_limit <= 0:
            raise ValueError(f"History limit must be positive, got {self.history_limit}")
        if self.top_up_amount <= 0:
            raise ValueError(f"Top-up amount must be positive, got {self.top_up_amount}")

    def is_valid_stake(self, stake) -> bool:
        """Positive int that is a whole number of some allowed chip."""
        if type(stake) is not int or stake <= 0:
            return False
        return any(stake % chip == 0 for chip in self.chip_values)


def params_from_dict(data: dict) -> TableParams:
    """Build TableParams from a profile dict, ignoring unknown keys."""
    if not data:
        return TableParams()
    known = {f.name for f in fields(TableParams)}
    return TableParams(**{k: v for k, v in data.items() if k in known})
