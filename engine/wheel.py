"""
Single-zero wheel: pocket constants, colors and the outcome source.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class PocketColor(Enum):
    GREEN = "green"
    RED = "red"
    BLACK = "black"


POCKET_COUNT = 37
MIN_POCKET = 0
MAX_POCKET = 36

# Physical order of the pockets around a European wheel, clockwise from zero
WHEEL_ORDER = (
    0, 32, 15, 19, 4, 21, 2, 25, 17, 34, 6, 27, 13, 36, 11, 30, 8, 23, 10,
    5, 24, 16, 33, 1, 20, 14, 31, 9, 22, 18, 29, 7, 28, 12, 35, 3, 26,
)

RED_NUMBERS = frozenset({1, 3, 5, 7, 9, 12, 14, 16, 18, 19, 21, 23, 25, 27, 30, 32, 34, 36})
BLACK_NUMBERS = frozenset({2, 4, 6, 8, 10, 11, 13, 15, 17, 20, 22, 24, 26, 28, 29, 31, 33, 35})


def is_valid_pocket(pocket) -> bool:
    # bool is an int subclass, keep it out
    return isinstance(pocket, int) and not isinstance(pocket, bool) and MIN_POCKET <= pocket <= MAX_POCKET


def pocket_color(pocket: int) -> PocketColor:
    if not is_valid_pocket(pocket):
        raise ValueError(f"Pocket {pocket!r} is not on a single-zero wheel")
    if pocket in RED_NUMBERS:
        return PocketColor.RED
    if pocket in BLACK_NUMBERS:
        return PocketColor.BLACK
    return PocketColor.GREEN


@dataclass(frozen=True)
class Outcome:
    """The pocket the ball landed in for one round"""
    pocket: int

    def __post_init__(self):
        if not is_valid_pocket(self.pocket):
            raise ValueError(f"Outcome pocket {self.pocket!r} out of range 0-36")

    @property
    def color(self) -> PocketColor:
        return pocket_color(self.pocket)

    @property
    def is_zero(self) -> bool:
        return self.pocket == 0

    @property
    def wheel_index(self) -> int:
        """Position of the pocket on the physical wheel (for the wheel display)"""
        return WHEEL_ORDER.index(self.pocket)

    def __str__(self):
        return f"{self.pocket} {self.color.value}"


class OutcomeSource:
    """
    Uniform pocket generator.

    Holds its own random.Random so a seeded table replays the same spins
    without touching the global generator.
    """

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def draw(self) -> Outcome:
        return Outcome(self._rng.choice(WHEEL_ORDER))
