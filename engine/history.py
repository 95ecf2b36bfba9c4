"""
Bounded history of completed rounds (newest first) plus the small
statistics the history panel shows.
"""

from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

import numpy as np

from engine.roulette_rules import RoundSettlement, SettledWager
from engine.table_params import HISTORY_LIMIT
from engine.wheel import POCKET_COUNT, Outcome, PocketColor


@dataclass(frozen=True)
class HistoryEntry:
    sequence_id: int
    timestamp: datetime
    outcome: Outcome
    wagers: Tuple[SettledWager, ...]
    total_won: int
    total_lost: int

    @property
    def net(self) -> int:
        return self.total_won - self.total_lost

    @classmethod
    def from_settlement(cls, sequence_id: int, settlement: RoundSettlement,
                        timestamp: Optional[datetime] = None) -> "HistoryEntry":
        return cls(
            sequence_id=sequence_id,
            timestamp=timestamp or datetime.now(timezone.utc),
            outcome=settlement.outcome,
            wagers=settlement.wagers,
            total_won=settlement.total_won,
            total_lost=settlement.total_lost,
        )


class HistoryLog:
    def __init__(self, limit: int = HISTORY_LIMIT):
        if limit <= 0:
            raise ValueError(f"History limit must be positive, got {limit}")
        self.limit = limit
        # appendleft on a bounded deque drops from the right (oldest)
        self._entries = deque(maxlen=limit)

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def record(self, entry: HistoryEntry):
        if self._entries:
            assert entry.sequence_id > self._entries[0].sequence_id, (
                f"History entry {entry.sequence_id} is not newer than {self._entries[0].sequence_id}"
            )
        self._entries.appendleft(entry)

    def recent(self, n: int) -> List[HistoryEntry]:
        if n <= 0:
            return []
        return list(self._entries)[:n]

    @property
    def latest(self) -> Optional[HistoryEntry]:
        return self._entries[0] if self._entries else None

    # --- Statistics ---

    def recent_pockets(self, n: int = 10) -> List[int]:
        return [e.outcome.pocket for e in self.recent(n)]

    def summary(self, n: int = 10) -> Dict[str, int]:
        """Color and parity counts over the last n outcomes."""
        outcomes = [e.outcome for e in self.recent(n)]
        return {
            'rounds': len(outcomes),
            'red': sum(1 for o in outcomes if o.color == PocketColor.RED),
            'black': sum(1 for o in outcomes if o.color == PocketColor.BLACK),
            'green': sum(1 for o in outcomes if o.color == PocketColor.GREEN),
            'even': sum(1 for o in outcomes if o.pocket != 0 and o.pocket % 2 == 0),
            'odd': sum(1 for o in outcomes if o.pocket % 2 == 1),
        }

    def pocket_frequencies(self) -> np.ndarray:
        """Hit count per pocket 0-36 across the retained history."""
        pockets = np.array([e.outcome.pocket for e in self._entries], dtype=int)
        return np.bincount(pockets, minlength=POCKET_COUNT)

    def net_trajectory(self) -> np.ndarray:
        """Cumulative net result, oldest round first."""
        nets = np.array([e.net for e in reversed(self._entries)], dtype=int)
        return np.cumsum(nets)
