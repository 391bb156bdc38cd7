"""Bounded history of hunter positions at the end of each hunter turn."""

from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass

from ..utils.constants import HISTORY_CAPACITY
from ..utils.geometry import Vector2


@dataclass(frozen=True)
class TurnSnapshot:
    """Per-hunter end-of-turn positions, indexed like GameState.hunters."""

    positions: tuple[Vector2, ...]
    in_outer_band: tuple[bool, ...]

    def __post_init__(self):
        """Validate snapshot shape."""
        if len(self.positions) != len(self.in_outer_band):
            raise ValueError(
                f"Snapshot size mismatch: {len(self.positions)} positions, "
                f"{len(self.in_outer_band)} band flags"
            )


class TurnHistory:
    """FIFO of the most recent turn snapshots; the oldest falls off when full."""

    def __init__(self, snapshots=(), capacity: int = HISTORY_CAPACITY):
        if capacity < 1:
            raise ValueError(f"Invalid capacity: {capacity} (must be >= 1)")
        self.capacity = capacity
        self._snapshots: deque[TurnSnapshot] = deque(snapshots, maxlen=capacity)

    def append(self, snapshot: TurnSnapshot) -> None:
        self._snapshots.append(snapshot)

    def recent(self, count: int) -> list[TurnSnapshot]:
        """Return up to `count` newest snapshots, oldest first."""
        if count <= 0:
            return []
        return list(self._snapshots)[-count:]

    def __len__(self) -> int:
        return len(self._snapshots)

    def __iter__(self) -> Iterator[TurnSnapshot]:
        return iter(self._snapshots)

    def __eq__(self, other) -> bool:
        if not isinstance(other, TurnHistory):
            return NotImplemented
        return self.capacity == other.capacity and list(self) == list(other)

    def __repr__(self) -> str:
        return f"TurnHistory(capacity={self.capacity}, snapshots={list(self._snapshots)!r})"
