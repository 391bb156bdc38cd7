"""Board geometry and zone classification."""

from dataclasses import dataclass
from enum import Enum

from ..utils.geometry import Vector2, clamp_to_circle


class Zone(Enum):
    """Concentric regions of the board."""

    INNER = "inner"  # The clearing
    OUTER_BAND = "outer_band"  # The borderlands
    OUTSIDE = "outside"


@dataclass(frozen=True)
class Board:
    """Immutable circular board: an inner clearing ringed by a playable band."""

    center: Vector2
    inner_radius: float
    band_width: float

    def __post_init__(self):
        """Validate board dimensions."""
        if self.inner_radius <= 0:
            raise ValueError(f"Invalid inner_radius: {self.inner_radius} (must be > 0)")
        if self.band_width < 0:
            raise ValueError(f"Invalid band_width: {self.band_width} (must be >= 0)")

    @property
    def outer_radius(self) -> float:
        return self.inner_radius + self.band_width

    def classify(self, point: Vector2) -> Zone:
        """Classify a point; the inner boundary belongs to the clearing."""
        dist = point.distance_to(self.center)
        if dist <= self.inner_radius:
            return Zone.INNER
        if dist <= self.outer_radius:
            return Zone.OUTER_BAND
        return Zone.OUTSIDE

    def in_inner_zone(self, point: Vector2) -> bool:
        return self.classify(point) is Zone.INNER

    def in_outer_band(self, point: Vector2) -> bool:
        return self.classify(point) is Zone.OUTER_BAND

    def clamp_to_inner(self, point: Vector2, inset: float = 0.0) -> Vector2:
        """Pull a point back inside the clearing, shrunk by `inset`."""
        return clamp_to_circle(point, self.center, max(self.inner_radius - inset, 0.0))

    def clamp_to_playable(self, point: Vector2) -> Vector2:
        return clamp_to_circle(point, self.center, self.outer_radius)
