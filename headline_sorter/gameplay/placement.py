"""
Lane geometry and the placement engine.
NO UI DEPENDENCIES.

Coordinate system:
- (0, 0) is top-left
- x increases to the right
- y increases downward
"""
import random
from dataclasses import dataclass
from typing import Iterable

from .constants import (
    LANE_LEFT, LANE_RIGHT, PLACEMENT_ATTEMPTS, PLACEMENT_JITTER, SCREEN_HEIGHT
)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def intersects(self, other: 'Rect') -> bool:
        """True if the two rectangles share any interior area."""
        return (
            self.x < other.right and self.right > other.x and
            self.y < other.bottom and self.bottom > other.y
        )

    def contains_point(self, px: float, py: float) -> bool:
        """Inclusive point test (edges count as inside)."""
        return self.x <= px <= self.right and self.y <= py <= self.bottom


@dataclass(frozen=True)
class Lane:
    """
    The horizontal band between the two disposal zones.
    Newspapers travel vertically inside it.
    """
    left: float = LANE_LEFT
    right: float = LANE_RIGHT
    bottom: float = SCREEN_HEIGHT

    @property
    def width(self) -> float:
        return self.right - self.left

    def center_x(self, item_width: float) -> float:
        """x that centers an item of the given width in the lane."""
        return self.left + (self.width - item_width) / 2


@dataclass(frozen=True)
class Placement:
    """Result of a placement search."""
    x: float
    y: float
    found: bool  # False = every attempt overlapped; x, y is the last attempt


def find_position(
    lane: Lane,
    y: float,
    width: float,
    height: float,
    others: Iterable[Rect],
    rng: random.Random,
    max_attempts: int = PLACEMENT_ATTEMPTS,
    jitter: float = PLACEMENT_JITTER,
) -> Placement:
    """
    Search for an x near the lane center where a width x height rectangle
    at row y overlaps none of `others`.

    Bounded: at most `max_attempts` candidates are tried. Never raises.
    """
    others = list(others)
    base_x = lane.center_x(width)
    x = base_x

    for _ in range(max(1, max_attempts)):
        x = base_x + rng.uniform(-jitter, jitter)
        candidate = Rect(x, y, width, height)
        if not any(candidate.intersects(other) for other in others):
            return Placement(x, y, found=True)

    return Placement(x, y, found=False)
