"""
Conveyor entities: the Newspaper.
NO UI DEPENDENCIES.
"""
import itertools
from enum import Enum, auto
from typing import Optional, Tuple

from .headlines import Headline
from .placement import Rect
from .constants import (
    BELT_PAUSE_TRIGGER_Y, GAME_SPEED, NEWSPAPER_HEIGHT, NEWSPAPER_WIDTH
)


_ids = itertools.count(1)


class AdvanceOutcome(Enum):
    """What happened to a newspaper during one tick of belt motion."""
    NONE = auto()
    REACHED_CENTER = auto()   # first time the paper is centered for reading
    TIMED_OUT = auto()        # scrolled off the top of the screen


class Newspaper:
    """
    A single newspaper riding the conveyor.

    Position is owned by the newspaper while it is on the belt. Once a drag
    starts, the drag/drop controller in Game writes the position instead.
    """

    def __init__(
        self,
        headline: Headline,
        x: float,
        y: float,
        speed: float = GAME_SPEED,
        width: float = NEWSPAPER_WIDTH,
        height: float = NEWSPAPER_HEIGHT,
    ):
        self.id: int = next(_ids)
        self.headline = headline
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.speed = speed

        self.being_dragged: bool = False
        self.belt_pause_armed: bool = True

        # Drag bookkeeping
        self.drag_started_at: Optional[float] = None
        self.drag_offset: Tuple[float, float] = (0.0, 0.0)
        self.original_position: Optional[Tuple[float, float]] = None
        self.suspended_at_drag_start: float = 0.0

    @property
    def is_true(self) -> bool:
        return self.headline.is_true

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    @property
    def is_off_screen(self) -> bool:
        """True once the whole paper has scrolled past the top edge."""
        return self.y < -self.height

    def advance(self, suspended: bool) -> AdvanceOutcome:
        """
        Move one tick up the belt.

        Does nothing while dragged or while belt motion is suspended.
        The timeout check comes first, so a paper that leaves the screen
        still armed never asks for a belt pause.
        """
        if self.being_dragged or suspended:
            return AdvanceOutcome.NONE

        self.y -= self.speed

        if self.is_off_screen:
            return AdvanceOutcome.TIMED_OUT

        if self.belt_pause_armed and self.y <= BELT_PAUSE_TRIGGER_Y:
            self.belt_pause_armed = False  # one-shot
            return AdvanceOutcome.REACHED_CENTER

        return AdvanceOutcome.NONE

    def is_hit(self, px: float, py: float) -> bool:
        """Check if a pointer position lands on this paper."""
        return self.rect.contains_point(px, py)

    # =========================================================================
    # DRAGGING
    # =========================================================================

    def start_drag(self, px: float, py: float, now: float, suspended_total: float) -> None:
        """Grab the paper at pointer (px, py)."""
        self.being_dragged = True
        self.drag_offset = (px - self.x, py - self.y)
        self.drag_started_at = now
        self.original_position = (self.x, self.y)
        self.suspended_at_drag_start = suspended_total

    def drag_to(self, px: float, py: float) -> None:
        """Follow the pointer, keeping the original grab offset."""
        dx, dy = self.drag_offset
        self.x = px - dx
        self.y = py - dy

    def end_drag(self) -> None:
        self.being_dragged = False
        self.drag_started_at = None
        self.drag_offset = (0.0, 0.0)

    def __repr__(self) -> str:
        label = "TRUE" if self.is_true else "FAKE"
        return f"Newspaper(#{self.id} {label}, x={self.x:.0f}, y={self.y:.0f})"
