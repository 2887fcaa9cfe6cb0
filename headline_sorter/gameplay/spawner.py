"""
Spawn scheduler - decides when a new newspaper enters the belt.
NO UI DEPENDENCIES.
"""
from enum import Enum, auto
from typing import Optional

from .constants import (
    EMPTY_LANE_GRACE, SPAWN_INTERVAL_DECREMENT, SPAWN_INTERVAL_FLOOR,
    SPAWN_INTERVAL_START
)


class SpawnTrigger(Enum):
    """Why a spawn is due this tick."""
    NONE = auto()
    TIME = auto()         # spawn interval elapsed
    EMPTY_LANE = auto()   # belt is empty and the grace period passed


class SpawnScheduler:
    """
    Tracks the shrinking spawn interval and the time of the last spawn.

    Time-based spawns make the game harder: each one shortens the interval
    by a fixed step until it reaches the floor. Empty-lane spawns keep the
    belt from idling but never change the interval.
    """

    def __init__(
        self,
        initial_interval: float = SPAWN_INTERVAL_START,
        decrement: float = SPAWN_INTERVAL_DECREMENT,
        floor: float = SPAWN_INTERVAL_FLOOR,
        empty_lane_grace: float = EMPTY_LANE_GRACE,
    ):
        self.initial_interval = initial_interval
        self.decrement = decrement
        self.floor = floor
        self.empty_lane_grace = empty_lane_grace

        self.interval: float = initial_interval
        self.last_spawn_at: Optional[float] = None
        self._expedited: bool = False

    def check(self, now: float, lane_empty: bool) -> SpawnTrigger:
        """
        Decide whether a spawn is due.
        Both triggers collapse into one answer, so at most one spawn per tick.
        """
        if self.last_spawn_at is None:
            return SpawnTrigger.TIME

        elapsed = now - self.last_spawn_at
        if elapsed > self.interval:
            return SpawnTrigger.TIME

        if lane_empty and (self._expedited or elapsed > self.empty_lane_grace):
            return SpawnTrigger.EMPTY_LANE

        return SpawnTrigger.NONE

    def record_spawn(self, now: float, trigger: SpawnTrigger) -> None:
        """Note a successful spawn; only time-based spawns shrink the interval."""
        self.last_spawn_at = now
        self._expedited = False
        if trigger == SpawnTrigger.TIME and self.interval > self.floor:
            self.interval = max(self.floor, self.interval - self.decrement)

    def expedite(self) -> None:
        """Let the next tick fill an empty lane without waiting for the grace period."""
        self._expedited = True

    def reset(self) -> None:
        self.interval = self.initial_interval
        self.last_spawn_at = None
        self._expedited = False
