"""
Game clock and the pause/timer coordinator.
NO UI DEPENDENCIES.
"""
from typing import Optional

from .constants import BELT_PAUSE_DURATION, SUCCESS_FLASH_DURATION


class GameClock:
    """
    Monotonic game time in seconds.
    Advanced only by the frame loop, so tests control it completely.
    """

    def __init__(self, start: float = 0.0):
        self.now: float = start

    def advance(self, dt: float) -> float:
        if dt > 0:
            self.now += dt
        return self.now


class PauseCoordinator:
    """
    Two independent suspension signals plus the success flash timer.

    - Global pause: stops everything. No expiry; set and cleared by the
      session state machine.
    - Belt pause: stops only conveyor motion. Expires on its own after
      BELT_PAUSE_DURATION, or is cleared early by a correct drop.

    Also keeps a running total of seconds during which motion was
    suspended, which the drag/drop controller uses to work out how far a
    dragged paper would have travelled.
    """

    def __init__(
        self,
        belt_pause_duration: float = BELT_PAUSE_DURATION,
        success_flash_duration: float = SUCCESS_FLASH_DURATION,
    ):
        self.belt_pause_duration = belt_pause_duration
        self.success_flash_duration = success_flash_duration

        self.global_paused: bool = False
        self.belt_paused_until: Optional[float] = None
        self.success_flash_until: Optional[float] = None
        self.suspended_seconds: float = 0.0

    # =========================================================================
    # GLOBAL PAUSE
    # =========================================================================

    def pause_global(self) -> None:
        self.global_paused = True

    def resume_global(self) -> None:
        self.global_paused = False

    # =========================================================================
    # BELT PAUSE
    # =========================================================================

    @property
    def belt_paused(self) -> bool:
        return self.belt_paused_until is not None

    def trigger_belt_pause(self, now: float) -> None:
        self.belt_paused_until = now + self.belt_pause_duration

    def clear_belt_pause(self) -> bool:
        """Clear the belt pause. Returns True if one was active."""
        was_paused = self.belt_paused
        self.belt_paused_until = None
        return was_paused

    def expire(self, now: float) -> bool:
        """
        Drop timers whose time has come.
        Returns True if the belt pause ended on this call.
        """
        if self.success_flash_until is not None and now >= self.success_flash_until:
            self.success_flash_until = None

        if self.belt_paused_until is not None and now >= self.belt_paused_until:
            self.belt_paused_until = None
            return True
        return False

    # =========================================================================
    # SUCCESS FLASH
    # =========================================================================

    def flash_success(self, now: float) -> None:
        self.success_flash_until = now + self.success_flash_duration

    def success_flash_active(self, now: float) -> bool:
        return self.success_flash_until is not None and now < self.success_flash_until

    # =========================================================================
    # QUERIES
    # =========================================================================

    @property
    def motion_suspended(self) -> bool:
        return self.global_paused or self.belt_paused

    @property
    def spawning_suspended(self) -> bool:
        # Belt pause alone does not hold back spawns
        return self.global_paused

    def accumulate(self, dt: float) -> None:
        """Count dt towards suspended time if motion is currently stopped."""
        if self.motion_suspended and dt > 0:
            self.suspended_seconds += dt

    def reset(self) -> None:
        self.global_paused = False
        self.belt_paused_until = None
        self.success_flash_until = None
        self.suspended_seconds = 0.0
