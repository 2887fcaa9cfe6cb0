"""
Main Game class - the session state machine.
NO UI DEPENDENCIES.

This is the central gameplay module. It owns every piece of session
state and can be fully tested without any UI framework.
"""
import functools
import logging
import random
import threading
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, List, Optional, Tuple

from .constants import (
    BELT_SEGMENT_SPACING, GAME_SPEED, MAX_FAILS, NEWSPAPER_HEIGHT,
    NEWSPAPER_WIDTH, TICKS_PER_SECOND
)
from .entities import AdvanceOutcome, Newspaper
from .headlines import Headline, HeadlinePool
from .placement import Lane, Rect, find_position
from .spawner import SpawnScheduler, SpawnTrigger
from .stories import CollectedStory, StoryCollection
from .timers import GameClock, PauseCoordinator
from .zones import DEFAULT_ZONES, DropZone, ZoneKind, find_drop_zone, is_correct_drop
from ..persistence import HighScoreStore, MemoryHighScoreStore

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    """Current phase of the session."""
    LOADING = auto()            # Waiting for headline data
    START = auto()              # Start screen
    RUNNING = auto()            # Belt live, input accepted
    PAUSED = auto()             # Manual pause
    DIALOG_INCORRECT = auto()   # Wrong bin or too slow, waiting for dismiss
    DIALOG_GAME_OVER = auto()   # Out of fails, waiting for restart
    RESETTING = auto()          # Transient, between game over and start


DIALOG_PHASES = frozenset({GamePhase.DIALOG_INCORRECT, GamePhase.DIALOG_GAME_OVER})
IN_GAME_PHASES = frozenset({
    GamePhase.RUNNING, GamePhase.PAUSED,
    GamePhase.DIALOG_INCORRECT, GamePhase.DIALOG_GAME_OVER,
})


class FailureKind(Enum):
    """Why a newspaper counted as a fail."""
    WRONG_ZONE = auto()  # dropped in the wrong bin
    TIMEOUT = auto()     # scrolled off the top before being sorted


@dataclass
class Failure:
    """The newspaper behind the current incorrect dialog."""
    newspaper: Newspaper
    kind: FailureKind
    zone: Optional[ZoneKind] = None


@dataclass
class DropResult:
    """Outcome of releasing a dragged newspaper."""
    newspaper: Newspaper
    zone: Optional[ZoneKind]
    correct: Optional[bool]  # None when the paper went back on the belt

    @property
    def returned_to_lane(self) -> bool:
        return self.zone is None


# =============================================================================
# EVENTS
# =============================================================================

@dataclass
class GameEvent:
    """An event that occurred during gameplay (for UI to react to)."""
    pass


@dataclass
class PhaseChangedEvent(GameEvent):
    old_phase: GamePhase
    new_phase: GamePhase


@dataclass
class NewspaperSpawnedEvent(GameEvent):
    newspaper: Newspaper
    trigger: SpawnTrigger


@dataclass
class SuccessEvent(GameEvent):
    """Correct drop."""
    newspaper: Newspaper
    zone: ZoneKind


@dataclass
class IncorrectDropEvent(GameEvent):
    """Dropped in the wrong bin."""
    newspaper: Newspaper
    zone: ZoneKind


@dataclass
class TimeoutFailEvent(GameEvent):
    """Scrolled off the top before the player sorted it."""
    newspaper: Newspaper


@dataclass
class GameOverEvent(GameEvent):
    score: int
    high_score: int
    new_high_score: bool


@dataclass
class BeltPauseStartedEvent(GameEvent):
    newspaper: Newspaper
    until: float


@dataclass
class BeltPauseEndedEvent(GameEvent):
    pass


@dataclass
class StoryCollectedEvent(GameEvent):
    story: CollectedStory


@dataclass
class PoolExhaustedEvent(GameEvent):
    """No headlines left to spawn this session."""
    pass


def _synchronized(method):
    """Run the method under the session lock so input never interleaves a tick."""
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)
    return wrapper


class Game:
    """
    The session: phase machine, counters, timers and the live newspapers.

    This class is COMPLETELY DECOUPLED from UI.
    It exposes state as plain data and accepts commands as method calls.

    Usage:
        game = Game(headlines=load_headlines(path))
        game.begin()
        while running:
            events = game.update(dt)
            # UI forwards pointer events and reads game state to render
    """

    def __init__(
        self,
        headlines: Optional[Iterable[Headline]] = None,
        high_score_store: Optional[HighScoreStore] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[GameClock] = None,
        game_speed: float = GAME_SPEED,
        max_fails: int = MAX_FAILS,
        lane: Optional[Lane] = None,
        zones: Iterable[DropZone] = DEFAULT_ZONES,
    ):
        self._lock = threading.RLock()
        self.rng = rng if rng is not None else random.Random()
        self.clock = clock if clock is not None else GameClock()
        self.lane = lane if lane is not None else Lane()
        self.zones: Tuple[DropZone, ...] = tuple(zones)
        self.game_speed = game_speed
        self.max_fails = max_fails

        # Subsystems
        self.pool = HeadlinePool(rng=self.rng)
        self.spawner = SpawnScheduler()
        self.pauses = PauseCoordinator()
        self.stories = StoryCollection()

        # High score
        self.high_score_store = high_score_store if high_score_store is not None else MemoryHighScoreStore()
        self.high_score: int = self.high_score_store.load()
        self.new_high_score: bool = False

        # Belt contents, in spawn order
        self.newspapers: List[Newspaper] = []
        self.dragged: Optional[Newspaper] = None
        self.failure: Optional[Failure] = None

        # Counters
        self.score: int = 0
        self.fails: int = 0
        self.correct_drops: int = 0
        self.incorrect_drops: int = 0
        self.timeout_fails: int = 0

        self.belt_offset: float = 0.0
        self._pool_exhausted_reported = False

        # Event queue for UI notifications, drained by update()
        self._events: List[GameEvent] = []

        self.phase = GamePhase.LOADING
        if headlines is not None:
            self.finish_loading(headlines)

    # =========================================================================
    # FLOW COMMANDS
    # =========================================================================

    @_synchronized
    def finish_loading(self, headlines: Iterable[Headline]) -> bool:
        """Loading collaborators are ready: seed the pool and show the start screen."""
        if self.phase != GamePhase.LOADING:
            return False
        self.pool.replace(headlines)
        logger.info(f"Loaded {self.pool.total} headlines")
        self._set_phase(GamePhase.START)
        return True

    @_synchronized
    def begin(self) -> bool:
        """Player pressed start."""
        if self.phase != GamePhase.START:
            return False
        self._set_phase(GamePhase.RUNNING)
        return True

    @_synchronized
    def toggle_pause(self) -> bool:
        """Manual pause. Refused while a dialog is open."""
        if self.phase == GamePhase.RUNNING:
            self.pauses.pause_global()
            self._set_phase(GamePhase.PAUSED)
            return True
        if self.phase == GamePhase.PAUSED:
            self.pauses.resume_global()
            self._set_phase(GamePhase.RUNNING)
            return True
        return False

    @_synchronized
    def dismiss_incorrect(self) -> bool:
        """Close the incorrect dialog and resume play."""
        if self.phase != GamePhase.DIALOG_INCORRECT:
            return False
        self.failure = None
        self.pauses.resume_global()
        self._set_phase(GamePhase.RUNNING)
        return True

    @_synchronized
    def restart(self) -> bool:
        """
        Reset the whole session and go back to the start screen.
        Normally used from the game over dialog, but valid from any in-game phase.
        """
        if self.phase in (GamePhase.LOADING, GamePhase.RESETTING):
            return False
        self._set_phase(GamePhase.RESETTING)
        self._reset_state()
        self._set_phase(GamePhase.START)
        return True

    reset = restart

    def _reset_state(self) -> None:
        self.newspapers = []
        self.dragged = None
        self.failure = None
        self.score = 0
        self.fails = 0
        self.correct_drops = 0
        self.incorrect_drops = 0
        self.timeout_fails = 0
        self.new_high_score = False
        self.belt_offset = 0.0
        self._pool_exhausted_reported = False
        self.spawner.reset()
        self.pauses.reset()
        self.stories.clear()
        self.pool.refill()

    def _set_phase(self, new_phase: GamePhase) -> None:
        old_phase = self.phase
        self.phase = new_phase
        logger.info(f"Phase {old_phase.name} -> {new_phase.name}")
        self._events.append(PhaseChangedEvent(old_phase, new_phase))

    # =========================================================================
    # POINTER INPUT
    # =========================================================================

    @_synchronized
    def pointer_down(self, px: float, py: float) -> Optional[Newspaper]:
        """
        Try to grab a newspaper at the pointer.
        Topmost (most recently drawn) paper wins. Only one drag at a time.
        """
        if self.phase != GamePhase.RUNNING or self.dragged is not None:
            return None

        for paper in reversed(self.newspapers):
            if paper.is_hit(px, py):
                paper.start_drag(px, py, self.clock.now, self.pauses.suspended_seconds)
                self.dragged = paper
                return paper
        return None

    @_synchronized
    def pointer_move(self, px: float, py: float) -> bool:
        """Move the dragged paper with the pointer."""
        if self.dragged is None or self.phase in DIALOG_PHASES:
            return False
        self.dragged.drag_to(px, py)
        return True

    @_synchronized
    def pointer_up(self, px: float, py: float) -> Optional[DropResult]:
        """Release the dragged paper: sort it, or put it back on the belt."""
        paper = self.dragged
        if paper is None:
            return None
        self.dragged = None

        if self.phase == GamePhase.DIALOG_GAME_OVER:
            # Nothing more counts once the game is over
            paper.end_drag()
            return None

        if self.phase not in DIALOG_PHASES:
            paper.drag_to(px, py)

        now = self.clock.now
        zone = find_drop_zone(paper.rect, self.zones)

        if zone is None:
            self._return_to_lane(paper, now)
            paper.end_drag()
            return DropResult(paper, None, None)

        paper.end_drag()
        self.newspapers.remove(paper)

        correct = is_correct_drop(zone.kind, paper.is_true)
        if correct:
            self._register_success(paper, zone.kind, now)
        else:
            self._register_incorrect(paper, zone.kind, now)
        return DropResult(paper, zone.kind, correct)

    def _return_to_lane(self, paper: Newspaper, now: float) -> None:
        """
        Put a paper dropped outside both bins back on the belt, where it
        would be had it kept riding. Only time with the belt moving counts.
        """
        original_x, original_y = paper.original_position or (paper.x, paper.y)
        started = paper.drag_started_at if paper.drag_started_at is not None else now

        suspended_during_drag = self.pauses.suspended_seconds - paper.suspended_at_drag_start
        effective = max(0.0, (now - started) - suspended_during_drag)
        distance = paper.speed * effective * TICKS_PER_SECOND

        placement = find_position(
            self.lane, original_y - distance, paper.width, paper.height,
            self._resting_rects(exclude=paper), self.rng,
        )
        if not placement.found:
            logger.debug(f"No free slot for returned {paper}, using best attempt")
        paper.x = placement.x
        paper.y = placement.y
        logger.debug(f"Returned {paper} to belt, effective drag {effective:.2f}s")

    # =========================================================================
    # SCORING
    # =========================================================================

    def _register_success(self, paper: Newspaper, zone: ZoneKind, now: float) -> None:
        self.score += 1
        self.correct_drops += 1
        logger.debug(f"Correct drop of {paper} in {zone.name}")
        self._events.append(SuccessEvent(paper, zone))
        self.pauses.flash_success(now)

        # No idle time after a success
        if self.pauses.clear_belt_pause():
            self._events.append(BeltPauseEndedEvent())

        self._collect(paper, now)

        if not self.newspapers and self.phase == GamePhase.RUNNING:
            self.spawner.expedite()

    def _register_incorrect(self, paper: Newspaper, zone: ZoneKind, now: float) -> None:
        self.incorrect_drops += 1
        logger.debug(f"Incorrect drop of {paper} in {zone.name}")
        self._events.append(IncorrectDropEvent(paper, zone))
        self._collect(paper, now)
        self._register_failure(Failure(paper, FailureKind.WRONG_ZONE, zone))

    def _register_timeout(self, paper: Newspaper, now: float) -> None:
        self.timeout_fails += 1
        logger.debug(f"{paper} fell off the belt")
        self._events.append(TimeoutFailEvent(paper))
        self._collect(paper, now)
        self._register_failure(Failure(paper, FailureKind.TIMEOUT))

    def _register_failure(self, failure: Failure) -> None:
        """Count a fail; game over takes priority over the incorrect dialog."""
        if self.phase == GamePhase.DIALOG_GAME_OVER:
            return

        self.fails = min(self.max_fails, self.fails + 1)
        self.pauses.pause_global()

        if self.fails >= self.max_fails:
            self._enter_game_over()
            return

        self.failure = failure
        if self.phase != GamePhase.DIALOG_INCORRECT:
            self._set_phase(GamePhase.DIALOG_INCORRECT)

    def _enter_game_over(self) -> None:
        self.failure = None
        self._reconcile_high_score()
        self._set_phase(GamePhase.DIALOG_GAME_OVER)
        self._events.append(GameOverEvent(self.score, self.high_score, self.new_high_score))

    def _reconcile_high_score(self) -> None:
        if self.score > self.high_score:
            self.high_score = self.score
            self.new_high_score = True
            self.high_score_store.save(self.score)

    def _collect(self, paper: Newspaper, now: float) -> None:
        story = self.stories.add(paper.headline, now)
        if story is not None:
            self._events.append(StoryCollectedEvent(story))

    # =========================================================================
    # UPDATE LOOP
    # =========================================================================

    @_synchronized
    def update(self, dt: float) -> List[GameEvent]:
        """
        Advance the session by one tick of dt seconds.
        Returns every event since the previous call, pointer events included.
        """
        now = self.clock.advance(dt)

        if self.phase in IN_GAME_PHASES:
            self._update_timers(dt, now)
        if self.phase == GamePhase.RUNNING:
            self._update_running(now)
        # Other phases don't update

        return self.drain_events()

    @_synchronized
    def drain_events(self) -> List[GameEvent]:
        """Take every queued event without advancing time."""
        events, self._events = self._events, []
        return events

    def _update_timers(self, dt: float, now: float) -> None:
        """Timers run in every in-game phase, even under global pause."""
        self.pauses.accumulate(dt)
        if self.pauses.expire(now):
            self._events.append(BeltPauseEndedEvent())

    def _update_running(self, now: float) -> None:
        if not self.pauses.motion_suspended:
            self.belt_offset = (self.belt_offset + self.game_speed) % BELT_SEGMENT_SPACING

        self._advance_newspapers(now)

        if self.phase == GamePhase.RUNNING:
            self._try_spawn(now)

    def _advance_newspapers(self, now: float) -> None:
        """
        Move every paper one tick. Suspension is re-read per paper, so a
        fail or belt pause halfway through the pass stops the rest.
        Removals are applied after the pass.
        """
        removed = set()

        for paper in self.newspapers:
            outcome = paper.advance(self.pauses.motion_suspended)

            if outcome == AdvanceOutcome.TIMED_OUT:
                removed.add(paper.id)
                self._register_timeout(paper, now)

            elif outcome == AdvanceOutcome.REACHED_CENTER:
                self.pauses.trigger_belt_pause(now)
                logger.debug(f"Belt pause for {paper}")
                self._events.append(BeltPauseStartedEvent(paper, self.pauses.belt_paused_until))

        if removed:
            self.newspapers = [p for p in self.newspapers if p.id not in removed]

    def _try_spawn(self, now: float) -> None:
        if self.pauses.spawning_suspended:
            return

        trigger = self.spawner.check(now, lane_empty=not self.newspapers)
        if trigger == SpawnTrigger.NONE:
            return

        placement = find_position(
            self.lane, self.lane.bottom, NEWSPAPER_WIDTH, NEWSPAPER_HEIGHT,
            self._resting_rects(), self.rng,
        )
        if not placement.found:
            # Retried next tick without penalty
            return

        if self.pool.is_empty():
            if not self._pool_exhausted_reported:
                self._pool_exhausted_reported = True
                logger.warning("Headline pool exhausted, no more newspapers this session")
                self._events.append(PoolExhaustedEvent())
            return

        headline = self.pool.draw()
        paper = Newspaper(headline, placement.x, placement.y, speed=self.game_speed)
        self.newspapers.append(paper)
        self.spawner.record_spawn(now, trigger)
        logger.debug(
            f"Spawned {paper} ({trigger.name}), next interval {self.spawner.interval:.2f}s"
        )
        self._events.append(NewspaperSpawnedEvent(paper, trigger))

    def _resting_rects(self, exclude: Optional[Newspaper] = None) -> List[Rect]:
        """Rectangles of papers on the belt. Dragged papers may overlap anything."""
        return [
            p.rect for p in self.newspapers
            if not p.being_dragged and p is not exclude
        ]

    # =========================================================================
    # STATE QUERIES (for UI to read)
    # =========================================================================

    @property
    def is_dialog_active(self) -> bool:
        return self.phase in DIALOG_PHASES

    @property
    def belt_moving(self) -> bool:
        return self.phase == GamePhase.RUNNING and not self.pauses.motion_suspended

    @property
    def out_of_headlines(self) -> bool:
        """Pool drawn dry and the belt clear: nothing more arrives this session."""
        return self.pool.is_empty() and not self.newspapers

    def success_flash_active(self) -> bool:
        """Success indicator is shown only when no dialog covers it."""
        return not self.is_dialog_active and self.pauses.success_flash_active(self.clock.now)

    def get_newspapers(self) -> List[Newspaper]:
        """Papers in draw order: belt papers first, the dragged one last."""
        resting = [p for p in self.newspapers if not p.being_dragged]
        dragged = [p for p in self.newspapers if p.being_dragged]
        return resting + dragged

    def get_collected_stories(self) -> List[CollectedStory]:
        return list(self.stories)

    def get_score_state(self) -> Tuple[int, int, int, int]:
        """Get (score, fails, max_fails, high_score)."""
        return (self.score, self.fails, self.max_fails, self.high_score)

    # =========================================================================
    # CONVENIENCE METHODS FOR TESTING
    # =========================================================================

    @_synchronized
    def place_newspaper(self, headline: Headline, x: float, y: float) -> Newspaper:
        """Put a newspaper on the belt at an exact position, bypassing the spawner."""
        paper = Newspaper(headline, x, y, speed=self.game_speed)
        self.newspapers.append(paper)
        return paper

    def simulate(self, seconds: float, dt: float = 1.0 / TICKS_PER_SECOND) -> List[GameEvent]:
        """
        Run the session for a number of seconds.
        Returns all events that occurred.
        """
        all_events = []
        ticks = int(round(seconds / dt))
        for _ in range(ticks):
            all_events.extend(self.update(dt))
        return all_events
