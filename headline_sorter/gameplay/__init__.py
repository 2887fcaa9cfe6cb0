"""
Gameplay core: session state machine, newspapers, placement, spawning,
zones and pause timers. NO UI DEPENDENCIES.
"""
from .game import Game, GamePhase, FailureKind, DropResult
from .headlines import Headline, HeadlinePool

__all__ = ["Game", "GamePhase", "FailureKind", "DropResult", "Headline", "HeadlinePool"]
