"""
High score persistence.
A single integer under one key; the game only reads it at startup and
writes it when a game ends with a better score.
"""
import json
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

HIGH_SCORE_KEY = "highScore"


@runtime_checkable
class HighScoreStore(Protocol):
    """Anything that can load and save the high score."""

    def load(self) -> int:
        ...

    def save(self, value: int) -> None:
        ...


class MemoryHighScoreStore:
    """Keeps the high score in memory. Used by tests and when no file is configured."""

    def __init__(self, value: int = 0):
        self.value = value
        self.saves = 0

    def load(self) -> int:
        return self.value

    def save(self, value: int) -> None:
        self.value = value
        self.saves += 1


class JsonHighScoreStore:
    """
    Stores the high score in a small JSON file: {"highScore": 12}.

    A missing, unreadable or malformed file reads as 0. Write failures are
    logged and otherwise ignored; losing a high score is not worth crashing
    the game over.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> int:
        if not self.path.exists():
            return 0
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning(f"Could not read high score from {self.path}: {exc}")
            return 0

        value = data.get(HIGH_SCORE_KEY, 0) if isinstance(data, dict) else 0
        try:
            return max(0, int(value))
        except (TypeError, ValueError):
            logger.warning(f"Ignoring invalid high score value {value!r} in {self.path}")
            return 0

    def save(self, value: int) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps({HIGH_SCORE_KEY: int(value)}), encoding="utf-8")
        except OSError as exc:
            logger.error(f"Could not save high score to {self.path}: {exc}")
            return
        logger.info(f"Saved high score {value} to {self.path}")
