"""
Headline data loading.

Reads the headline JSON file, validates it with pydantic and hands the
records to the game. Any failure falls back to a small built-in list so the
game can always start; the core never sees a load error, only the ready
signal.
"""
import json
import logging
import threading
from pathlib import Path
from typing import Callable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from headline_sorter.gameplay.headlines import Headline

logger = logging.getLogger(__name__)


class HeadlineRecord(BaseModel):
    """One entry of the data file, using the file's own key names."""

    model_config = ConfigDict(populate_by_name=True)

    is_true: bool = Field(alias="isTrue")
    headline: str = Field(min_length=1)
    year: str = ""
    image_url: str = Field(default="", alias="imageUrl")
    article: str = ""

    def to_headline(self) -> Headline:
        return Headline(
            is_true=self.is_true,
            headline=self.headline,
            year=self.year,
            article=self.article,
            image_url=self.image_url,
        )


class HeadlineFile(BaseModel):
    headlines: List[HeadlineRecord]


FALLBACK_HEADLINES = [
    Headline(
        is_true=True,
        headline="Breaking: Major Discovery Changes Everything!",
        year="2024",
        image_url="https://upload.wikimedia.org/wikipedia/commons/7/70/BostonMolassesDisaster.jpg",
        article="Scientific Breakthrough",
    ),
    Headline(
        is_true=True,
        headline="Local Hero Saves the Day in Dramatic Rescue",
        year="2024",
        image_url="https://upload.wikimedia.org/wikipedia/commons/7/70/BostonMolassesDisaster.jpg",
        article="Heroic Rescue",
    ),
    Headline(
        is_true=True,
        headline="Stock Market Plummets as Economy Faces Crisis",
        year="2024",
        image_url="https://upload.wikimedia.org/wikipedia/commons/7/70/BostonMolassesDisaster.jpg",
        article="Economic Crisis",
    ),
]


def load_headlines(path: Path) -> List[Headline]:
    """
    Load headlines from a JSON file shaped like {"headlines": [...]}.
    Returns the fallback list if the file is missing, unreadable or invalid.
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        parsed = HeadlineFile.model_validate(raw)
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        logger.error(f"Failed to load headline data from {path}: {exc}")
        return list(FALLBACK_HEADLINES)

    if not parsed.headlines:
        logger.error(f"No headlines in {path}, using fallback list")
        return list(FALLBACK_HEADLINES)

    headlines = [record.to_headline() for record in parsed.headlines]
    logger.info(f"Loaded {len(headlines)} headlines from {path}")
    return headlines


class HeadlineLoader:
    """
    Loads headline data on a background thread so the loading screen keeps
    drawing. `ready` flips once the data (or the fallback) is available.
    """

    def __init__(self, path: Path, on_ready: Optional[Callable[[List[Headline]], None]] = None):
        self.path = Path(path)
        self.on_ready = on_ready
        self.headlines: List[Headline] = []
        self._ready = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def ready(self) -> bool:
        return self._ready.is_set()

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, name="headline-loader", daemon=True)
        self._thread.start()

    def _run(self) -> None:
        self.headlines = load_headlines(self.path)
        try:
            if self.on_ready is not None:
                self.on_ready(self.headlines)
        finally:
            # Waiters are released even if the callback raises
            self._ready.set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until loading finishes. Returns the ready flag."""
        return self._ready.wait(timeout)
