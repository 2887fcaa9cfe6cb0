"""
Headline records and the draw-without-replacement pool.
NO UI DEPENDENCIES.
"""
import random
from dataclasses import dataclass
from typing import Iterable, List, Optional


@dataclass(frozen=True)
class Headline:
    """One classification record: a headline and whether it really happened."""
    is_true: bool
    headline: str
    year: str = ""
    article: str = ""
    image_url: str = ""


class HeadlinePool:
    """
    Shuffled pool of headlines, drawn without replacement.

    The full original set is kept so the pool can be refilled (and
    reshuffled) when a new session starts.
    """

    def __init__(self, headlines: Iterable[Headline] = (), rng: Optional[random.Random] = None):
        self._rng = rng if rng is not None else random.Random()
        self._original: List[Headline] = list(headlines)
        self._remaining: List[Headline] = []
        self.refill()

    def refill(self) -> None:
        """Restore every original headline and reshuffle."""
        self._remaining = list(self._original)
        self._rng.shuffle(self._remaining)

    def replace(self, headlines: Iterable[Headline]) -> None:
        """Swap in a new original set (used once loading finishes)."""
        self._original = list(headlines)
        self.refill()

    def draw(self) -> Optional[Headline]:
        """Remove and return one headline, or None when the pool is empty."""
        if not self._remaining:
            return None
        return self._remaining.pop()

    def is_empty(self) -> bool:
        return not self._remaining

    @property
    def remaining(self) -> int:
        return len(self._remaining)

    @property
    def total(self) -> int:
        return len(self._original)

    def __len__(self) -> int:
        return len(self._remaining)
