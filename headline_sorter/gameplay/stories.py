"""
Collected stories - the genuine headlines the player has come across.
NO UI DEPENDENCIES.
"""
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from .headlines import Headline


@dataclass(frozen=True)
class CollectedStory:
    """A genuine story, kept for the reading list shown next to the game."""
    headline: str
    link: str
    image_url: str
    year: str
    collected_at: float


class StoryCollection:
    """
    Ordered, deduplicated list of genuine stories.
    Keyed by headline text; fabricated stories are never collected.
    """

    def __init__(self):
        self._stories: List[CollectedStory] = []
        self._by_headline: Dict[str, CollectedStory] = {}

    def add(self, headline: Headline, now: float) -> Optional[CollectedStory]:
        """
        Collect a story.
        Returns the new entry, or None if fake or already collected.
        """
        if not headline.is_true:
            return None
        if headline.headline in self._by_headline:
            return None

        story = CollectedStory(
            headline=headline.headline,
            link=headline.article,
            image_url=headline.image_url,
            year=headline.year,
            collected_at=now,
        )
        self._stories.append(story)
        self._by_headline[story.headline] = story
        return story

    def __contains__(self, headline: str) -> bool:
        return headline in self._by_headline

    def __iter__(self) -> Iterator[CollectedStory]:
        return iter(self._stories)

    def __len__(self) -> int:
        return len(self._stories)

    def clear(self) -> None:
        self._stories.clear()
        self._by_headline.clear()
