"""
Story list layout - where each collected story and its link sit on screen.

Plain geometry, no pygame: the renderer draws from it and the input handler
hit-tests against it, so both always agree on where a link is.
"""
from dataclasses import dataclass
from typing import List, Optional, Sequence

from headline_sorter.gameplay.placement import Rect
from headline_sorter.gameplay.stories import CollectedStory


STORY_PANEL = Rect(100, 370, 700, 400)
HEADER_HEIGHT = 50
ROW_HEIGHT = 65
ROW_PADDING = 10
LINK_HEIGHT = 24

EMPTY_MESSAGE = "No stories collected yet"


@dataclass(frozen=True)
class StoryRow:
    story: CollectedStory
    rect: Rect
    link_rect: Optional[Rect]  # None when the story has no link


@dataclass
class StoryListLayout:
    """Rows that fit in the panel, most recent stories last."""
    panel: Rect
    rows: List[StoryRow]
    hidden: int = 0  # older stories that did not fit

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @property
    def total(self) -> int:
        return len(self.rows) + self.hidden

    def link_at(self, px: float, py: float) -> Optional[str]:
        """Link under the pointer, if any."""
        for row in self.rows:
            if row.link_rect is not None and row.link_rect.contains_point(px, py):
                return row.story.link
        return None


def layout_story_list(stories: Sequence[CollectedStory], panel: Rect = STORY_PANEL) -> StoryListLayout:
    """
    Lay out collected stories in the panel, one row each.
    When they don't all fit, the oldest are left out.
    """
    stories = list(stories)
    capacity = max(0, int((panel.height - HEADER_HEIGHT) // ROW_HEIGHT))
    visible = stories[len(stories) - capacity:] if len(stories) > capacity else stories

    rows = []
    for i, story in enumerate(visible):
        row = Rect(
            panel.x + ROW_PADDING,
            panel.y + HEADER_HEIGHT + i * ROW_HEIGHT,
            panel.width - 2 * ROW_PADDING,
            ROW_HEIGHT - 5,
        )
        link = None
        if story.link:
            link = Rect(
                row.x + ROW_PADDING,
                row.bottom - LINK_HEIGHT - 4,
                row.width - 2 * ROW_PADDING,
                LINK_HEIGHT,
            )
        rows.append(StoryRow(story, row, link))

    return StoryListLayout(panel, rows, hidden=len(stories) - len(visible))
