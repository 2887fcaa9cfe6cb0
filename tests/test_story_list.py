"""
Tests for the collected story list: layout and link clicks.
"""
import random
import webbrowser

import pytest

from headline_sorter.gameplay.game import Game, GamePhase
from headline_sorter.gameplay.headlines import Headline
from headline_sorter.gameplay.placement import Rect
from headline_sorter.gameplay.stories import CollectedStory
from headline_sorter.ui.input_handler import InputHandler
from headline_sorter.ui.renderer import PLAY_AGAIN_BUTTON
from headline_sorter.ui.story_list import STORY_PANEL, layout_story_list

from helpers import FAKE, REAL, TICK, sort_correctly


def story(i, link="https://example.org/story"):
    return CollectedStory(
        headline=f"Genuine story {i}", link=link, image_url="", year="1900", collected_at=float(i),
    )


def center(rect: Rect):
    return rect.x + rect.width / 2, rect.y + rect.height / 2


@pytest.fixture
def opened(monkeypatch):
    urls = []
    monkeypatch.setattr(webbrowser, "open", lambda url, new=0: urls.append(url))
    return urls


class TestStoryListLayout:
    """Where stories and their links end up on screen."""

    def test_empty_list(self):
        layout = layout_story_list([])
        assert layout.is_empty
        assert layout.hidden == 0
        assert layout.link_at(*center(STORY_PANEL)) is None

    def test_rows_inside_panel(self):
        layout = layout_story_list([story(i) for i in range(3)])

        assert [row.story.headline for row in layout.rows] == [
            "Genuine story 0", "Genuine story 1", "Genuine story 2"
        ]
        for row in layout.rows:
            assert STORY_PANEL.x <= row.rect.x and row.rect.right <= STORY_PANEL.right
            assert STORY_PANEL.y <= row.rect.y and row.rect.bottom <= STORY_PANEL.bottom
        # Rows never share space
        assert not layout.rows[0].rect.intersects(layout.rows[1].rect)

    def test_link_hit_test(self):
        layout = layout_story_list([story(0, "https://a.example"), story(1, "https://b.example")])

        assert layout.link_at(*center(layout.rows[0].link_rect)) == "https://a.example"
        assert layout.link_at(*center(layout.rows[1].link_rect)) == "https://b.example"
        # The headline part of a row is not a link
        row = layout.rows[0].rect
        assert layout.link_at(row.x + 5, row.y + 2) is None

    def test_story_without_link(self):
        layout = layout_story_list([story(0, link="")])
        assert layout.rows[0].link_rect is None

    def test_overflow_keeps_latest(self):
        """Oldest stories drop out when the panel is full."""
        stories = [story(i) for i in range(20)]
        layout = layout_story_list(stories)

        shown = len(layout.rows)
        assert 0 < shown < 20
        assert layout.hidden == 20 - shown
        assert layout.total == 20
        assert layout.rows[-1].story.headline == "Genuine story 19"


class TestStoryLinkClicks:
    """The input handler opens links from the same layout the renderer draws."""

    def test_click_link_while_paused(self, game, opened):
        sort_correctly(game, game.place_newspaper(REAL, 300, 300))
        game.toggle_pause()

        layout = layout_story_list(game.get_collected_stories())
        handler = InputHandler(game, renderer=None, sound=None)
        handler.handle_click(*center(layout.rows[0].link_rect))

        assert opened == [REAL.article]
        assert game.phase == GamePhase.PAUSED

    def test_click_outside_links_opens_nothing(self, game, opened):
        sort_correctly(game, game.place_newspaper(REAL, 300, 300))
        game.toggle_pause()

        InputHandler(game, renderer=None, sound=None).handle_click(5, 5)

        assert opened == []

    def test_click_link_after_game_over(self, opened):
        game = Game(headlines=[], max_fails=1, rng=random.Random(0))
        game.begin()
        sort_correctly(game, game.place_newspaper(REAL, 300, 300))
        game.place_newspaper(FAKE, 300, -399)
        game.update(TICK)
        assert game.phase == GamePhase.DIALOG_GAME_OVER

        handler = InputHandler(game, renderer=None, sound=None)
        layout = layout_story_list(game.get_collected_stories())
        handler.handle_click(*center(layout.rows[0].link_rect))
        assert opened == [REAL.article]

        # Play again still works with the list on screen
        handler.handle_click(*PLAY_AGAIN_BUTTON.center)
        assert game.phase == GamePhase.START

    def test_fake_stories_never_listed(self, game):
        sort_correctly(game, game.place_newspaper(FAKE, 300, 300))
        other = Headline(is_true=True, headline="Second genuine story")
        sort_correctly(game, game.place_newspaper(other, 300, 300))

        layout = layout_story_list(game.get_collected_stories())
        assert [row.story.headline for row in layout.rows] == ["Second genuine story"]
        assert layout.rows[0].link_rect is None
