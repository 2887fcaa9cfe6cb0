"""
Tests for the headline pool and the collected stories list.
"""
import random

from headline_sorter.gameplay.headlines import Headline, HeadlinePool
from headline_sorter.gameplay.stories import StoryCollection

from helpers import FAKE, REAL, fakes


class TestHeadlinePool:
    """Draw without replacement, refill on a new session."""

    def test_draw_without_replacement(self):
        headlines = fakes(5)
        pool = HeadlinePool(headlines, rng=random.Random(1))

        drawn = [pool.draw() for _ in range(5)]
        assert sorted(h.headline for h in drawn) == sorted(h.headline for h in headlines)
        assert pool.is_empty()
        assert pool.draw() is None

    def test_refill_restores_everything(self):
        pool = HeadlinePool(fakes(4), rng=random.Random(2))
        pool.draw()
        pool.draw()
        assert pool.remaining == 2

        pool.refill()
        assert pool.remaining == 4
        assert pool.total == 4
        assert len(pool) == 4

    def test_replace(self):
        """Loading swaps in the real data set."""
        pool = HeadlinePool(rng=random.Random(0))
        assert pool.is_empty()

        pool.replace([FAKE, REAL])
        assert pool.total == 2
        assert {pool.draw(), pool.draw()} == {FAKE, REAL}

    def test_shuffle_follows_seed(self):
        first = HeadlinePool(fakes(10), rng=random.Random(5))
        second = HeadlinePool(fakes(10), rng=random.Random(5))
        assert [first.draw() for _ in range(10)] == [second.draw() for _ in range(10)]


class TestStoryCollection:
    """Only genuine stories are collected, once each."""

    def test_genuine_story_collected(self):
        stories = StoryCollection()
        story = stories.add(REAL, now=3.0)

        assert story is not None
        assert story.headline == REAL.headline
        assert story.link == REAL.article
        assert story.year == "1919"
        assert story.collected_at == 3.0
        assert REAL.headline in stories

    def test_fake_story_ignored(self):
        stories = StoryCollection()
        assert stories.add(FAKE, now=0.0) is None
        assert len(stories) == 0

    def test_duplicates_ignored(self):
        stories = StoryCollection()
        stories.add(REAL, now=0.0)
        copy = Headline(is_true=True, headline=REAL.headline, article="elsewhere")
        assert stories.add(copy, now=1.0) is None
        assert len(stories) == 1
        assert list(stories)[0].link == REAL.article

    def test_clear(self):
        stories = StoryCollection()
        stories.add(REAL, now=0.0)
        stories.clear()
        assert len(stories) == 0
        assert REAL.headline not in stories
