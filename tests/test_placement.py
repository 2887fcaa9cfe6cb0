"""
Tests for lane geometry and the placement engine.
"""
import random

from headline_sorter.gameplay.placement import Lane, Rect, find_position


class CountingRandom(random.Random):
    """Random that counts how many candidates were tried."""

    def __init__(self, seed=0):
        super().__init__(seed)
        self.calls = 0

    def uniform(self, a, b):
        self.calls += 1
        return super().uniform(a, b)


class TestRect:
    """Tests for rectangle overlap."""

    def test_overlapping_rects_intersect(self):
        assert Rect(0, 0, 10, 10).intersects(Rect(5, 5, 10, 10))

    def test_touching_edges_do_not_intersect(self):
        """Shared edges are not overlap."""
        assert not Rect(0, 0, 10, 10).intersects(Rect(10, 0, 10, 10))
        assert not Rect(0, 0, 10, 10).intersects(Rect(0, 10, 10, 10))

    def test_contains_point_inclusive(self):
        rect = Rect(10, 10, 5, 5)
        assert rect.contains_point(10, 10)
        assert rect.contains_point(15, 15)
        assert not rect.contains_point(16, 15)


class TestLane:
    """Tests for the default lane."""

    def test_default_lane_between_zones(self):
        lane = Lane()
        assert (lane.left, lane.right, lane.bottom) == (200, 700, 800)
        assert lane.width == 500

    def test_center_x(self):
        assert Lane().center_x(300) == 300


class TestFindPosition:
    """Tests for the bounded placement search."""

    def test_empty_lane_always_found(self):
        """Nothing to overlap, first candidate wins."""
        rng = CountingRandom()
        placement = find_position(Lane(), 800, 300, 400, [], rng)

        assert placement.found
        assert placement.y == 800
        assert 280 <= placement.x <= 320
        assert rng.calls == 1

    def test_blocked_lane_gives_up_after_max_attempts(self):
        """A full lane ends the search without raising."""
        rng = CountingRandom()
        blocker = Rect(200, 700, 500, 400)
        placement = find_position(Lane(), 800, 300, 400, [blocker], rng, max_attempts=10)

        assert not placement.found
        assert rng.calls == 10
        # Last attempt is still a jittered lane position
        assert 280 <= placement.x <= 320

    def test_rects_clear_of_the_row_do_not_block(self):
        """Papers further up the belt leave the spawn row free."""
        others = [Rect(300, 0, 300, 400), Rect(300, 400, 300, 400)]
        placement = find_position(Lane(), 800, 300, 400, others, random.Random(3))
        assert placement.found

    def test_no_overlap_when_found(self):
        """A found position never intersects any other rectangle."""
        rng = random.Random(11)
        others = [Rect(0, 700, 250, 400)]
        for _ in range(50):
            placement = find_position(Lane(), 800, 300, 400, others, rng)
            if placement.found:
                candidate = Rect(placement.x, placement.y, 300, 400)
                assert not any(candidate.intersects(o) for o in others)

    def test_zero_jitter_uses_center(self):
        placement = find_position(Lane(), 500, 300, 400, [], random.Random(0), jitter=0)
        assert placement.x == 300
