"""
Shared headlines and drag helpers for gameplay tests.
"""
from headline_sorter.gameplay.game import Game
from headline_sorter.gameplay.headlines import Headline


FAKE = Headline(is_true=False, headline="Moon Declared Property of Local Bank", year="1927")
REAL = Headline(
    is_true=True,
    headline="Wave of Molasses Sweeps Through North End Streets",
    year="1919",
    article="https://en.wikipedia.org/wiki/Great_Molasses_Flood",
)

TICK = 1.0 / 60

# Pointer targets well inside each zone and in the middle of the lane
DISCARD_POINT = (100, 400)
ARCHIVE_POINT = (800, 400)
LANE_POINT = (450, 400)


def drag(game: Game, paper, to_x: float, to_y: float):
    """Grab a paper at its center, move it and release it."""
    grab_x = paper.x + paper.width / 2
    grab_y = paper.y + paper.height / 2
    assert game.pointer_down(grab_x, grab_y) is paper
    game.pointer_move(to_x, to_y)
    return game.pointer_up(to_x, to_y)


def sort_correctly(game: Game, paper):
    point = ARCHIVE_POINT if paper.is_true else DISCARD_POINT
    return drag(game, paper, *point)


def sort_wrongly(game: Game, paper):
    point = DISCARD_POINT if paper.is_true else ARCHIVE_POINT
    return drag(game, paper, *point)


def fakes(count: int):
    return [Headline(is_true=False, headline=f"Invented story number {i}") for i in range(count)]
