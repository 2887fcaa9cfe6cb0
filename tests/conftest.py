"""
Shared fixtures for gameplay tests.
"""
import random

import pytest

from headline_sorter.gameplay.game import Game
from headline_sorter.persistence import MemoryHighScoreStore


@pytest.fixture
def store():
    return MemoryHighScoreStore()


@pytest.fixture
def game(store):
    """A running game with an empty pool, so nothing spawns on its own."""
    g = Game(headlines=[], high_score_store=store, rng=random.Random(7))
    g.begin()
    g.drain_events()
    return g
