import pytest

from termwordle.config import Options
from termwordle.game import WordleGame

WORDS = sorted([
    "ABOUT", "APPLE", "BRAIN", "BRINE", "CHAIR", "CRANE", "DRAIN", "ERASE",
    "GRAIN", "PLANT", "SLATE", "SPEED", "STAIR", "TOAST", "TRAIN",
])


@pytest.fixture
def words():
    return list(WORDS)


@pytest.fixture
def make_game(words):
    def _make(**kwargs):
        return WordleGame(Options(**kwargs), list(words), list(words))
    return _make
