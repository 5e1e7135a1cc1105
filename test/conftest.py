import os
import random
import sys

import pytest

# Ensure src/ (containing the game modules) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
SRC_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..', 'src'))
if SRC_ROOT not in sys.path:
    sys.path.insert(0, SRC_ROOT)

from app import app as flask_application
from engine import RoundEngine


SMALL_WORDS = ('cat', 'dog', 'fish', 'bird', 'lion')


@pytest.fixture()
def rng():
    return random.Random(1234)


@pytest.fixture()
def engine(rng):
    return RoundEngine(max_words=10, score_increase=20, rng=rng)


@pytest.fixture()
def small_engine(rng):
    """Engine whose session uses every word of a five-word list."""
    return RoundEngine(SMALL_WORDS, max_words=5, score_increase=20, rng=rng)


@pytest.fixture()
def flask_app():
    flask_application.config.update(TESTING=True)
    yield flask_application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()
