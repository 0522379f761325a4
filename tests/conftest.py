import pytest

from bracketengine.formats import (
    DoubleEliminationFormat,
    RoundRobinFormat,
    SingleEliminationFormat,
    SwissFormat,
)
from bracketengine.models.config import BracketConfig


def make_rows(*ids):
    return [{"id": pid, "displayName": pid} for pid in ids]


def numbered_rows(count):
    return make_rows(*[f"P{i}" for i in range(1, count + 1)])


def play_match(fmt, document, match_id, winner_id):
    """Complete a match and return the new document."""
    return fmt.complete(document, match_id, winner_id)


@pytest.fixture
def abcd():
    return make_rows("A", "B", "C", "D")


@pytest.fixture
def single_elim():
    return SingleEliminationFormat()


@pytest.fixture
def double_elim():
    return DoubleEliminationFormat()


@pytest.fixture
def round_robin():
    return RoundRobinFormat()


@pytest.fixture
def swiss():
    return SwissFormat(BracketConfig(swiss_seed=42))
