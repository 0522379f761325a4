import pytest

from bracketengine import dispatcher
from bracketengine.exceptions import UnsupportedFormatError, ValidationError
from bracketengine.formats import (
    DoubleEliminationFormat,
    RoundRobinFormat,
    SingleEliminationFormat,
    SwissFormat,
)
from bracketengine.models.config import BracketConfig
from bracketengine.models.enums import FormatKind

from conftest import make_rows, numbered_rows


@pytest.mark.parametrize(
    "tag, cls",
    [
        ("single_elimination", SingleEliminationFormat),
        ("double_elimination", DoubleEliminationFormat),
        ("round_robin", RoundRobinFormat),
        ("swiss", SwissFormat),
        (FormatKind.SWISS, SwissFormat),
        ("Round_Robin", RoundRobinFormat),
    ],
)
def test_get_format(tag, cls):
    assert isinstance(dispatcher.get_format(tag), cls)


def test_unknown_type():
    with pytest.raises(UnsupportedFormatError):
        dispatcher.get_format("ladder")
    with pytest.raises(UnsupportedFormatError):
        dispatcher.generate_bracket_data("ladder", numbered_rows(4))


@pytest.mark.parametrize("kind", list(FormatKind))
def test_generate_every_format(kind):
    doc = dispatcher.generate_bracket_data(kind.value, numbered_rows(6))
    assert doc.tournament_type == kind
    assert len(doc.participants) == 6
    assert [p.seed for p in doc.participants] == [1, 2, 3, 4, 5, 6]


def test_minimum_participants():
    with pytest.raises(ValidationError, match="Need at least 4 participants"):
        dispatcher.generate_bracket_data("single_elimination", numbered_rows(3), 4)
    # Never below two, whatever the caller asks for
    with pytest.raises(ValidationError):
        dispatcher.generate_bracket_data("round_robin", numbered_rows(1), 0)


def test_completion_routes_by_type(abcd):
    doc = dispatcher.generate_bracket_data("single_elimination", abcd)
    doc = dispatcher.handle_match_completion(doc, "round1_match1", "A", "single_elimination")
    assert doc.rounds[1].matches[0].player1.id == "A"


def test_mismatched_document_and_type(abcd):
    doc = dispatcher.generate_bracket_data("single_elimination", abcd)
    with pytest.raises(UnsupportedFormatError):
        dispatcher.handle_match_completion(doc, "round1_match1", "A", "round_robin")


def test_byes_and_current_matches():
    doc = dispatcher.generate_bracket_data("single_elimination", numbered_rows(3))
    assert [m.match_id for m in dispatcher.current_matches(doc)] == [
        "round1_match1",
        "round1_match2",
    ]
    one = dispatcher.advance_bye(doc, "round1_match2")
    assert one.rounds[1].matches[0].player1.id == "P3"
    all_byes = dispatcher.advance_all_byes(doc)
    assert all_byes.to_dict() == one.to_dict()


def test_config_reaches_the_format():
    config = BracketConfig(swiss_seed=99)
    first = dispatcher.generate_bracket_data("swiss", numbered_rows(12), config=config)
    second = dispatcher.generate_bracket_data("swiss", numbered_rows(12), config=config)
    assert first.to_dict() == second.to_dict()


def test_completed_document_has_no_current_matches():
    doc = dispatcher.generate_bracket_data("single_elimination", make_rows("A", "B"))
    doc = dispatcher.handle_match_completion(doc, "round1_match1", "A", "single_elimination")
    assert dispatcher.current_matches(doc) == []


def test_config_minimum_applies_by_default():
    config = BracketConfig(min_participants=6)
    with pytest.raises(ValidationError, match="Need at least 6 participants"):
        dispatcher.generate_bracket_data("swiss", numbered_rows(3), config=config)
    # An explicit minimum still wins over the configured one
    doc = dispatcher.generate_bracket_data("swiss", numbered_rows(3), 2, config=config)
    assert len(doc.participants) == 3


def test_integer_winner_ids_through_dispatcher():
    doc = dispatcher.generate_bracket_data("round_robin", [{"id": 7}, {"id": 9}])
    doc = dispatcher.handle_match_completion(doc, "round1_match1", 9, "round_robin")
    assert doc.winner.id == "9"
