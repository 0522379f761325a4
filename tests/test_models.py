import logging

import pytest

from bracketengine.exceptions import MatchNotFoundError, UnsupportedFormatError, ValidationError
from bracketengine.formats import DoubleEliminationFormat, SingleEliminationFormat
from bracketengine.models import (
    BracketDocument,
    BracketSection,
    FormatKind,
    MatchRef,
    MatchSlot,
    Participant,
    ParticipantRef,
    Round,
    participants_from_roster,
)
from bracketengine.standings import rank_participants, standings_table

from conftest import make_rows, numbered_rows


# ========== Participants ==========


@pytest.mark.parametrize(
    "row, expected",
    [
        ({"id": "1", "displayName": "Ace"}, "Ace"),
        ({"id": "1", "name": "Bee"}, "Bee"),
        ({"id": "1", "username": "cee"}, "cee"),
        ({"id": "1", "first_name": "Dee", "last_name": "Ell"}, "Dee Ell"),
        ({"id": "1", "first_name": "Dee"}, "Dee"),
        ({"id": "7"}, "User 7"),
    ],
)
def test_display_name_fallback(row, expected):
    assert Participant.from_dict(row).display_name == expected


def test_numeric_ids_become_strings():
    assert Participant.from_dict({"user_id": 12}).id == "12"


def test_row_without_id():
    with pytest.raises(ValidationError):
        Participant.from_dict({"name": "Nobody"})


def test_roster_keeps_order():
    roster = participants_from_roster(make_rows("C", "A", "B"))
    assert [p.id for p in roster] == ["C", "A", "B"]


# ========== Match slots ==========


def test_match_slot_states():
    a, b = ParticipantRef("A", "Ace"), ParticipantRef("B", "Bee")
    empty = MatchSlot("m")
    assert not empty.is_bye and not empty.is_ready and empty.has_open_slot

    bye = MatchSlot("m", player1=a)
    assert bye.is_bye and bye.present_player == a
    assert bye.opponent_of("A") is None

    full = MatchSlot("m", player1=a, player2=b)
    assert full.is_ready and not full.has_open_slot
    assert full.opponent_of("B") == "A"
    with pytest.raises(ValueError):
        full.fill_open_slot(ParticipantRef("C"))

    full.complete("A")
    assert full.is_completed and not full.is_ready


def test_empty_round_counts_as_completed():
    assert Round(1, "Losers Round 1", BracketSection.LOSERS).is_completed


# ========== Documents ==========


def test_document_json_round_trip_after_play():
    fmt = DoubleEliminationFormat()
    doc = fmt.generate(numbered_rows(5))
    doc = fmt.complete(doc, "winners_round1_match1", "P2")
    restored = BracketDocument.from_json(doc.to_json())
    assert restored == doc
    assert restored.get_participant("P1").in_losers_bracket


def test_wire_keys_are_camel_case(abcd):
    data = SingleEliminationFormat().generate(abcd).to_dict()
    assert {"rounds", "participants", "currentRound", "totalRounds", "tournamentType",
            "tournamentComplete", "winner"} == set(data)
    assert data["tournamentType"] == "single_elimination"
    assert data["rounds"][0]["matches"][0]["matchId"] == "round1_match1"
    assert "inLosersBracket" in data["participants"][0]


def test_unknown_type_in_stored_document(abcd):
    data = SingleEliminationFormat().generate(abcd).to_dict()
    data["tournamentType"] = "ladder"
    with pytest.raises(UnsupportedFormatError):
        BracketDocument.from_dict(data)


def test_match_ids_are_unique():
    doc = DoubleEliminationFormat().generate(numbered_rows(9))
    ids = [m.match_id for _, m in doc.iter_matches()]
    assert len(ids) == len(set(ids))


def test_match_rows_export(abcd):
    doc = SingleEliminationFormat().generate(abcd)
    rows = doc.to_match_rows()
    assert len(rows) == 3
    assert rows[0] == {
        "match_id": "round1_match1",
        "round_number": 1,
        "player1_id": "A",
        "player2_id": "B",
        "winner_id": None,
        "status": "scheduled",
        "match_data": {"bracket": "main", "round_name": "Round 1"},
    }


def test_locate_checks_bracket():
    doc = DoubleEliminationFormat().generate(numbered_rows(4))
    round_data, match = doc.locate(MatchRef("winners_round1_match1", 1, BracketSection.WINNERS))
    assert match.player1.id == "P1"
    with pytest.raises(MatchNotFoundError):
        doc.locate(MatchRef("winners_round1_match1", bracket=BracketSection.LOSERS))


def test_match_ref_coerce():
    assert MatchRef.coerce("round1_match1") == MatchRef("round1_match1")
    assert MatchRef.coerce({"match_id": "x", "round_number": 2}) == MatchRef("x", 2)
    ref = MatchRef("x", 1, BracketSection.MAIN)
    assert MatchRef.coerce(ref) is ref
    assert MatchRef.from_dict(ref.to_dict()) == ref


def test_format_kind_parse():
    assert FormatKind.parse(" Swiss ") is FormatKind.SWISS
    assert FormatKind.SINGLE_ELIMINATION.label == "Single Elimination"
    with pytest.raises(UnsupportedFormatError):
        FormatKind.parse("ladder")


# ========== Standings ==========


def test_elimination_standings_put_survivors_first(abcd):
    fmt = SingleEliminationFormat()
    doc = fmt.complete(fmt.generate(abcd), "round1_match2", "D")
    ranked = [r.id for r in rank_participants(doc)]
    assert ranked == ["D", "A", "B", "C"]
    # The document order is untouched
    assert [p.id for p in doc.participants] == ["A", "B", "C", "D"]


def test_standings_table_rows(abcd):
    fmt = SingleEliminationFormat()
    doc = fmt.complete(fmt.generate(abcd), "round1_match1", "B")
    table = standings_table(doc)
    assert table[0]["id"] == "B"
    assert table[0]["rank"] == 1
    assert table[-1]["eliminated"] is True


def test_integer_roster_ids_report_results():
    fmt = SingleEliminationFormat()
    doc = fmt.generate([{"id": 1, "name": "Ace"}, {"id": 2, "name": "Bee"}])
    assert [p.id for p in doc.participants] == ["1", "2"]

    doc = fmt.complete(doc, "round1_match1", 1)
    assert doc.tournament_complete
    assert doc.winner.id == "1"
    assert doc.rounds[0].matches[0].winner == "1"


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"matchId": ""},
        {"matchId": "round1_match1", "bracket": "consolation"},
        {"match_id": "round1_match1", "round_number": "first"},
    ],
)
def test_malformed_match_ref(data):
    with pytest.raises(MatchNotFoundError):
        MatchRef.from_dict(data)


def test_match_ref_coerce_rejects_other_types():
    with pytest.raises(MatchNotFoundError):
        MatchRef.coerce(42)


def test_seed_tie_break_is_logged(caplog):
    fmt = SingleEliminationFormat()
    doc = fmt.generate(make_rows("A", "B", "C", "D"))
    with caplog.at_level(logging.DEBUG, logger="bracketengine"):
        ranked = rank_participants(doc)
    assert [r.id for r in ranked] == ["A", "B", "C", "D"]
    assert "A and B are tied" in caplog.text
