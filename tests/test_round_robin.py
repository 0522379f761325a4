import itertools
import logging

import pytest

from bracketengine.exceptions import InvalidResultError, TournamentCompleteError
from bracketengine.formats import round_robin as round_robin_module
from bracketengine.formats.round_robin import circle_schedule

from conftest import make_rows, numbered_rows


def _pairs(doc):
    return [
        frozenset((m.player1.id, m.player2.id))
        for r in doc.rounds
        for m in r.matches
    ]


def test_four_players_six_matches_over_three_rounds(round_robin, abcd):
    doc = round_robin.generate(abcd)
    assert doc.total_rounds == 3
    assert [len(r.matches) for r in doc.rounds] == [2, 2, 2]
    assert doc.match_count == 6
    assert sorted(map(sorted, _pairs(doc))) == sorted(
        map(sorted, itertools.combinations("ABCD", 2))
    )


@pytest.mark.parametrize("count", range(2, 12))
def test_every_pair_meets_once(round_robin, count):
    doc = round_robin.generate(numbered_rows(count))
    pairs = _pairs(doc)
    assert len(pairs) == count * (count - 1) // 2
    assert len(set(pairs)) == len(pairs)


@pytest.mark.parametrize("count", [3, 4, 5, 6, 7, 8])
def test_nobody_plays_twice_in_a_round(round_robin, count):
    doc = round_robin.generate(numbered_rows(count))
    for r in doc.rounds:
        ids = [pid for m in r.matches for pid in m.player_ids]
        assert len(ids) == len(set(ids))


def test_odd_roster_sits_one_out_per_round(round_robin):
    doc = round_robin.generate(numbered_rows(5))
    assert doc.total_rounds == 5
    assert [len(r.matches) for r in doc.rounds] == [2] * 5
    sitting_out = []
    for r in doc.rounds:
        playing = {pid for m in r.matches for pid in m.player_ids}
        sitting_out.extend({p.id for p in doc.participants} - playing)
    assert sorted(sitting_out) == ["P1", "P2", "P3", "P4", "P5"]


def test_circle_schedule_first_round():
    assert circle_schedule(["A", "B", "C", "D"])[0] == [("A", "D"), ("B", "C")]


def test_results_advance_rounds_and_pick_winner(round_robin, abcd):
    doc = round_robin.generate(abcd)
    for round_index in range(doc.total_rounds):
        for match in doc.rounds[round_index].matches:
            doc = round_robin.complete(doc, match.match_id, match.player1.id)
        if round_index < doc.total_rounds - 1:
            assert doc.current_round == round_index + 2

    assert doc.tournament_complete
    assert doc.current_round > doc.total_rounds
    assert doc.winner.id == "A"
    a = doc.get_participant("A")
    assert (a.wins, a.points, a.losses) == (3, 3.0, 0)


def test_tied_records_fall_back_to_seed(round_robin):
    doc = round_robin.generate(make_rows("A", "B", "C"))
    # B beats C, C beats A, A beats B: everyone on one win
    results = {
        frozenset("BC"): "B",
        frozenset("AC"): "C",
        frozenset("AB"): "A",
    }
    for r in list(doc.rounds):
        for match in r.matches:
            winner = results[frozenset(match.player_ids)]
            doc = round_robin.complete(doc, match.match_id, winner)

    assert doc.tournament_complete
    assert {p.wins for p in doc.participants} == {1}
    assert doc.winner.id == "A"


def test_out_of_order_results_keep_current_round(round_robin, abcd):
    doc = round_robin.generate(abcd)
    later = doc.rounds[1].matches[0]
    doc = round_robin.complete(doc, later.match_id, later.player2.id)
    assert doc.current_round == 1
    assert doc.get_participant(later.player2.id).points == 1.0
    assert doc.get_participant(later.player1.id).losses == 1


def test_draws_not_allowed(round_robin, abcd):
    doc = round_robin.generate(abcd)
    with pytest.raises(InvalidResultError):
        round_robin.complete(doc, "round1_match1", None)


def test_no_results_after_completion(round_robin):
    doc = round_robin.generate(make_rows("A", "B"))
    doc = round_robin.complete(doc, "round1_match1", "B")
    assert doc.winner.id == "B"
    with pytest.raises(TournamentCompleteError):
        round_robin.complete(doc, "round1_match1", "A")


def test_module_functions(abcd):
    doc = round_robin_module.generate_bracket_data("round_robin", abcd)
    doc = round_robin_module.handle_match_completion(doc, "round1_match1", "A", "round_robin")
    assert doc.get_participant("A").wins == 1


def test_round_advancement_is_logged(round_robin, abcd, caplog):
    doc = round_robin.generate(abcd)
    with caplog.at_level(logging.INFO, logger="bracketengine"):
        for match in doc.rounds[0].matches:
            doc = round_robin.complete(doc, match.match_id, match.player1.id)
    assert doc.current_round == 2
    assert "Round 1 complete" in caplog.text
