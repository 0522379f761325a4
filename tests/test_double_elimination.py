import pytest

from bracketengine.constants import GRAND_FINALS_MATCH1, GRAND_FINALS_MATCH2
from bracketengine.exceptions import MatchNotReadyError, TournamentCompleteError
from bracketengine.formats import double_elimination
from bracketengine.formats.double_elimination import losers_round_for_drop
from bracketengine.models.enums import BracketSection, FormatKind
from bracketengine.testing.simulator import SimulationConfig, TournamentSimulator

from conftest import make_rows, numbered_rows


def _grand_finals(doc):
    return doc.get_round(BracketSection.GRAND_FINALS, 1).matches


def _play_to_grand_finals(fmt, doc):
    """Four players: A and C reach grand finals, C through the losers bracket."""
    doc = fmt.complete(doc, "winners_round1_match1", "A")
    doc = fmt.complete(doc, "winners_round1_match2", "C")
    doc = fmt.complete(doc, "losers_round1_match1", "B")
    doc = fmt.complete(doc, "winners_round2_match1", "A")
    doc = fmt.complete(doc, "losers_round2_match1", "C")
    return doc


def test_structure(double_elim):
    doc = double_elim.generate(numbered_rows(8))

    winners = doc.rounds_in(BracketSection.WINNERS)
    losers = doc.rounds_in(BracketSection.LOSERS)
    assert [len(r.matches) for r in winners] == [4, 2, 1]
    assert len(losers) == 4
    assert all(not r.matches for r in losers)
    assert [m.match_id for m in _grand_finals(doc)] == [
        GRAND_FINALS_MATCH1,
        GRAND_FINALS_MATCH2,
    ]
    assert doc.total_rounds == 3 + 4 + 1
    assert winners[0].matches[0].match_id == "winners_round1_match1"


def test_drop_targets():
    assert losers_round_for_drop(1) == 1
    assert losers_round_for_drop(2) == 2
    assert losers_round_for_drop(3) == 4
    assert losers_round_for_drop(4) == 6


def test_five_players_first_loser_waits_in_losers_bracket(double_elim):
    doc = double_elim.generate(numbered_rows(5))
    doc = double_elim.complete(doc, "winners_round1_match1", "P1")

    losers_round1 = doc.get_round(BracketSection.LOSERS, 1)
    assert len(losers_round1.matches) == 1
    waiting = losers_round1.matches[0]
    assert waiting.match_id == "losers_round1_match1"
    assert waiting.player1.id == "P2"
    assert waiting.player2 is None

    dropped = doc.get_participant("P2")
    assert dropped.losses == 1
    assert dropped.in_losers_bracket
    assert not dropped.eliminated

    with pytest.raises(MatchNotReadyError):
        double_elim.advance_bye(doc, "losers_round1_match1")
    with pytest.raises(MatchNotReadyError):
        double_elim.complete(doc, "losers_round1_match1", "P2")

    doc = double_elim.complete(doc, "winners_round1_match2", "P3")
    assert doc.get_round(BracketSection.LOSERS, 1).matches[0].player2.id == "P4"

    doc = double_elim.complete(doc, "losers_round1_match1", "P4")
    out = doc.get_participant("P2")
    assert out.losses == 2
    assert out.eliminated
    assert doc.get_round(BracketSection.LOSERS, 2).matches[0].player1.id == "P4"


def test_winners_champion_wins_grand_finals(double_elim, abcd):
    doc = _play_to_grand_finals(double_elim, double_elim.generate(abcd))
    gf1, gf2 = _grand_finals(doc)
    assert (gf1.player1.id, gf1.player2.id) == ("A", "C")
    assert doc.get_participant("B").eliminated
    assert doc.get_participant("D").eliminated

    doc = double_elim.complete(doc, GRAND_FINALS_MATCH1, "A")
    assert doc.tournament_complete
    assert doc.winner.id == "A"
    assert doc.get_participant("C").eliminated
    assert _grand_finals(doc)[1].player1 is None


def test_bracket_reset(double_elim, abcd):
    doc = _play_to_grand_finals(double_elim, double_elim.generate(abcd))

    doc = double_elim.complete(doc, GRAND_FINALS_MATCH1, "C")
    assert not doc.tournament_complete
    gf2 = _grand_finals(doc)[1]
    assert (gf2.player1.id, gf2.player2.id) == ("A", "C")
    champion = doc.get_participant("A")
    assert champion.losses == 1
    assert champion.in_losers_bracket
    assert not champion.eliminated

    doc = double_elim.complete(doc, GRAND_FINALS_MATCH2, "C")
    assert doc.tournament_complete
    assert doc.winner.id == "C"
    assert doc.get_participant("A").eliminated

    with pytest.raises(TournamentCompleteError):
        double_elim.complete(doc, GRAND_FINALS_MATCH2, "A")


def test_two_players_go_straight_to_grand_finals(double_elim):
    doc = double_elim.generate(make_rows("A", "B"))
    assert doc.total_rounds == 2
    assert doc.rounds_in(BracketSection.LOSERS) == []

    doc = double_elim.complete(doc, "winners_round1_match1", "A")
    gf1 = _grand_finals(doc)[0]
    assert (gf1.player1.id, gf1.player2.id) == ("A", "B")

    doc = double_elim.complete(doc, GRAND_FINALS_MATCH1, "B")
    doc = double_elim.complete(doc, GRAND_FINALS_MATCH2, "A")
    assert doc.winner.id == "A"
    assert doc.get_participant("B").losses == 2


def test_eight_players_losers_rounds_fill_evenly():
    result = TournamentSimulator(
        SimulationConfig(
            tournament_type=FormatKind.DOUBLE_ELIMINATION, num_participants=8, seed=3
        )
    ).run()
    losers = result.document.rounds_in(BracketSection.LOSERS)
    assert [len(r.matches) for r in losers] == [2, 2, 1, 1]


def test_grand_finals_not_ready_until_losers_final(double_elim, abcd):
    doc = double_elim.generate(abcd)
    doc = double_elim.complete(doc, "winners_round1_match1", "A")
    doc = double_elim.complete(doc, "winners_round1_match2", "C")
    doc = double_elim.complete(doc, "winners_round2_match1", "A")

    assert _grand_finals(doc)[0].player1.id == "A"
    with pytest.raises(MatchNotReadyError):
        double_elim.advance_bye(doc, GRAND_FINALS_MATCH1)


def test_complete_does_not_mutate_input(double_elim, abcd):
    doc = double_elim.generate(abcd)
    before = doc.to_dict()
    double_elim.complete(doc, "winners_round1_match1", "B")
    assert doc.to_dict() == before


def test_module_functions(abcd):
    doc = double_elimination.generate_bracket_data("double_elimination", abcd)
    doc = double_elimination.handle_match_completion(
        doc, "winners_round1_match1", "A", "double_elimination"
    )
    assert doc.get_participant("B").in_losers_bracket
