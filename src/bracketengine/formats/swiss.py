"""Swiss brackets.

Round 1 shuffles the roster and pairs it consecutively. Every later round is
paired from the standings once the previous round is finished: the leader
meets the best-placed participant they have not played yet, and so on down
the table. An odd roster gives one participant a bye each round, never the
same participant twice while others are still waiting for theirs.
"""

# Bracket Engine
# Copyright (C) 2025  Bracket Engine developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import random
from typing import Dict, List, Optional, Set, Tuple, Union

from bracketengine.constants import (
    BYE_POINTS,
    DRAW_POINTS,
    LOSS_POINTS,
    MATCH_ID_TEMPLATE,
    ROUND_NAME_TEMPLATE,
    WIN_POINTS,
)
from bracketengine.formats.base import (
    MatchRefInput,
    RosterInput,
    TournamentFormat,
    pair_consecutively,
    rounds_needed,
)
from bracketengine.models.bracket import BracketDocument, MatchSlot, Round
from bracketengine.models.enums import FormatKind
from bracketengine.models.participant import ParticipantRef, TournamentParticipantRecord
from bracketengine.standings import rank_participants
from bracketengine.type_hints import MaybeParticipantId, ParticipantId
from bracketengine.utils import setup_logger

logger = setup_logger(__name__)

SwissPairing = Tuple[ParticipantRef, Optional[ParticipantRef]]


def pairing_history(document: BracketDocument) -> Dict[ParticipantId, Set[ParticipantId]]:
    """Opponents each participant has already been paired against."""
    history: Dict[ParticipantId, Set[ParticipantId]] = {
        p.id: set() for p in document.participants
    }
    for _, match in document.iter_matches():
        if match.player1 is not None and match.player2 is not None:
            history[match.player1.id].add(match.player2.id)
            history[match.player2.id].add(match.player1.id)
    return history


def bye_history(document: BracketDocument) -> Set[ParticipantId]:
    """Participants who already received a bye."""
    return {
        match.present_player.id
        for _, match in document.iter_matches()
        if match.present_player is not None and len(match.player_ids) == 1
    }


def pair_by_standings(
    ranked: List[TournamentParticipantRecord],
    history: Dict[ParticipantId, Set[ParticipantId]],
    previous_byes: Set[ParticipantId],
    avoid_rematches: bool = True,
) -> List[SwissPairing]:
    """Pair a ranked field for the next Swiss round.

    Parameters
    ----------
    ranked : list of TournamentParticipantRecord
        Participants in standings order, best first.
    history : dict
        Opponents already faced, by participant id.
    previous_byes : set
        Participants who already had a bye.
    avoid_rematches : bool
        Skip opponents already faced while a fresh one is available.

    Returns
    -------
    list of tuple
        Pairings in table order, with the bye (if any) last.
    """
    pool = list(ranked)
    bye: Optional[TournamentParticipantRecord] = None
    if len(pool) % 2:
        # Lowest-ranked participant still owed a bye; everyone had one: the last
        candidates = [r for r in reversed(pool) if r.id not in previous_byes]
        bye = candidates[0] if candidates else pool[-1]
        pool.remove(bye)

    pairings: List[SwissPairing] = []
    while pool:
        top = pool.pop(0)
        opponent_index = 0
        if avoid_rematches:
            for index, candidate in enumerate(pool):
                if candidate.id not in history.get(top.id, set()):
                    opponent_index = index
                    break
            else:
                logger.warning(f"No fresh opponent left for {top.id}; allowing a rematch")
        opponent = pool.pop(opponent_index)
        pairings.append((top.ref(), opponent.ref()))

    if bye is not None:
        pairings.append((bye.ref(), None))
    return pairings


class SwissFormat(TournamentFormat):
    """Fixed number of rounds, each paired from the current standings."""

    kind = FormatKind.SWISS
    allows_draws = True

    def _build(self, records: List[TournamentParticipantRecord]) -> BracketDocument:
        total_rounds = rounds_needed(len(records))
        shuffled = [r.ref() for r in records]
        random.Random(self.config.swiss_seed).shuffle(shuffled)

        rounds = [
            Round(
                round_number=1,
                name=ROUND_NAME_TEMPLATE.format(round=1),
                matches=self._matches_for(1, pair_consecutively(shuffled)),
            )
        ]
        for round_number in range(2, total_rounds + 1):
            rounds.append(
                Round(
                    round_number=round_number,
                    name=ROUND_NAME_TEMPLATE.format(round=round_number),
                )
            )

        return BracketDocument(
            rounds=rounds,
            participants=records,
            current_round=1,
            total_rounds=total_rounds,
            tournament_type=self.kind,
        )

    @staticmethod
    def _matches_for(round_number: int, pairings: List[SwissPairing]) -> List[MatchSlot]:
        return [
            MatchSlot(
                match_id=MATCH_ID_TEMPLATE.format(round=round_number, match=index),
                player1=player1,
                player2=player2,
            )
            for index, (player1, player2) in enumerate(pairings, start=1)
        ]

    def _on_match_completed(
        self,
        document: BracketDocument,
        round_data: Round,
        match: MatchSlot,
        winner_id: ParticipantId,
        loser_id: MaybeParticipantId,
    ) -> None:
        if loser_id is None:
            self._record(document, winner_id).record_win(BYE_POINTS)
        else:
            self._record(document, winner_id).record_win(WIN_POINTS)
            self._record(document, loser_id).record_loss(LOSS_POINTS)
        self._after_result(document, round_data)

    def _on_draw(self, document: BracketDocument, round_data: Round, match: MatchSlot) -> None:
        for participant_id in match.player_ids:
            self._record(document, participant_id).record_draw(DRAW_POINTS)
        self._after_result(document, round_data)

    def _after_result(self, document: BracketDocument, round_data: Round) -> None:
        if not round_data.is_completed:
            return
        if round_data.round_number != document.current_round:
            return

        document.current_round += 1
        if document.current_round > document.total_rounds:
            self._finish(document, rank_participants(document)[0])
            return

        next_round = document.rounds[document.current_round - 1]
        pairings = pair_by_standings(
            rank_participants(document),
            pairing_history(document),
            bye_history(document),
            avoid_rematches=self.config.swiss_avoid_rematches,
        )
        next_round.matches = self._matches_for(next_round.round_number, pairings)
        logger.info(
            f"Paired {next_round.name}: {len(next_round.matches)} matches from standings"
        )


def generate_bracket_data(
    tournament_type: Union[str, FormatKind],
    participants: RosterInput,
    min_participants: Optional[int] = None,
) -> BracketDocument:
    """Generate a Swiss bracket; any other type is rejected."""
    return SwissFormat().generate_bracket_data(
        tournament_type, participants, min_participants
    )


def handle_match_completion(
    bracket_document: BracketDocument,
    completed_match: MatchRefInput,
    winner_id: MaybeParticipantId,
    tournament_type: Union[str, FormatKind],
) -> BracketDocument:
    """Complete a Swiss match, or record a draw with ``winner_id=None``."""
    return SwissFormat().handle_match_completion(
        bracket_document, completed_match, winner_id, tournament_type
    )
