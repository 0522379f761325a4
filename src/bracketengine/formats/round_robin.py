"""Round robin brackets.

Every participant meets every other participant exactly once. Pairings are
scheduled with the circle method: the first seat stays fixed and the others
rotate one place per round, so nobody plays twice in the same round. With an
odd roster one participant sits out each round.
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

from typing import List, Optional, Sequence, Tuple, TypeVar, Union

from bracketengine.constants import (
    LOSS_POINTS,
    MATCH_ID_TEMPLATE,
    ROUND_NAME_TEMPLATE,
    WIN_POINTS,
)
from bracketengine.formats.base import MatchRefInput, RosterInput, TournamentFormat
from bracketengine.models.bracket import BracketDocument, MatchSlot, Round
from bracketengine.models.enums import FormatKind
from bracketengine.models.participant import TournamentParticipantRecord
from bracketengine.standings import rank_participants
from bracketengine.type_hints import MaybeParticipantId, ParticipantId
from bracketengine.utils import setup_logger

logger = setup_logger(__name__)

T = TypeVar("T")


def circle_schedule(entrants: Sequence[T]) -> List[List[Tuple[T, T]]]:
    """Schedule every pairing of ``entrants`` into rounds using the circle method.

    Args:
        entrants: Participants in seed order

    Returns:
        One list of pairings per round. An even count gives ``n - 1`` rounds
        of ``n / 2`` pairings; an odd count gives ``n`` rounds of
        ``(n - 1) / 2`` pairings.
    """
    seats: List[Optional[T]] = list(entrants)
    if len(seats) % 2:
        seats.append(None)  # whoever meets the empty seat sits out

    count = len(seats)
    schedule = []
    for _ in range(count - 1):
        pairings = []
        for i in range(count // 2):
            home, away = seats[i], seats[count - 1 - i]
            if home is not None and away is not None:
                pairings.append((home, away))
        schedule.append(pairings)
        # Rotate: keep the first seat fixed, move the last seat to position 1
        seats = [seats[0], seats[-1]] + seats[1:-1]
    return schedule


class RoundRobinFormat(TournamentFormat):
    """All-play-all with standings by wins, then points."""

    kind = FormatKind.ROUND_ROBIN

    def _build(self, records: List[TournamentParticipantRecord]) -> BracketDocument:
        schedule = circle_schedule([r.ref() for r in records])
        rounds = []
        for round_number, pairings in enumerate(schedule, start=1):
            rounds.append(
                Round(
                    round_number=round_number,
                    name=ROUND_NAME_TEMPLATE.format(round=round_number),
                    matches=[
                        MatchSlot(
                            match_id=MATCH_ID_TEMPLATE.format(
                                round=round_number, match=index
                            ),
                            player1=player1,
                            player2=player2,
                        )
                        for index, (player1, player2) in enumerate(pairings, start=1)
                    ],
                )
            )
        return BracketDocument(
            rounds=rounds,
            participants=records,
            current_round=1,
            total_rounds=len(rounds),
            tournament_type=self.kind,
        )

    def _on_match_completed(
        self,
        document: BracketDocument,
        round_data: Round,
        match: MatchSlot,
        winner_id: ParticipantId,
        loser_id: MaybeParticipantId,
    ) -> None:
        self._record(document, winner_id).record_win(WIN_POINTS)
        if loser_id is not None:
            self._record(document, loser_id).record_loss(LOSS_POINTS)

        # Results may arrive out of order; advance past every finished round
        while (
            document.current_round <= document.total_rounds
            and document.rounds[document.current_round - 1].is_completed
        ):
            logger.info(f"{document.rounds[document.current_round - 1].name} complete")
            document.current_round += 1

        if document.current_round > document.total_rounds:
            leader = rank_participants(document)[0]
            logger.debug(f"All round robin rounds played; {leader.id} leads the standings")
            self._finish(document, leader)


def generate_bracket_data(
    tournament_type: Union[str, FormatKind],
    participants: RosterInput,
    min_participants: Optional[int] = None,
) -> BracketDocument:
    """Generate a round robin bracket; any other type is rejected."""
    return RoundRobinFormat().generate_bracket_data(
        tournament_type, participants, min_participants
    )


def handle_match_completion(
    bracket_document: BracketDocument,
    completed_match: MatchRefInput,
    winner_id: ParticipantId,
    tournament_type: Union[str, FormatKind],
) -> BracketDocument:
    """Complete a round robin match; any other type is rejected."""
    return RoundRobinFormat().handle_match_completion(
        bracket_document, completed_match, winner_id, tournament_type
    )
