"""Single elimination brackets.

Round 1 pairs the roster in seed order ``(1, 2), (3, 4), ...``. Later rounds
are pre-allocated empty and filled as winners advance into the first open
slot of the next round. One loss eliminates.
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

import math
from typing import List, Optional, Union

from bracketengine.constants import (
    FINALS_NAME,
    MATCH_ID_TEMPLATE,
    ROUND_NAME_TEMPLATE,
)
from bracketengine.formats.base import (
    MatchRefInput,
    RosterInput,
    TournamentFormat,
    pair_consecutively,
    rounds_needed,
)
from bracketengine.models.bracket import BracketDocument, MatchSlot, Round
from bracketengine.models.enums import BracketSection, FormatKind
from bracketengine.models.participant import TournamentParticipantRecord
from bracketengine.type_hints import MaybeParticipantId, ParticipantId
from bracketengine.utils import setup_logger

logger = setup_logger(__name__)


class SingleEliminationFormat(TournamentFormat):
    """Knockout bracket: lose once and you are out."""

    kind = FormatKind.SINGLE_ELIMINATION

    def _build(self, records: List[TournamentParticipantRecord]) -> BracketDocument:
        total_rounds = rounds_needed(len(records))
        rounds: List[Round] = []

        first_round = [
            MatchSlot(
                match_id=MATCH_ID_TEMPLATE.format(round=1, match=index),
                player1=player1,
                player2=player2,
            )
            for index, (player1, player2) in enumerate(
                pair_consecutively([r.ref() for r in records]), start=1
            )
        ]
        rounds.append(
            Round(
                round_number=1,
                name=self._round_name(1, total_rounds),
                matches=first_round,
            )
        )

        for round_number in range(2, total_rounds + 1):
            match_count = math.ceil(len(rounds[-1].matches) / 2)
            rounds.append(
                Round(
                    round_number=round_number,
                    name=self._round_name(round_number, total_rounds),
                    matches=[
                        MatchSlot(
                            match_id=MATCH_ID_TEMPLATE.format(
                                round=round_number, match=index
                            )
                        )
                        for index in range(1, match_count + 1)
                    ],
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
    def _round_name(round_number: int, total_rounds: int) -> str:
        if round_number == total_rounds:
            return FINALS_NAME
        return ROUND_NAME_TEMPLATE.format(round=round_number)

    def _on_match_completed(
        self,
        document: BracketDocument,
        round_data: Round,
        match: MatchSlot,
        winner_id: ParticipantId,
        loser_id: MaybeParticipantId,
    ) -> None:
        winner = self._record(document, winner_id)
        winner.record_win()
        if loser_id is not None:
            self._record(document, loser_id).record_elimination_loss()

        next_round = document.get_round(BracketSection.MAIN, round_data.round_number + 1)
        if next_round is not None:
            self._advance_into(next_round, winner.ref())

        self._refresh_current_round(document)

        remaining = document.active_participants
        if len(remaining) == 1:
            self._finish(document, remaining[0])

    def _feeder_rounds(self, document: BracketDocument, round_data: Round) -> List[Round]:
        previous = document.get_round(BracketSection.MAIN, round_data.round_number - 1)
        return [previous] if previous is not None else []


def generate_bracket_data(
    tournament_type: Union[str, FormatKind],
    participants: RosterInput,
    min_participants: Optional[int] = None,
) -> BracketDocument:
    """Generate a single elimination bracket; any other type is rejected."""
    return SingleEliminationFormat().generate_bracket_data(
        tournament_type, participants, min_participants
    )


def handle_match_completion(
    bracket_document: BracketDocument,
    completed_match: MatchRefInput,
    winner_id: ParticipantId,
    tournament_type: Union[str, FormatKind],
) -> BracketDocument:
    """Complete a single elimination match; any other type is rejected."""
    return SingleEliminationFormat().handle_match_completion(
        bracket_document, completed_match, winner_id, tournament_type
    )
