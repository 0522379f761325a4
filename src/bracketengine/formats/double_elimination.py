"""Double elimination brackets.

The document holds three sections:

* the winners bracket, seeded like single elimination;
* the losers bracket, ``(W - 1) * 2`` rounds that start empty and gain
  matches as participants drop down;
* the grand finals, with a second "if necessary" match used only when the
  losers bracket champion wins the first one.

A participant is eliminated on their second loss.
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
    GRAND_FINALS_MATCH1,
    GRAND_FINALS_MATCH2,
    GRAND_FINALS_NAME,
    LOSERS_MATCH_ID_TEMPLATE,
    LOSERS_ROUND_NAME_TEMPLATE,
    MAX_LOSSES,
    WINNERS_MATCH_ID_TEMPLATE,
    WINNERS_ROUND_NAME_TEMPLATE,
)
from bracketengine.exceptions import BracketEngineError
from bracketengine.formats.base import (
    MatchRefInput,
    RosterInput,
    TournamentFormat,
    pair_consecutively,
    rounds_needed,
)
from bracketengine.models.bracket import BracketDocument, MatchSlot, Round
from bracketengine.models.enums import BracketSection, FormatKind
from bracketengine.models.participant import ParticipantRef, TournamentParticipantRecord
from bracketengine.type_hints import MaybeParticipantId, ParticipantId
from bracketengine.utils import setup_logger

logger = setup_logger(__name__)


def losers_round_for_drop(winners_round: int) -> int:
    """Losers round that receives the losers of a winners round.

    Winners round 1 drops into losers round 1; winners round ``r`` drops into
    losers round ``2 * (r - 1)``, where it meets the survivors of the
    previous losers round.
    """
    if winners_round <= 1:
        return 1
    return 2 * (winners_round - 1)


class DoubleEliminationFormat(TournamentFormat):
    """Winners bracket, losers bracket and grand finals with a bracket reset."""

    kind = FormatKind.DOUBLE_ELIMINATION

    # ========== Generation ==========

    def _build(self, records: List[TournamentParticipantRecord]) -> BracketDocument:
        winners_rounds = rounds_needed(len(records))
        losers_rounds = (winners_rounds - 1) * 2
        rounds: List[Round] = []

        first_round = [
            MatchSlot(
                match_id=WINNERS_MATCH_ID_TEMPLATE.format(round=1, match=index),
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
                name=WINNERS_ROUND_NAME_TEMPLATE.format(round=1),
                bracket=BracketSection.WINNERS,
                matches=first_round,
            )
        )
        for round_number in range(2, winners_rounds + 1):
            match_count = math.ceil(len(rounds[-1].matches) / 2)
            rounds.append(
                Round(
                    round_number=round_number,
                    name=WINNERS_ROUND_NAME_TEMPLATE.format(round=round_number),
                    bracket=BracketSection.WINNERS,
                    matches=[
                        MatchSlot(
                            match_id=WINNERS_MATCH_ID_TEMPLATE.format(
                                round=round_number, match=index
                            )
                        )
                        for index in range(1, match_count + 1)
                    ],
                )
            )

        # Losers rounds start empty and are populated as participants drop down
        for round_number in range(1, losers_rounds + 1):
            rounds.append(
                Round(
                    round_number=round_number,
                    name=LOSERS_ROUND_NAME_TEMPLATE.format(round=round_number),
                    bracket=BracketSection.LOSERS,
                )
            )

        rounds.append(
            Round(
                round_number=1,
                name=GRAND_FINALS_NAME,
                bracket=BracketSection.GRAND_FINALS,
                matches=[
                    MatchSlot(match_id=GRAND_FINALS_MATCH1),
                    MatchSlot(match_id=GRAND_FINALS_MATCH2),
                ],
            )
        )

        return BracketDocument(
            rounds=rounds,
            participants=records,
            current_round=1,
            total_rounds=winners_rounds + losers_rounds + 1,
            tournament_type=self.kind,
        )

    # ========== Advancement ==========

    def _on_match_completed(
        self,
        document: BracketDocument,
        round_data: Round,
        match: MatchSlot,
        winner_id: ParticipantId,
        loser_id: MaybeParticipantId,
    ) -> None:
        winner = self._record(document, winner_id)
        loser = self._record(document, loser_id) if loser_id is not None else None
        winner.record_win()
        if loser is not None:
            loser.record_elimination_loss(MAX_LOSSES)

        if round_data.bracket == BracketSection.WINNERS:
            self._after_winners_match(document, round_data, winner, loser)
        elif round_data.bracket == BracketSection.LOSERS:
            self._after_losers_match(document, round_data, winner, loser)
        else:
            self._after_grand_finals_match(document, match, winner, loser)

        if not document.tournament_complete:
            self._refresh_current_round(document)

    def _after_winners_match(
        self,
        document: BracketDocument,
        round_data: Round,
        winner: TournamentParticipantRecord,
        loser: Optional[TournamentParticipantRecord],
    ) -> None:
        winners_final = len(document.rounds_in(BracketSection.WINNERS))
        if round_data.round_number == winners_final:
            self._grand_finals_match(document, GRAND_FINALS_MATCH1).player1 = winner.ref()
            logger.info(f"{winner.id} wins the winners bracket")
        else:
            next_round = document.get_round(
                BracketSection.WINNERS, round_data.round_number + 1
            )
            self._advance_into(next_round, winner.ref())

        if loser is None:
            return
        if not document.rounds_in(BracketSection.LOSERS):
            # Two-player bracket: the winners final loser goes straight to grand finals
            self._grand_finals_match(document, GRAND_FINALS_MATCH1).player2 = loser.ref()
            return
        target = document.get_round(
            BracketSection.LOSERS, losers_round_for_drop(round_data.round_number)
        )
        placed = self._drop_into(target, loser.ref())
        logger.info(f"{loser.id} drops to {target.name} ({placed.match_id})")

    def _after_losers_match(
        self,
        document: BracketDocument,
        round_data: Round,
        winner: TournamentParticipantRecord,
        loser: Optional[TournamentParticipantRecord],
    ) -> None:
        if loser is not None:
            logger.info(f"{loser.id} eliminated after {loser.losses} losses")
        losers_final = len(document.rounds_in(BracketSection.LOSERS))
        if round_data.round_number == losers_final:
            self._grand_finals_match(document, GRAND_FINALS_MATCH1).player2 = winner.ref()
            logger.info(f"{winner.id} wins the losers bracket")
            return
        next_round = document.get_round(BracketSection.LOSERS, round_data.round_number + 1)
        self._drop_into(next_round, winner.ref())

    def _after_grand_finals_match(
        self,
        document: BracketDocument,
        match: MatchSlot,
        winner: TournamentParticipantRecord,
        loser: Optional[TournamentParticipantRecord],
    ) -> None:
        if match.match_id == GRAND_FINALS_MATCH1 and winner.id == match.player2.id:
            # Losers bracket champion handed the winners champion a first loss
            reset = self._grand_finals_match(document, GRAND_FINALS_MATCH2)
            reset.player1 = match.player1
            reset.player2 = match.player2
            logger.info("Bracket reset: grand finals match 2 required")
            return
        self._finish(document, winner)

    # ========== Helpers ==========

    @staticmethod
    def _grand_finals_match(document: BracketDocument, match_id: str) -> MatchSlot:
        finals = document.get_round(BracketSection.GRAND_FINALS, 1)
        match = finals.get_match(match_id) if finals is not None else None
        if match is None:
            raise BracketEngineError(f"Bracket document has no {match_id}")
        return match

    @staticmethod
    def _drop_into(round_data: Round, participant: ParticipantRef) -> MatchSlot:
        """Take the first open slot in a losers round, opening a new match if needed."""
        target = round_data.first_open_match()
        if target is None:
            target = MatchSlot(
                match_id=LOSERS_MATCH_ID_TEMPLATE.format(
                    round=round_data.round_number, match=len(round_data.matches) + 1
                )
            )
            round_data.matches.append(target)
        target.fill_open_slot(participant)
        return target

    def _feeder_rounds(self, document: BracketDocument, round_data: Round) -> List[Round]:
        feeders: List[Round] = []
        if round_data.bracket == BracketSection.WINNERS:
            previous = document.get_round(BracketSection.WINNERS, round_data.round_number - 1)
            if previous is not None:
                feeders.append(previous)
        elif round_data.bracket == BracketSection.LOSERS:
            number = round_data.round_number
            previous = document.get_round(BracketSection.LOSERS, number - 1)
            if previous is not None:
                feeders.append(previous)
            for winners_round in document.rounds_in(BracketSection.WINNERS):
                if losers_round_for_drop(winners_round.round_number) == number:
                    feeders.append(winners_round)
        else:
            feeders.extend(document.rounds_in(BracketSection.WINNERS))
            feeders.extend(document.rounds_in(BracketSection.LOSERS))
        return feeders


def generate_bracket_data(
    tournament_type: Union[str, FormatKind],
    participants: RosterInput,
    min_participants: Optional[int] = None,
) -> BracketDocument:
    """Generate a double elimination bracket; any other type is rejected."""
    return DoubleEliminationFormat().generate_bracket_data(
        tournament_type, participants, min_participants
    )


def handle_match_completion(
    bracket_document: BracketDocument,
    completed_match: MatchRefInput,
    winner_id: ParticipantId,
    tournament_type: Union[str, FormatKind],
) -> BracketDocument:
    """Complete a double elimination match; any other type is rejected."""
    return DoubleEliminationFormat().handle_match_completion(
        bracket_document, completed_match, winner_id, tournament_type
    )
