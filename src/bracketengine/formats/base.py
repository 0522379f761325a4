"""Common interface for tournament formats.

A :class:`TournamentFormat` generates a bracket document from a roster and
advances it when results come in. Implementations never mutate the document
they are given: every operation deep-copies it first and returns the copy.
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

import copy
import math
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from bracketengine.exceptions import (
    BracketEngineError,
    InvalidResultError,
    MatchAlreadyCompletedError,
    MatchNotReadyError,
    TournamentCompleteError,
    UnsupportedFormatError,
    ValidationError,
)
from bracketengine.models.bracket import BracketDocument, MatchRef, MatchSlot, Round
from bracketengine.models.config import BracketConfig
from bracketengine.models.enums import FormatKind
from bracketengine.models.participant import (
    Participant,
    ParticipantRef,
    TournamentParticipantRecord,
    participant_key,
    participants_from_roster,
)
from bracketengine.type_hints import MaybeParticipantId, ParticipantId, RosterRow
from bracketengine.utils import setup_logger
from bracketengine.utils.validation import (
    validate_participant_count,
    validate_roster_strict,
)

logger = setup_logger(__name__)

RosterInput = Iterable[Union[Participant, RosterRow]]
MatchRefInput = Union[MatchRef, str, dict]


def rounds_needed(participant_count: int) -> int:
    """``ceil(log2(n))``: rounds for a knockout of ``n`` participants."""
    if participant_count < 2:
        return 0
    return math.ceil(math.log2(participant_count))


def pair_consecutively(
    refs: Sequence[ParticipantRef],
) -> List[Tuple[ParticipantRef, Optional[ParticipantRef]]]:
    """Pair ``(0, 1), (2, 3), ...``; an odd count leaves the last one with a bye."""
    pairs = []
    for i in range(0, len(refs), 2):
        opponent = refs[i + 1] if i + 1 < len(refs) else None
        pairs.append((refs[i], opponent))
    return pairs


class TournamentFormat(ABC):
    """Generation and result handling for one tournament format.

    Subclasses implement :meth:`_build` to lay out the rounds and
    :meth:`_on_match_completed` to update standings and advance players.
    Bye handling, validation and copy-on-write are shared here.
    """

    kind: FormatKind
    allows_draws: bool = False

    def __init__(self, config: Optional[BracketConfig] = None) -> None:
        self.config = config or BracketConfig()

    # ========== Generation ==========

    def generate(
        self, participants: RosterInput, min_participants: Optional[int] = None
    ) -> BracketDocument:
        """Generate a bracket document for an ordered roster.

        Args:
            participants: Confirmed participants; order is seeding
            min_participants: Minimum roster size; defaults to the config value

        Returns:
            New bracket document

        Raises:
            ValidationError: If the roster is too small or has duplicate ids
        """
        roster = participants_from_roster(participants)
        validate_roster_strict(roster, self._minimum(min_participants))

        records = [
            TournamentParticipantRecord.from_participant(participant, seed)
            for seed, participant in enumerate(roster, start=1)
        ]
        document = self._build(records)
        logger.info(
            f"Generated {self.kind.value} bracket: {len(records)} participants, "
            f"{document.total_rounds} rounds, {document.match_count} matches"
        )
        return document

    def generate_bracket_data(
        self,
        tournament_type: Union[str, FormatKind],
        participants: RosterInput,
        min_participants: Optional[int] = None,
    ) -> BracketDocument:
        """Generate after checking the roster size and that the type is this format's."""
        roster = participants_from_roster(participants)
        minimum = self._minimum(min_participants)
        result = validate_participant_count(len(roster), minimum)
        if not result:
            raise ValidationError(result.error_message)
        self.ensure_kind(tournament_type)
        return self.generate(roster, minimum)

    def _minimum(self, min_participants: Optional[int]) -> int:
        if min_participants is None:
            return self.config.effective_min_participants
        return min_participants

    @abstractmethod
    def _build(self, records: List[TournamentParticipantRecord]) -> BracketDocument:
        """Lay out rounds and matches for validated participant records."""

    # ========== Result handling ==========

    def complete(
        self,
        document: BracketDocument,
        completed_match: MatchRefInput,
        winner_id: MaybeParticipantId,
    ) -> BracketDocument:
        """Apply a match result and return the advanced document.

        Args:
            document: Current bracket document (left untouched)
            completed_match: Reference to the finished match
            winner_id: Winning participant id, as a string or the roster's
                original (e.g. integer) id; ``None`` reports a draw where the
                format allows draws

        Returns:
            Updated copy of the document

        Raises:
            UnsupportedFormatError: Document was generated by another format
            TournamentCompleteError: Tournament already has a winner
            MatchNotFoundError: Reference does not resolve
            MatchAlreadyCompletedError: Match already has a result
            InvalidResultError: Winner is not playing, or the match is not ready
        """
        ref = MatchRef.coerce(completed_match)
        self._check_document(document)
        if winner_id is not None:
            winner_id = participant_key(winner_id)
        updated = document.copy()
        round_data, match = updated.locate(ref)
        if match.is_completed:
            raise MatchAlreadyCompletedError(f"Match {match.match_id} is already completed")

        if winner_id is None:
            self._apply_draw(updated, round_data, match)
        elif match.is_bye and match.present_player.id == winner_id:
            self._apply_bye(updated, round_data, match)
        else:
            if not match.is_ready:
                raise InvalidResultError(
                    f"Match {match.match_id} does not have two players yet"
                )
            if not match.involves(winner_id):
                raise InvalidResultError(
                    f"Participant {winner_id} is not playing in match {match.match_id}"
                )
            loser_id = match.opponent_of(winner_id)
            match.complete(winner_id)
            logger.info(f"{match.match_id}: {winner_id} defeats {loser_id}")
            self._on_match_completed(updated, round_data, match, winner_id, loser_id)
        return updated

    def handle_match_completion(
        self,
        document: BracketDocument,
        completed_match: MatchRefInput,
        winner_id: MaybeParticipantId,
        tournament_type: Union[str, FormatKind],
    ) -> BracketDocument:
        """Complete a match after checking the type is this format's."""
        self.ensure_kind(tournament_type)
        return self.complete(document, completed_match, winner_id)

    def advance_bye(
        self, document: BracketDocument, match_ref: MatchRefInput
    ) -> BracketDocument:
        """Resolve a bye match by advancing its only player with a nominal win.

        Raises:
            MatchNotReadyError: If the match is not a bye, or could still
                receive an opponent
        """
        ref = MatchRef.coerce(match_ref)
        self._check_document(document)
        updated = document.copy()
        round_data, match = updated.locate(ref)
        self._apply_bye(updated, round_data, match)
        return updated

    def advance_all_byes(self, document: BracketDocument) -> BracketDocument:
        """Resolve every bye that is ready, including byes created by resolving others."""
        self._check_document(document)
        updated = document.copy()
        while not updated.tournament_complete:
            pending = self.ready_byes(updated)
            if not pending:
                break
            round_data, match = pending[0]
            self._apply_bye(updated, round_data, match)
        return updated

    @abstractmethod
    def _on_match_completed(
        self,
        document: BracketDocument,
        round_data: Round,
        match: MatchSlot,
        winner_id: ParticipantId,
        loser_id: MaybeParticipantId,
    ) -> None:
        """Update standings and advance players. ``loser_id`` is None for a bye."""

    def _on_draw(self, document: BracketDocument, round_data: Round, match: MatchSlot) -> None:
        raise InvalidResultError(f"{self.kind.label} matches cannot end in a draw")

    # ========== Queries ==========

    def ready_byes(self, document: BracketDocument) -> List[Tuple[Round, MatchSlot]]:
        """Bye matches that can be advanced now."""
        return [
            (round_data, match)
            for round_data, match in document.iter_matches()
            if match.is_bye and self.is_bye_ready(document, round_data)
        ]

    def current_matches(self, document: BracketDocument) -> List[MatchSlot]:
        """Matches to show as playable: both players known, or a ready bye."""
        if document.tournament_complete:
            return []
        playable = []
        for round_data, match in document.iter_matches():
            if match.is_ready:
                playable.append(match)
            elif match.is_bye and self.is_bye_ready(document, round_data):
                playable.append(match)
        return playable

    def is_bye_ready(self, document: BracketDocument, round_data: Round) -> bool:
        """No further participant can arrive in ``round_data``."""
        return all(
            self._is_round_closed(document, feeder)
            for feeder in self._feeder_rounds(document, round_data)
        )

    def _is_round_closed(self, document: BracketDocument, round_data: Round) -> bool:
        return round_data.is_completed and self.is_bye_ready(document, round_data)

    def _feeder_rounds(self, document: BracketDocument, round_data: Round) -> List[Round]:
        """Rounds whose results can still place participants in ``round_data``."""
        return []

    # ========== Shared helpers ==========

    def ensure_kind(self, tournament_type: Union[str, FormatKind]) -> FormatKind:
        kind = FormatKind.parse(tournament_type)
        if kind != self.kind:
            raise UnsupportedFormatError(tournament_type, expected=self.kind.label)
        return kind

    def _check_document(self, document: BracketDocument) -> None:
        if document.tournament_type != self.kind:
            raise UnsupportedFormatError(
                document.tournament_type.value, expected=self.kind.label
            )
        if document.tournament_complete:
            raise TournamentCompleteError(
                f"Tournament is already complete (winner: "
                f"{document.winner.display_name if document.winner else 'unknown'})"
            )

    def _apply_bye(
        self, document: BracketDocument, round_data: Round, match: MatchSlot
    ) -> None:
        if match.is_completed:
            raise MatchAlreadyCompletedError(f"Match {match.match_id} is already completed")
        if not match.is_bye:
            raise MatchNotReadyError(f"Match {match.match_id} is not a bye")
        if not self.is_bye_ready(document, round_data):
            raise MatchNotReadyError(
                f"Match {match.match_id} can still receive an opponent"
            )
        player_id = match.present_player.id
        match.complete(player_id)
        logger.info(f"{match.match_id}: {player_id} advances on a bye")
        self._on_match_completed(document, round_data, match, player_id, None)

    def _apply_draw(
        self, document: BracketDocument, round_data: Round, match: MatchSlot
    ) -> None:
        if not self.allows_draws:
            raise InvalidResultError(f"{self.kind.label} matches cannot end in a draw")
        if not match.is_ready:
            raise InvalidResultError(
                f"Match {match.match_id} does not have two players yet"
            )
        match.complete(None)
        logger.info(f"{match.match_id}: draw")
        self._on_draw(document, round_data, match)

    @staticmethod
    def _record(
        document: BracketDocument, participant_id: ParticipantId
    ) -> TournamentParticipantRecord:
        record = document.get_participant(participant_id)
        if record is None:
            raise InvalidResultError(
                f"Participant {participant_id} is not part of this bracket"
            )
        return record

    @staticmethod
    def _advance_into(round_data: Round, participant: ParticipantRef) -> MatchSlot:
        """Fill the first open slot of the first open match (player1 before player2)."""
        target = round_data.first_open_match()
        if target is None:
            raise BracketEngineError(
                f"No open slot in {round_data.name} for {participant.id}"
            )
        target.fill_open_slot(participant)
        logger.debug(f"{participant.id} placed in {target.match_id}")
        return target

    @staticmethod
    def _finish(document: BracketDocument, champion: TournamentParticipantRecord) -> None:
        document.tournament_complete = True
        document.winner = copy.deepcopy(champion)
        logger.info(f"Tournament complete, winner: {champion.display_name} ({champion.id})")

    @staticmethod
    def _refresh_current_round(document: BracketDocument) -> None:
        """Point ``current_round`` at the first round (document order) still in play."""
        for position, round_data in enumerate(document.rounds, start=1):
            if round_data.matches and not round_data.is_completed:
                document.current_round = position
                return
        document.current_round = document.total_rounds
