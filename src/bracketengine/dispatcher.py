"""Format dispatcher.

Routes generation and completion calls to the format named by a
``tournamentType`` tag. The set of formats is closed: unknown tags fail with
:class:`~bracketengine.exceptions.UnsupportedFormatError`.
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

from typing import Dict, List, Optional, Type, Union

from bracketengine.exceptions import UnsupportedFormatError, ValidationError
from bracketengine.formats.base import MatchRefInput, RosterInput, TournamentFormat
from bracketengine.formats.double_elimination import DoubleEliminationFormat
from bracketengine.formats.round_robin import RoundRobinFormat
from bracketengine.formats.single_elimination import SingleEliminationFormat
from bracketengine.formats.swiss import SwissFormat
from bracketengine.models.bracket import BracketDocument, MatchSlot
from bracketengine.models.config import BracketConfig
from bracketengine.models.enums import FormatKind
from bracketengine.models.participant import participants_from_roster
from bracketengine.type_hints import MaybeParticipantId
from bracketengine.utils import setup_logger
from bracketengine.utils.validation import validate_participant_count

logger = setup_logger(__name__)

FORMAT_REGISTRY: Dict[FormatKind, Type[TournamentFormat]] = {
    FormatKind.SINGLE_ELIMINATION: SingleEliminationFormat,
    FormatKind.DOUBLE_ELIMINATION: DoubleEliminationFormat,
    FormatKind.ROUND_ROBIN: RoundRobinFormat,
    FormatKind.SWISS: SwissFormat,
}


def get_format(
    tournament_type: Union[str, FormatKind], config: Optional[BracketConfig] = None
) -> TournamentFormat:
    """Instantiate the format registered for a tournament type.

    Raises:
        UnsupportedFormatError: If the tag names no known format
    """
    kind = FormatKind.parse(tournament_type)
    format_cls = FORMAT_REGISTRY.get(kind)
    if format_cls is None:
        raise UnsupportedFormatError(tournament_type)
    return format_cls(config)


def generate_bracket_data(
    tournament_type: Union[str, FormatKind],
    participants: RosterInput,
    min_participants: Optional[int] = None,
    config: Optional[BracketConfig] = None,
) -> BracketDocument:
    """Generate a bracket document for any supported format.

    Args:
        tournament_type: Format tag, e.g. ``"double_elimination"``
        participants: Confirmed roster in seed order
        min_participants: Minimum roster size (never below two); defaults to
            ``config.min_participants``
        config: Engine configuration (Swiss seed, rematch avoidance)

    Returns:
        New bracket document

    Raises:
        ValidationError: If the roster is too small or invalid
        UnsupportedFormatError: If the tag names no known format
    """
    config = config or BracketConfig()
    minimum = (
        config.effective_min_participants if min_participants is None else min_participants
    )
    roster = participants_from_roster(participants)
    result = validate_participant_count(len(roster), minimum)
    if not result:
        raise ValidationError(result.error_message)
    tournament_format = get_format(tournament_type, config)
    return tournament_format.generate(roster, minimum)


def handle_match_completion(
    bracket_document: BracketDocument,
    completed_match: MatchRefInput,
    winner_id: MaybeParticipantId,
    tournament_type: Union[str, FormatKind],
    config: Optional[BracketConfig] = None,
) -> BracketDocument:
    """Apply a match result with the handler for ``tournament_type``.

    The document must have been generated by the same format, otherwise
    :class:`UnsupportedFormatError` is raised. The input document is never
    modified; the advanced copy is returned.
    """
    tournament_format = get_format(tournament_type, config)
    return tournament_format.complete(bracket_document, completed_match, winner_id)


def advance_bye(
    bracket_document: BracketDocument,
    match_ref: MatchRefInput,
    config: Optional[BracketConfig] = None,
) -> BracketDocument:
    """Resolve a ready bye match in a document of any format."""
    tournament_format = get_format(bracket_document.tournament_type, config)
    return tournament_format.advance_bye(bracket_document, match_ref)


def advance_all_byes(
    bracket_document: BracketDocument, config: Optional[BracketConfig] = None
) -> BracketDocument:
    """Resolve every ready bye, cascading into byes that become ready."""
    tournament_format = get_format(bracket_document.tournament_type, config)
    return tournament_format.advance_all_byes(bracket_document)


def current_matches(bracket_document: BracketDocument) -> List[MatchSlot]:
    """Matches that can be played or resolved right now."""
    return get_format(bracket_document.tournament_type).current_matches(
        bracket_document
    )
