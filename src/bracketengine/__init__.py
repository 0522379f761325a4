"""Bracket Engine - tournament bracket generation and advancement.

Supports single elimination, double elimination (with a grand finals
reset), round robin and Swiss brackets.
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

__version__ = "0.3.0"

from bracketengine.dispatcher import (
    advance_all_byes,
    advance_bye,
    current_matches,
    generate_bracket_data,
    get_format,
    handle_match_completion,
)
from bracketengine.models import (
    BracketConfig,
    BracketDocument,
    BracketSection,
    FormatKind,
    MatchRef,
    MatchSlot,
    Participant,
    Round,
    TournamentParticipantRecord,
)

__all__ = [
    "__version__",
    "BracketConfig",
    "BracketDocument",
    "BracketSection",
    "FormatKind",
    "MatchRef",
    "MatchSlot",
    "Participant",
    "Round",
    "TournamentParticipantRecord",
    "advance_all_byes",
    "advance_bye",
    "current_matches",
    "generate_bracket_data",
    "get_format",
    "handle_match_completion",
]
