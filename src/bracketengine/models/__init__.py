"""Data models for Bracket Engine."""

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

from bracketengine.models.bracket import BracketDocument, MatchRef, MatchSlot, Round
from bracketengine.models.config import BracketConfig, load_config
from bracketengine.models.enums import BracketSection, FormatKind, MatchStatus
from bracketengine.models.participant import (
    Participant,
    ParticipantRef,
    TournamentParticipantRecord,
    participants_from_roster,
)

__all__ = [
    "BracketConfig",
    "BracketDocument",
    "BracketSection",
    "FormatKind",
    "MatchRef",
    "MatchSlot",
    "MatchStatus",
    "Participant",
    "ParticipantRef",
    "Round",
    "TournamentParticipantRecord",
    "load_config",
    "participants_from_roster",
]
