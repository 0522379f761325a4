"""Data model for a bracket round."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from bracketengine.models.bracket.match_slot import MatchSlot
from bracketengine.models.enums import BracketSection


@dataclass
class Round:
    """Container for the matches of one round.

    Attributes
    ----------
    round_number : int
        1-based, sequential within ``bracket``.
    name : str
        Display label ("Round 2", "Finals", "Losers Round 3", ...).
    bracket : BracketSection
        ``main`` for single elimination, round robin and Swiss; ``winners``,
        ``losers`` or ``grand_finals`` for double elimination.
    matches : list of MatchSlot
        Ordered matches. May be empty for rounds filled later (Swiss,
        losers bracket).
    """

    round_number: int
    name: str
    bracket: BracketSection = BracketSection.MAIN
    matches: List[MatchSlot] = field(default_factory=list)

    @property
    def is_completed(self) -> bool:
        """All matches have a result. Empty rounds count as completed."""
        return all(match.is_completed for match in self.matches)

    def get_match(self, match_id: str) -> Optional[MatchSlot]:
        for match in self.matches:
            if match.match_id == match_id:
                return match
        return None

    def first_open_match(self) -> Optional[MatchSlot]:
        """First match, in round order, that can still take a participant."""
        for match in self.matches:
            if match.has_open_slot:
                return match
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round to dictionary."""
        return {
            "roundNumber": self.round_number,
            "name": self.name,
            "bracket": self.bracket.value,
            "matches": [m.to_dict() for m in self.matches],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Round":
        """Deserialize round from dictionary."""
        return cls(
            round_number=int(data["roundNumber"]),
            name=data.get("name", f"Round {data['roundNumber']}"),
            bracket=BracketSection(data.get("bracket", BracketSection.MAIN.value)),
            matches=[MatchSlot.from_dict(m) for m in data.get("matches", [])],
        )
