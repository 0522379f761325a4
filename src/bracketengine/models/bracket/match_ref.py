"""Reference to a match reported by a caller."""

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

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from bracketengine.exceptions import MatchNotFoundError
from bracketengine.models.enums import BracketSection


@dataclass(frozen=True)
class MatchRef:
    """Identifies the match a result belongs to.

    Only ``match_id`` is required. ``round_number`` and ``bracket`` are
    optional cross-checks: when given they must agree with the match found
    in the document. Player ids are always read from the document.
    """

    match_id: str
    round_number: Optional[int] = None
    bracket: Optional[BracketSection] = None

    @classmethod
    def coerce(cls, value: Union["MatchRef", str, Dict[str, Any]]) -> "MatchRef":
        """Accept a MatchRef, a bare match id, or a match row dictionary."""
        if isinstance(value, MatchRef):
            return value
        if isinstance(value, str):
            return cls(match_id=value)
        if not isinstance(value, Mapping):
            raise MatchNotFoundError(str(value), "not a match reference")
        return cls.from_dict(value)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MatchRef":
        """Build a reference from document keys or flattened match row keys.

        Raises:
            MatchNotFoundError: If the match id is missing or the round
                number or bracket cannot be read
        """
        match_id = data.get("matchId", data.get("match_id"))
        if match_id is None or str(match_id).strip() == "":
            raise MatchNotFoundError("<missing>", "match reference has no matchId")
        match_id = str(match_id)

        round_number = data.get("roundNumber", data.get("round_number"))
        if round_number is not None:
            try:
                round_number = int(round_number)
            except (TypeError, ValueError):
                raise MatchNotFoundError(
                    match_id, f"invalid round number {round_number!r}"
                ) from None

        bracket = data.get("bracket")
        if bracket:
            try:
                bracket = BracketSection(bracket)
            except ValueError:
                raise MatchNotFoundError(match_id, f"unknown bracket {bracket!r}") from None
        else:
            bracket = None

        return cls(match_id=match_id, round_number=round_number, bracket=bracket)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "matchId": self.match_id,
            "roundNumber": self.round_number,
            "bracket": self.bracket.value if self.bracket else None,
        }
