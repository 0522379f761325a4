"""Participant models.

A :class:`Participant` is the roster entry handed to a generator. Once a
bracket is generated the engine keeps its own per-tournament copy, the
:class:`TournamentParticipantRecord`, which the completion handlers mutate.
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

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Union

from bracketengine.exceptions import ValidationError
from bracketengine.type_hints import ParticipantId, RosterRow


@dataclass(frozen=True)
class Participant:
    """A confirmed roster entry.

    Attributes
    ----------
    id : str
        Opaque, stable identifier (the user id behind the registration).
    display_name : str
        Name shown in brackets.
    """

    id: ParticipantId
    display_name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "displayName": self.display_name}

    @classmethod
    def from_dict(cls, data: RosterRow) -> "Participant":
        """Build a participant from a roster row.

        The display name falls back to ``username``, then the first and last
        name, then ``"User <id>"``.
        """
        raw_id = data.get("id", data.get("user_id"))
        if raw_id is None or str(raw_id).strip() == "":
            raise ValidationError(f"Roster row has no participant id: {dict(data)!r}")
        participant_id = participant_key(raw_id)
        return cls(id=participant_id, display_name=_display_name(data, participant_id))


def participant_key(raw_id: Any) -> ParticipantId:
    """Identifier as stored in bracket documents.

    Roster ids may be numbers; documents always hold them as strings, so
    callers can report results with either form.
    """
    return str(raw_id)


def _display_name(data: RosterRow, participant_id: str) -> str:
    for key in ("displayName", "display_name", "name", "username"):
        value = data.get(key)
        if value and str(value).strip():
            return str(value).strip()
    full_name = f"{data.get('first_name') or ''} {data.get('last_name') or ''}".strip()
    if full_name:
        return full_name
    return f"User {participant_id}"


def participants_from_roster(
    rows: Iterable[Union[RosterRow, Participant]],
) -> List[Participant]:
    """Convert roster rows to participants, preserving order (order is seeding)."""
    participants = []
    for row in rows:
        if isinstance(row, Participant):
            participants.append(row)
        else:
            participants.append(Participant.from_dict(row))
    return participants


@dataclass(frozen=True)
class ParticipantRef:
    """What a match slot holds: enough to identify and display a participant."""

    id: ParticipantId
    display_name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "displayName": self.display_name}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["ParticipantRef"]:
        if not data:
            return None
        return cls(id=str(data["id"]), display_name=data.get("displayName", ""))


@dataclass
class TournamentParticipantRecord:
    """Per-tournament standing of one participant.

    Attributes:
        id: Participant id
        display_name: Name copied from the roster
        seed: 1-based position in the generation roster
        wins: Matches won (byes count as nominal wins)
        losses: Matches lost
        points: Standings points (round robin and Swiss)
        draws: Drawn matches (Swiss only)
        eliminated: Out of the tournament (elimination formats)
        in_losers_bracket: Has dropped to the losers bracket (double elimination)
    """

    id: ParticipantId
    display_name: str
    seed: int
    wins: int = 0
    losses: int = 0
    points: float = 0.0
    draws: int = 0
    eliminated: bool = False
    in_losers_bracket: bool = False

    @classmethod
    def from_participant(
        cls, participant: Participant, seed: int
    ) -> "TournamentParticipantRecord":
        return cls(id=participant.id, display_name=participant.display_name, seed=seed)

    def ref(self) -> ParticipantRef:
        """Reference to place this participant in a match slot."""
        return ParticipantRef(id=self.id, display_name=self.display_name)

    def record_win(self, points: float = 0.0) -> None:
        self.wins += 1
        self.points += points

    def record_loss(self, points: float = 0.0) -> None:
        self.losses += 1
        self.points += points

    def record_draw(self, points: float) -> None:
        self.draws += 1
        self.points += points

    def record_elimination_loss(self, max_losses: int = 1) -> None:
        """Count a loss in an elimination format.

        With ``max_losses`` of 2 the first loss drops the participant to the
        losers bracket and the second eliminates them.
        """
        self.losses += 1
        if max_losses > 1:
            self.in_losers_bracket = True
        self.eliminated = self.losses >= max_losses

    def to_dict(self) -> Dict[str, Any]:
        """Serialize record to dictionary."""
        return {
            "id": self.id,
            "displayName": self.display_name,
            "seed": self.seed,
            "wins": self.wins,
            "losses": self.losses,
            "points": self.points,
            "draws": self.draws,
            "eliminated": self.eliminated,
            "inLosersBracket": self.in_losers_bracket,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentParticipantRecord":
        """Deserialize record from dictionary."""
        return cls(
            id=str(data["id"]),
            display_name=data.get("displayName", ""),
            seed=int(data["seed"]),
            wins=int(data.get("wins", 0)),
            losses=int(data.get("losses", 0)),
            points=float(data.get("points", 0.0)),
            draws=int(data.get("draws", 0)),
            eliminated=bool(data.get("eliminated", False)),
            in_losers_bracket=bool(data.get("inLosersBracket", False)),
        )
