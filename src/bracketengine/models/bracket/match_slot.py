"""Match slot data class."""

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
from typing import Any, Dict, List, Optional

from bracketengine.models.enums import MatchStatus
from bracketengine.models.participant import ParticipantRef
from bracketengine.type_hints import MaybeParticipantId, ParticipantId


@dataclass
class MatchSlot:
    """A single match inside a round.

    Attributes
    ----------
    match_id : str
        Unique within a bracket document.
    player1 : ParticipantRef or None
        ``None`` means not yet determined, or a bye.
    player2 : ParticipantRef or None
        Same as ``player1``.
    winner : str or None
        Participant id of the winner; ``None`` until completed or for a draw.
    status : MatchStatus
        ``scheduled`` until a result is recorded.
    """

    match_id: str
    player1: Optional[ParticipantRef] = None
    player2: Optional[ParticipantRef] = None
    winner: MaybeParticipantId = None
    status: MatchStatus = MatchStatus.SCHEDULED

    @property
    def is_completed(self) -> bool:
        return self.status == MatchStatus.COMPLETED

    @property
    def is_bye(self) -> bool:
        """Exactly one player present and no result yet."""
        return (
            not self.is_completed
            and self.winner is None
            and (self.player1 is None) != (self.player2 is None)
        )

    @property
    def is_ready(self) -> bool:
        """Both players known and still to be played."""
        return (
            not self.is_completed
            and self.player1 is not None
            and self.player2 is not None
        )

    @property
    def has_open_slot(self) -> bool:
        """Can still receive an advancing participant."""
        return not self.is_completed and (self.player1 is None or self.player2 is None)

    @property
    def player_ids(self) -> List[ParticipantId]:
        return [p.id for p in (self.player1, self.player2) if p is not None]

    @property
    def present_player(self) -> Optional[ParticipantRef]:
        """The only player of a one-sided match, if any."""
        if self.player1 is not None and self.player2 is None:
            return self.player1
        if self.player2 is not None and self.player1 is None:
            return self.player2
        return None

    def involves(self, participant_id: ParticipantId) -> bool:
        return participant_id in self.player_ids

    def opponent_of(self, participant_id: ParticipantId) -> MaybeParticipantId:
        """Return the other player's id, or None for a bye."""
        if self.player1 is not None and self.player1.id == participant_id:
            return self.player2.id if self.player2 is not None else None
        if self.player2 is not None and self.player2.id == participant_id:
            return self.player1.id if self.player1 is not None else None
        return None

    def fill_open_slot(self, participant: ParticipantRef) -> None:
        """Place a participant in player1, or player2 if player1 is taken."""
        if self.player1 is None:
            self.player1 = participant
        elif self.player2 is None:
            self.player2 = participant
        else:
            raise ValueError(f"Match {self.match_id} has no open slot")

    def complete(self, winner_id: MaybeParticipantId) -> None:
        self.winner = winner_id
        self.status = MatchStatus.COMPLETED

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match slot to dictionary."""
        return {
            "matchId": self.match_id,
            "player1": self.player1.to_dict() if self.player1 else None,
            "player2": self.player2.to_dict() if self.player2 else None,
            "winner": self.winner,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchSlot":
        """Deserialize match slot from dictionary."""
        return cls(
            match_id=data["matchId"],
            player1=ParticipantRef.from_dict(data.get("player1")),
            player2=ParticipantRef.from_dict(data.get("player2")),
            winner=data.get("winner"),
            status=MatchStatus(data.get("status", MatchStatus.SCHEDULED.value)),
        )
