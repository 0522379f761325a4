"""The bracket document: complete state of one tournament.

Every engine operation takes a :class:`BracketDocument` and returns a new
one. Nothing else in the engine holds state.
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
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from bracketengine.exceptions import MatchNotFoundError
from bracketengine.models.bracket.match_ref import MatchRef
from bracketengine.models.bracket.match_slot import MatchSlot
from bracketengine.models.bracket.round_data import Round
from bracketengine.models.enums import BracketSection, FormatKind
from bracketengine.models.participant import TournamentParticipantRecord
from bracketengine.type_hints import ParticipantId


@dataclass
class BracketDocument:
    """Serializable state of a tournament bracket.

    Attributes:
        rounds: Rounds in document order (double elimination: winners rounds,
            then losers rounds, then grand finals)
        participants: Per-tournament records, in seed order
        current_round: 1-based position of the round in play
        total_rounds: Fixed at generation
        tournament_type: Format that generated the document
        tournament_complete: Terminal flag
        winner: Champion record once complete
    """

    rounds: List[Round]
    participants: List[TournamentParticipantRecord]
    current_round: int
    total_rounds: int
    tournament_type: FormatKind
    tournament_complete: bool = False
    winner: Optional[TournamentParticipantRecord] = None

    # ========== Lookups ==========

    def iter_matches(self) -> Iterator[Tuple[Round, MatchSlot]]:
        for round_data in self.rounds:
            for match in round_data.matches:
                yield round_data, match

    def find_match(self, match_id: str) -> Tuple[Round, MatchSlot]:
        """Locate a match by id.

        Raises:
            MatchNotFoundError: If no match has this id
        """
        for round_data, match in self.iter_matches():
            if match.match_id == match_id:
                return round_data, match
        raise MatchNotFoundError(match_id)

    def locate(self, ref: MatchRef) -> Tuple[Round, MatchSlot]:
        """Locate the match a reference points to, checking optional round/bracket."""
        round_data, match = self.find_match(ref.match_id)
        if ref.round_number is not None and ref.round_number != round_data.round_number:
            raise MatchNotFoundError(
                ref.match_id,
                f"reported round {ref.round_number}, "
                f"match is in round {round_data.round_number}",
            )
        if ref.bracket is not None and ref.bracket != round_data.bracket:
            raise MatchNotFoundError(
                ref.match_id,
                f"reported bracket {ref.bracket}, match is in {round_data.bracket}",
            )
        return round_data, match

    def get_participant(
        self, participant_id: ParticipantId
    ) -> Optional[TournamentParticipantRecord]:
        for record in self.participants:
            if record.id == participant_id:
                return record
        return None

    def rounds_in(self, bracket: BracketSection) -> List[Round]:
        return [r for r in self.rounds if r.bracket == bracket]

    def get_round(self, bracket: BracketSection, round_number: int) -> Optional[Round]:
        for round_data in self.rounds:
            if round_data.bracket == bracket and round_data.round_number == round_number:
                return round_data
        return None

    @property
    def match_count(self) -> int:
        return sum(len(r.matches) for r in self.rounds)

    @property
    def active_participants(self) -> List[TournamentParticipantRecord]:
        return [p for p in self.participants if not p.eliminated]

    # ========== Copying / export ==========

    def copy(self) -> "BracketDocument":
        """Deep copy; handlers mutate the copy and never the caller's document."""
        return copy.deepcopy(self)

    def to_match_rows(self) -> List[Dict[str, Any]]:
        """Flatten the bracket to one row per match, as stored by the match table."""
        rows = []
        for round_data, match in self.iter_matches():
            rows.append(
                {
                    "match_id": match.match_id,
                    "round_number": round_data.round_number,
                    "player1_id": match.player1.id if match.player1 else None,
                    "player2_id": match.player2.id if match.player2 else None,
                    "winner_id": match.winner,
                    "status": match.status.value,
                    "match_data": {
                        "bracket": round_data.bracket.value,
                        "round_name": round_data.name,
                    },
                }
            )
        return rows

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize document to dictionary."""
        return {
            "rounds": [r.to_dict() for r in self.rounds],
            "participants": [p.to_dict() for p in self.participants],
            "currentRound": self.current_round,
            "totalRounds": self.total_rounds,
            "tournamentType": self.tournament_type.value,
            "tournamentComplete": self.tournament_complete,
            "winner": self.winner.to_dict() if self.winner else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BracketDocument":
        """Deserialize document from dictionary."""
        winner = data.get("winner")
        return cls(
            rounds=[Round.from_dict(r) for r in data.get("rounds", [])],
            participants=[
                TournamentParticipantRecord.from_dict(p)
                for p in data.get("participants", [])
            ],
            current_round=int(data.get("currentRound", 1)),
            total_rounds=int(data["totalRounds"]),
            tournament_type=FormatKind.parse(data["tournamentType"]),
            tournament_complete=bool(data.get("tournamentComplete", False)),
            winner=TournamentParticipantRecord.from_dict(winner) if winner else None,
        )

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, text: str) -> "BracketDocument":
        return cls.from_dict(json.loads(text))
