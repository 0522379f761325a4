"""Standings and final ranking.

This module orders tournament participants the way each format ranks them.
Every ordering ends with the seed, so equal records always rank the same way
and the final winner of a tied round robin or Swiss event is reproducible.
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

from typing import Callable, Dict, Iterable, List, Tuple

from bracketengine.models.bracket import BracketDocument
from bracketengine.models.enums import FormatKind
from bracketengine.models.participant import TournamentParticipantRecord
from bracketengine.utils import setup_logger

logger = setup_logger(__name__)

SortKey = Tuple[float, ...]


def round_robin_key(record: TournamentParticipantRecord) -> SortKey:
    """Wins, then points, both descending."""
    return (-record.wins, -record.points, record.seed)


def swiss_key(record: TournamentParticipantRecord) -> SortKey:
    """Points and wins descending, then fewest losses."""
    return (-record.points, -record.wins, record.losses, record.seed)


def elimination_key(record: TournamentParticipantRecord) -> SortKey:
    """Survivors first, then wins descending and losses ascending."""
    return (int(record.eliminated), -record.wins, record.losses, record.seed)


_KEYS: Dict[FormatKind, Callable[[TournamentParticipantRecord], SortKey]] = {
    FormatKind.SINGLE_ELIMINATION: elimination_key,
    FormatKind.DOUBLE_ELIMINATION: elimination_key,
    FormatKind.ROUND_ROBIN: round_robin_key,
    FormatKind.SWISS: swiss_key,
}


def sort_records(
    records: Iterable[TournamentParticipantRecord], kind: FormatKind
) -> List[TournamentParticipantRecord]:
    """Return a new list of records in standings order for ``kind``."""
    return sorted(records, key=_KEYS[kind])


def rank_participants(document: BracketDocument) -> List[TournamentParticipantRecord]:
    """Participants of a document in standings order.

    The document itself is not reordered.
    """
    ranked = sort_records(document.participants, document.tournament_type)
    if len(ranked) > 1:
        key = _KEYS[document.tournament_type]
        # Keys end with the seed; equal prefixes mean the seed decided first place
        if key(ranked[0])[:-1] == key(ranked[1])[:-1]:
            logger.debug(
                f"{ranked[0].id} and {ranked[1].id} are tied; seed order breaks the tie"
            )
    return ranked


def standings_table(document: BracketDocument) -> List[Dict[str, object]]:
    """Ranked rows suitable for printing or JSON output."""
    rows = []
    for rank, record in enumerate(rank_participants(document), start=1):
        rows.append(
            {
                "rank": rank,
                "id": record.id,
                "displayName": record.display_name,
                "seed": record.seed,
                "wins": record.wins,
                "losses": record.losses,
                "draws": record.draws,
                "points": record.points,
                "eliminated": record.eliminated,
            }
        )
    return rows
