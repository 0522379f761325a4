"""
Plain-text rendering of brackets and standings.
Shared by the command line interface and the interactive shell.
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

from typing import Dict, Iterable, List, Optional

from bracketengine.models.bracket import BracketDocument, MatchSlot
from bracketengine.models.participant import ParticipantRef

TBD = "TBD"
BYE = "BYE"


def _slot_label(player: Optional[ParticipantRef], is_bye: bool) -> str:
    if player is None:
        return BYE if is_bye else TBD
    return player.display_name or player.id


def format_match(match: MatchSlot, resolved_bye: bool = False) -> str:
    """One line per match: ``id: A vs B [winner]``.

    ``resolved_bye`` labels an empty slot as a bye rather than TBD.
    """
    show_bye = resolved_bye or match.is_completed
    left = _slot_label(match.player1, show_bye)
    right = _slot_label(match.player2, show_bye)
    line = f"{match.match_id}: {left} vs {right}"
    if match.is_completed:
        line += f"  [winner: {match.winner}]" if match.winner else "  [draw]"
    return line


def format_matches(matches: Iterable[MatchSlot]) -> str:
    lines = [format_match(m, resolved_bye=m.is_bye) for m in matches]
    return "\n".join(lines) if lines else "(no playable matches)"


def format_bracket(document: BracketDocument) -> str:
    """Render every round of a document, with a status header."""
    lines: List[str] = [
        f"{document.tournament_type.label} - "
        f"{len(document.participants)} participants, "
        f"round {document.current_round} of {document.total_rounds}"
    ]
    if document.tournament_complete and document.winner is not None:
        lines.append(f"Champion: {document.winner.display_name} ({document.winner.id})")

    for round_data in document.rounds:
        lines.append("")
        lines.append(f"== {round_data.name} ==")
        if not round_data.matches:
            lines.append("  (not yet paired)")
            continue
        for match in round_data.matches:
            lines.append(f"  {format_match(match)}")
    return "\n".join(lines)


def format_standings(rows: List[Dict[str, object]]) -> str:
    """Fixed-width standings table from :func:`standings_table` rows."""
    header = f"{'#':>3}  {'Name':<24} {'W':>3} {'L':>3} {'D':>3} {'Pts':>5}  Status"
    lines = [header, "-" * len(header)]
    for row in rows:
        status = "out" if row["eliminated"] else ""
        lines.append(
            f"{row['rank']:>3}  {str(row['displayName'])[:24]:<24} "
            f"{row['wins']:>3} {row['losses']:>3} {row['draws']:>3} "
            f"{float(row['points']):>5.1f}  {status}"
        )
    return "\n".join(lines)
