"""Command line interface for Bracket Engine.

Operates on bracket documents stored as JSON files::

    bracketengine generate --type single_elimination --roster roster.json -o cup.json
    bracketengine bye cup.json --all
    bracketengine complete cup.json round1_match1 p1
    bracketengine show cup.json --playable
    bracketengine standings cup.json
    bracketengine simulate --type swiss --count 9 --seed 7
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

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from bracketengine import __version__, dispatcher
from bracketengine.exceptions import BracketEngineError, ValidationError
from bracketengine.models.bracket import BracketDocument
from bracketengine.models.config import BracketConfig, load_config
from bracketengine.models.enums import FormatKind
from bracketengine.standings import standings_table
from bracketengine.testing.simulator import (
    SimulationConfig,
    TournamentSimulator,
    make_roster,
)
from bracketengine.type_hints import Roster
from bracketengine.utils import setup_logger
from bracketengine.utils.print import (
    format_bracket,
    format_matches,
    format_standings,
)

logger = setup_logger(__name__)

FORMAT_CHOICES = [kind.value for kind in FormatKind]


def load_roster(path: Path) -> Roster:
    """Read a roster file: a JSON list of participant rows."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            rows = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ValidationError(f"Could not read roster {path}: {e}") from e
    if not isinstance(rows, list):
        raise ValidationError(f"Roster {path} must contain a JSON list")
    return rows


def load_document(path: Path) -> BracketDocument:
    try:
        return BracketDocument.from_json(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, KeyError) as e:
        raise BracketEngineError(f"Could not read bracket {path}: {e}") from e


def save_document(document: BracketDocument, path: Path) -> None:
    Path(path).write_text(document.to_json(), encoding="utf-8")
    logger.info(f"Bracket saved to {path}")


def _emit(document: BracketDocument, args: argparse.Namespace, source: Optional[Path]) -> None:
    target = args.output or source
    if target is None:
        print(document.to_json())
        return
    save_document(document, Path(target))
    print(f"Saved to {target}")


# ========== Commands ==========


def run_generate_command(args: argparse.Namespace, config: BracketConfig) -> int:
    if args.roster:
        roster = load_roster(Path(args.roster))
    elif args.count:
        roster = make_roster(args.count)
    else:
        print("Error: --roster or --count required", file=sys.stderr)
        return 2

    document = dispatcher.generate_bracket_data(
        args.type, roster, args.min_participants, config
    )
    _emit(document, args, None)
    return 0


def run_complete_command(args: argparse.Namespace, config: BracketConfig) -> int:
    source = Path(args.bracket)
    document = load_document(source)
    winner_id = None if args.draw else args.winner
    if winner_id is None and not args.draw:
        print("Error: give a winner id or --draw", file=sys.stderr)
        return 2
    updated = dispatcher.handle_match_completion(
        document, args.match_id, winner_id, document.tournament_type, config
    )
    if updated.tournament_complete and updated.winner is not None:
        print(f"Tournament complete! Winner: {updated.winner.display_name}")
    _emit(updated, args, source)
    return 0


def run_bye_command(args: argparse.Namespace, config: BracketConfig) -> int:
    source = Path(args.bracket)
    document = load_document(source)
    if args.all:
        updated = dispatcher.advance_all_byes(document, config)
    elif args.match_id:
        updated = dispatcher.advance_bye(document, args.match_id, config)
    else:
        print("Error: give a match id or --all", file=sys.stderr)
        return 2
    _emit(updated, args, source)
    return 0


def run_show_command(args: argparse.Namespace, config: BracketConfig) -> int:
    document = load_document(Path(args.bracket))
    if args.playable:
        print(format_matches(dispatcher.current_matches(document)))
    else:
        print(format_bracket(document))
    return 0


def run_standings_command(args: argparse.Namespace, config: BracketConfig) -> int:
    rows = standings_table(load_document(Path(args.bracket)))
    if args.json:
        print(json.dumps(rows, indent=2))
    else:
        print(format_standings(rows))
    return 0


def run_simulate_command(args: argparse.Namespace, config: BracketConfig) -> int:
    simulator = TournamentSimulator(
        SimulationConfig(
            tournament_type=FormatKind.parse(args.type),
            num_participants=args.count,
            seed=args.seed,
            draw_rate=args.draw_rate,
            swiss_avoid_rematches=config.swiss_avoid_rematches,
        )
    )
    result = simulator.run()
    print(format_bracket(result.document))
    print(
        f"\nMatches played: {result.matches_played}, byes: {result.byes_advanced}, "
        f"draws: {result.draws}"
    )
    if args.output:
        save_document(result.document, Path(args.output))
    return 0


def create_main_parser() -> argparse.ArgumentParser:
    """Create main argument parser."""
    parser = argparse.ArgumentParser(
        prog="bracketengine",
        description="Generate and advance tournament brackets",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", help="Engine configuration file (JSON)")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (overrides BRACKETENGINE_LOG_LEVEL)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    gen_parser = subparsers.add_parser("generate", help="Generate a new bracket")
    gen_parser.add_argument("--type", required=True, choices=FORMAT_CHOICES)
    gen_parser.add_argument("--roster", help="Roster file (JSON list of participants)")
    gen_parser.add_argument("--count", type=int, help="Generate a roster p1..pN instead")
    gen_parser.add_argument("--min-participants", type=int)
    gen_parser.add_argument("--output", "-o", help="Write the bracket here")
    gen_parser.set_defaults(func=run_generate_command)

    done_parser = subparsers.add_parser("complete", help="Report a match result")
    done_parser.add_argument("bracket", help="Bracket file")
    done_parser.add_argument("match_id")
    done_parser.add_argument("winner", nargs="?", help="Winning participant id")
    done_parser.add_argument("--draw", action="store_true", help="Report a draw (Swiss)")
    done_parser.add_argument("--output", "-o", help="Write here instead of in place")
    done_parser.set_defaults(func=run_complete_command)

    bye_parser = subparsers.add_parser("bye", help="Advance bye matches")
    bye_parser.add_argument("bracket", help="Bracket file")
    bye_parser.add_argument("match_id", nargs="?")
    bye_parser.add_argument("--all", action="store_true", help="Advance every ready bye")
    bye_parser.add_argument("--output", "-o", help="Write here instead of in place")
    bye_parser.set_defaults(func=run_bye_command)

    show_parser = subparsers.add_parser("show", help="Print a bracket")
    show_parser.add_argument("bracket", help="Bracket file")
    show_parser.add_argument(
        "--playable", action="store_true", help="Only matches that can be played now"
    )
    show_parser.set_defaults(func=run_show_command)

    standings_parser = subparsers.add_parser("standings", help="Print standings")
    standings_parser.add_argument("bracket", help="Bracket file")
    standings_parser.add_argument("--json", action="store_true")
    standings_parser.set_defaults(func=run_standings_command)

    sim_parser = subparsers.add_parser("simulate", help="Play a bracket with random results")
    sim_parser.add_argument("--type", required=True, choices=FORMAT_CHOICES)
    sim_parser.add_argument("--count", type=int, default=8)
    sim_parser.add_argument("--seed", type=int)
    sim_parser.add_argument("--draw-rate", type=float, default=0.0)
    sim_parser.add_argument("--output", "-o")
    sim_parser.set_defaults(func=run_simulate_command)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``bracketengine`` console script."""
    parser = create_main_parser()
    args = parser.parse_args(argv)

    if args.log_level:
        setup_logger(__name__, args.log_level)

    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    try:
        config = load_config(args.config)
        return args.func(args, config)
    except BracketEngineError as e:
        print(f"Error: {e}", file=sys.stderr)
        logger.debug("Command failed", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
