"""
fairshare CLI — rank the leaves of a tree file.

Commands:
    fairshare rank FILE     — Show leaves ranked by fair-proportion score
    fairshare stats FILE    — Show leaf count, node count and total length

Every failure is reported as a single line and exit code 1.
Nothing is printed for a tree that fails to score.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional

from ..domain import ScoringError
from ..ranking import OrderedScoreSet, RankedScore
from ..sizes import leaf_count, node_count, total_length
from ..solver import load_tree_file, solve_file


logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION CONSTANTS
# =============================================================================

DEFAULT_PRECISION = 4


# =============================================================================
# OUTPUT FORMATTING
# =============================================================================

def format_score_row(rank: int, entry: RankedScore, precision: int = DEFAULT_PRECISION) -> str:
    """Format a single ranked leaf for display."""
    return f"{rank:>4} | {entry.score:>12.{precision}f} | {entry.name}"


def format_table(
    entries: list[RankedScore],
    precision: int = DEFAULT_PRECISION,
) -> str:
    """Format ranked leaves as a plain-text table."""
    lines = [
        f"{'Rank':>4} | {'Score':>12} | Name",
        "-" * 40,
    ]
    for rank, entry in enumerate(entries, start=1):
        lines.append(format_score_row(rank, entry, precision))
    return "\n".join(lines)


def select_entries(results: OrderedScoreSet, top: Optional[int]) -> list[RankedScore]:
    if top is None:
        return list(results.drain())
    return results.top(top)


# =============================================================================
# CLI COMMANDS
# =============================================================================

def cmd_rank(args: argparse.Namespace) -> int:
    """Rank the leaves of a tree file."""
    try:
        results = solve_file(args.file)
    except ScoringError as e:
        print(f"ERROR: {e}")
        return 1

    total = len(results)

    if args.json:
        records = results.to_records()
        if args.top is not None:
            records = records[:args.top]
        print(json.dumps(records, indent=2))
        return 0

    entries = select_entries(results, args.top)

    if not entries:
        print("No leaves found.")
        return 0

    print(format_table(entries, args.precision))
    print()
    print(f"Total: {total} leaves")
    return 0


def cmd_stats(args: argparse.Namespace) -> int:
    """Show summary statistics for a tree file."""
    try:
        tree = load_tree_file(args.file)
    except ScoringError as e:
        print(f"ERROR: {e}")
        return 1

    print(f"Leaves:         {leaf_count(tree)}")
    print(f"Internal nodes: {node_count(tree)}")
    print(f"Total length:   {total_length(tree):.{DEFAULT_PRECISION}f}")
    return 0


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="fairshare",
        description="Rank tree leaves by fair-proportion distinctness",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    # Rank command
    rank_parser = subparsers.add_parser(
        "rank",
        help="Show leaves ranked by score",
    )
    rank_parser.add_argument("file", help="JSON tree file")
    rank_parser.add_argument(
        "--top",
        type=non_negative_int,
        default=None,
        help="Only show the N highest-scoring leaves",
    )
    rank_parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON records",
    )
    rank_parser.add_argument(
        "--precision",
        type=non_negative_int,
        default=DEFAULT_PRECISION,
        help="Decimal places in the table (default: %(default)s)",
    )
    rank_parser.set_defaults(func=cmd_rank)

    # Stats command
    stats_parser = subparsers.add_parser(
        "stats",
        help="Show tree statistics",
    )
    stats_parser.add_argument("file", help="JSON tree file")
    stats_parser.set_defaults(func=cmd_stats)

    return parser


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(args.debug)
    logger.debug("Running command %s", args.command)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
