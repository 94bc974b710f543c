"""
Main entry point for running scripted VERBLOC puzzle sessions.

Usage:
    python -m src.main session.yaml
    python -m src.main session.yaml --output results/run1.json --verbose --show-board
    python -m src.main --list-layouts
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

import yaml

from .board import default_library
from .engine import PuzzleSession, SessionConfig


def load_config(config_path: str) -> SessionConfig:
    """Load session configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return SessionConfig(**data)


def list_layouts() -> None:
    """Print the curated layout library."""
    library = default_library()
    print(f"{len(library)} layouts:")
    for layout in library:
        print(
            f"  {layout.id:<20} {layout.grid_size}x{layout.grid_size}  "
            f"{layout.puzzle_mode.value:<18} {layout.difficulty:<7} {layout.win_condition.description}"
        )


def main():
    parser = argparse.ArgumentParser(
        description="Play a scripted VERBLOC puzzle session",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example session.yaml:
  board:
    source: fixed
    layout_id: word-workshop
  moves:
    - positions: [[0, 0], [0, 1], [0, 2], [0, 3], [0, 4]]
    - positions: [[4, 0], [4, 1], [4, 2]]
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML session configuration (not needed with --list-layouts)"
    )
    parser.add_argument(
        "--output", "-o",
        help="Path to save results JSON (default: results/<timestamp>.json)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print progress to stdout and enable debug logging"
    )
    parser.add_argument(
        "--show-board",
        action="store_true",
        help="Print the board after every accepted move"
    )
    parser.add_argument(
        "--list-layouts",
        action="store_true",
        help="List the curated board layouts and exit"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.list_layouts:
        list_layouts()
        return 0

    if not args.config:
        print("Error: config file required (or use --list-layouts)", file=sys.stderr)
        return 1

    try:
        config = load_config(args.config)
        session = PuzzleSession.create(config=config)
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    # Determine output path
    if args.output:
        output_path = Path(args.output)
    else:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_path = Path("results") / f"session_{timestamp}.json"

    if args.verbose:
        print(f"Config: {args.config}")
        print(f"Output: {output_path}")
        print()

    result = session.run(verbose=args.verbose, show_board=args.show_board)
    session.save_result(output_path)

    if args.verbose:
        print()
        print(f"Results saved to: {output_path}")

    # Print summary
    print()
    print("=== Session Summary ===")
    print(f"Puzzle: {result.puzzle_mode.value} ({result.win_condition.description})")
    print(f"Moves: {result.moves_accepted} accepted / {result.total_turns} played")
    print(f"Progress: {result.progress.percentage}%")
    print(f"Outcome: {result.outcome.value}")
    print(f"End reason: {result.end_reason}")
    for player_id, score in result.scores.items():
        print(f"Score {player_id}: {score}")
    if result.winner:
        print(f"Winner: {result.winner}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
