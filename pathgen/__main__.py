"""Command-line entry point: generate paths and print the result."""

import argparse
import logging
import sys

from .domain.errors import ConfigurationError
from .domain.generator import generate_paths
from .domain.types import PathFindingOptions
from .utils.rng import SeededRNG


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pathgen",
        description="Generate randomized paths through a grid from a start cell to a target row/column")
    parser.add_argument("--rows", type=int, default=7, help="Number of rows in the grid")
    parser.add_argument("--cols", type=int, default=7, help="Number of columns in the grid")
    parser.add_argument("--start-row", type=int, default=3, help="Row of the start cell")
    parser.add_argument("--start-col", type=int, default=3, help="Column of the start cell")
    parser.add_argument("--end-row", type=int, default=None, help="Row every path must end on (row 0 if no end row or column is given)")
    parser.add_argument("--end-col", type=int, default=None, help="Column every path must end on")
    parser.add_argument("--paths", type=int, default=1, help="Maximum number of paths to generate")
    parser.add_argument("--allow-intersection", action="store_true",
                        help="Let paths cross cells used by other paths")
    parser.add_argument("--no-shared-start", action="store_true",
                        help="Treat a second path on the start cell as an intersection")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for a reproducible run")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every generation step")
    return parser


def main(argv=None) -> int:
    """Main entry point for the command line."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s")

    # Top edge unless a target row or column is given
    if args.end_row is None and args.end_col is None:
        args.end_row = 0

    try:
        options = PathFindingOptions(
            num_rows=args.rows,
            num_cols=args.cols,
            starting_row=args.start_row,
            starting_col=args.start_col,
            ending_row=args.end_row,
            ending_col=args.end_col,
            max_number_of_paths=args.paths,
            allow_intersection=args.allow_intersection,
            share_start_cell=not args.no_shared_start,
        )
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    result = generate_paths(options, rng=SeededRNG(args.seed))

    print(f"Grid {options.num_rows}x{options.num_cols}, start {options.start}, "
          f"end row={options.ending_row} col={options.ending_col}")
    print(f"Paths generated: {result.paths_generated}/{result.requested}")
    for index, path in enumerate(result.world.child_paths):
        cells = " -> ".join(f"({row},{col})" for row, col in path.coords())
        print(f"  Path {index} ({len(path)} cells): {cells}")

    if not result.complete:
        print("No further path could be generated")
    return 0


if __name__ == "__main__":
    sys.exit(main())
