#!/usr/bin/env python3
"""
Command-line interface for reconstructing a tree from its splits.

Each split names the two label groups left after removing one edge, e.g.
"b/acde". Given every split of a tree, the tree is rebuilt and printed.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from splitarchitect.config import BuildConfig
from splitarchitect.logger import rc_logger
from splitarchitect.elements.split import Split
from splitarchitect.parser.split_parser import parse_splits, read_splits
from splitarchitect.reconstruction.exceptions import (
    EmptyInputError,
    MalformedSplitError,
    SplitReconstructionError,
)
from splitarchitect.reconstruction.tree_builder import TreeBuilder
from splitarchitect.render import pretty_print, to_json, to_newick
from splitarchitect.verification import verify_reconstruction

DEMO_CASES: Dict[str, List[str]] = {
    "Test Case 1": ["b/acde", "ba/cde", "bace/d", "bacd/e"],
    "Test Case 2": [
        "ABD/CEFG",
        "BD/ACEFG",
        "D/ABCEFG",
        "G/ABCDEF",
        "E/ABCDFG",
        "EF/ABCDG",
    ],
}

EXIT_OK = 0
EXIT_INCOMPLETE = 1
EXIT_BAD_INPUT = 2


def setup_argument_parser() -> argparse.ArgumentParser:
    """
    Configure and return the argument parser.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="splitarchitect",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    input_group = parser.add_argument_group("input options")
    input_group.add_argument(
        "records",
        nargs="*",
        help='Split records such as "b/acde"',
    )
    input_group.add_argument(
        "-i",
        "--input",
        help="File with one split record per line ('#' starts a comment)",
        type=Path,
    )
    input_group.add_argument(
        "-d",
        "--delimiter",
        help="Separator between the two sides of a split (default: /)",
        default="/",
    )
    input_group.add_argument(
        "--label-separator",
        help="Separator between labels; by default every character is a label",
        default=None,
    )
    input_group.add_argument(
        "--demo",
        help="Reconstruct the bundled example split sets",
        action="store_true",
    )

    build_group = parser.add_argument_group("reconstruction options")
    build_group.add_argument(
        "--strict",
        help="Abort on the first inconsistent split instead of skipping it",
        action="store_true",
    )
    build_group.add_argument(
        "--no-universe-check",
        dest="check_leaf_universe",
        help="Do not reject splits covering a different leaf universe",
        action="store_false",
    )
    build_group.add_argument(
        "--verify",
        help="Check that the reconstructed tree reproduces every input split",
        action="store_true",
    )

    output_group = parser.add_argument_group("output options")
    output_group.add_argument(
        "-f",
        "--format",
        help="Output format (default: ascii)",
        choices=["ascii", "newick", "json"],
        default="ascii",
    )
    output_group.add_argument(
        "--debug-html",
        help="Write a trace of the reconstruction as HTML to this path",
        type=Path,
    )
    output_group.add_argument(
        "--log-level",
        help="Logging level (default: WARNING)",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )

    return parser


def render(result, output_format: str) -> str:
    if output_format == "newick":
        return to_newick(result.roots)
    if output_format == "json":
        return to_json(result)
    return pretty_print(result.roots)


def run_case(splits: List[Split], args: argparse.Namespace) -> int:
    """Build, print and optionally verify one set of parsed splits."""
    config = BuildConfig(
        on_inconsistency="raise" if args.strict else "skip",
        check_leaf_universe=args.check_leaf_universe,
        enable_debug_logging=args.debug_html is not None,
    )
    result = TreeBuilder(config).build(splits)

    print(render(result, args.format))
    for error in result.errors:
        print(f"{type(error).__name__}: {error}", file=sys.stderr)

    status = EXIT_OK if result.is_complete else EXIT_INCOMPLETE
    if args.verify:
        report = verify_reconstruction(result, splits)
        for warning in report["warnings"]:
            print(f"warning: {warning}", file=sys.stderr)
        for error in report["errors"]:
            print(f"verification failed: {error}", file=sys.stderr)
        if not report["success"]:
            status = EXIT_INCOMPLETE
    return status


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = setup_argument_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    cases: List[Tuple[str, List[Split]]] = []
    try:
        if args.demo:
            cases.extend(
                (name, parse_splits(records)) for name, records in DEMO_CASES.items()
            )
        if args.input is not None:
            cases.append(
                (
                    str(args.input),
                    read_splits(
                        args.input,
                        delimiter=args.delimiter,
                        label_separator=args.label_separator,
                    ),
                )
            )
        if args.records:
            cases.append(
                (
                    "arguments",
                    parse_splits(
                        args.records,
                        delimiter=args.delimiter,
                        label_separator=args.label_separator,
                    ),
                )
            )
    except (OSError, UnicodeDecodeError) as e:
        parser.error(f"Cannot read {args.input}: {e}")
    except MalformedSplitError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT
    if not cases:
        parser.error("No split records given (pass records, --input or --demo)")

    status = EXIT_OK
    try:
        for i, (name, splits) in enumerate(cases):
            if len(cases) > 1:
                if i:
                    print()
                print(f"Running {name}:\n")
            status = max(status, run_case(splits, args))
    except EmptyInputError as e:
        print(f"error: {e}", file=sys.stderr)
        status = EXIT_BAD_INPUT
    except SplitReconstructionError as e:
        print(f"error: {e}", file=sys.stderr)
        status = EXIT_INCOMPLETE
    finally:
        if args.debug_html is not None:
            rc_logger.write_html(args.debug_html)

    return status


if __name__ == "__main__":
    sys.exit(main())
