# demo entry point: runs a few example computations and prints them in a fixed format.
# results go to stdout, errors and logs to stderr

from __future__ import annotations
import argparse
import logging
import os
import sys
from typing import List, Optional, Sequence
from dotenv import load_dotenv
from .calculator import calculate_weighted_average, calculate_weighted_average_with_ints
from .models import Example, InvalidInput

load_dotenv()  # WEIGHTEDAVG_LOG_LEVEL may come from a local .env during development

DEFAULT_LOG_LEVEL = "WARNING"

# the last one is invalid on purpose to show the error path
EXAMPLES = [
    Example(label="floats", values=[10.0, 20.0, 30.0], weights=[1.0, 2.0, 3.0]),
    Example(label="ints", values=[5, 10, 15], weights=[1, 3, 1]),
    Example(label="zero weights", values=[10.0, 20.0], weights=[0.0, 0.0], expect_error=True),
]

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
        stream=sys.stderr,
    )


def run_example(example: Example) -> bool:
    # the only place InvalidInput is caught: report it and let the demo continue
    try:
        if all(isinstance(x, int) for x in [*example.values, *example.weights]):
            result = calculate_weighted_average_with_ints(example.values, example.weights)
        else:
            result = calculate_weighted_average(example.values, example.weights)
    except InvalidInput as exc:
        logger.info("example %r rejected", example.label)
        print(f"Error calculating weighted average: {exc}", file=sys.stderr)
        return example.expect_error

    print(f"Weighted average of {list(example.values)} with weights {list(example.weights)} is: {result:.2f}")
    return not example.expect_error


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="weighted-avg",
        description="Compute weighted averages. Without arguments runs the built-in examples.",
    )
    parser.add_argument("--values", nargs="+", type=float, help="values to average")
    parser.add_argument("--weights", nargs="+", type=float, help="non-negative weight per value")
    parser.add_argument(
        "--log-level",
        default=os.getenv("WEIGHTEDAVG_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        help="logging level (default: $WEIGHTEDAVG_LOG_LEVEL or WARNING)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if (args.values is None) != (args.weights is None):
        parser.error("--values and --weights must be given together")

    if not isinstance(logging.getLevelName(args.log_level.upper()), int):
        parser.error(f"unknown log level: {args.log_level}")
    configure_logging(args.log_level)

    examples: List[Example] = EXAMPLES
    if args.values is not None:
        examples = [Example(label="command line", values=args.values, weights=args.weights)]

    # run every example even after a failure, exit status reports any unexpected outcome
    ok = [run_example(ex) for ex in examples]
    return 0 if all(ok) else 1


if __name__ == "__main__":
    sys.exit(main())
