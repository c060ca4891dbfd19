"""Command-line interface for burst aggregator."""

import argparse
import logging
import sys

from burst_aggregator.config import DEFAULT_FILE_NAME, FILE_NAME_ENV, resolve_input_path
from burst_aggregator.coordinator import main_aggregate
from burst_aggregator.errors import AggregatorError

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO) -> None:
    """Configure logging to write to stderr."""
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="burst-aggregator",
        description="Count registrable domains in a file of URLs, one worker per CPU.",
    )

    parser.add_argument(
        "input_file",
        nargs="?",
        help=f"Path to the input file, one URL per line (default: ${FILE_NAME_ENV} or {DEFAULT_FILE_NAME})",
    )

    parser.add_argument(
        "--output-dir",
        default=".",
        help="Directory for the solution-<millis>.txt result file (default: current directory)",
    )

    parser.add_argument(
        "--stall-timeout",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Fail if no worker message arrives for this long (default: wait forever)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Configure logging based on --log-level
    log_level = getattr(logging, args.log_level)
    configure_logging(log_level)

    if args.stall_timeout is not None and args.stall_timeout <= 0:
        parser.error(f"--stall-timeout must be positive, got {args.stall_timeout}")

    try:
        main_aggregate(
            input_path=resolve_input_path(args.input_file),
            output_dir=args.output_dir,
            stall_timeout=args.stall_timeout,
        )
    except AggregatorError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
