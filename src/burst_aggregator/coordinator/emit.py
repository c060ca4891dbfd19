"""Merging partial tables and emitting the sorted result file."""

import logging
import time
from collections.abc import Iterable
from pathlib import Path

from burst_aggregator.errors import OutputWriteError
from burst_aggregator.types import FrequencyTable

logger = logging.getLogger(__name__)

OUTPUT_PREFIX = "solution-"


def merge_partial(aggregated: FrequencyTable, partial: FrequencyTable) -> None:
    """Add ``partial`` into ``aggregated`` key by key."""
    for key, count in partial.items():
        aggregated[key] = aggregated.get(key, 0) + count


def sort_entries(table: FrequencyTable) -> list[tuple[str, int]]:
    """Count descending; equal counts ordered by key so output is reproducible."""
    return sorted(table.items(), key=lambda item: (-item[1], item[0]))


def format_entries(entries: Iterable[tuple[str, int]]) -> str:
    return "".join(f"{key}: {count}\n" for key, count in entries)


def output_path_for(output_dir: Path, now_ns: int | None = None) -> Path:
    """Result file named after the current time in milliseconds."""
    if now_ns is None:
        now_ns = time.time_ns()
    return output_dir / f"{OUTPUT_PREFIX}{now_ns // 1_000_000}.txt"


def write_output(table: FrequencyTable, output_dir: str | Path) -> Path:
    """
    Sort ``table`` and write it to a new result file.

    The file is created exclusively and never overwritten; a name collision
    counts as a write failure.
    """
    path = output_path_for(Path(output_dir))
    payload = format_entries(sort_entries(table))

    try:
        with open(path, "x", encoding="utf-8") as handle:
            handle.write(payload)
    except OSError as exc:
        raise OutputWriteError(f"cannot write result {path}: {exc}") from exc

    logger.info("Solutions written to: %s", path)
    return path
