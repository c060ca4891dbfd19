"""Round-robin partitioning of the source file into worker shards."""

import logging
from pathlib import Path

from burst_aggregator.errors import AggregatorError, InputReadError
from burst_aggregator.partition.types import BUFFER_SIZE, PartitionStats
from burst_aggregator.partition.writers import ShardWriterSet

logger = logging.getLogger(__name__)


def partition_round_robin(
    input_path: str,
    num_shards: int,
    shard_dir: str,
) -> tuple[list[Path], PartitionStats]:
    """
    Split input into ``num_shards`` shard files by running line index.

    Line ``i`` (0-based) goes to shard ``i % num_shards``, keeping the original
    order within each shard. Returns only once every shard is closed. On any
    read or write failure all shard files are removed before the error
    propagates.
    """
    if num_shards < 1:
        raise ValueError(f"num_shards must be at least 1, got {num_shards}")

    tmp_path = Path(shard_dir)
    tmp_path.mkdir(parents=True, exist_ok=True)

    writers = ShardWriterSet(tmp_path, Path(input_path).name, num_shards)
    stats = PartitionStats(shard_line_counts=[0] * num_shards)

    try:
        writers.open_all()
        _route_lines(input_path, num_shards, writers, stats)
        writers.close_all()
    except AggregatorError:
        writers.abort()
        raise

    logger.debug("Partitioned %d lines: %s", stats.lines_read, stats.shard_line_counts)
    return writers.paths, stats


def _route_lines(
    input_path: str,
    num_shards: int,
    writers: ShardWriterSet,
    stats: PartitionStats,
) -> None:
    try:
        with open(input_path, encoding="utf-8", buffering=BUFFER_SIZE) as handle:
            for line in handle:
                shard_idx = stats.lines_read % num_shards
                writers.write(shard_idx, line.rstrip("\r\n") + "\n")
                stats.lines_read += 1
                stats.shard_line_counts[shard_idx] += 1
    except (OSError, UnicodeDecodeError) as exc:
        raise InputReadError(f"cannot read {input_path}: {exc}") from exc
