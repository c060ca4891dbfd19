"""Shared constants and metadata structures for partitioning."""

from dataclasses import dataclass, field
from pathlib import Path

# 1MB buffer for efficient I/O.
BUFFER_SIZE = 1024 * 1024


def shard_path(shard_dir: Path, index: int, source_name: str) -> Path:
    """Deterministic shard file name: ``{index}-{source_name}``."""
    return shard_dir / f"{index}-{source_name}"


@dataclass
class PartitionStats:
    """Statistics from partition_round_robin operation."""

    lines_read: int = 0
    shard_line_counts: list[int] = field(default_factory=list)
