"""Partitioner: source file -> N round-robin shard files."""

from burst_aggregator.partition.partition import partition_round_robin
from burst_aggregator.partition.types import PartitionStats, shard_path
from burst_aggregator.partition.writers import ShardWriterSet

__all__ = ["PartitionStats", "ShardWriterSet", "partition_round_robin", "shard_path"]
