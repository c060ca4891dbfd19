"""Burst Aggregator - fan-out/fan-in key frequency counting over local shards."""

from burst_aggregator.coordinator import Coordinator, RunSummary, aggregate, main_aggregate

__all__ = ["Coordinator", "RunSummary", "aggregate", "main_aggregate"]
