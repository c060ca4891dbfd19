"""Coordinator: spawn workers, merge partial tables, gate output and exit."""

from burst_aggregator.coordinator.coordinator import (
    Coordinator,
    CoordinatorState,
    RunSummary,
    aggregate,
    main_aggregate,
)
from burst_aggregator.coordinator.gates import CompletionGates

__all__ = [
    "CompletionGates",
    "Coordinator",
    "CoordinatorState",
    "RunSummary",
    "aggregate",
    "main_aggregate",
]
