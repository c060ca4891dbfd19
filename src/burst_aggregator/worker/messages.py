"""Messages a worker sends to the coordinator over its channel."""

from dataclasses import dataclass, field
from typing import TypeAlias

from burst_aggregator.types import FrequencyTable


@dataclass(frozen=True, slots=True)
class PartialResult:
    """One worker's key counts for its whole shard. Sent at most once."""

    worker_index: int
    table: FrequencyTable = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class WorkerExited:
    """Termination signal. Always the last message a worker sends."""

    worker_index: int
    succeeded: bool


WorkerMessage: TypeAlias = PartialResult | WorkerExited
