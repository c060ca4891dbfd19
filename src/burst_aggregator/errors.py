"""Error taxonomy for the aggregator.

Every failure is fatal to the unit that raises it. Nothing retries and
nothing restarts a failed worker.
"""


class AggregatorError(Exception):
    """Base class for all aggregator failures."""


class InputReadError(AggregatorError):
    """The source file could not be opened, read or decoded."""


class ShardWriteError(AggregatorError):
    """A shard file could not be opened, written or closed."""


class KeyExtractionError(AggregatorError):
    """A line did not yield a key. Fatal to the worker that read it."""


class OutputWriteError(AggregatorError):
    """The final result file could not be written."""


class CoordinatorStalledError(AggregatorError):
    """No worker message arrived within the opt-in stall timeout."""
