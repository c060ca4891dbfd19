"""Worker: one shard in, one partial result and one exit signal out."""

from burst_aggregator.worker.messages import PartialResult, WorkerExited, WorkerMessage
from burst_aggregator.worker.tally import run_worker, tally_shard

__all__ = ["PartialResult", "WorkerExited", "WorkerMessage", "run_worker", "tally_shard"]
