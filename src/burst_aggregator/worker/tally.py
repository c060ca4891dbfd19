"""Per-shard key counting and the worker lifecycle."""

import logging
from collections import defaultdict
from pathlib import Path
from typing import Any

from burst_aggregator.errors import KeyExtractionError
from burst_aggregator.types import FrequencyTable, KeyExtractor
from burst_aggregator.worker.messages import PartialResult, WorkerExited

logger = logging.getLogger(__name__)


def tally_shard(shard_path: str, extract_key: KeyExtractor) -> FrequencyTable:
    """
    Count keys over every line of one shard, strictly in file order.

    There is no line-level recovery: the first line the extractor rejects
    aborts the whole tally with KeyExtractionError.
    """
    counts: defaultdict[str, int] = defaultdict(int)

    with open(shard_path, encoding="utf-8") as handle:
        for line_no, raw_line in enumerate(handle, start=1):
            line = raw_line.rstrip("\n")
            try:
                key = extract_key(line)
            except Exception as exc:
                raise KeyExtractionError(f"{shard_path}:{line_no}: {exc}") from exc
            counts[key] += 1

    return dict(counts)


def run_worker(
    worker_index: int,
    shard_path: str,
    extract_key: KeyExtractor,
    channel: Any,
) -> None:
    """
    Consume one shard end to end and report to the coordinator.

    Sends PartialResult, deletes the shard, then sends WorkerExited. A failed
    worker sends no result and keeps its shard on disk, but still signals
    exit. The coordinator's result gate then never completes and the run
    ends without output.
    """
    succeeded = False
    try:
        table = tally_shard(shard_path, extract_key)
        channel.put(PartialResult(worker_index, table))
        Path(shard_path).unlink()
        succeeded = True
        logger.debug("Worker %d: %d distinct keys from %s", worker_index, len(table), shard_path)
    except Exception:
        logger.exception("Worker %d failed on %s; no partial result sent", worker_index, shard_path)
    finally:
        channel.put(WorkerExited(worker_index, succeeded))
