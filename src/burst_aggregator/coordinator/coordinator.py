import logging
import os
import queue
import shutil
import tempfile
import time
from concurrent.futures import Future
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from burst_aggregator.config import default_worker_count
from burst_aggregator.coordinator.emit import merge_partial, write_output
from burst_aggregator.coordinator.execution import (
    BURST_EXECUTOR_ENV,
    ExecutorClass,
    describe_executor,
    get_executor_class,
    is_gil_enabled,
    open_channel,
)
from burst_aggregator.coordinator.gates import CompletionGates
from burst_aggregator.errors import CoordinatorStalledError
from burst_aggregator.extract import registrable_domain
from burst_aggregator.partition import PartitionStats, partition_round_robin
from burst_aggregator.types import FrequencyTable, KeyExtractor
from burst_aggregator.worker import PartialResult, WorkerExited, WorkerMessage, run_worker

logger = logging.getLogger(__name__)


class CoordinatorState(Enum):
    IDLE = "idle"
    PARTITIONING = "partitioning"
    SPAWNED = "spawned"
    MERGING = "merging"
    WRITING = "writing"
    DRAINING = "draining"
    TERMINATED = "terminated"


@dataclass(frozen=True, slots=True)
class RunSummary:
    """What a finished run produced. ``output_path`` is None if no result was written."""

    output_path: Path | None
    results_received: int
    workers_exited: int
    distinct_keys: int
    partition_stats: PartitionStats


class Coordinator:
    """
    Partition, spawn N workers, merge their partials and write the result once.

    The aggregated table and both completion gates exist only between spawn
    and termination, and only ``handle`` mutates them. The run ends when all
    workers have exited, whether or not every partial result arrived.
    """

    def __init__(
        self,
        input_path: str,
        num_workers: int,
        shard_dir: str,
        output_dir: str = ".",
        extract_key: KeyExtractor = registrable_domain,
        executor_class: ExecutorClass = None,
        stall_timeout: float | None = None,
    ):
        if num_workers < 1:
            raise ValueError(f"num_workers must be at least 1, got {num_workers}")
        self.input_path = input_path
        self.num_workers = num_workers
        self.shard_dir = shard_dir
        self.output_dir = output_dir
        self.extract_key = extract_key
        self.executor_class = executor_class
        self.stall_timeout = stall_timeout

        self.state = CoordinatorState.IDLE
        self.output_path: Path | None = None
        self._gates: CompletionGates | None = None
        self._aggregated: FrequencyTable | None = None

    @property
    def gates(self) -> CompletionGates:
        if self._gates is None:
            raise RuntimeError(f"no completion gates in state {self.state.value}")
        return self._gates

    @property
    def aggregated(self) -> FrequencyTable:
        if self._aggregated is None:
            raise RuntimeError(f"no aggregated table in state {self.state.value}")
        return self._aggregated

    def run(self) -> RunSummary:
        self._transition(CoordinatorState.PARTITIONING)
        shard_paths, stats = partition_round_robin(self.input_path, self.num_workers, self.shard_dir)
        logger.info("Split %d lines into %d shards", stats.lines_read, len(shard_paths))

        # partition_round_robin has closed every shard; workers may start now.
        with open_channel(self.executor_class) as channel:
            self.begin()
            if self.executor_class is None:
                for index, path in enumerate(shard_paths):
                    run_worker(index, str(path), self.extract_key, channel)
                self._drain(channel)
            else:
                with self.executor_class(max_workers=self.num_workers) as executor:
                    for index, path in enumerate(shard_paths):
                        future = executor.submit(run_worker, index, str(path), self.extract_key, channel)
                        future.add_done_callback(_log_worker_crash)
                    self._drain(channel)

        return self._terminate(stats)

    def begin(self) -> None:
        """Create the per-run state; workers are about to be spawned."""
        self._gates = CompletionGates(self.num_workers)
        self._aggregated = {}
        self.output_path = None
        self._transition(CoordinatorState.SPAWNED)

    def handle(self, message: WorkerMessage) -> None:
        """Apply one worker message. The only place run state is mutated."""
        if isinstance(message, PartialResult):
            self._on_partial_result(message)
        elif isinstance(message, WorkerExited):
            self._on_worker_exited(message)
        else:
            raise TypeError(f"unexpected worker message: {message!r}")

    @property
    def finished(self) -> bool:
        return self._gates is not None and self._gates.exits_complete

    def _on_partial_result(self, message: PartialResult) -> None:
        if self.state is CoordinatorState.SPAWNED:
            self._transition(CoordinatorState.MERGING)

        complete = self.gates.record_result(message.worker_index)
        merge_partial(self.aggregated, message.table)
        logger.debug(
            "Result from worker %d (%d/%d)",
            message.worker_index,
            self.gates.results_received,
            self.num_workers,
        )

        if complete and self.output_path is None:
            self._transition(CoordinatorState.WRITING)
            self.output_path = write_output(self.aggregated, self.output_dir)
            self._transition(CoordinatorState.DRAINING)

    def _on_worker_exited(self, message: WorkerExited) -> None:
        self.gates.record_exit(message.worker_index)
        level = logging.DEBUG if message.succeeded else logging.WARNING
        logger.log(
            level,
            "Worker %d exited (%s), %d/%d",
            message.worker_index,
            "ok" if message.succeeded else "failed",
            self.gates.workers_exited,
            self.num_workers,
        )

    def _drain(self, channel: Any) -> None:
        while not self.finished:
            try:
                message = channel.get(timeout=self.stall_timeout)
            except queue.Empty:
                raise CoordinatorStalledError(
                    f"no worker message for {self.stall_timeout}s; "
                    f"missing results from {self.gates.missing_results()}, "
                    f"pending exits from {self.gates.pending_exits()}"
                ) from None
            self.handle(message)

    def _terminate(self, stats: PartitionStats) -> RunSummary:
        gates = self.gates
        summary = RunSummary(
            output_path=self.output_path,
            results_received=gates.results_received,
            workers_exited=gates.workers_exited,
            distinct_keys=len(self.aggregated),
            partition_stats=stats,
        )

        if self.output_path is None:
            logger.warning(
                "All %d workers exited but only %d reported results (missing: %s); no output written",
                self.num_workers,
                gates.results_received,
                gates.missing_results(),
            )

        self._gates = None
        self._aggregated = None
        self._transition(CoordinatorState.TERMINATED)
        return summary

    def _transition(self, new_state: CoordinatorState) -> None:
        logger.debug("Coordinator %s -> %s", self.state.value, new_state.value)
        self.state = new_state


def _log_worker_crash(future: Future) -> None:
    exc = future.exception()
    if exc is not None:
        logger.error("Worker task died before signalling exit: %r", exc)


def aggregate(
    input_path: str,
    workers: int | None = None,
    output_dir: str = ".",
    extract_key: KeyExtractor = registrable_domain,
    stall_timeout: float | None = None,
) -> RunSummary:
    """
    Count keys over ``input_path`` with one worker per CPU.

    1. Partition lines round-robin into one shard per worker
    2. Tally each shard concurrently
    3. Merge partials and write the sorted result once all have arrived
    """
    total_start = time.perf_counter()
    input_file = Path(input_path)
    num_workers = default_worker_count() if workers is None else workers

    executor_class = get_executor_class()
    executor_name = describe_executor(executor_class)

    gil_status = "enabled" if is_gil_enabled() else "disabled"
    executor_override = os.environ.get(BURST_EXECUTOR_ENV, "")
    override_info = f", {BURST_EXECUTOR_ENV}={executor_override}" if executor_override else ""

    logger.info(
        f"Starting: file={input_file.name}, workers={num_workers}, "
        f"executor={executor_name}, GIL={gil_status}{override_info}"
    )

    shard_dir = tempfile.mkdtemp(prefix="burst_shards_")

    try:
        coordinator = Coordinator(
            input_path,
            num_workers,
            shard_dir,
            output_dir=output_dir,
            extract_key=extract_key,
            executor_class=executor_class,
            stall_timeout=stall_timeout,
        )
        summary = coordinator.run()
    finally:
        leftover = sorted(p.name for p in Path(shard_dir).iterdir())
        if leftover:
            logger.warning("Removing %d unconsumed shard(s): %s", len(leftover), ", ".join(leftover))
        shutil.rmtree(shard_dir, ignore_errors=True)

    total_time = time.perf_counter() - total_start
    logger.info(
        "Done: %d/%d results, %d distinct keys (total %.2fs)",
        summary.results_received,
        num_workers,
        summary.distinct_keys,
        total_time,
    )
    return summary


def main_aggregate(
    input_path: str,
    output_dir: str = ".",
    stall_timeout: float | None = None,
) -> RunSummary:
    """Main entry point that prints the result file path to stdout."""
    summary = aggregate(input_path, output_dir=output_dir, stall_timeout=stall_timeout)

    if summary.output_path is not None:
        print(summary.output_path)
    return summary
