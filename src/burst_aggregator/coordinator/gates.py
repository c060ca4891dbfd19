"""The two independent completion gates tracked by the coordinator."""


class CompletionGates:
    """
    Monotonic per-worker counters for result arrivals and worker exits.

    The gates never consult each other: exits may complete while results
    never do.
    """

    def __init__(self, num_workers: int):
        if num_workers < 1:
            raise ValueError(f"num_workers must be at least 1, got {num_workers}")
        self.num_workers = num_workers
        self._reported: set[int] = set()
        self._exited: set[int] = set()

    @property
    def results_received(self) -> int:
        return len(self._reported)

    @property
    def workers_exited(self) -> int:
        return len(self._exited)

    @property
    def results_complete(self) -> bool:
        return self.results_received == self.num_workers

    @property
    def exits_complete(self) -> bool:
        return self.workers_exited == self.num_workers

    def missing_results(self) -> list[int]:
        return [i for i in range(self.num_workers) if i not in self._reported]

    def pending_exits(self) -> list[int]:
        return [i for i in range(self.num_workers) if i not in self._exited]

    def record_result(self, worker_index: int) -> bool:
        """Count one partial result. True exactly when this one completes the gate."""
        self._record(self._reported, worker_index, "result")
        return self.results_complete

    def record_exit(self, worker_index: int) -> bool:
        """Count one worker exit. True exactly when this one completes the gate."""
        self._record(self._exited, worker_index, "exit")
        return self.exits_complete

    def _record(self, seen: set[int], worker_index: int, event: str) -> None:
        if not 0 <= worker_index < self.num_workers:
            raise ValueError(f"worker index {worker_index} out of range for {self.num_workers} workers")
        if worker_index in seen:
            raise ValueError(f"duplicate {event} from worker {worker_index}")
        seen.add(worker_index)
