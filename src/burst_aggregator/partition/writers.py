"""Shard file handles owned by the partitioner."""

import contextlib
from pathlib import Path
from typing import TextIO

from burst_aggregator.errors import ShardWriteError
from burst_aggregator.partition.types import BUFFER_SIZE, shard_path


class ShardWriterSet:
    """One open, truncated file per shard, held until partitioning finishes."""

    def __init__(self, shard_dir: Path, source_name: str, num_shards: int):
        self._paths = [shard_path(shard_dir, i, source_name) for i in range(num_shards)]
        self._handles: list[TextIO] = []

    @property
    def paths(self) -> list[Path]:
        return list(self._paths)

    def open_all(self) -> None:
        """Create every shard file up front so empty shards still exist."""
        for path in self._paths:
            try:
                handle = open(path, "w", encoding="utf-8", buffering=BUFFER_SIZE)  # noqa: SIM115
            except OSError as exc:
                raise ShardWriteError(f"cannot open shard {path}: {exc}") from exc
            self._handles.append(handle)

    def write(self, index: int, line: str) -> None:
        try:
            self._handles[index].write(line)
        except OSError as exc:
            raise ShardWriteError(f"cannot write shard {self._paths[index]}: {exc}") from exc

    def close_all(self) -> None:
        """Flush and close every shard. The first failure is raised after all are closed."""
        failure: OSError | None = None
        failed_path: Path | None = None
        for path, handle in zip(self._paths, self._handles, strict=False):
            try:
                handle.close()
            except OSError as exc:
                if failure is None:
                    failure, failed_path = exc, path
        self._handles.clear()

        if failure is not None:
            raise ShardWriteError(f"cannot close shard {failed_path}: {failure}") from failure

    def abort(self) -> None:
        """Drop every shard, committed or not."""
        for handle in self._handles:
            with contextlib.suppress(OSError):
                handle.close()
        self._handles.clear()

        for path in self._paths:
            path.unlink(missing_ok=True)
