"""Execution policy, executor selection and worker channels."""

import contextlib
import multiprocessing
import os
import queue
import sys
from collections.abc import Iterator
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from typing import Any, TypeAlias

ExecutorClass: TypeAlias = type[ThreadPoolExecutor] | type[ProcessPoolExecutor] | None

# Environment variable to override executor selection.
BURST_EXECUTOR_ENV = "BURST_EXECUTOR"


def is_gil_enabled() -> bool:
    """Check if GIL is enabled."""
    try:
        return sys._is_gil_enabled()
    except AttributeError:
        return True


def get_executor_class() -> ExecutorClass:
    """
    Select the appropriate executor class.

    Priority:
    1. BURST_EXECUTOR env var override ("threads", "processes", or "serial")
    2. Auto-select based on GIL status (disabled -> threads, enabled -> processes)

    "serial" runs every worker inline before the coordinator drains the channel.
    """
    executor_override = os.environ.get(BURST_EXECUTOR_ENV, "").lower()

    if executor_override == "threads":
        return ThreadPoolExecutor
    if executor_override == "processes":
        return ProcessPoolExecutor
    if executor_override == "serial":
        return None

    if is_gil_enabled():
        return ProcessPoolExecutor
    return ThreadPoolExecutor


def describe_executor(executor_class: ExecutorClass) -> str:
    """Convert an executor class into a readable policy name."""
    if executor_class is None:
        return "serial"
    if executor_class is ThreadPoolExecutor:
        return "threads"
    return "processes"


@contextlib.contextmanager
def open_channel(executor_class: ExecutorClass) -> Iterator[Any]:
    """
    Yield an ordered queue workers can put messages on.

    Process workers need a manager-backed proxy; threads and serial mode
    share a plain in-memory queue.
    """
    if executor_class is ProcessPoolExecutor:
        with multiprocessing.Manager() as manager:
            yield manager.Queue()
    else:
        yield queue.Queue()
