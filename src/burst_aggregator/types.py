"""Shared type aliases used across partitioning, workers and the coordinator."""

from collections.abc import Callable
from typing import TypeAlias

KeyExtractor: TypeAlias = Callable[[str], str]
FrequencyTable: TypeAlias = dict[str, int]
