"""Tests for the completion gates."""

import pytest

from burst_aggregator.coordinator import CompletionGates


def test_result_gate_completes_on_last_worker() -> None:
    gates = CompletionGates(3)

    assert gates.record_result(2) is False
    assert gates.record_result(0) is False
    assert gates.record_result(1) is True
    assert gates.results_received == 3
    assert gates.missing_results() == []


def test_gates_are_independent() -> None:
    gates = CompletionGates(2)

    gates.record_exit(0)
    assert gates.record_exit(1) is True

    assert gates.exits_complete
    assert gates.results_received == 0
    assert not gates.results_complete
    assert gates.missing_results() == [0, 1]


def test_each_worker_counts_once_per_gate() -> None:
    gates = CompletionGates(2)
    gates.record_result(0)
    gates.record_exit(0)

    with pytest.raises(ValueError, match="duplicate result"):
        gates.record_result(0)
    with pytest.raises(ValueError, match="duplicate exit"):
        gates.record_exit(0)
    assert gates.results_received == 1
    assert gates.workers_exited == 1
    assert gates.pending_exits() == [1]


def test_rejects_unknown_worker_index() -> None:
    gates = CompletionGates(2)
    with pytest.raises(ValueError, match="out of range"):
        gates.record_result(2)
    with pytest.raises(ValueError, match="out of range"):
        gates.record_exit(-1)


def test_requires_at_least_one_worker() -> None:
    with pytest.raises(ValueError):
        CompletionGates(0)
