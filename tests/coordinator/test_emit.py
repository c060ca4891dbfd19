"""Tests for merging partial tables and writing the result file."""

from pathlib import Path

import pytest

from burst_aggregator.coordinator.emit import (
    format_entries,
    merge_partial,
    output_path_for,
    sort_entries,
    write_output,
)
from burst_aggregator.errors import OutputWriteError


class TestMergePartial:
    """Test cases for merge_partial function."""

    def test_sums_shared_keys_and_inserts_new_ones(self) -> None:
        aggregated = {"a": 2, "b": 1}
        merge_partial(aggregated, {"b": 3, "c": 1})
        assert aggregated == {"a": 2, "b": 4, "c": 1}

    def test_result_equals_keywise_sum_of_partials(self) -> None:
        partials = [
            {"a": 1, "shared": 2},
            {},
            {"shared": 5, "only-here": 7},
            {"a": 3},
        ]
        aggregated: dict[str, int] = {}
        for partial in partials:
            merge_partial(aggregated, partial)

        keys = {key for partial in partials for key in partial}
        assert aggregated == {key: sum(p.get(key, 0) for p in partials) for key in keys}


class TestSortAndFormat:
    """Test cases for sort_entries and format_entries."""

    def test_sorts_by_count_descending_then_key(self) -> None:
        entries = sort_entries({"c": 1, "a": 2, "b": 1, "d": 5})
        assert entries == [("d", 5), ("a", 2), ("b", 1), ("c", 1)]

    def test_formats_one_newline_terminated_record_per_key(self) -> None:
        assert format_entries([("a", 2), ("b", 1)]) == "a: 2\nb: 1\n"
        assert format_entries([]) == ""


class TestWriteOutput:
    """Test cases for write_output function."""

    def test_writes_sorted_records(self, tmp_path: Path) -> None:
        path = write_output({"b": 1, "a": 2, "c": 1}, tmp_path)

        assert path.parent == tmp_path
        assert path.name.startswith("solution-")
        assert path.read_text(encoding="utf-8") == "a: 2\nb: 1\nc: 1\n"

    def test_name_is_derived_from_milliseconds(self, tmp_path: Path) -> None:
        assert output_path_for(tmp_path, now_ns=1_700_000_000_123_456_789).name == (
            "solution-1700000000123.txt"
        )

    def test_never_overwrites_an_existing_result(self, tmp_path, monkeypatch) -> None:
        existing = tmp_path / "solution-42.txt"
        existing.write_text("keep\n", encoding="utf-8")
        monkeypatch.setattr(
            "burst_aggregator.coordinator.emit.output_path_for",
            lambda output_dir: output_dir / "solution-42.txt",
        )

        with pytest.raises(OutputWriteError):
            write_output({"a": 1}, tmp_path)
        assert existing.read_text(encoding="utf-8") == "keep\n"

    def test_unwritable_directory_is_an_output_write_error(self, tmp_path: Path) -> None:
        with pytest.raises(OutputWriteError):
            write_output({"a": 1}, tmp_path / "missing")
