"""
Unit tests for the /proc/stat and /proc/cpuinfo parsers.
"""

import pytest

from pemon.errors import (
    CoreCountMismatch,
    CounterLineNotFound,
    CounterParseError,
    ErrorKind,
    FrequencyLineMalformed,
    SourceUnavailable,
)
from pemon.models.samples import CoreCounterSnapshot
from pemon.system.procfs import (
    count_processors,
    enumerate_cores,
    parse_all_snapshots,
    parse_core_frequencies,
    parse_counter_snapshot,
    parse_frequency_line,
    read_text,
)


@pytest.mark.unit
class TestCounterSnapshotParser:
    """Test cases for parse_counter_snapshot."""

    def test_parses_ten_field_line(self):
        text = "cpu  1 2 3 4 5 6 7 8 9 10\ncpu0 100 1 50 800 10 2 3 4 5 6\n"

        snapshot = parse_counter_snapshot(text, 0)

        assert snapshot == CoreCounterSnapshot(100, 1, 50, 800, 10, 2, 3, 4, 5, 6)
        assert snapshot.field_count == 10
        assert snapshot.total == 981

    def test_nine_field_line_defaults_guest_nice(self):
        text = "cpu0 100 0 50 800 10 0 0 0 7\n"

        snapshot = parse_counter_snapshot(text, 0)

        assert snapshot.guest == 7
        assert snapshot.guest_nice == 0
        assert snapshot.field_count == 9

    def test_extra_trailing_fields_are_ignored(self):
        text = "cpu0 1 2 3 4 5 6 7 8 9 10 11 12\n"

        snapshot = parse_counter_snapshot(text, 0)

        assert snapshot.guest_nice == 10
        assert snapshot.total == 55

    def test_cpu1_does_not_match_cpu10_or_cpu11(self):
        text = (
            "cpu10 9 9 9 9 9 9 9 9 9 9\n"
            "cpu11 8 8 8 8 8 8 8 8 8 8\n"
            "cpu1 1 1 1 1 1 1 1 1 1 1\n"
        )

        snapshot = parse_counter_snapshot(text, 1)

        assert snapshot.user == 1

    def test_cpu1_missing_even_if_cpu10_present(self):
        text = "cpu10 9 9 9 9 9 9 9 9 9 9\n"

        with pytest.raises(CounterLineNotFound) as exc_info:
            parse_counter_snapshot(text, 1)

        assert exc_info.value.core_index == 1
        assert exc_info.value.kind is ErrorKind.PARSE

    def test_aggregate_line_is_never_selected(self):
        text = "cpu  1 1 1 1 1 1 1 1 1 1\n"

        with pytest.raises(CounterLineNotFound):
            parse_counter_snapshot(text, 0)

    def test_too_few_fields(self):
        text = "cpu0 1 2 3 4 5 6 7 8\n"

        with pytest.raises(CounterParseError) as exc_info:
            parse_counter_snapshot(text, 0)

        assert "at least 9" in str(exc_info.value)

    @pytest.mark.parametrize("bad", ["abc", "-5", "1.5"])
    def test_non_numeric_or_negative_field(self, bad):
        text = f"cpu0 1 2 3 {bad} 5 6 7 8 9 10\n"

        with pytest.raises(CounterParseError) as exc_info:
            parse_counter_snapshot(text, 0)

        assert "idle" in str(exc_info.value)

    def test_parse_all_snapshots_in_core_order(self, stat_sequence):
        snapshots = parse_all_snapshots(stat_sequence[0], 2)

        assert [s.user for s in snapshots] == [100, 200]
        assert [s.idle for s in snapshots] == [800, 700]

    def test_parse_all_snapshots_missing_core(self, stat_sequence):
        with pytest.raises(CounterLineNotFound):
            parse_all_snapshots(stat_sequence[0], 3)


@pytest.mark.unit
class TestCoreEnumerator:
    """Test cases for core discovery from cpuinfo."""

    def test_count_processors(self, cpuinfo_text):
        assert count_processors(cpuinfo_text) == 2

    def test_frequency_line(self):
        assert parse_frequency_line("cpu MHz : 2400.125") == 2400.125

    def test_frequency_line_with_tabs(self):
        assert parse_frequency_line("cpu MHz\t\t: 799.998") == 799.998

    @pytest.mark.parametrize(
        "line",
        ["cpu MHz : abc", "cpu MHz : ", "cpu MHz 2400", "cpu MHz : 0", "cpu MHz : nan"],
    )
    def test_malformed_frequency_line(self, line):
        with pytest.raises(FrequencyLineMalformed):
            parse_frequency_line(line)

    def test_frequencies_in_file_order(self, cpuinfo_text):
        assert parse_core_frequencies(cpuinfo_text) == [2400.125, 1800.0]

    def test_enumerate_cores(self, cpuinfo_text):
        inventory = enumerate_cores(cpuinfo_text)

        assert inventory.core_count == 2
        assert inventory.frequencies_mhz == (2400.125, 1800.0)
        assert inventory.core_ids == [1, 2]

    def test_enumerate_cores_malformed_frequency(self, cpuinfo_text):
        text = cpuinfo_text.replace("1800.000", "abc")

        with pytest.raises(FrequencyLineMalformed):
            enumerate_cores(text)

    def test_enumerate_cores_count_mismatch(self, cpuinfo_text):
        text = cpuinfo_text + "\nprocessor\t: 2\nvendor_id\t: GenuineIntel\n"

        with pytest.raises(CoreCountMismatch):
            enumerate_cores(text)

    def test_enumerate_cores_empty(self):
        with pytest.raises(CoreCountMismatch):
            enumerate_cores("")


@pytest.mark.unit
class TestReadText:
    def test_reads_file(self, tmp_path):
        path = tmp_path / "stat"
        path.write_text("cpu0 1 2 3 4 5 6 7 8 9\n")

        assert read_text(str(path)).startswith("cpu0")

    def test_missing_file(self, tmp_path):
        missing = tmp_path / "missing"

        with pytest.raises(SourceUnavailable) as exc_info:
            read_text(str(missing))

        assert exc_info.value.path == str(missing)
        assert exc_info.value.kind is ErrorKind.PARSE
