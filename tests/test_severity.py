"""Tests for event severity scoring."""

import pytest

from craftlog_lewitt.events import Delta, Flags, calculate_severity
from craftlog_lewitt.events.severity import edit_size_severity


class TestCalculateSeverity:
    """Rule order and fixed severities."""

    def test_policy_violation_is_max(self):
        assert calculate_severity("policy_violation") == 1.0

    def test_undo_beats_paste(self):
        flags = Flags(is_undo_like=True, is_paste_like=True)
        assert calculate_severity("edit", flags, Delta(added_chars=5000)) == 0.15

    def test_redo(self):
        assert calculate_severity("edit", Flags(is_redo_like=True)) == 0.25

    def test_paste(self):
        assert calculate_severity("edit", Flags(is_paste_like=True), Delta(added_chars=300)) == 0.85

    def test_zero_change_edit_floor(self):
        assert calculate_severity("edit", Flags(), Delta()) == 0.1

    def test_edit_without_delta(self):
        """A missing delta counts as zero characters."""
        assert calculate_severity("edit") == 0.1

    @pytest.mark.parametrize(
        "event,expected",
        [
            ("snapshot", 0.2),
            ("session_start", 0.4),
            ("session_pause", 0.3),
            ("session_resume", 0.35),
            ("mode_change", 0.3),
            ("ai_prompt", 0.5),
            ("file_open", 0.5),
        ],
    )
    def test_kind_defaults(self, event, expected):
        assert calculate_severity(event) == expected


class TestEditSizeSeverity:
    def test_reference_values(self):
        assert edit_size_severity(100) == pytest.approx(0.6690884737546057)
        assert edit_size_severity(1) == pytest.approx(0.2593013368057694)
        assert edit_size_severity(30000) == 1

    def test_saturates(self):
        assert edit_size_severity(10_000_000) == 1.0

    def test_counts_beyond_float_range(self):
        assert edit_size_severity(10**400) == 1.0

    def test_monotonic(self):
        values = [edit_size_severity(n) for n in (0, 1, 10, 100, 1000, 10000, 30000)]
        assert values == sorted(values)
        assert all(0.1 <= v <= 1.0 for v in values)
