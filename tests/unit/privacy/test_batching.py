"""Tests for batch-window alignment and notBefore calculation."""

import pytest

from intent_router.privacy.batching import align_to_batch_window, calculate_not_before
from tests.helpers import NOW

TIMESTAMPS = [0, 1, 59, 60, 61, 119, 120, 1_699_999_999, NOW, NOW + 1]
WINDOWS = [1, 7, 60, 300, 3600]


class TestAlignToBatchWindow:
    def test_rounds_up(self):
        assert align_to_batch_window(101, 60) == 120

    def test_exact_multiple_unchanged(self):
        assert align_to_batch_window(120, 60) == 120

    @pytest.mark.parametrize("timestamp", TIMESTAMPS)
    def test_zero_window_disables_batching(self, timestamp):
        assert align_to_batch_window(timestamp, 0) == timestamp

    @pytest.mark.parametrize("window", WINDOWS)
    @pytest.mark.parametrize("timestamp", TIMESTAMPS)
    def test_result_is_aligned_and_idempotent(self, timestamp, window):
        aligned = align_to_batch_window(timestamp, window)
        assert aligned % window == 0
        assert timestamp <= aligned < timestamp + window
        assert align_to_batch_window(aligned, window) == aligned

    def test_negative_window_rejected(self):
        with pytest.raises(ValueError):
            align_to_batch_window(100, -1)


class TestCalculateNotBefore:
    def test_no_desired_time_uses_earliest(self):
        assert calculate_not_before(30, 0, now=NOW) == NOW + 30

    def test_early_desired_time_is_clamped(self):
        assert calculate_not_before(30, 0, desired_time=NOW + 5, now=NOW) == NOW + 30

    def test_later_desired_time_is_kept(self):
        assert calculate_not_before(30, 0, desired_time=NOW + 500, now=NOW) == NOW + 500

    def test_clamp_happens_before_alignment(self):
        """now=100, delay=30, window=60, desired=110: clamp to 130 then align to 180.

        Aligning first would give 120, which is before the minimum delay.
        """
        assert calculate_not_before(30, 60, desired_time=110, now=100) == 180

    @pytest.mark.parametrize("window", [0, *WINDOWS])
    @pytest.mark.parametrize("desired", [None, NOW - 100, NOW + 10, NOW + 10_000])
    def test_never_before_min_delay_and_aligned(self, window, desired):
        not_before = calculate_not_before(45, window, desired_time=desired, now=NOW)
        assert not_before >= NOW + 45
        if window > 0:
            assert not_before % window == 0

    def test_uses_wall_clock_by_default(self, monkeypatch):
        monkeypatch.setattr("intent_router.privacy.batching.time.time", lambda: 1000.7)
        assert calculate_not_before(10, 0) == 1010
