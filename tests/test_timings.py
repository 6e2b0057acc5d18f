"""
Tests for the raw timing cursor.
"""

import numpy as np
import pytest

from rfraw import RawTimingReader, coalesce


class TestRawTimingReader:
    """Test pulse/gap coalescing."""

    def test_alternating(self):
        reader = RawTimingReader([500, -1000, 500])
        assert reader.begin() == 500
        assert reader.next_gap() == 1000
        assert reader.last_gap is False
        assert reader.next_pulse() == 500
        assert reader.next_gap() == 0
        assert reader.next_pulse() == 0

    def test_same_sign_runs_are_summed(self):
        reader = RawTimingReader([300, 200, -100, -900, 500])
        assert reader.begin() == 500
        assert reader.next_gap() == 1000
        assert reader.next_pulse() == 500

    def test_zero_samples_join_pulse(self):
        reader = RawTimingReader([500, 0, 300, -1000])
        assert reader.begin() == 800

    def test_starts_with_gap(self):
        reader = RawTimingReader([-100, 500])
        assert reader.begin() == 0

    def test_empty(self):
        reader = RawTimingReader([])
        assert len(reader) == 0
        assert reader.begin() == 0
        assert reader.next_gap() == 0

    def test_trailing_gap_marked(self):
        reader = RawTimingReader([500, -1000, 500, -100, -200])
        reader.begin()
        reader.next_gap()
        assert reader.last_gap is False
        reader.next_pulse()
        assert reader.next_gap() == 300
        assert reader.last_gap is True

    def test_begin_rewinds(self):
        reader = RawTimingReader([500, -9000])
        reader.begin()
        reader.next_gap()
        assert reader.last_gap is True
        assert reader.begin() == 500
        assert reader.last_gap is False

    def test_remaining(self):
        reader = RawTimingReader([500, -1000, 500, -1000])
        reader.begin()
        assert reader.remaining() == 3
        reader.next_gap()
        assert reader.remaining() == 2

    def test_non_integer_rejected(self):
        with pytest.raises(ValueError):
            RawTimingReader([500.9, -1000.2, 500.0])
        with pytest.raises(ValueError):
            RawTimingReader(np.array([500.0, -1000.0]))

    def test_numpy_input(self):
        reader = RawTimingReader(np.array([500, -1000], dtype=np.int32))
        pulse = reader.begin()
        assert pulse == 500
        assert type(pulse) is int


class TestCoalesce:
    """Test logical sequence extraction."""

    def test_coalesce(self):
        assert coalesce([300, 200, -100, -900, 500]) == [500, -1000, 500]

    def test_coalesce_keeps_trailing_gap(self):
        assert coalesce([500, -1000, 500, -9000]) == [500, -1000, 500, -9000]

    def test_coalesce_leading_gap(self):
        assert coalesce([-100, 500]) == []
