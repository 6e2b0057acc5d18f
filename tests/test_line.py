"""
Tests for RFRAW line layout.
"""

import pytest

from rfraw import FORMAT_B0, FORMAT_B1, RFRAWLine


class TestLineEncode:
    """Test line serialization."""

    def test_b1_layout(self):
        line = RFRAWLine(FORMAT_B1, [500, 1000], [(0, 1), (0, 1)])
        assert line.to_hex() == "AAB10201F403E8818155"

    def test_b0_layout(self):
        line = RFRAWLine(FORMAT_B0, [500, 1000], [(0, 1)])
        encoded = line.encode()
        # header, tag, len, count, repeats, 2 words, 1 pair, terminator
        assert len(encoded) == 10
        assert encoded[2] == 6  # bytes between length and terminator
        assert line.to_hex() == "AAB006020101F403E88155"

    def test_width_clamped(self):
        line = RFRAWLine(FORMAT_B1, [70000], [(0, 0)])
        assert line.encode()[3:5] == b"\xff\xff"

    def test_length_clamped_to_zero(self):
        line = RFRAWLine(FORMAT_B0, [100 * (i + 1) for i in range(8)], [(1, 2)] * 250)
        encoded = line.encode()
        assert len(encoded) == 5 + 16 + 250 + 1
        assert encoded[2] == 0

    def test_body_ignores_repeats(self):
        a = RFRAWLine(FORMAT_B0, [500, 1000], [(0, 1)], repeats=1)
        b = RFRAWLine(FORMAT_B0, [500, 1000], [(0, 1)], repeats=3)
        assert a.body() == b.body()
        assert a.encode() != b.encode()

    def test_validation(self):
        with pytest.raises(ValueError):
            RFRAWLine(0xB2, [500])
        with pytest.raises(ValueError):
            RFRAWLine(FORMAT_B1, list(range(1, 10)))
        with pytest.raises(ValueError):
            RFRAWLine(FORMAT_B1, [500], [(0, 1)])
        with pytest.raises(ValueError):
            RFRAWLine(FORMAT_B0, [500], repeats=0)
