"""
Tests for RFRAW decoder.
"""

import logging

from rfraw import (
    FORMAT_B0,
    HexReader,
    NibbleFormat,
    RFRAWDecoder,
    decode_rfraw,
    dump_rfraw,
)


class TestParseLine:
    """Test single line parsing."""

    def test_b1_line(self):
        decoder = RFRAWDecoder()
        line = decoder.parse_line(HexReader("AAB10201F403E8818155"))
        assert line is not None
        assert line.widths == [500, 1000]
        assert line.repeats == 1
        assert line.nibble_format is NibbleFormat.CURRENT
        assert line.timings == [500, -1000, 500, -1000]

    def test_b0_line(self):
        decoder = RFRAWDecoder()
        line = decoder.parse_line(HexReader("AAB00B030201F403E8271080818255"))
        assert line.fmt == FORMAT_B0
        assert line.repeats == 2
        assert line.widths == [500, 1000, 10000]
        assert line.timings == [500, -500, 500, -1000, 500, -10000]

    def test_unknown_tag_stops_after_tag(self):
        reader = HexReader("AAB20201F403E88055")
        assert RFRAWDecoder().parse_line(reader) is None
        assert reader.pos == 4

    def test_bad_header(self):
        assert RFRAWDecoder().parse_line(HexReader("ABB10201F403E88055")) is None

    def test_too_many_bins(self):
        assert RFRAWDecoder().parse_line(HexReader("AAB109" + "01F4" * 9 + "8055")) is None

    def test_truncated_table(self):
        assert RFRAWDecoder().parse_line(HexReader("AAB10201F4")) is None


class TestDecode:
    """Test full text decoding."""

    def test_separators_are_ignored(self):
        plain = decode_rfraw("AAB10201F403E88055")
        assert plain == [500, -500]
        assert decode_rfraw("AA-B1:02 01F4 03E8 80 55") == plain

    def test_lowercase(self):
        assert decode_rfraw("aab10201f403e88155") == [500, -1000]

    def test_legacy_nibble_format(self):
        """No 0x88 bits: high nibble is the pulse, low nibble the gap."""
        decoder = RFRAWDecoder()
        timings = decoder.decode("AAB1020064012C011055")
        assert timings == [100, -300, 300, -100]
        assert decoder.lines[0].nibble_format is NibbleFormat.LEGACY

    def test_consecutive_pulses_get_zero_gap(self):
        assert decode_rfraw("AAB1020064012C8855") == [100, 0, 100]

    def test_consecutive_gaps_get_zero_pulse(self):
        assert decode_rfraw("AAB1020064012C800155") == [100, -100, 0, -100, 0, -300]

    def test_index_beyond_table_is_zero_width(self):
        assert decode_rfraw("AAB10101F48155") == [500, 0]

    def test_multiple_lines(self):
        text = "AAB10201F403E88155 +\n AAB10201F403E88055"
        assert decode_rfraw(text) == [500, -1000, 500, -500]

    def test_repeats_expanded_by_request(self):
        text = "AAB006020301F403E88155"
        assert decode_rfraw(text) == [500, -1000]
        assert decode_rfraw(text, expand_repeats=True) == [500, -1000] * 3

    def test_zero_repeat_count_rejected(self):
        assert decode_rfraw("AAB006020001F403E88155") is None
        assert decode_rfraw("AAB006020001F403E88155", expand_repeats=True) is None

    def test_missing_terminator(self):
        assert decode_rfraw("AAB10201F403E881") is None

    def test_dangling_separator(self):
        assert decode_rfraw("AAB10201F403E880-") is None

    def test_garbage(self):
        assert decode_rfraw("hello") is None

    def test_empty(self):
        assert decode_rfraw("") is None
        assert decode_rfraw(" + ") is None

    def test_failure_keeps_parsed_lines(self):
        decoder = RFRAWDecoder()
        assert decoder.decode("AAB10201F403E88155+AAB2") is None
        assert len(decoder.lines) == 1
        assert decoder.lines[0].timings == [500, -1000]


class TestDump:
    """Test logging of received data."""

    def test_dump_chunks(self, caplog):
        with caplog.at_level(logging.INFO, logger="rfraw.decoder"):
            dump_rfraw("A" * 500)

        messages = [record.getMessage() for record in caplog.records]
        assert messages[0] == "Received RFRAW: data="
        assert [len(m) for m in messages[1:]] == [230, 230, 40]
