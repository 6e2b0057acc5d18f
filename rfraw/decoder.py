"""
RFRAW Decoder - Parses RFRAW hex text back into signed timings.
"""

import logging
from enum import Enum
from typing import List, Optional

from . import (
    DUMP_CHUNK,
    FORMAT_B0,
    FORMAT_B1,
    HEADER,
    MAX_LINE_BINS,
    TAG_MASK,
    TERMINATOR,
)
from .hexstr import HexReader

# Module-level logger
_logger = logging.getLogger(__name__)

# Skipped between lines
LINE_SEPARATORS = " \t\r\n+-"


class NibbleFormat(Enum):
    """How pulse and gap nibbles are told apart."""

    CURRENT = "current"  # nibble >= 8 is a pulse
    LEGACY = "legacy"  # high nibble of each byte is a pulse


class Phase(Enum):
    """Which half of a pulse/gap pair comes next."""

    EXPECT_PULSE = "pulse"
    EXPECT_GAP = "gap"


class DecodedLine:
    """One parsed RFRAW line."""

    def __init__(
        self,
        fmt: int,
        repeats: int,
        widths: List[int],
        nibble_format: NibbleFormat,
        timings: List[int],
    ):
        self.fmt = fmt
        self.repeats = repeats
        self.widths = widths
        self.nibble_format = nibble_format
        self.timings = timings

    def __repr__(self) -> str:
        return (
            f"DecodedLine(fmt=0x{self.fmt:02X}, repeats={self.repeats}, "
            f"widths={self.widths}, {self.nibble_format.value}, "
            f"timings={len(self.timings)})"
        )


class TimingBuilder:
    """
    Two-state machine that keeps decoded output strictly alternating.

    A pulse arriving while a gap is expected (or vice versa) first emits
    a zero-length entry of the missing phase.
    """

    def __init__(self):
        self.phase = Phase.EXPECT_PULSE
        self.timings: List[int] = []

    def pulse(self, width: int):
        if self.phase is Phase.EXPECT_GAP:
            self.timings.append(0)
        self.timings.append(width)
        self.phase = Phase.EXPECT_GAP

    def gap(self, width: int):
        if self.phase is Phase.EXPECT_PULSE:
            self.timings.append(0)
        self.timings.append(-width)
        self.phase = Phase.EXPECT_PULSE


def detect_nibble_format(reader: HexReader) -> NibbleFormat:
    """
    Scan ahead (without consuming) up to the terminator.

    Any byte with a 0x88 bit set can only come from the current format.
    """
    scan = HexReader(reader.text, reader.pos)
    while True:
        byte = scan.get_byte()
        if byte < 0 or byte == TERMINATOR:
            return NibbleFormat.LEGACY
        if byte & TAG_MASK:
            return NibbleFormat.CURRENT


class RFRAWDecoder:
    """
    Permissive RFRAW parser.

    Accepts B0 and B1 lines in either nibble format, separated by '+'
    and whitespace, with '-'/':' anywhere between hex digits.
    """

    def __init__(self):
        # Lines parsed by the last decode() call, kept on failure
        self.lines: List[DecodedLine] = []

    def parse_line(self, reader: HexReader) -> Optional[DecodedLine]:
        """
        Parse one line at the reader position.

        Args:
            reader: Hex cursor positioned at the line header

        Returns:
            DecodedLine, or None if the line is malformed
        """
        if reader.get_byte() != HEADER:
            return None

        fmt = reader.get_byte()
        if fmt not in (FORMAT_B0, FORMAT_B1):
            _logger.debug(f"Unknown format tag at {reader.pos}: {fmt}")
            return None

        if fmt == FORMAT_B0:
            reader.get_byte()  # length, not needed

        count = reader.get_byte()
        if not 0 <= count <= MAX_LINE_BINS:
            return None

        repeats = 1
        if fmt == FORMAT_B0:
            repeats = reader.get_byte()
            if repeats < 1:
                return None

        widths = [0] * MAX_LINE_BINS
        for i in range(count):
            width = reader.get_word()
            if width < 0:
                return None
            widths[i] = width

        nibble_format = detect_nibble_format(reader)
        timings = self._walk_nibbles(reader, widths, nibble_format)
        if timings is None:
            return None

        return DecodedLine(fmt, repeats, widths[:count], nibble_format, timings)

    @staticmethod
    def _walk_nibbles(
        reader: HexReader,
        widths: List[int],
        nibble_format: NibbleFormat,
    ) -> Optional[List[int]]:
        """Decode pulse/gap nibbles up to and including the terminator."""
        builder = TimingBuilder()
        high = True  # next nibble is the high half of a byte

        while True:
            if high and reader.peek_byte() == TERMINATOR:
                reader.get_byte()
                return builder.timings

            nibble = reader.get_nibble()
            if nibble < 0:
                return None

            if nibble_format is NibbleFormat.LEGACY:
                is_pulse = high
            else:
                is_pulse = nibble >= 8

            if is_pulse:
                builder.pulse(widths[nibble & 7])
            else:
                builder.gap(widths[nibble & 7])
            high = not high

    def decode(self, text: str, expand_repeats: bool = False) -> Optional[List[int]]:
        """
        Decode RFRAW text to signed timings.

        Lines are parsed left to right. The first malformed line fails the
        whole decode; lines parsed before it stay in self.lines.

        Args:
            text: RFRAW hex text, lines joined with '+'
            expand_repeats: Repeat each B0 line's timings by its repeat count

        Returns:
            Signed timings (pulses positive, gaps negative), or None
        """
        self.lines = []
        reader = HexReader(text)

        while True:
            while not reader.at_end() and reader.text[reader.pos] in LINE_SEPARATORS:
                reader.pos += 1
            if reader.at_end():
                break

            line = self.parse_line(reader)
            if line is None:
                _logger.debug(f"RFRAW parse failed near position {reader.pos}")
                return None
            self.lines.append(line)

        if not self.lines:
            return None

        timings = []
        for line in self.lines:
            copies = line.repeats if expand_repeats else 1
            for _ in range(copies):
                timings.extend(line.timings)

        return timings


def decode_rfraw(text: str, expand_repeats: bool = False) -> Optional[List[int]]:
    """Decode RFRAW text to signed timings, or None if malformed."""
    return RFRAWDecoder().decode(text, expand_repeats)


def dump_rfraw(data: str, chunk: int = DUMP_CHUNK):
    """Log an RFRAW string at INFO, split into chunks."""
    _logger.info("Received RFRAW: data=")
    for start in range(0, max(len(data), 1), chunk):
        _logger.info(data[start:start + chunk])
