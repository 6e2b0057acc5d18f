"""
RFRAW line structure and serialization.
"""

from typing import List, Sequence, Tuple

from . import (
    FORMAT_B0,
    FORMAT_B1,
    HEADER,
    MAX_LENGTH,
    MAX_LINE_BINS,
    MAX_REPEATS,
    MAX_WIDTH,
    PULSE_FLAG,
    TERMINATOR,
)
from .hexstr import HexBuilder, format_hex


class RFRAWLine:
    """
    Represents a single RFRAW line.

    B1 layout (big-endian):
    - Header: 0xAA
    - Format: 0xB1
    - Bin count N (at most 8)
    - Width table: N x 16-bit words (microseconds)
    - Pairs: one byte per pulse/gap, 0x80 | pulse << 4 | gap
    - Terminator: 0x55

    B0 adds a length byte after the format tag (bytes between it and the
    terminator, 0 if over 255) and a repeat count after the bin count.
    """

    def __init__(
        self,
        fmt: int,
        widths: Sequence[int],
        pairs: Sequence[Tuple[int, int]] = (),
        repeats: int = 1,
    ):
        """
        Initialize a line.

        Args:
            fmt: FORMAT_B0 or FORMAT_B1
            widths: Bin mean widths in microseconds (clamped to 16 bits on encode)
            pairs: (pulse_index, gap_index) tuples into widths
            repeats: Repeat count (B0 only, 1 to 255)
        """
        if fmt not in (FORMAT_B0, FORMAT_B1):
            raise ValueError(f"unknown format tag: 0x{fmt:02X}")
        if len(widths) > MAX_LINE_BINS:
            raise ValueError(f"at most {MAX_LINE_BINS} widths per line")
        if not 1 <= repeats <= MAX_REPEATS:
            raise ValueError("repeats must be 1 to 255")
        for pulse, gap in pairs:
            if not (0 <= pulse < len(widths) and 0 <= gap < len(widths)):
                raise ValueError(f"pair ({pulse}, {gap}) outside width table")

        self.fmt = fmt
        self.widths: List[int] = list(widths)
        self.pairs: List[Tuple[int, int]] = list(pairs)
        self.repeats = repeats

    def _header_size(self) -> int:
        return 5 if self.fmt == FORMAT_B0 else 3

    def encode(self) -> bytes:
        """Encode line to bytes."""
        builder = HexBuilder()
        builder.push_byte(HEADER)
        builder.push_byte(self.fmt)
        if self.fmt == FORMAT_B0:
            builder.push_byte(0)  # length, patched below
        builder.push_byte(len(self.widths))
        if self.fmt == FORMAT_B0:
            builder.push_byte(self.repeats)

        for width in self.widths:
            builder.push_word(min(max(width, 0), MAX_WIDTH))

        for pulse, gap in self.pairs:
            builder.push_byte(PULSE_FLAG | (pulse << 4) | gap)

        builder.push_byte(TERMINATOR)

        if self.fmt == FORMAT_B0:
            length = len(builder) - 4
            builder.set_byte(2, length if length <= MAX_LENGTH else 0)

        return builder.to_bytes()

    def body(self) -> bytes:
        """Bytes after the fixed header (and repeat count); equal bodies repeat."""
        return self.encode()[self._header_size():]

    def to_hex(self) -> str:
        return format_hex(self.encode())

    def __eq__(self, other) -> bool:
        if not isinstance(other, RFRAWLine):
            return NotImplemented
        return self.encode() == other.encode()

    def __repr__(self) -> str:
        name = "B0" if self.fmt == FORMAT_B0 else "B1"
        return (
            f"RFRAWLine({name}, widths={self.widths}, "
            f"pairs={len(self.pairs)}, repeats={self.repeats})"
        )
