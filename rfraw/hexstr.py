"""
Hex string building and lenient hex scanning.
"""

import struct

# Skipped between hex digits
SEPARATORS = " \t-:"


def format_hex(data: bytes) -> str:
    """Format bytes as an uppercase hex string without separators."""
    return data.hex().upper()


class HexBuilder:
    """Byte accumulator for one RFRAW line."""

    def __init__(self):
        self._data = bytearray()

    def push_byte(self, value: int):
        if not 0 <= value <= 0xFF:
            raise ValueError(f"byte out of range: {value}")
        self._data.append(value)

    def push_word(self, value: int):
        """Append a big-endian 16-bit word."""
        if not 0 <= value <= 0xFFFF:
            raise ValueError(f"word out of range: {value}")
        self._data += struct.pack(">H", value)

    def set_byte(self, index: int, value: int):
        self._data[index] = value

    def to_bytes(self) -> bytes:
        return bytes(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __str__(self) -> str:
        return format_hex(self._data)


class HexReader:
    """
    Cursor over hex text.

    Whitespace and '-'/':' separators are skipped before every digit.
    All reads return -1 on end of text or a non-hex character; a failed
    read never moves the cursor past the offending character, so loops
    that stop on -1 always terminate.
    """

    def __init__(self, text: str, pos: int = 0):
        self.text = text
        self.pos = pos

    def _skip_separators(self):
        while self.pos < len(self.text) and self.text[self.pos] in SEPARATORS:
            self.pos += 1

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def remaining(self) -> str:
        return self.text[self.pos:]

    def get_nibble(self) -> int:
        """Read one hex digit (case-insensitive)."""
        self._skip_separators()
        if self.at_end():
            return -1

        c = self.text[self.pos]
        if "0" <= c <= "9":
            value = ord(c) - ord("0")
        elif "A" <= c <= "F":
            value = ord(c) - ord("A") + 10
        elif "a" <= c <= "f":
            value = ord(c) - ord("a") + 10
        else:
            return -1

        self.pos += 1
        return value

    def get_byte(self) -> int:
        high = self.get_nibble()
        low = self.get_nibble()
        if high >= 0 and low >= 0:
            return (high << 4) | low
        return -1

    def get_word(self) -> int:
        """Read a big-endian 16-bit word."""
        high = self.get_byte()
        low = self.get_byte()
        if high >= 0 and low >= 0:
            return (high << 8) | low
        return -1

    def peek_byte(self) -> int:
        """Read the next byte without consuming it."""
        return HexReader(self.text, self.pos).get_byte()

    def __repr__(self) -> str:
        return f"HexReader(pos={self.pos}, remaining={self.remaining()!r})"
