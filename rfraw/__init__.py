"""
RFRAW - Compact hex representation of raw RF pulse/gap timings.
Adaptive histogram quantization with B0/B1 line formats.
"""

__version__ = "0.1.0"

# Quantization
MAX_HIST_BINS = 16  # bins per histogram
MAX_LINE_BINS = 8  # bins addressable by the 3 low bits of a nibble
MAX_GAP_BINS_B1 = 2  # more distinct gaps than this -> B0 grouping
TOLERANCE = 0.2  # 20% still discerns pulse widths of 0.33, 0.66, 1.0
LIMIT_BIN_INDEX = 3  # gap bin whose min splits B0 lines (4th shortest)

# Line structure
HEADER = 0xAA
FORMAT_B0 = 0xB0
FORMAT_B1 = 0xB1
TERMINATOR = 0x55
PULSE_FLAG = 0x80  # set on every pulse nibble of a pair byte
TAG_MASK = 0x88  # any of these bits -> current nibble format
MAX_WIDTH = 0xFFFF  # widths are 16-bit words
MAX_LENGTH = 0xFF
MAX_REPEATS = 0xFF

HEXSTR_MAX_COUNT = 32  # B0 lines per signal
LINE_SEPARATOR = "+"
DUMP_CHUNK = 230  # characters per log line

from .hexstr import HexBuilder, HexReader, format_hex
from .histogram import Histogram, HistogramBin
from .timings import RawTimingReader, coalesce
from .line import RFRAWLine
from .encoder import RFRAWEncoder, encode_rfraw
from .decoder import (
    DecodedLine,
    NibbleFormat,
    Phase,
    RFRAWDecoder,
    decode_rfraw,
    dump_rfraw,
)

__all__ = [
    "HexBuilder",
    "HexReader",
    "format_hex",
    "Histogram",
    "HistogramBin",
    "RawTimingReader",
    "coalesce",
    "RFRAWLine",
    "RFRAWEncoder",
    "encode_rfraw",
    "DecodedLine",
    "NibbleFormat",
    "Phase",
    "RFRAWDecoder",
    "decode_rfraw",
    "dump_rfraw",
]
