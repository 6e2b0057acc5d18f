"""
RFRAW Encoder - Quantizes raw pulse/gap timings into RFRAW hex lines.
"""

import logging
from typing import Iterator, List, Optional, Sequence, Tuple

from . import (
    FORMAT_B0,
    FORMAT_B1,
    HEXSTR_MAX_COUNT,
    LIMIT_BIN_INDEX,
    LINE_SEPARATOR,
    MAX_GAP_BINS_B1,
    MAX_LINE_BINS,
    MAX_REPEATS,
    MAX_WIDTH,
    TOLERANCE,
)
from .histogram import Histogram
from .line import RFRAWLine
from .timings import RawTimingReader

# Module-level logger
_logger = logging.getLogger(__name__)


class RFRAWEncoder:
    """
    Encoder from raw signed timings to RFRAW text.

    Signals with at most two distinct gap widths become a single B1 line.
    Anything richer is split into B0 lines at long gaps, with identical
    consecutive lines folded into a repeat count.
    """

    def __init__(
        self,
        tolerance: float = TOLERANCE,
        max_groups: int = HEXSTR_MAX_COUNT,
        limit_bin_index: int = LIMIT_BIN_INDEX,
    ):
        """
        Initialize encoder.

        Args:
            tolerance: Relative width tolerance for histogram bins
            max_groups: Maximum number of B0 lines per signal
            limit_bin_index: Gap bin whose minimum width splits B0 lines
        """
        if not 0.0 < tolerance < 1.0:
            raise ValueError("tolerance must be between 0 and 1")
        if max_groups < 1:
            raise ValueError("max_groups must be positive")
        if limit_bin_index < 0:
            raise ValueError("limit_bin_index must not be negative")

        self.tolerance = tolerance
        self.max_groups = max_groups
        self.limit_bin_index = limit_bin_index

        # Raw samples left unencoded by the last encode() call
        self.dropped_samples = 0

    def _build_histograms(self, reader: RawTimingReader) -> Tuple[Histogram, Histogram]:
        """
        Collect width statistics in one pass.

        Returns:
            (timing histogram over pulses and gaps, gap histogram), both
            fused and sorted by mean. The trailing gap is left out of both.
        """
        timings = Histogram(self.tolerance)
        gaps = Histogram(self.tolerance)

        pulse = reader.begin()
        while pulse > 0:
            timings.add(pulse)
            gap = reader.next_gap()
            if gap > 0 and not reader.last_gap:
                gaps.add(gap)
                timings.add(gap)
            pulse = reader.next_pulse()

        for hist in (timings, gaps):
            hist.fuse()
            hist.sort_by_mean()

        return timings, gaps

    @staticmethod
    def _bin_index(hist: Histogram, width: int) -> int:
        index = hist.find_bin_index(width)
        if index < 0:
            # Every width was added to this histogram, so some bin covers it
            raise RuntimeError(f"width {width} outside all histogram bins: {hist}")
        return index

    def _pairs(self, reader: RawTimingReader, hist: Histogram) -> Iterator[Tuple[int, int]]:
        """Yield (pulse_index, gap_index) up to the trailing gap."""
        pulse = reader.begin()
        while pulse > 0:
            gap = reader.next_gap()
            if gap <= 0 or reader.last_gap:
                return
            yield self._bin_index(hist, pulse), self._bin_index(hist, gap)
            pulse = reader.next_pulse()

    def _encode_b1(self, reader: RawTimingReader, timings: Histogram) -> RFRAWLine:
        return RFRAWLine(FORMAT_B1, timings.means(), list(self._pairs(reader, timings)))

    def _encode_b0(
        self,
        reader: RawTimingReader,
        timings: Histogram,
        gaps: Histogram,
    ) -> List[RFRAWLine]:
        """
        Group the signal into B0 lines.

        A line ends after any gap at least as long as the split limit: the
        minimum width of the 4th shortest gap bin (or the longest, if fewer).
        """
        limit = gaps[min(self.limit_bin_index, len(gaps) - 1)].min
        widths = timings.means()
        _logger.debug(f"B0 split limit: {limit}us over gap bins {gaps.means()}")

        lines: List[RFRAWLine] = []
        start = 0
        pulse = reader.begin()

        while pulse > 0 and len(lines) < self.max_groups:
            pairs = []
            while pulse > 0:
                gap = reader.next_gap()
                if gap <= 0 or reader.last_gap:
                    pulse = 0
                    break
                pairs.append((self._bin_index(timings, pulse), self._bin_index(timings, gap)))
                start = reader.pos
                pulse = reader.next_pulse()
                if gap >= limit:
                    break

            if pairs:
                self._append_line(lines, RFRAWLine(FORMAT_B0, widths, pairs))

        if pulse > 0:
            self.dropped_samples = len(reader) - start
            _logger.warning(
                f"Too many pulse groups ({self.dropped_samples} raw samples missed in rfraw)"
            )

        return lines

    @staticmethod
    def _append_line(lines: List[RFRAWLine], line: RFRAWLine):
        """Append a line, or bump the repeat count of an identical predecessor."""
        if lines and lines[-1].repeats < MAX_REPEATS and lines[-1].body() == line.body():
            lines[-1].repeats += 1
        else:
            lines.append(line)

    def encode_lines(self, timings: Sequence[int]) -> Optional[List[RFRAWLine]]:
        """
        Encode raw timings to RFRAW lines.

        Args:
            timings: Signed durations in microseconds (positive = pulse, negative = gap)

        Returns:
            List of lines, or None if there is nothing to encode or the
            signal has too many distinct widths

        Raises:
            ValueError: If the timings are not integers
        """
        self.dropped_samples = 0
        reader = RawTimingReader(timings)

        if len(reader) == 0:
            return None

        hist_timings, hist_gaps = self._build_histograms(reader)

        if not len(hist_timings):
            return None

        if hist_timings.dropped or len(hist_timings) > MAX_LINE_BINS:
            _logger.debug(
                f"Signal too complex: {len(hist_timings)} timing bins "
                f"({hist_timings.dropped} widths dropped)"
            )
            return None

        if any(width > MAX_WIDTH for width in hist_timings.means()):
            _logger.debug(f"Clamping widths to {MAX_WIDTH}us: {hist_timings.means()}")

        if len(hist_gaps) <= MAX_GAP_BINS_B1:
            return [self._encode_b1(reader, hist_timings)]

        return self._encode_b0(reader, hist_timings, hist_gaps)

    def encode(self, timings: Sequence[int]) -> Optional[str]:
        """
        Encode raw timings to RFRAW text.

        Returns:
            Hex string (B0 lines joined with '+'), or None
        """
        lines = self.encode_lines(timings)
        if lines is None:
            return None
        return LINE_SEPARATOR.join(line.to_hex() for line in lines)


def encode_rfraw(timings: Sequence[int], **kwargs) -> Optional[str]:
    """
    Encode raw timings to RFRAW text.

    Args:
        timings: Signed durations in microseconds
        **kwargs: RFRAWEncoder options

    Returns:
        RFRAW string, or None
    """
    return RFRAWEncoder(**kwargs).encode(timings)
