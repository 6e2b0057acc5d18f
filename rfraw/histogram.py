"""
Adaptive histogram of pulse/gap widths.

Widths are clustered first-fit: a sample joins the first bin (in
insertion order) whose mean is within a relative tolerance of it.
"""

import logging
from typing import Iterator, List, Optional

from . import MAX_HIST_BINS, TOLERANCE

# Module-level logger
_logger = logging.getLogger(__name__)


def within_tolerance(a: int, b: int, tolerance: float) -> bool:
    """Relative match rule shared by add and fuse."""
    return abs(a - b) < tolerance * max(a, b)


class HistogramBin:
    """
    Running statistics of one width cluster.

    mean is always sum // count, and min <= mean <= max.
    """

    __slots__ = ("count", "sum", "mean", "min", "max")

    def __init__(self, value: int):
        self.count = 1
        self.sum = value
        self.mean = value
        self.min = value
        self.max = value

    def add(self, value: int):
        self.count += 1
        self.sum += value
        self.mean = self.sum // self.count
        self.min = min(self.min, value)
        self.max = max(self.max, value)

    def merge(self, other: "HistogramBin"):
        """Fold another bin into this one."""
        self.count += other.count
        self.sum += other.sum
        self.mean = self.sum // self.count
        self.min = min(self.min, other.min)
        self.max = max(self.max, other.max)

    def matches(self, value: int, tolerance: float) -> bool:
        return within_tolerance(value, self.mean, tolerance)

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max

    def __eq__(self, other) -> bool:
        if not isinstance(other, HistogramBin):
            return NotImplemented
        return (
            self.count == other.count
            and self.sum == other.sum
            and self.min == other.min
            and self.max == other.max
        )

    def __repr__(self) -> str:
        return (
            f"HistogramBin(count={self.count}, mean={self.mean}, "
            f"min={self.min}, max={self.max})"
        )


class Histogram:
    """
    Bounded collection of width bins.

    Bins stay in insertion order until sort_by_mean() is called. Once
    max_bins bins exist, unmatched samples are dropped.
    """

    def __init__(self, tolerance: float = TOLERANCE, max_bins: int = MAX_HIST_BINS):
        """
        Initialize histogram.

        Args:
            tolerance: Relative width difference below which samples share a bin
            max_bins: Maximum number of bins (default 16)
        """
        if not 0.0 < tolerance < 1.0:
            raise ValueError("tolerance must be between 0 and 1")
        if max_bins < 1:
            raise ValueError("max_bins must be positive")

        self.tolerance = tolerance
        self.max_bins = max_bins
        self.bins: List[HistogramBin] = []
        self.dropped = 0

    def add(self, value: int):
        """Add a width sample to the first matching bin, or a new bin."""
        for bin_ in self.bins:
            if bin_.matches(value, self.tolerance):
                bin_.add(value)
                return

        if len(self.bins) < self.max_bins:
            self.bins.append(HistogramBin(value))
        else:
            self.dropped += 1
            _logger.debug(f"Histogram full ({self.max_bins} bins), dropping width {value}")

    def fuse(self, tolerance: Optional[float] = None):
        """
        Merge bins whose means are within tolerance of each other.

        Repeats until no pair matches, so a second call is a no-op.
        """
        if tolerance is None:
            tolerance = self.tolerance

        fused = True
        while fused:
            fused = False
            n = 0
            while n < len(self.bins):
                m = n + 1
                while m < len(self.bins):
                    if within_tolerance(self.bins[n].mean, self.bins[m].mean, tolerance):
                        self.bins[n].merge(self.bins.pop(m))
                        fused = True
                    else:
                        m += 1
                n += 1

    def sort_by_mean(self):
        """Stable ascending sort by bin mean."""
        self.bins.sort(key=lambda bin_: bin_.mean)

    def find_bin_index(self, value: int) -> int:
        """
        Find the first bin whose [min, max] range contains value.

        Returns:
            Bin index, or -1 if no bin contains it
        """
        for index, bin_ in enumerate(self.bins):
            if bin_.contains(value):
                return index
        return -1

    def means(self) -> List[int]:
        return [bin_.mean for bin_ in self.bins]

    def __len__(self) -> int:
        return len(self.bins)

    def __iter__(self) -> Iterator[HistogramBin]:
        return iter(self.bins)

    def __getitem__(self, index: int) -> HistogramBin:
        return self.bins[index]

    def __repr__(self) -> str:
        return f"Histogram(tolerance={self.tolerance}, bins={self.bins})"
