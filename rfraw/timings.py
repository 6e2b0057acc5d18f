"""
Cursor over raw signed timings.

Raw captures often split one logical pulse or gap into several samples
of the same sign. The reader sums such runs so the caller sees a clean
alternating pulse/gap sequence.
"""

from typing import List, Sequence

import numpy as np


class RawTimingReader:
    """
    Iterate raw timings as coalesced pulses and gaps.

    Call begin() once, then next_gap() and next_pulse() in alternation.
    Both return 0 past the end of the data.
    """

    def __init__(self, timings: Sequence[int]):
        """
        Args:
            timings: Signed integer durations in microseconds (positive = pulse, negative = gap)

        Raises:
            ValueError: If the durations are not integers
        """
        data = np.asarray(timings)
        if data.size and not np.issubdtype(data.dtype, np.integer):
            raise ValueError(f"timings must be integers, got {data.dtype}")
        self.data: List[int] = data.astype(np.int64).ravel().tolist()
        self.pos = 0
        self.last_gap = False

    def begin(self) -> int:
        """Rewind and return the first pulse (0 if the data starts with a gap)."""
        self.pos = 0
        self.last_gap = False
        return self.next_pulse()

    def next_pulse(self) -> int:
        total = 0
        while self.pos < len(self.data) and self.data[self.pos] >= 0:
            total += self.data[self.pos]
            self.pos += 1
        return total

    def next_gap(self) -> int:
        """
        Return the magnitude of the next gap run.

        Sets last_gap when the run extends to the end of the data; that
        trailing gap is usually the receiver timeout, not signal timing.
        """
        total = 0
        while self.pos < len(self.data) and self.data[self.pos] <= 0:
            if self.pos == len(self.data) - 1:
                self.last_gap = True
            total -= self.data[self.pos]
            self.pos += 1
        return total

    def remaining(self) -> int:
        """Number of raw samples not yet consumed."""
        return len(self.data) - self.pos

    def __len__(self) -> int:
        return len(self.data)


def coalesce(timings: Sequence[int]) -> List[int]:
    """
    Collapse same-sign runs into an alternating pulse/gap list.

    Example:
        coalesce([300, 200, -100, -900, 500]) -> [500, -1000, 500]
    """
    reader = RawTimingReader(timings)
    result = []

    pulse = reader.begin()
    while pulse > 0:
        result.append(pulse)
        gap = reader.next_gap()
        if gap <= 0:
            break
        result.append(-gap)
        pulse = reader.next_pulse()

    return result
