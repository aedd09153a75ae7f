"""Basic wavefolder."""

from __future__ import annotations

import math


class Wavefolder:
    """Folds input back into [-1, 1]; larger amplitudes fold more often."""

    def __init__(self, gain: float = 1.0, offset: float = 0.0) -> None:
        self.gain = gain
        """Input gain; negative values give thru-zero folding."""
        self.offset = offset
        """Offset added before the gain, for asymmetric folding."""

    def process(self, value: float) -> float:
        """Return the folded sample."""
        value = (value + self.offset) * self.gain
        ft = math.floor((value + 1.0) * 0.5)
        sign = 1.0 if int(ft) % 2 == 0 else -1.0
        return sign * (value - 2.0 * ft)