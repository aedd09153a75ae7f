"""Feedback comb filter."""

from __future__ import annotations

import math

_LOG001 = -6.9078  # log(0.001)


class Comb:
    """Comb filter over an internal delay buffer of ``size`` samples."""

    def __init__(self, sample_rate: float, size: int) -> None:
        max_loop_time = size / sample_rate - 0.01
        if size < 1 or max_loop_time <= 0.0:
            raise ValueError("buffer is too short for a comb filter")
        self._sample_rate = sample_rate
        self.rev_time = 3.5
        """Decay time in seconds (time to fall by 60 dB)."""
        self._max_size = size
        self._max_loop_time = max_loop_time
        self._loop_time = max_loop_time
        self._mod = int(sample_rate * max_loop_time)
        self._buf = [0.0] * size
        self._prvt = 0.0
        self._coef = 0.0
        self._buf_pos = 0

    @property
    def max_loop_time(self) -> float:
        """Longest period the buffer can hold, in seconds."""
        return self._max_loop_time

    @property
    def loop_time(self) -> float:
        """Current period in seconds."""
        return self._loop_time

    @property
    def delay_samples(self) -> int:
        """Current period in samples."""
        return self._mod

    def set_period(self, looptime: float) -> None:
        """Set the period in seconds; non-positive values are ignored."""
        if looptime > 0:
            self._loop_time = min(looptime, self._max_loop_time)
            self._mod = int(self._loop_time * self._sample_rate)
            if self._mod > self._max_size:
                self._mod = self._max_size - 1

    def set_freq(self, freq: float) -> None:
        """Set the frequency in Hz; non-positive values are ignored."""
        if freq > 0:
            self.set_period(1.0 / freq)

    def process(self, value: float) -> float:
        if self._prvt != self.rev_time:
            self._prvt = self.rev_time
            exp_arg = _LOG001 * self._loop_time / self._prvt
            self._coef = 0.0 if exp_arg < -36.8413615 else math.exp(exp_arg)

        size = self._max_size
        outsamp = self._buf[(self._buf_pos + self._mod) % size]
        self._buf[self._buf_pos] = outsamp * self._coef + value
        self._buf_pos = (self._buf_pos - 1 + size) % size
        return outsamp