"""Waveshaping helpers, an overdrive and a simple peak limiter."""

from __future__ import annotations

from collections.abc import Iterable


def clamp(value: float, low: float, high: float) -> float:
    """Limit ``value`` to the closed interval ``[low, high]``."""
    return min(max(value, low), high)


def one_pole(current: float, target: float, coeff: float) -> float:
    """Move ``current`` towards ``target`` by ``coeff`` and return the new value."""
    return current + coeff * (target - current)


def soft_limit(x: float) -> float:
    """Rational approximation of tanh, accurate for |x| <= 3."""
    return x * (27.0 + x * x) / (27.0 + 9.0 * x * x)


def soft_clip(x: float) -> float:
    """Soft saturation that reaches exactly +/-1 beyond |x| = 3."""
    if x < -3.0:
        return -1.0
    if x > 3.0:
        return 1.0
    return soft_limit(x)


class Overdrive:
    """Distortion with drive-dependent pre gain and compensating post gain."""

    def __init__(self, drive: float = 0.5) -> None:
        self._drive = 0.0
        self._pre_gain = 0.0
        self._post_gain = 1.0
        self.drive = drive

    @property
    def drive(self) -> float:
        """Amount of drive, 0 to 1."""
        return self._drive / 2.0

    @drive.setter
    def drive(self, drive: float) -> None:
        d = 2.0 * clamp(drive, 0.0, 1.0)
        self._drive = d
        d2 = d * d
        pre_gain_a = d * 0.5
        pre_gain_b = d2 * d2 * d * 24.0
        self._pre_gain = pre_gain_a + (pre_gain_b - pre_gain_a) * d2
        squashed = d * (2.0 - d)
        self._post_gain = 1.0 / soft_clip(0.33 + squashed * (self._pre_gain - 0.33))

    def process(self, value: float) -> float:
        """Return the overdriven sample."""
        return soft_clip(self._pre_gain * value) * self._post_gain


class Limiter:
    """Peak follower driving a gain stage into a soft limiter."""

    def __init__(self) -> None:
        self._peak = 0.5

    def process_block(self, samples: Iterable[float], pre_gain: float) -> list[float]:
        """Limit a block of samples and return the processed block."""
        out: list[float] = []
        for sample in samples:
            pre = sample * pre_gain
            error = abs(pre) - self._peak
            self._peak += (0.05 if error > 0 else 0.00002) * error
            gain = 1.0 if self._peak <= 1.0 else 1.0 / self._peak
            out.append(soft_limit(pre * gain * 0.7))
        return out