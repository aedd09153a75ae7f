"""Dynamics compressor with side-chain and multi-channel support."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

_MAX_SAMPLE_RATE = 192000


def _log10(x: float) -> float:
    """Base-10 logarithm that yields -inf for non-positive input."""
    if x <= 0.0:
        return -math.inf
    return math.log10(x)


class Compressor:
    """Feed-forward compressor; the gain found for a key signal can be applied to others."""

    def __init__(self, sample_rate: float) -> None:
        self._sample_rate = int(min(_MAX_SAMPLE_RATE, max(1, sample_rate)))
        self._sample_rate_inv = 1.0 / self._sample_rate
        self._sample_rate_inv2 = 2.0 / self._sample_rate

        self._ratio = 2.0
        self._thresh = -12.0
        self._atk = 0.1
        self._rel = 0.1
        self._makeup_gain = 0.0
        self._makeup_auto = False
        self._atk_slo = 0.0
        self._atk_slo2 = 0.0
        self._rel_slo = 0.0
        self._ratio_mul = 0.0
        self._gain = 1.0

        # Order matters: attack coefficients must exist before the ratio is used.
        self.ratio = 2.0
        self.attack = 0.1
        self.release = 0.1
        self.threshold = -12.0
        self.auto_makeup = True

        self._gain_rec = 0.1
        self._slope_rec = 0.1

    @property
    def sample_rate(self) -> int:
        """Sample rate in use, limited to 1 .. 192000 Hz."""
        return self._sample_rate

    def _recalculate_ratio(self) -> None:
        self._ratio_mul = (1.0 - self._atk_slo2) * ((1.0 / self._ratio) - 1.0)

    def _recalculate_attack(self) -> None:
        self._atk_slo = math.exp(-(self._sample_rate_inv / self._atk))
        self._atk_slo2 = math.exp(-(self._sample_rate_inv2 / self._atk))
        self._recalculate_ratio()

    def _recalculate_release(self) -> None:
        self._rel_slo = math.exp(-(self._sample_rate_inv / self._rel))

    def _recalculate_makeup(self) -> None:
        if self._makeup_auto:
            self._makeup_gain = abs(self._thresh - self._thresh / self._ratio) * 0.5

    @property
    def ratio(self) -> float:
        """Amount of gain reduction, 1 to 40."""
        return self._ratio

    @ratio.setter
    def ratio(self, ratio: float) -> None:
        self._ratio = ratio
        self._recalculate_ratio()

    @property
    def threshold(self) -> float:
        """Level in dB above which compression is applied, 0 to -80."""
        return self._thresh

    @threshold.setter
    def threshold(self, threshold: float) -> None:
        self._thresh = threshold
        self._recalculate_makeup()

    @property
    def attack(self) -> float:
        """Envelope time in seconds for the onset of compression."""
        return self._atk

    @attack.setter
    def attack(self, attack: float) -> None:
        self._atk = attack
        self._recalculate_attack()

    @property
    def release(self) -> float:
        """Envelope time in seconds for the release of compression."""
        return self._rel

    @release.setter
    def release(self, release: float) -> None:
        self._rel = release
        self._recalculate_release()

    @property
    def makeup(self) -> float:
        """Additional gain in dB that makes up for the compression."""
        return self._makeup_gain

    @makeup.setter
    def makeup(self, gain: float) -> None:
        self._makeup_gain = gain

    @property
    def auto_makeup(self) -> bool:
        """Whether makeup gain follows the threshold and ratio."""
        return self._makeup_auto

    @auto_makeup.setter
    def auto_makeup(self, enable: bool) -> None:
        self._makeup_auto = bool(enable)
        self._makeup_gain = 0.0
        self._recalculate_makeup()

    @property
    def gain(self) -> float:
        """Most recently computed gain in dB."""
        return 20.0 * _log10(self._gain)

    def _detect(self, key: float) -> None:
        in_abs = abs(key)
        cur_slo = self._rel_slo if self._slope_rec > in_abs else self._atk_slo
        self._slope_rec = self._slope_rec * cur_slo + (1.0 - cur_slo) * in_abs
        over = max(20.0 * _log10(self._slope_rec) - self._thresh, 0.0)
        self._gain_rec = self._atk_slo2 * self._gain_rec + self._ratio_mul * over
        self._gain = 10.0 ** (0.05 * (self._gain_rec + self._makeup_gain))

    def process(self, value: float, key: float | None = None) -> float:
        """Compress one sample, keyed by ``key`` when given, else by the sample itself."""
        self._detect(value if key is None else key)
        return self.apply(value)

    def apply(self, value: float) -> float:
        """Apply the most recently computed gain to a sample."""
        return self._gain * value

    def process_block(
        self, samples: Iterable[float], key: Iterable[float] | None = None
    ) -> list[float]:
        """Compress a block, optionally keyed by a side-chain block of equal length."""
        samples = list(samples)
        keys = samples if key is None else list(key)
        out: list[float] = []
        for value, k in zip(samples, keys, strict=True):
            self._detect(k)
            out.append(self.apply(value))
        return out

    def process_channels(
        self, channels: Sequence[Sequence[float]], key: Iterable[float]
    ) -> list[list[float]]:
        """Compress several channels with one gain computed from ``key``."""
        keys = list(key)
        if not channels:
            for k in keys:
                self._detect(k)
            return []
        outs: list[list[float]] = [[] for _ in channels]
        for k, frame in zip(keys, zip(*channels), strict=True):
            self._detect(k)
            for out, value in zip(outs, frame):
                out.append(self.apply(value))
        return outs