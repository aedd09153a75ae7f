"""Double-sampled, stable state variable filter."""

from __future__ import annotations

import math

from voltdsp.shaping import clamp


class Svf:
    """State variable filter with low, high, band, notch and peak outputs."""

    def __init__(self, sample_rate: float) -> None:
        self._sr = sample_rate
        self._fc = 200.0
        self._res = 0.5
        self._drive = 0.5
        self._pre_drive = 0.5
        self._freq = 0.25
        self._damp = 0.0
        self._notch = 0.0
        self._low = 0.0
        self._high = 0.0
        self._band = 0.0
        self._out_low = 0.0
        self._out_high = 0.0
        self._out_band = 0.0
        self._out_peak = 0.0
        self._out_notch = 0.0
        self._fc_max = sample_rate / 3.0

    def _update_damp(self) -> None:
        self._damp = min(
            2.0 * (1.0 - self._res**0.25),
            min(2.0, 2.0 / self._freq - self._freq * 0.5),
        )

    @property
    def freq(self) -> float:
        """Cutoff frequency in Hz, limited to sample_rate / 3."""
        return self._fc

    @freq.setter
    def freq(self, f: float) -> None:
        self._fc = clamp(f, 1.0e-6, self._fc_max)
        # The filter runs twice per sample, hence the doubled rate.
        self._freq = 2.0 * math.sin(math.pi * min(0.25, self._fc / (self._sr * 2.0)))
        self._update_damp()

    @property
    def res(self) -> float:
        """Resonance, 0 to 1."""
        return self._res

    @res.setter
    def res(self, r: float) -> None:
        self._res = clamp(r, 0.0, 1.0)
        self._update_damp()
        self._drive = self._pre_drive * self._res

    @property
    def drive(self) -> float:
        """Drive applied to the resonance, 0 to 10."""
        return self._pre_drive * 10.0

    @drive.setter
    def drive(self, d: float) -> None:
        self._pre_drive = clamp(d * 0.1, 0.0, 1.0)
        self._drive = self._pre_drive * self._res

    @property
    def low(self) -> float:
        return self._out_low

    @property
    def high(self) -> float:
        return self._out_high

    @property
    def band(self) -> float:
        return self._out_band

    @property
    def notch(self) -> float:
        return self._out_notch

    @property
    def peak(self) -> float:
        return self._out_peak

    def _step(self, value: float) -> None:
        self._notch = value - self._damp * self._band
        self._low = self._low + self._freq * self._band
        self._high = self._notch - self._low
        self._band = (
            self._freq * self._high
            + self._band
            - self._drive * self._band * self._band * self._band
        )

    def process(self, value: float) -> None:
        """Filter one sample, updating every output."""
        self._step(value)
        self._out_low = 0.5 * self._low
        self._out_high = 0.5 * self._high
        self._out_band = 0.5 * self._band
        self._out_peak = 0.5 * (self._low - self._high)
        self._out_notch = 0.5 * self._notch
        self._step(value)
        self._out_low += 0.5 * self._low
        self._out_high += 0.5 * self._high
        self._out_band += 0.5 * self._band
        self._out_peak += 0.5 * (self._low - self._high)
        self._out_notch += 0.5 * self._notch