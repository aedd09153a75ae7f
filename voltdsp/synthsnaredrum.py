"""Naive 909-style snare: two coupled oscillators plus filtered noise."""

from __future__ import annotations

import math
import random

from voltdsp.shaping import clamp
from voltdsp.svf import Svf

_ONE_TWELFTH = 1.0 / 12.0


def _distorted_sine(phase: float) -> float:
    triangle = (phase if phase < 0.5 else 1.0 - phase) * 4.0 - 1.3
    return 2.0 * triangle / (1.0 + abs(triangle))


class SyntheticSnareDrum:
    """Snare drum model with accent, fm sweep, decay and snappiness controls."""

    def __init__(self, sample_rate: float, rng: random.Random | None = None) -> None:
        self._sample_rate = sample_rate
        self._rng = rng if rng is not None else random.Random()

        self._phase = [0.0, 0.0]
        self._drum_amplitude = 0.0
        self._snare_amplitude = 0.0
        self._fm = 0.0
        self._hold_counter = 0
        self._sustain_gain = 0.0
        self._even = True
        self._trig = False

        self.sustain = False
        """When true the drum rings out indefinitely."""
        self._accent = 0.0
        self._f0 = 0.0
        self._fm_amount_raw = 0.0
        self._fm_amount = 0.0
        self._decay = 0.0
        self._snappy = 0.0
        self.accent = 0.6
        self.freq = 200.0
        self.fm_amount = 0.1
        self.decay = 0.3
        self.snappy = 0.7

        self._drum_lp = Svf(sample_rate)
        self._snare_hp = Svf(sample_rate)
        self._snare_lp = Svf(sample_rate)

    @property
    def accent(self) -> float:
        """Accent amount, 0 to 1."""
        return self._accent

    @accent.setter
    def accent(self, accent: float) -> None:
        self._accent = clamp(accent, 0.0, 1.0)

    @property
    def freq(self) -> float:
        """Root frequency in Hz, at most the sample rate."""
        return self._f0 * self._sample_rate

    @freq.setter
    def freq(self, freq: float) -> None:
        self._f0 = clamp(freq / self._sample_rate, 0.0, 1.0)

    @property
    def fm_amount(self) -> float:
        """Amount of pitch sweep, 0 to 1."""
        return self._fm_amount_raw

    @fm_amount.setter
    def fm_amount(self, amount: float) -> None:
        self._fm_amount_raw = clamp(amount, 0.0, 1.0)
        self._fm_amount = self._fm_amount_raw * self._fm_amount_raw

    @property
    def decay(self) -> float:
        """Decay length, any non-negative value."""
        return self._decay

    @decay.setter
    def decay(self, decay: float) -> None:
        self._decay = max(decay, 0.0)

    @property
    def snappy(self) -> float:
        """Mix between drum (0) and snare noise (1)."""
        return self._snappy

    @snappy.setter
    def snappy(self, snappy: float) -> None:
        self._snappy = clamp(snappy, 0.0, 1.0)

    def trig(self) -> None:
        """Strike the drum on the next sample."""
        self._trig = True

    def process(self, trigger: bool = False) -> float:
        """Return the next sample; a true ``trigger`` strikes the drum."""
        sr = self._sample_rate
        decay = self._decay
        f0 = self._f0
        decay_xt = decay * (1.0 + decay * (decay - 1.0))
        drum_decay = 1.0 - 1.0 / (0.015 * sr) * 2.0 ** (
            _ONE_TWELFTH
            * (-decay_xt * 72.0 - self._fm_amount * 12.0 + self._snappy * 7.0)
        )
        snare_decay = 1.0 - 1.0 / (0.01 * sr) * 2.0 ** (
            _ONE_TWELFTH * (-decay * 60.0 - self._snappy * 7.0)
        )
        fm_decay = 1.0 - 1.0 / (0.007 * sr)

        snappy = clamp(self._snappy * 1.1 - 0.05, 0.0, 1.0)
        drum_level = math.sqrt(1.0 - snappy)
        snare_level = math.sqrt(snappy)

        self._snare_hp.freq = min(10.0 * f0, 0.5) * sr
        self._snare_lp.freq = min(35.0 * f0, 0.5) * sr
        self._snare_lp.res = 0.5 + 2.0 * snappy
        self._drum_lp.freq = 3.0 * f0 * sr

        if trigger or self._trig:
            self._trig = False
            self._snare_amplitude = self._drum_amplitude = 0.3 + 0.7 * self._accent
            self._fm = 1.0
            self._phase = [0.0, 0.0]
            self._hold_counter = int((0.04 + decay * 0.03) * sr)

        self._even = not self._even
        if self.sustain:
            self._sustain_gain = self._snare_amplitude = self._accent * decay
            self._drum_amplitude = self._snare_amplitude
            self._fm = 0.0
        else:
            # The drum tail is long; the snare holds for 40-70 ms before decaying.
            if self._drum_amplitude > 0.03 or self._even:
                self._drum_amplitude *= drum_decay
            if self._hold_counter:
                self._hold_counter -= 1
            else:
                self._snare_amplitude *= snare_decay
            self._fm *= fm_decay

        # Oscillator coupling through the shared reset line.
        reset_amount = clamp((0.125 - f0) * 8.0, 0.0, 1.0)
        reset_amount *= reset_amount
        reset_amount *= self._fm_amount
        reset_noise = sum(-1.0 if p > 0.5 else 1.0 for p in self._phase)
        reset_noise *= reset_amount * 0.025

        f = f0 * (1.0 + self._fm_amount * (4.0 * self._fm))
        self._phase[0] += f
        self._phase[1] += f * 1.47
        if reset_amount > 0.1:
            self._phase = [
                1.0 - p if p >= 1.0 + reset_noise else p for p in self._phase
            ]
        else:
            self._phase = [p - 1.0 if p >= 1.0 else p for p in self._phase]

        drum = -0.1
        drum += _distorted_sine(self._phase[0]) * 0.60
        drum += _distorted_sine(self._phase[1]) * 0.25
        drum *= self._drum_amplitude * drum_level
        self._drum_lp.process(drum)
        drum = self._drum_lp.low

        self._snare_lp.process(self._rng.random())
        self._snare_hp.process(self._snare_lp.low)
        snare = self._snare_hp.high
        snare = (snare + 0.1) * (self._snare_amplitude + self._fm) * snare_level

        return snare + drum