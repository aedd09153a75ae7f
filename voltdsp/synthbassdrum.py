"""Naive 909-ish bass drum: a modulated oscillator with FM and envelopes."""

from __future__ import annotations

import math
import random

from voltdsp.shaping import clamp, one_pole
from voltdsp.svf import Svf

_ONE_TWELFTH = 1.0 / 12.0


def _distorted_sine(phase: float, phase_noise: float, dirtiness: float) -> float:
    phase += phase_noise * dirtiness
    phase -= int(phase)
    triangle = (phase if phase < 0.5 else 1.0 - phase) * 4.0 - 1.0
    sine = 2.0 * triangle / (1.0 + abs(triangle))
    clean_sine = math.sin(2.0 * math.pi * (phase + 0.75))
    return sine + (1.0 - dirtiness) * (clean_sine - sine)


def _transistor_vca(sample: float, gain: float) -> float:
    sample = (sample - 0.6) * gain
    return 3.0 * sample / (2.0 + abs(sample)) + gain * 0.3


class SyntheticBassDrumClick:
    """Filtered click used for the bass drum's transient."""

    def __init__(self, sample_rate: float) -> None:
        self._lp = 0.0
        self._hp = 0.0
        self._filter = Svf(sample_rate)
        self._filter.freq = 5000.0
        self._filter.res = 1.0

    def process(self, value: float) -> float:
        """Return the next click sample for the trigger level ``value``."""
        error = value - self._lp
        self._lp += (0.5 if error > 0 else 0.1) * error
        self._hp = one_pole(self._hp, self._lp, 0.04)
        self._filter.process(self._lp - self._hp)
        return self._filter.low


class SyntheticBassDrumAttackNoise:
    """Band-limited noise used for the bass drum's attack."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._lp = 0.0
        self._hp = 0.0

    def process(self) -> float:
        """Return the next noise sample."""
        self._lp = one_pole(self._lp, self._rng.random(), 0.05)
        self._hp = one_pole(self._hp, self._lp, 0.005)
        return self._lp - self._hp


class SyntheticBassDrum:
    """Bass drum with accent, tone, decay, dirtiness and FM sweep controls."""

    def __init__(self, sample_rate: float, rng: random.Random | None = None) -> None:
        self._sample_rate = sample_rate
        self._rng = rng if rng is not None else random.Random()

        self._trig = False
        self._phase = 0.0
        self._phase_noise = 0.0
        self._f0 = 0.0
        self._fm = 0.0
        self._fm_lp = 0.0
        self._body_env = 0.0
        self._body_env_lp = 0.0
        self._transient_env = 0.0
        self._transient_env_lp = 0.0
        self._body_env_pulse_width = 0
        self._fm_pulse_width = 0
        self._tone_lp = 0.0
        self._sustain_gain = 0.0

        self._new_f0 = 0.0
        self._accent = 0.0
        self._tone = 0.0
        self._decay_raw = 0.0
        self._decay = 0.0
        self._dirtiness = 0.0
        self._fm_envelope_amount = 0.0
        self._fm_envelope_decay_raw = 0.0
        self._fm_envelope_decay = 0.0

        self.freq = 100.0
        self.sustain = False
        """When true the drum plays continuously."""
        self.accent = 0.2
        self.tone = 0.6
        self.decay = 0.7
        self.dirtiness = 0.3
        self.fm_envelope_amount = 0.6
        self.fm_envelope_decay = 0.3

        self._click = SyntheticBassDrumClick(sample_rate)
        self._noise = SyntheticBassDrumAttackNoise(self._rng)

    @property
    def freq(self) -> float:
        """Root frequency in Hz, at most the sample rate."""
        return self._new_f0 * self._sample_rate

    @freq.setter
    def freq(self, freq: float) -> None:
        self._new_f0 = clamp(freq / self._sample_rate, 0.0, 1.0)

    @property
    def accent(self) -> float:
        """Accent amount, 0 to 1."""
        return self._accent

    @accent.setter
    def accent(self, accent: float) -> None:
        self._accent = clamp(accent, 0.0, 1.0)

    @property
    def tone(self) -> float:
        """Brightness, 0 to 1."""
        return self._tone

    @tone.setter
    def tone(self, tone: float) -> None:
        self._tone = clamp(tone, 0.0, 1.0)

    @property
    def decay(self) -> float:
        """Decay length, 0 to 1."""
        return self._decay_raw

    @decay.setter
    def decay(self, decay: float) -> None:
        self._decay_raw = clamp(decay, 0.0, 1.0)
        self._decay = self._decay_raw * self._decay_raw

    @property
    def dirtiness(self) -> float:
        """Amount of grit, 0 to 1."""
        return self._dirtiness

    @dirtiness.setter
    def dirtiness(self, dirtiness: float) -> None:
        self._dirtiness = clamp(dirtiness, 0.0, 1.0)

    @property
    def fm_envelope_amount(self) -> float:
        """Depth of the pitch sweep on a hit, 0 to 1."""
        return self._fm_envelope_amount

    @fm_envelope_amount.setter
    def fm_envelope_amount(self, amount: float) -> None:
        self._fm_envelope_amount = clamp(amount, 0.0, 1.0)

    @property
    def fm_envelope_decay(self) -> float:
        """Length of the pitch sweep, 0 to 1."""
        return self._fm_envelope_decay_raw

    @fm_envelope_decay.setter
    def fm_envelope_decay(self, decay: float) -> None:
        self._fm_envelope_decay_raw = clamp(decay, 0.0, 1.0)
        self._fm_envelope_decay = self._fm_envelope_decay_raw**2

    def trig(self) -> None:
        """Strike the drum on the next sample."""
        self._trig = True

    def process(self, trigger: bool = False) -> float:
        """Return the next sample; a true ``trigger`` strikes the drum."""
        sr = self._sample_rate
        dirtiness = self._dirtiness * max(1.0 - 8.0 * self._new_f0, 0.0)

        fm_decay = 1.0 - 1.0 / (0.008 * (1.0 + self._fm_envelope_decay * 4.0) * sr)
        body_env_decay = 1.0 - 1.0 / (0.02 * sr) * 2.0 ** (
            (-self._decay * 60.0) * _ONE_TWELFTH
        )
        transient_env_decay = 1.0 - 1.0 / (0.005 * sr)
        tone_f = min(
            4.0 * self._new_f0 * 2.0 ** ((self._tone * 108.0) * _ONE_TWELFTH), 1.0
        )
        transient_level = self._tone

        if trigger or self._trig:
            self._trig = False
            self._fm = 1.0
            self._body_env = self._transient_env = 0.3 + 0.7 * self._accent
            self._body_env_pulse_width = int(sr * 0.001)
            self._fm_pulse_width = int(sr * 0.0013)

        self._sustain_gain = self._accent * self._decay
        self._phase_noise = one_pole(self._phase_noise, self._rng.random() - 0.5, 0.002)

        mix = 0.0
        if self.sustain:
            self._f0 = self._new_f0
            self._phase += self._f0
            if self._phase >= 1.0:
                self._phase -= 1.0
            body = _distorted_sine(self._phase, self._phase_noise, dirtiness)
            mix -= _transistor_vca(body, self._sustain_gain)
        else:
            if self._fm_pulse_width:
                self._fm_pulse_width -= 1
                self._phase = 0.25
            else:
                self._fm *= fm_decay
                fm = 1.0 + self._fm_envelope_amount * 3.5 * self._fm_lp
                self._f0 = self._new_f0
                self._phase += min(self._f0 * fm, 0.5)
                if self._phase >= 1.0:
                    self._phase -= 1.0

            if self._body_env_pulse_width:
                self._body_env_pulse_width -= 1
            else:
                self._body_env *= body_env_decay
                self._transient_env *= transient_env_decay

            envelope_lp_f = 0.1
            self._body_env_lp = one_pole(self._body_env_lp, self._body_env, envelope_lp_f)
            self._transient_env_lp = one_pole(
                self._transient_env_lp, self._transient_env, envelope_lp_f
            )
            self._fm_lp = one_pole(self._fm_lp, self._fm, envelope_lp_f)

            body = _distorted_sine(self._phase, self._phase_noise, dirtiness)
            transient = self._click.process(
                0.0 if self._body_env_pulse_width else 1.0
            ) + self._noise.process()

            mix -= _transistor_vca(body, self._body_env_lp)
            mix -= transient * self._transient_env_lp * transient_level

        self._tone_lp = one_pole(self._tone_lp, mix, tone_f)
        return self._tone_lp