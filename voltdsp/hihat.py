"""808-style hi-hat built from square-wave metallic noise."""

from __future__ import annotations

import random
from collections.abc import Callable
from typing import Protocol

from voltdsp.shaping import clamp
from voltdsp.svf import Svf

_ONE_TWELFTH = 1.0 / 12.0
_PHASE_MODULUS = 1 << 32
# Frequency ratios of the six oscillators, for a nominal f0 of 414 Hz.
_RATIOS = (1.0, 1.304, 1.466, 1.787, 1.932, 2.536)


class NoiseSource(Protocol):
    """Anything that turns a normalised frequency into a noise sample."""

    def process(self, f0: float) -> float: ...


def _semitones_to_ratio(semitones: float) -> float:
    return 2.0 ** (semitones * _ONE_TWELFTH)


class SquareNoise:
    """Metallic noise from six detuned square oscillators summed together."""

    def __init__(self) -> None:
        self._phases = [0] * len(_RATIOS)

    def process(self, f0: float) -> float:
        """Return the next sample; ``f0`` is the frequency divided by the sample rate."""
        noise = 0
        for i, ratio in enumerate(_RATIOS):
            f = min(f0 * ratio, 0.499)
            increment = int(f * 4294967296.0) % _PHASE_MODULUS
            phase = (self._phases[i] + increment) % _PHASE_MODULUS
            self._phases[i] = phase
            noise += phase >> 31
        return 0.33 * noise - 1.0


def swing_vca(sample: float, gain: float) -> float:
    """Asymmetric, saturating VCA."""
    sample *= 10.0 if sample > 0.0 else 0.1
    sample = sample / (1.0 + abs(sample))
    return (sample + 1.0) * gain


def linear_vca(sample: float, gain: float) -> float:
    """Plain multiplying VCA."""
    return sample * gain


class HiHat:
    """808 hi-hat with extra controls that reach into cymbal territory."""

    def __init__(
        self,
        sample_rate: float,
        noise_source: NoiseSource | None = None,
        vca: Callable[[float, float], float] = linear_vca,
        resonance: bool = True,
        rng: random.Random | None = None,
    ) -> None:
        self._sample_rate = sample_rate
        self._metallic_noise = noise_source if noise_source is not None else SquareNoise()
        self._vca = vca
        self._resonance = resonance
        self._rng = rng if rng is not None else random.Random()

        self._trig = False
        self._envelope = 0.0
        self._noise_clock = 0.0
        self._noise_sample = 0.0
        self._sustain_gain = 0.0

        self._f0 = 0.0
        self._tone = 0.0
        self._decay_raw = 0.0
        self._decay = 0.0
        self._noisiness_raw = 0.0
        self._noisiness = 0.0
        self._accent = 0.0
        self.freq = 3000.0
        self.tone = 0.5
        self.decay = 0.2
        self.noisiness = 0.8
        self.accent = 0.8
        self.sustain = False
        """When true the hi-hat rings out indefinitely."""

        self._noise_coloration_svf = Svf(sample_rate)
        self._hpf = Svf(sample_rate)

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
    def tone(self) -> float:
        """Brightness, 0 to 1."""
        return self._tone

    @tone.setter
    def tone(self, tone: float) -> None:
        self._tone = clamp(tone, 0.0, 1.0)

    @property
    def decay(self) -> float:
        """Decay length, non-negative; tuned for 0 to 1."""
        return self._decay_raw

    @decay.setter
    def decay(self, decay: float) -> None:
        self._decay_raw = max(decay, 0.0)
        self._decay = self._decay_raw * 1.7 - 1.2

    @property
    def noisiness(self) -> float:
        """Mix between tone (0) and clocked noise (1)."""
        return self._noisiness_raw

    @noisiness.setter
    def noisiness(self, noisiness: float) -> None:
        self._noisiness_raw = clamp(noisiness, 0.0, 1.0)
        self._noisiness = self._noisiness_raw * self._noisiness_raw

    def trig(self) -> None:
        """Strike the hi-hat on the next sample."""
        self._trig = True

    def process(self, trigger: bool = False) -> float:
        """Return the next sample; a true ``trigger`` strikes the hi-hat."""
        sr = self._sample_rate
        decay = self._decay
        envelope_decay = 1.0 - 0.003 * _semitones_to_ratio(-decay * 84.0)
        cut_decay = 1.0 - 0.0025 * _semitones_to_ratio(-decay * 36.0)

        if trigger or self._trig:
            self._trig = False
            self._envelope = (1.5 + 0.5 * (1.0 - decay)) * (0.3 + 0.7 * self._accent)

        out = self._metallic_noise.process(2.0 * self._f0)

        cutoff = 150.0 / sr * _semitones_to_ratio(self._tone * 72.0)
        cutoff = clamp(cutoff, 0.0, 16000.0 / sr)

        svf = self._noise_coloration_svf
        svf.freq = cutoff * sr
        svf.res = 3.0 + 6.0 * self._tone if self._resonance else 1.0
        svf.process(out)
        out = svf.band

        # Clocked noise added to the oscillators for more variety.
        noise_f = clamp(self._f0 * (16.0 + 16.0 * (1.0 - self._noisiness)), 0.0, 0.5)
        self._noise_clock += noise_f
        if self._noise_clock >= 1.0:
            self._noise_clock -= 1.0
            self._noise_sample = self._rng.random() - 0.5
        out += self._noisiness * (self._noise_sample - out)

        self._sustain_gain = self._accent * decay
        self._envelope *= envelope_decay if self._envelope > 0.5 else cut_decay
        out = self._vca(out, self._sustain_gain if self.sustain else self._envelope)

        self._hpf.freq = cutoff * sr
        self._hpf.res = 0.5
        self._hpf.process(out)
        return self._hpf.high