"""808-style bass and snare drum models built on resonant filters."""

from __future__ import annotations

import math
import random

from voltdsp.shaping import clamp, one_pole, soft_clip
from voltdsp.svf import Svf

_ONE_TWELFTH = 1.0 / 12.0
_TWO_PI = 2.0 * math.pi
_SNARE_MODE_RATIOS = (1.00, 2.00, 3.18, 4.16, 5.62)


def _diode(x: float) -> float:
    """Pass positive values, softly compress negative ones."""
    if x >= 0.0:
        return x
    x *= 2.0
    return 0.7 * x / (1.0 + abs(x))


class AnalogBassDrum:
    """808 bass drum: a pulse-excited resonator with attack and self FM."""

    def __init__(self, sample_rate: float) -> None:
        self._sample_rate = sample_rate
        self._trig = False

        self._pulse_remaining_samples = 0
        self._fm_pulse_remaining_samples = 0
        self._pulse = 0.0
        self._pulse_height = 0.0
        self._pulse_lp = 0.0
        self._fm_pulse_lp = 0.0
        self._retrig_pulse = 0.0
        self._lp_out = 0.0
        self._tone_lp = 0.0
        self._sustain_gain = 0.0
        self._phase = 0.0

        self.sustain = False
        """When true the drum plays indefinitely."""
        self._accent = 0.0
        self._f0 = 0.0
        self._tone = 0.0
        self._decay_raw = 0.0
        self._decay = 0.0
        self._attack_fm_raw = 0.0
        self._attack_fm_amount = 0.0
        self._self_fm_raw = 0.0
        self._self_fm_amount = 0.0
        self.accent = 0.1
        self.freq = 50.0
        self.tone = 0.1
        self.decay = 0.3
        self.self_fm_amount = 1.0
        self.attack_fm_amount = 0.5

        self._resonator = Svf(sample_rate)

    @property
    def accent(self) -> float:
        """Accent amount, 0 to 1."""
        return self._accent

    @accent.setter
    def accent(self, accent: float) -> None:
        self._accent = clamp(accent, 0.0, 1.0)

    @property
    def freq(self) -> float:
        """Root frequency in Hz, at most half the sample rate."""
        return self._f0 * self._sample_rate

    @freq.setter
    def freq(self, freq: float) -> None:
        self._f0 = clamp(freq / self._sample_rate, 0.0, 0.5)

    @property
    def tone(self) -> float:
        """Amount of click, 0 to 1."""
        return self._tone

    @tone.setter
    def tone(self, tone: float) -> None:
        self._tone = clamp(tone, 0.0, 1.0)

    @property
    def decay(self) -> float:
        """Decay length; works best from 0 to 1."""
        return self._decay_raw

    @decay.setter
    def decay(self, decay: float) -> None:
        self._decay_raw = decay
        self._decay = decay * 0.1 - 0.1

    @property
    def attack_fm_amount(self) -> float:
        """Amount of FM on the attack; works best from 0 to 1."""
        return self._attack_fm_raw

    @attack_fm_amount.setter
    def attack_fm_amount(self, amount: float) -> None:
        self._attack_fm_raw = amount
        self._attack_fm_amount = amount * 50.0

    @property
    def self_fm_amount(self) -> float:
        """Amount of self FM; works best from 0 to 1."""
        return self._self_fm_raw

    @self_fm_amount.setter
    def self_fm_amount(self, amount: float) -> None:
        self._self_fm_raw = amount
        self._self_fm_amount = amount * 50.0

    def trig(self) -> None:
        """Strike the drum on the next sample."""
        self._trig = True

    def process(self, trigger: bool = False) -> float:
        """Return the next sample; a true ``trigger`` strikes the drum."""
        sr = self._sample_rate
        trigger_pulse_duration = int(1.0e-3 * sr)
        fm_pulse_duration = int(6.0e-3 * sr)
        pulse_decay_time = 0.2e-3 * sr
        pulse_filter_time = 0.1e-3 * sr
        retrig_pulse_duration = 0.05 * sr

        f0 = self._f0
        scale = 0.001 / f0 if f0 > 0.0 else math.inf
        q = 1500.0 * 2.0 ** (_ONE_TWELFTH * self._decay * 80.0)
        tone_f = min(4.0 * f0 * 2.0 ** (_ONE_TWELFTH * self._tone * 108.0), 1.0)
        exciter_leak = 0.08 * (self._tone + 0.25)

        if trigger or self._trig:
            self._trig = False
            self._pulse_remaining_samples = trigger_pulse_duration
            self._fm_pulse_remaining_samples = fm_pulse_duration
            self._pulse_height = 3.0 + 7.0 * self._accent
            self._lp_out = 0.0

        if self._pulse_remaining_samples:
            self._pulse_remaining_samples -= 1
            pulse = (
                self._pulse_height
                if self._pulse_remaining_samples
                else self._pulse_height - 1.0
            )
            self._pulse = pulse
        else:
            self._pulse *= 1.0 - 1.0 / pulse_decay_time
            pulse = self._pulse
        if self.sustain:
            pulse = 0.0

        self._pulse_lp = one_pole(self._pulse_lp, pulse, 1.0 / pulse_filter_time)
        pulse = _diode((pulse - self._pulse_lp) + pulse * 0.044)

        fm_pulse = 0.0
        if self._fm_pulse_remaining_samples:
            self._fm_pulse_remaining_samples -= 1
            fm_pulse = 1.0
            self._retrig_pulse = 0.0 if self._fm_pulse_remaining_samples else -0.8
        else:
            self._retrig_pulse *= 1.0 - 1.0 / retrig_pulse_duration
        if self.sustain:
            fm_pulse = 0.0
        self._fm_pulse_lp = one_pole(self._fm_pulse_lp, fm_pulse, 1.0 / pulse_filter_time)

        punch = 0.7 + _diode(10.0 * self._lp_out - 1.0)
        attack_fm = self._fm_pulse_lp * 1.7 * self._attack_fm_amount
        self_fm = punch * 0.08 * self._self_fm_amount
        f = clamp(f0 * (1.0 + attack_fm + self_fm), 0.0, 0.4)

        if self.sustain:
            self._sustain_gain = self._accent * self._decay
            self._phase += f
            if self._phase >= 1.0:
                self._phase -= 1.0
            resonator_out = math.sin(_TWO_PI * self._phase) * self._sustain_gain
            self._lp_out = math.cos(_TWO_PI * self._phase) * self._sustain_gain
        else:
            resonator = self._resonator
            resonator.freq = f * sr
            resonator.res = 0.4 * q * f
            resonator.process((pulse - self._retrig_pulse * 0.2) * scale)
            resonator_out = resonator.band
            self._lp_out = resonator.low

        self._tone_lp = one_pole(
            self._tone_lp, pulse * exciter_leak + resonator_out, tone_f
        )
        return self._tone_lp


class AnalogSnareDrum:
    """808 snare drum: five resonant modes plus filtered noise."""

    NUM_MODES = len(_SNARE_MODE_RATIOS)

    def __init__(self, sample_rate: float, rng: random.Random | None = None) -> None:
        self._sample_rate = sample_rate
        self._rng = rng if rng is not None else random.Random()
        self._trig = False

        self._pulse_remaining_samples = 0
        self._pulse = 0.0
        self._pulse_height = 0.0
        self._pulse_lp = 0.0
        self._noise_envelope = 0.0
        self._sustain_gain = 0.0

        self.sustain = False
        """When true the drum rings out indefinitely."""
        self._accent = 0.0
        self._f0 = 0.0
        self._tone_raw = 0.0
        self._tone = 0.0
        self._decay = 0.0
        self._snappy = 0.0
        self.accent = 0.6
        self.freq = 200.0
        self.decay = 0.3
        self.snappy = 0.7
        self.tone = 0.5

        self._resonators = [Svf(sample_rate) for _ in range(self.NUM_MODES)]
        self._phases = [0.0] * self.NUM_MODES
        self._noise_filter = Svf(sample_rate)

    @property
    def accent(self) -> float:
        """Accent amount, 0 to 1."""
        return self._accent

    @accent.setter
    def accent(self, accent: float) -> None:
        self._accent = clamp(accent, 0.0, 1.0)

    @property
    def freq(self) -> float:
        """Root frequency in Hz, at most 0.4 times the sample rate."""
        return self._f0 * self._sample_rate

    @freq.setter
    def freq(self, freq: float) -> None:
        self._f0 = clamp(freq / self._sample_rate, 0.0, 0.4)

    @property
    def tone(self) -> float:
        """Brightness, 0 (dark) to 1 (bright)."""
        return self._tone_raw

    @tone.setter
    def tone(self, tone: float) -> None:
        self._tone_raw = clamp(tone, 0.0, 1.0)
        self._tone = self._tone_raw * 2.0

    @property
    def decay(self) -> float:
        """Decay length; works with positive numbers."""
        return self._decay

    @decay.setter
    def decay(self, decay: float) -> None:
        self._decay = decay

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

    def _mode_gains(self) -> list[float]:
        tone = self._tone
        if tone < 0.666667:
            # Two modes, as on the original circuit.
            tone *= 1.5
            gains = [1.5 + (1.0 - tone) * (1.0 - tone) * 4.5, 2.0 * tone + 0.15]
            gains += [0.0] * (self.NUM_MODES - 2)
            return gains
        tone = (tone - 0.666667) * 3.0
        gains = [1.5 - tone * 0.5, 2.15 - tone * 0.7]
        for _ in range(2, self.NUM_MODES):
            gains.append(tone)
            tone *= tone
        return gains

    def process(self, trigger: bool = False) -> float:
        """Return the next sample; a true ``trigger`` strikes the drum."""
        sr = self._sample_rate
        decay = self._decay
        decay_xt = decay * (1.0 + decay * (decay - 1.0))
        trigger_pulse_duration = int(1.0e-3 * sr)
        pulse_decay_time = 0.1e-3 * sr
        q = 2000.0 * 2.0 ** (_ONE_TWELFTH * decay_xt * 84.0)
        noise_envelope_decay = 1.0 - 0.0017 * 2.0 ** (
            _ONE_TWELFTH * (-decay * (50.0 + self._snappy * 10.0))
        )
        exciter_leak = self._snappy * (2.0 - self._snappy) * 0.1
        snappy = clamp(self._snappy * 1.1 - 0.05, 0.0, 1.0)

        if trigger or self._trig:
            self._trig = False
            self._pulse_remaining_samples = trigger_pulse_duration
            self._pulse_height = 3.0 + 7.0 * self._accent
            self._noise_envelope = 2.0

        freqs = [min(self._f0 * ratio, 0.499) for ratio in _SNARE_MODE_RATIOS]
        for i, (resonator, f) in enumerate(zip(self._resonators, freqs)):
            resonator.freq = f * sr
            resonator.res = f * (q if i == 0 else q * 0.25) * 0.2

        gains = self._mode_gains()

        f_noise = self._f0 * 16.0
        self._noise_filter.freq = f_noise * sr
        self._noise_filter.res = f_noise * 1.5

        if self._pulse_remaining_samples:
            self._pulse_remaining_samples -= 1
            pulse = (
                self._pulse_height
                if self._pulse_remaining_samples
                else self._pulse_height - 1.0
            )
            self._pulse = pulse
        else:
            self._pulse *= 1.0 - 1.0 / pulse_decay_time
            pulse = self._pulse

        sustain_gain = self._sustain_gain = self._accent * decay

        self._pulse_lp = clamp(self._pulse_lp, pulse, 0.75)

        shell = 0.0
        for i, (resonator, f, gain) in enumerate(zip(self._resonators, freqs, gains)):
            if i == 0:
                excitation = (pulse - self._pulse_lp) + 0.006 * pulse
            else:
                excitation = 0.026 * pulse
            phase = self._phases[i] + f
            if phase >= 1.0:
                phase -= 1.0
            self._phases[i] = phase
            resonator.process(excitation)
            if self.sustain:
                shell += gain * math.sin(phase * _TWO_PI) * sustain_gain * 0.25
            else:
                shell += gain * (resonator.band + excitation * exciter_leak)
        shell = soft_clip(shell)

        noise = max(2.0 * self._rng.random() - 1.0, 0.0)
        self._noise_envelope *= noise_envelope_decay
        level = sustain_gain if self.sustain else self._noise_envelope
        noise *= level * snappy * 2.0

        self._noise_filter.process(noise)
        noise = self._noise_filter.band

        return noise + shell * (1.0 - snappy)