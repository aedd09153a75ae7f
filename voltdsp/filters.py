"""Simple recursive filters: one-pole low/high pass, biquad, modal, allpass."""

from __future__ import annotations

import math


class Tone:
    """First-order recursive low-pass filter."""

    def __init__(self, sample_rate: float) -> None:
        self._sample_rate = sample_rate
        self._prevout = 0.0
        self._freq = 100.0
        self._c1 = 0.5
        self._c2 = 0.5

    @property
    def freq(self) -> float:
        """Half-power frequency in Hz."""
        return self._freq

    @freq.setter
    def freq(self, freq: float) -> None:
        self._freq = freq
        b = 2.0 - math.cos(2.0 * math.pi * freq / self._sample_rate)
        self._c2 = b - math.sqrt(b * b - 1.0)
        self._c1 = 1.0 - self._c2

    def process(self, value: float) -> float:
        out = self._c1 * value + self._c2 * self._prevout
        self._prevout = out
        return out


class ATone:
    """First-order recursive high-pass filter."""

    def __init__(self, sample_rate: float) -> None:
        self._sample_rate = sample_rate
        self._prevout = 0.0
        self._freq = 1000.0
        self._c2 = 0.5

    @property
    def freq(self) -> float:
        """Half-power frequency in Hz."""
        return self._freq

    @freq.setter
    def freq(self, freq: float) -> None:
        self._freq = freq
        b = 2.0 - math.cos(2.0 * math.pi * freq / self._sample_rate)
        self._c2 = b - math.sqrt(b * b - 1.0)

    def process(self, value: float) -> float:
        out = self._c2 * (self._prevout + value)
        self._prevout = out - value
        return out


class Biquad:
    """Two-pole resonant recursive filter."""

    def __init__(self, sample_rate: float) -> None:
        self._sample_rate = sample_rate
        self._two_pi_d_sr = 2.0 * math.pi / sample_rate
        self._cutoff = 500.0
        self._res = 0.7
        self._reset()
        self._xnm1 = self._xnm2 = self._ynm1 = self._ynm2 = 0.0

    def _reset(self) -> None:
        con = self._cutoff * self._two_pi_d_sr
        res = self._res
        cos_con = math.cos(con)
        sin_con = math.sin(con)
        alpha = 1.0 - 2.0 * res * cos_con * cos_con + res * res * math.cos(2.0 * con)
        beta = 1.0 + cos_con
        gamma = 1.0 + cos_con
        m1 = alpha * gamma + beta * sin_con
        m2 = alpha * gamma - beta * sin_con
        den = math.sqrt(m1 * m1 + m2 * m2)
        self._b0 = 1.5 * (alpha * alpha + beta * beta) / den
        self._b1 = self._b0
        self._b2 = 0.0
        self._a0 = 1.0
        self._a1 = -2.0 * res * cos_con
        self._a2 = res * res

    @property
    def cutoff(self) -> float:
        """Cutoff frequency in Hz."""
        return self._cutoff

    @cutoff.setter
    def cutoff(self, cutoff: float) -> None:
        self._cutoff = cutoff
        self._reset()

    @property
    def res(self) -> float:
        """Resonance amount."""
        return self._res

    @res.setter
    def res(self, res: float) -> None:
        self._res = res
        self._reset()

    def process(self, value: float) -> float:
        yn = (
            self._b0 * value
            + self._b1 * self._xnm1
            + self._b2 * self._xnm2
            - self._a1 * self._ynm1
            - self._a2 * self._ynm2
        ) / self._a0
        self._xnm2 = self._xnm1
        self._xnm1 = value
        self._ynm2 = self._ynm1
        self._ynm1 = yn
        return yn


class Mode:
    """Resonant modal filter."""

    def __init__(self, sample_rate: float) -> None:
        self._sr = sample_rate
        self.freq = 500.0
        self.q = 50.0
        self.clear()

    def clear(self) -> None:
        """Reset the filter state so the output returns to zero."""
        self._xnm1 = self._ynm1 = self._ynm2 = 0.0
        self._a0 = self._a1 = self._a2 = 0.0
        self._d = 0.0
        self._lfq = -1.0
        self._lq = -1.0

    def process(self, value: float) -> float:
        if self._lfq != self.freq or self._lq != self.q:
            kfreq = self.freq * 2.0 * math.pi
            kalpha = self._sr / kfreq
            kbeta = kalpha * kalpha
            self._d = 0.5 * kalpha
            self._lq = self.q
            self._lfq = self.freq
            self._a0 = 1.0 / (kbeta + self._d / kfreq)
            self._a1 = self._a0 * (1.0 - 2.0 * kbeta)
            self._a2 = self._a0 * (kbeta - self._d / self.q)
        yn = self._a0 * self._xnm1 - self._a1 * self._ynm1 - self._a2 * self._ynm2
        self._xnm1 = value
        self._ynm2 = self._ynm1
        self._ynm1 = yn
        return yn * self._d


class Soap:
    """Second-order allpass giving band-pass and band-reject outputs."""

    def __init__(self, sample_rate: float) -> None:
        self._sr = sample_rate
        self.center_freq = 400.0
        self.bandwidth = 50.0
        self._din_1 = 0.0
        self._din_2 = 0.0
        self._dout_1 = 0.0
        self._dout_2 = 0.0
        self.bandpass = 0.0
        self.bandreject = 0.0

    def process(self, value: float) -> None:
        """Filter one sample, updating ``bandpass`` and ``bandreject``."""
        d = -math.cos(2.0 * math.pi * (self.center_freq / self._sr))
        tf = math.tan(math.pi * (self.bandwidth / self._sr))
        c = (tf - 1.0) / (tf + 1.0)
        k = d - d * c
        all_output = (
            -c * value + k * self._din_1 + self._din_2 - k * self._dout_1 + c * self._dout_2
        )
        self._din_2 = self._din_1
        self._din_1 = value
        self._dout_2 = self._dout_1
        self._dout_1 = all_output
        self.bandpass = (value - all_output) * 0.5
        self.bandreject = (value + all_output * 0.99) * 0.5


class Allpass:
    """Delay-line allpass filter with a reverberation time."""

    def __init__(self, sample_rate: float, size: int) -> None:
        self._sample_rate = sample_rate
        self.rev_time = 3.5
        self._max_loop_time = size / sample_rate - 0.01
        self._buf = [0.0] * size
        self._buf_pos = 0
        self._prvt = 0.0
        self._coef = 0.0
        self._set_loop(self._max_loop_time)

    def _set_loop(self, loop_time: float) -> None:
        mod = int(max(loop_time * self._sample_rate, 0.0))
        if mod < 1:
            raise ValueError("loop time is shorter than one sample")
        self._loop_time = loop_time
        self._mod = mod

    @property
    def max_loop_time(self) -> float:
        """Longest loop time the buffer can hold, in seconds."""
        return self._max_loop_time

    @property
    def delay_samples(self) -> int:
        """Current loop length in samples."""
        return self._mod

    @property
    def loop_time(self) -> float:
        """Loop time in seconds, which sets the filter's frequency."""
        return self._loop_time

    @loop_time.setter
    def loop_time(self, looptime: float) -> None:
        self._set_loop(max(min(looptime, self._max_loop_time), 0.0001))

    def process(self, value: float) -> float:
        if self._prvt != self.rev_time:
            self._prvt = self.rev_time
            self._coef = math.exp(-6.9078 * self._loop_time / self._prvt)
        y = self._buf[self._buf_pos]
        z = self._coef * y + value
        self._buf[self._buf_pos] = z
        out = y - self._coef * z
        self._buf_pos = (self._buf_pos + 1) % self._mod
        return out