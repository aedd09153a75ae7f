"""Control-rate signal generators: envelopes, line segments and a phasor."""

from __future__ import annotations

import enum
import math

FLT_EPSILON = 2.0**-23


def _fdiv(num: float, den: float) -> float:
    """Divide with IEEE semantics: division by zero gives inf or nan."""
    try:
        return num / den
    except ZeroDivisionError:
        if num == 0 or math.isnan(num):
            return math.nan
        return math.copysign(math.inf, num) * math.copysign(1.0, den)


def _flog(x: float) -> float:
    """Natural logarithm that yields -inf or nan instead of raising."""
    if x > 0:
        return math.log(x)
    if x == 0:
        return -math.inf
    return math.nan


def _expf_fast(x: float) -> float:
    """Cheap exponential approximation: (1 + x/1024) ** 1024."""
    x = 1.0 + x / 1024.0
    for _ in range(10):
        x *= x
    return x


class AdEnvSegment(enum.IntEnum):
    """Stages of an attack/decay envelope."""

    IDLE = 0
    ATTACK = 1
    DECAY = 2


class AdEnv:
    """Triggerable attack/decay envelope with adjustable range and curve."""

    def __init__(self, sample_rate: float) -> None:
        self._sample_rate = sample_rate
        self._segment = AdEnvSegment.IDLE
        self._prev_segment = AdEnvSegment.IDLE
        self._times = {segment: 0.05 for segment in AdEnvSegment}
        self.curve = 0.0
        self.min_value = 0.0
        self.max_value = 1.0
        self._output = 0.0001
        self._curve_x = 0.0
        self._retrig_val = 0.0
        self._triggered = False

    def trigger(self) -> None:
        """Start or restart the envelope on the next sample."""
        self._triggered = True

    def set_time(self, segment: AdEnvSegment | int, time: float) -> None:
        """Set the length of a segment in seconds."""
        self._times[AdEnvSegment(segment)] = time

    @property
    def value(self) -> float:
        """Current output without advancing the envelope."""
        return self._output * (self.max_value - self.min_value) + self.min_value

    @property
    def current_segment(self) -> AdEnvSegment:
        return self._segment

    @property
    def is_running(self) -> bool:
        return self._segment != AdEnvSegment.IDLE

    def process(self) -> float:
        """Advance one sample and return the scaled envelope value."""
        if self._triggered:
            self._triggered = False
            self._segment = AdEnvSegment.ATTACK
            self._curve_x = 0.0
            self._retrig_val = self._output

        segment = self._segment
        time_samps = int(self._times[segment] * self._sample_rate)

        if segment == AdEnvSegment.ATTACK:
            beg, end = self._retrig_val, 1.0
        elif segment == AdEnvSegment.DECAY:
            beg, end = 1.0, 0.0
        else:
            beg, end = 0.0, 0.0

        if self._prev_segment != segment:
            self._curve_x = 0.0

        if self.curve == 0.0:
            inc = _fdiv(end - beg, time_samps)
        else:
            inc = _fdiv(end - beg, 1.0 - _expf_fast(self.curve))

        if inc >= 0.0:
            inc = max(inc, FLT_EPSILON)
        else:
            inc = min(inc, -FLT_EPSILON)

        val = self._output
        out = val
        if self.curve == 0.0:
            val += inc
        else:
            self._curve_x += _fdiv(self.curve, time_samps)
            val = beg + inc * (1.0 - _expf_fast(self._curve_x))
            if math.isnan(val):
                val = 0.0

        self._prev_segment = segment
        if segment == AdEnvSegment.ATTACK and out >= 1.0:
            self._segment = AdEnvSegment.DECAY
        elif segment == AdEnvSegment.DECAY and out <= 0.0:
            self._segment = AdEnvSegment.IDLE

        if self._segment == AdEnvSegment.IDLE:
            val = out = 0.0
        self._output = val
        return out * (self.max_value - self.min_value) + self.min_value


class AdsrSegment(enum.IntEnum):
    """Stages of an ADSR envelope."""

    IDLE = 0
    ATTACK = 1
    DECAY = 2
    RELEASE = 4


class Adsr:
    """Gate-driven attack/decay/sustain/release envelope with one-pole segments."""

    def __init__(self, sample_rate: float, block_size: int = 1) -> None:
        self._sample_rate = int(sample_rate / block_size)
        self._attack_shape = -1.0
        self._attack_target = 0.0
        self._attack_time = -1.0
        self._decay_time = -1.0
        self._release_time = -1.0
        self._attack_d0 = 0.0
        self._decay_d0 = 0.0
        self._release_d0 = 0.0
        self._sus_level = 0.7
        self._x = 0.0
        self._gate = False
        self._mode = AdsrSegment.IDLE
        self.set_time(AdsrSegment.ATTACK, 0.1)
        self.set_time(AdsrSegment.DECAY, 0.1)
        self.set_time(AdsrSegment.RELEASE, 0.1)

    def retrigger(self, hard: bool) -> None:
        """Force the envelope back to attack; a hard retrigger restarts from zero."""
        self._mode = AdsrSegment.ATTACK
        if hard:
            self._x = 0.0

    def set_time(self, segment: AdsrSegment | int, time: float) -> None:
        """Set a segment time in seconds; segments without a time are ignored."""
        if segment == AdsrSegment.ATTACK:
            self.set_attack_time(time, 0.0)
        elif segment == AdsrSegment.DECAY:
            self.set_decay_time(time)
        elif segment == AdsrSegment.RELEASE:
            self.set_release_time(time)

    def set_attack_time(self, time: float, shape: float = 0.0) -> None:
        """Set attack time in seconds and the shape of the attack curve."""
        if time == self._attack_time and shape == self._attack_shape:
            return
        self._attack_time = time
        self._attack_shape = shape
        if time > 0.0:
            x = shape
            target = 9.0 * x**10 + 0.3 * x + 1.01
            self._attack_target = target
            log_target = _flog(1.0 - 1.0 / target)
            self._attack_d0 = 1.0 - math.exp(_fdiv(log_target, time * self._sample_rate))
        else:
            self._attack_d0 = 1.0

    def _coefficient(self, time: float) -> float:
        if time > 0.0:
            return 1.0 - math.exp(_fdiv(-1.0, time * self._sample_rate))
        return 1.0

    def set_decay_time(self, time: float) -> None:
        if time != self._decay_time:
            self._decay_time = time
            self._decay_d0 = self._coefficient(time)

    def set_release_time(self, time: float) -> None:
        if time != self._release_time:
            self._release_time = time
            self._release_d0 = self._coefficient(time)

    @property
    def sustain_level(self) -> float:
        return self._sus_level

    @sustain_level.setter
    def sustain_level(self, level: float) -> None:
        # A level at or below zero forces the envelope into idle after decay.
        if level <= 0.0:
            level = -0.01
        elif level > 1.0:
            level = 1.0
        self._sus_level = level

    @property
    def current_segment(self) -> AdsrSegment:
        return self._mode

    @property
    def is_running(self) -> bool:
        return self._mode != AdsrSegment.IDLE

    def process(self, gate: bool) -> float:
        """Advance one sample with the given gate state and return the output."""
        gate = bool(gate)
        if gate and not self._gate:
            self._mode = AdsrSegment.ATTACK
        elif not gate and self._gate:
            self._mode = AdsrSegment.RELEASE
        self._gate = gate

        mode = self._mode
        if mode == AdsrSegment.IDLE:
            return 0.0
        if mode == AdsrSegment.ATTACK:
            self._x += self._attack_d0 * (self._attack_target - self._x)
            if self._x > 1.0:
                self._x = 1.0
                self._mode = AdsrSegment.DECAY
            return self._x

        if mode == AdsrSegment.DECAY:
            d0, target = self._decay_d0, self._sus_level
        else:
            d0, target = self._release_d0, -0.01
        self._x += d0 * (target - self._x)
        if self._x < 0.0:
            self._x = 0.0
            self._mode = AdsrSegment.IDLE
        return self._x


class Line:
    """Linear ramp from a start value to an end value over a duration."""

    def __init__(self, sample_rate: float) -> None:
        self._sample_rate = sample_rate
        self._duration = 0.5
        self._end = 0.0
        self._start = 1.0
        self._val = 1.0
        self._inc = 0.0
        self._finished = False

    @property
    def finished(self) -> bool:
        """True once the ramp has reached its end value."""
        return self._finished

    def start(self, start: float, end: float, duration: float) -> None:
        """Begin a new ramp; duration is in seconds."""
        self._start = start
        self._end = end
        self._duration = duration
        self._inc = _fdiv(end - start, self._sample_rate * duration)
        self._val = start
        self._finished = False

    def process(self) -> float:
        """Return the next value of the ramp."""
        out = self._val
        if (self._end > self._start and out >= self._end) or (
            self._end < self._start and out <= self._end
        ):
            self._finished = True
            self._val = self._end
            out = self._end
        else:
            self._val += self._inc
        return out


class Phasor:
    """Ramp from 0 to 1 repeating at a given frequency."""

    def __init__(
        self, sample_rate: float, freq: float = 1.0, initial_phase: float = 0.0
    ) -> None:
        self._sample_rate = sample_rate
        self._phs = initial_phase
        self._freq = 0.0
        self._inc = 0.0
        self.freq = freq

    @property
    def freq(self) -> float:
        """Frequency in Hz."""
        return self._freq

    @freq.setter
    def freq(self, freq: float) -> None:
        self._freq = freq
        self._inc = (2.0 * math.pi * freq) / self._sample_rate

    def process(self) -> float:
        """Return the current phase as a value in [0, 1] and advance."""
        out = self._phs / (2.0 * math.pi)
        self._phs += self._inc
        if self._phs > 2.0 * math.pi:
            self._phs -= 2.0 * math.pi
        if self._phs < 0.0:
            self._phs = 0.0
        return out