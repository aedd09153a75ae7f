"""Auto-wah, sample-and-hold fold, bitcrusher and decimator."""

from __future__ import annotations

import math

_MAX_BITS_TO_CRUSH = 16


class Autowah:
    """Envelope-following wah filter."""

    def __init__(self, sample_rate: float) -> None:
        self._sampling_freq = sample_rate
        self._const1 = 1413.72 / sample_rate
        self._const2 = math.exp(-(100.0 / sample_rate))
        self._const4 = math.exp(-(10.0 / sample_rate))
        self.wah = 0.0
        """Wah amount, 0 to 1."""
        self.dry_wet = 100.0
        """Dry/wet mix, 0 to 100."""
        self.level = 0.1
        """Wah level, 0 to 1."""
        self._rec0 = [0.0, 0.0, 0.0]
        self._rec1 = 0.0
        self._rec2 = 0.0
        self._rec3 = 0.0
        self._rec4 = 0.0
        self._rec5 = 0.0

    def process(self, value: float) -> float:
        slow2 = 0.01 * (self.dry_wet * self.level)
        slow3 = (1.0 - 0.01 * self.dry_wet) + (1.0 - self.wah)

        t1 = abs(value)
        c4 = self._const4
        self._rec3 = max(t1, c4 * self._rec3 + (1.0 - c4) * t1)
        c2 = self._const2
        self._rec2 = c2 * self._rec2 + (1.0 - c2) * self._rec3
        t2 = min(1.0, self._rec2)
        t3 = 2.0 ** (2.3 * t2)
        t4 = 1.0 - self._const1 * t3 / 2.0 ** (1.0 + 2.0 * (1.0 - t2))
        self._rec1 = 0.999 * self._rec1 + 0.001 * (
            -(2.0 * (t4 * math.cos(self._const1 * 2.0 * t3)))
        )
        self._rec4 = 0.999 * self._rec4 + 0.001 * t4 * t4
        self._rec5 = 0.999 * self._rec5 + 0.0001 * 4.0**t2

        prev1, prev2 = self._rec0[1], self._rec0[2]
        rec0 = -((self._rec1 * prev1 + self._rec4 * prev2) - slow2 * (self._rec5 * value))
        out = self.wah * (rec0 - prev1) + slow3 * value
        self._rec0 = [rec0, rec0, prev1]
        return out


class Fold:
    """Sample-and-hold that takes a new input every ``increment`` samples."""

    def __init__(self) -> None:
        self.increment = 1000.0
        self._sample_index = 0
        self._index = 0.0
        self._value = 0.0

    def process(self, value: float) -> float:
        if self._index < self._sample_index:
            self._index += self.increment
            self._value = value
        self._sample_index += 1
        return self._value


class Bitcrush:
    """Bit-depth reduction followed by sample-rate reduction."""

    def __init__(self, sample_rate: float) -> None:
        self._sample_rate = sample_rate
        self.bit_depth = 8
        """Bit depth, 0 to 16."""
        self.crush_rate = 10000.0
        """Rate to downsample to, 0 to the sample rate."""
        self._fold = Fold()

    def process(self, value: float) -> float:
        bits = 2.0**self.bit_depth
        if self.crush_rate:
            fold_amount = self._sample_rate / self.crush_rate
        else:
            fold_amount = math.inf
        out = value * 65536.0 + 32768.0
        out *= bits / 65536.0
        out = math.floor(out)
        out *= (65536.0 / bits) - 32768.0
        self._fold.increment = fold_amount
        return self._fold.process(out) / 65536.0


class Decimator:
    """Downsampling and bitcrushing."""

    def __init__(self) -> None:
        self.downsample_factor = 1.0
        self.smooth_crushing = False
        self._bitcrush_factor = 0.0
        self._bits_to_crush = 0
        self._bit_overflow = 1.0
        self._downsampled = 0.0
        self._inc = 0

    @property
    def bitcrush_factor(self) -> float:
        return self._bitcrush_factor

    @property
    def bits_to_crush(self) -> int:
        return self._bits_to_crush

    def set_bitcrush_factor(self, factor: float) -> None:
        """Set the amount of bitcrushing, 0 to 1."""
        self._bitcrush_factor = factor
        self._bits_to_crush = max(int(factor * _MAX_BITS_TO_CRUSH), 0)
        self._bit_overflow = 2.0 - factor * 16.0 + self._bits_to_crush

    def set_bits_to_crush(self, bits: int) -> None:
        """Set the exact number of bits to crush (up to 16); disables smooth crushing."""
        self._bits_to_crush = min(bits, _MAX_BITS_TO_CRUSH)
        self.smooth_crushing = False

    def process(self, value: float) -> float:
        threshold = int(self.downsample_factor * self.downsample_factor * 96.0)
        self._inc += 1
        if self._inc > threshold:
            self._inc = 0
            self._downsampled = value

        if self.smooth_crushing:
            scale = 65536.0 * self._bit_overflow
            shift = self._bits_to_crush + 1
        else:
            scale = 65536.0
            shift = self._bits_to_crush
        temp = int(self._downsampled * scale)
        temp = (temp >> shift) << shift
        return temp / scale