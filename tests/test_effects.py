import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from voltdsp.effects import Autowah, Bitcrush, Decimator, Fold

unit = st.floats(min_value=-1.0, max_value=1.0, allow_nan=False)


@given(st.lists(unit, min_size=1, max_size=200))
def test_autowah_without_wah_passes_through(samples):
    wah = Autowah(48000)
    assert [wah.process(x) for x in samples] == pytest.approx(samples)


def test_autowah_silence():
    wah = Autowah(48000)
    wah.wah = 1.0
    assert all(wah.process(0.0) == 0.0 for _ in range(500))


def test_autowah_dry_only_doubles_input():
    wah = Autowah(48000)
    wah.dry_wet = 0.0
    assert wah.process(0.25) == pytest.approx(0.5)


def test_autowah_output_finite():
    wah = Autowah(48000)
    wah.wah = 1.0
    for i in range(5000):
        assert math.isfinite(wah.process(math.sin(i * 0.05)))


def test_fold_holds_initial_zero_then_samples():
    fold = Fold()
    assert fold.process(0.7) == 0.0
    assert fold.process(0.3) == 0.3
    assert all(fold.process(0.9) == 0.3 for _ in range(500))


def test_fold_increment_one_passes_through():
    fold = Fold()
    fold.increment = 1.0
    fold.process(0.5)
    samples = [0.1, 0.2, -0.4, 0.8]
    assert [fold.process(x) for x in samples] == samples


def test_bitcrush_first_sample_is_held_zero():
    crush = Bitcrush(48000)
    assert crush.process(0.5) == 0.0


def test_bitcrush_quantizes_nearby_inputs_alike():
    a = Bitcrush(48000)
    b = Bitcrush(48000)
    for crush in (a, b):
        crush.bit_depth = 1
        crush.crush_rate = 48000
        crush.process(0.0)
    assert a.process(0.1) == b.process(0.2)


def test_bitcrush_holds_between_updates():
    crush = Bitcrush(48000)
    crush.crush_rate = 4800
    crush.process(0.0)
    held = crush.process(0.3)
    assert all(crush.process(-0.6) == held for _ in range(5))


def test_decimator_holds_until_threshold():
    dec = Decimator()
    assert all(dec.process(0.5) == 0.0 for _ in range(96))
    assert dec.process(0.5) == 0.5


def test_decimator_exact_without_crushing():
    dec = Decimator()
    dec.downsample_factor = 0.0
    assert dec.process(0.5) == 0.5


def test_set_bits_to_crush_is_limited():
    dec = Decimator()
    dec.smooth_crushing = True
    dec.set_bits_to_crush(20)
    assert dec.bits_to_crush == 16
    assert dec.smooth_crushing is False


def test_bitcrush_factor_sets_bits():
    dec = Decimator()
    dec.set_bitcrush_factor(0.5)
    assert dec.bits_to_crush == 8
    assert dec.bitcrush_factor == 0.5


@given(unit, st.integers(min_value=0, max_value=16))
def test_decimator_output_is_quantized(x, bits):
    dec = Decimator()
    dec.downsample_factor = 0.0
    dec.set_bits_to_crush(bits)
    out = dec.process(x)
    scaled = out * 65536.0
    assert scaled == int(scaled)
    assert int(scaled) % (1 << bits) == 0
    assert abs(out - x) <= ((1 << bits) + 1) / 65536.0


@given(unit)
def test_decimator_smooth_crushing_is_quantized(x):
    dec = Decimator()
    dec.downsample_factor = 0.0
    dec.set_bitcrush_factor(0.5)
    dec.smooth_crushing = True
    out = dec.process(x)
    scaled = out * 131072.0
    assert scaled == int(scaled)
    assert int(scaled) % 512 == 0