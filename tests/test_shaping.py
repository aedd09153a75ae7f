import pytest
from hypothesis import given
from hypothesis import strategies as st

from voltdsp.shaping import (
    Limiter,
    Overdrive,
    clamp,
    one_pole,
    soft_clip,
    soft_limit,
)

finite = st.floats(min_value=-1e6, max_value=1e6, allow_nan=False)


@given(finite, finite, finite)
def test_clamp_stays_within_bounds(value, a, b):
    low, high = min(a, b), max(a, b)
    result = clamp(value, low, high)
    assert low <= result <= high
    if low <= value <= high:
        assert result == value


def test_one_pole_extremes():
    assert one_pole(0.2, 0.9, 1.0) == pytest.approx(0.9)
    assert one_pole(0.2, 0.9, 0.0) == 0.2


@given(st.floats(min_value=-10, max_value=10, allow_nan=False))
def test_soft_limit_is_odd(x):
    assert soft_limit(-x) == pytest.approx(-soft_limit(x))


def test_soft_clip_saturates():
    assert soft_clip(5.0) == 1.0
    assert soft_clip(-5.0) == -1.0
    assert soft_clip(3.0) == pytest.approx(soft_clip(3.0001), abs=1e-6)


def test_soft_clip_matches_soft_limit_in_range():
    assert soft_clip(0.4) == soft_limit(0.4)


def test_overdrive_zero_drive_is_silent():
    assert Overdrive(0.0).process(0.7) == 0.0


def test_overdrive_drive_is_clamped():
    assert Overdrive(5.0).drive == 1.0
    assert Overdrive(-1.0).drive == 0.0


@given(st.floats(min_value=-1, max_value=1, allow_nan=False))
def test_overdrive_is_odd(x):
    od = Overdrive(0.6)
    assert od.process(-x) == pytest.approx(-od.process(x))


def test_overdrive_is_monotonic():
    od = Overdrive(0.8)
    outputs = [od.process(x / 10.0) for x in range(-10, 11)]
    assert all(a <= b for a, b in zip(outputs, outputs[1:]))


def test_limiter_preserves_length_and_silence():
    assert Limiter().process_block([0.0] * 16, 2.0) == [0.0] * 16


def test_limiter_small_signal_passes_through_soft_limit():
    out = Limiter().process_block([0.1], 1.0)
    assert out[0] == pytest.approx(soft_limit(0.1 * 0.7))


def test_limiter_reduces_loud_signals():
    limiter = Limiter()
    out = limiter.process_block([10.0] * 2000, 1.0)
    assert abs(out[-1]) < abs(soft_limit(10.0 * 0.7))