import pytest
from hypothesis import given
from hypothesis import strategies as st

from voltdsp.svf import Svf

SR = 48000.0


def test_outputs_start_at_zero():
    svf = Svf(SR)
    assert (svf.low, svf.high, svf.band, svf.notch, svf.peak) == (0.0,) * 5


def test_silence_in_silence_out():
    svf = Svf(SR)
    svf.freq = 1000.0
    for _ in range(100):
        svf.process(0.0)
    assert (svf.low, svf.high, svf.band, svf.notch, svf.peak) == (0.0,) * 5


def test_freq_is_clamped():
    svf = Svf(SR)
    svf.freq = 1e9
    assert svf.freq == SR / 3.0
    svf.freq = -5.0
    assert svf.freq == 1.0e-6


def test_res_is_clamped():
    svf = Svf(SR)
    svf.res = 4.0
    assert svf.res == 1.0
    svf.res = -1.0
    assert svf.res == 0.0


def test_drive_round_trip_and_clamp():
    svf = Svf(SR)
    svf.drive = 3.0
    assert svf.drive == pytest.approx(3.0)
    svf.drive = 50.0
    assert svf.drive == pytest.approx(10.0)


def test_lowpass_passes_dc():
    svf = Svf(SR)
    svf.freq = 1000.0
    for _ in range(5000):
        svf.process(1.0)
    assert svf.low == pytest.approx(1.0, abs=1e-3)
    assert svf.high == pytest.approx(0.0, abs=1e-3)


@given(st.lists(st.floats(min_value=-1, max_value=1, allow_nan=False), min_size=1, max_size=50))
def test_output_identities(samples):
    svf = Svf(SR)
    svf.freq = 2000.0
    svf.res = 0.3
    for x in samples:
        svf.process(x)
        assert svf.notch == pytest.approx(svf.low + svf.high, abs=1e-9)
        assert svf.peak == pytest.approx(svf.low - svf.high, abs=1e-9)