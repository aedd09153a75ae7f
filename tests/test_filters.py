import pytest
from hypothesis import given
from hypothesis import strategies as st

from voltdsp.filters import Allpass, ATone, Biquad, Mode, Soap, Tone

SR = 48000.0
signal = st.lists(st.floats(min_value=-1, max_value=1, allow_nan=False), min_size=1, max_size=40)


def test_tone_default_coefficients():
    tone = Tone(SR)
    assert tone.freq == 100.0
    assert tone.process(1.0) == 0.5


def test_tone_passes_dc_after_setting_freq():
    tone = Tone(SR)
    tone.freq = 500.0
    out = 0.0
    for _ in range(3000):
        out = tone.process(1.0)
    assert out == pytest.approx(1.0, abs=1e-6)


def test_atone_default_coefficient():
    atone = ATone(SR)
    assert atone.freq == 1000.0
    assert atone.process(1.0) == 0.5


def test_atone_blocks_dc():
    atone = ATone(SR)
    atone.freq = 1000.0
    out = 1.0
    for _ in range(2000):
        out = atone.process(1.0)
    assert abs(out) < 1e-6


def test_biquad_properties_round_trip():
    bq = Biquad(SR)
    assert (bq.cutoff, bq.res) == (500, 0.7)
    bq.cutoff = 1200.0
    bq.res = 0.3
    assert (bq.cutoff, bq.res) == (1200.0, 0.3)


@given(signal)
def test_biquad_is_linear(samples):
    a, b = Biquad(SR), Biquad(SR)
    for x in samples:
        assert b.process(2.0 * x) == pytest.approx(2.0 * a.process(x), abs=1e-9)


def test_biquad_silence():
    bq = Biquad(SR)
    assert [bq.process(0.0) for _ in range(10)] == [0.0] * 10


def test_mode_output_is_delayed_by_one_sample():
    mode = Mode(SR)
    assert mode.process(1.0) == 0.0
    assert mode.process(0.0) != 0.0


def test_mode_clear_silences():
    mode = Mode(SR)
    mode.freq = 800.0
    mode.q = 200.0
    for x in (1.0, 0.0, 0.0, 0.5):
        mode.process(x)
    mode.clear()
    assert [mode.process(0.0) for _ in range(10)] == [0.0] * 10


@given(signal)
def test_mode_is_linear(samples):
    a, b = Mode(SR), Mode(SR)
    for x in samples:
        assert b.process(3.0 * x) == pytest.approx(3.0 * a.process(x), abs=1e-9)


@given(signal)
def test_soap_outputs_relation(samples):
    soap = Soap(SR)
    soap.center_freq = 1000.0
    soap.bandwidth = 200.0
    for x in samples:
        soap.process(x)
        combined = 0.99 * soap.bandpass + soap.bandreject
        assert combined == pytest.approx((0.99 + 1.0) * x / 2.0, abs=1e-9)


def test_soap_silence():
    soap = Soap(SR)
    for _ in range(10):
        soap.process(0.0)
    assert (soap.bandpass, soap.bandreject) == (0.0, 0.0)


def test_allpass_impulse_returns_after_loop():
    ap = Allpass(1000.0, 100)
    n = ap.delay_samples
    out = [ap.process(1.0)] + [ap.process(0.0) for _ in range(n)]
    assert out[0] < 0.0
    assert out[1:n] == [0.0] * (n - 1)
    assert out[n] > 0.0


def test_allpass_loop_time_is_clamped_to_buffer():
    ap = Allpass(1000.0, 100)
    ap.loop_time = 100.0
    assert ap.loop_time == ap.max_loop_time
    ap.loop_time = 0.05
    assert ap.delay_samples == int(0.05 * 1000.0)


def test_allpass_rejects_too_short_buffer():
    with pytest.raises(ValueError):
        Allpass(1000.0, 5)


def test_allpass_rejects_loop_shorter_than_a_sample():
    ap = Allpass(1000.0, 100)
    with pytest.raises(ValueError):
        ap.loop_time = 0.0
    assert ap.delay_samples >= 1