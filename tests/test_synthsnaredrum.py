import random

from voltdsp.synthsnaredrum import SyntheticSnareDrum


def _render(drum, length, trigger_at=None):
    return [drum.process(i == trigger_at) for i in range(length)]


def test_untriggered_drum_is_silent():
    drum = SyntheticSnareDrum(48000, random.Random(1))
    assert all(y == 0.0 for y in _render(drum, 2000))


def test_trigger_produces_sound():
    drum = SyntheticSnareDrum(48000, random.Random(1))
    out = _render(drum, 2000, trigger_at=0)
    assert max(abs(y) for y in out) > 0.01


def test_same_seed_gives_same_output():
    a = SyntheticSnareDrum(48000, random.Random(7))
    b = SyntheticSnareDrum(48000, random.Random(7))
    assert _render(a, 3000, trigger_at=10) == _render(b, 3000, trigger_at=10)


def test_trig_equals_trigger_argument():
    a = SyntheticSnareDrum(48000, random.Random(3))
    b = SyntheticSnareDrum(48000, random.Random(3))
    a.trig()
    out_a = [a.process() for _ in range(1000)]
    out_b = [b.process(i == 0) for i in range(1000)]
    assert out_a == out_b


def test_sound_decays():
    drum = SyntheticSnareDrum(48000, random.Random(5))
    out = _render(drum, 48000, trigger_at=0)
    early = sum(y * y for y in out[:2400])
    late = sum(y * y for y in out[40000:42400])
    assert late < early


def test_sustain_rings_without_trigger():
    drum = SyntheticSnareDrum(48000, random.Random(2))
    drum.sustain = True
    out = _render(drum, 20000)
    assert max(abs(y) for y in out[10000:]) > 0.0


def test_parameters_are_clamped():
    drum = SyntheticSnareDrum(48000, random.Random(0))
    drum.accent = 5.0
    drum.snappy = -1.0
    drum.decay = -2.0
    drum.fm_amount = 3.0
    drum.freq = 1.0e6
    assert drum.accent == 1.0
    assert drum.snappy == 0.0
    assert drum.decay == 0.0
    assert drum.fm_amount == 1.0
    assert drum.freq == 48000


def test_defaults():
    drum = SyntheticSnareDrum(48000)
    assert drum.accent == 0.6
    assert drum.decay == 0.3
    assert drum.snappy == 0.7
    assert drum.sustain is False