import math
import random

from voltdsp.synthbassdrum import (
    SyntheticBassDrum,
    SyntheticBassDrumAttackNoise,
    SyntheticBassDrumClick,
)

SR = 48000.0


def test_click_silent_for_zero_input():
    click = SyntheticBassDrumClick(SR)
    assert all(click.process(0.0) == 0.0 for _ in range(100))


def test_click_responds_to_step():
    click = SyntheticBassDrumClick(SR)
    out = [click.process(1.0) for _ in range(200)]
    assert all(math.isfinite(v) for v in out)
    assert max(abs(v) for v in out) > 1e-3


def test_attack_noise_is_seeded():
    a = SyntheticBassDrumAttackNoise(random.Random(4))
    b = SyntheticBassDrumAttackNoise(random.Random(4))
    assert [a.process() for _ in range(300)] == [b.process() for _ in range(300)]


def test_attack_noise_bounded():
    noise = SyntheticBassDrumAttackNoise(random.Random(7))
    for _ in range(2000):
        assert -1.0 <= noise.process() <= 1.0


def test_drum_silent_until_triggered():
    drum = SyntheticBassDrum(SR, random.Random(1))
    assert all(drum.process() == 0.0 for _ in range(300))


def test_trigger_produces_sound():
    drum = SyntheticBassDrum(SR, random.Random(1))
    out = [drum.process(i == 0) for i in range(2000)]
    assert all(math.isfinite(v) for v in out)
    assert max(abs(v) for v in out) > 1e-2


def test_trig_matches_trigger_argument():
    a = SyntheticBassDrum(SR, random.Random(3))
    b = SyntheticBassDrum(SR, random.Random(3))
    b.trig()
    assert [a.process(i == 0) for i in range(500)] == [b.process() for _ in range(500)]


def test_sound_decays():
    drum = SyntheticBassDrum(SR, random.Random(2))
    drum.decay = 0.1
    out = [drum.process(i == 0) for i in range(48000)]
    early = max(abs(v) for v in out[:4800])
    late = max(abs(v) for v in out[-4800:])
    assert late < early


def test_sustain_sounds_without_trigger():
    drum = SyntheticBassDrum(SR, random.Random(5))
    drum.sustain = True
    drum.accent = 1.0
    drum.decay = 1.0
    out = [drum.process() for _ in range(2000)]
    assert max(abs(v) for v in out) > 1e-2


def test_parameters_are_clamped():
    drum = SyntheticBassDrum(SR)
    drum.accent = 5.0
    drum.tone = -2.0
    drum.decay = 2.0
    drum.dirtiness = -1.0
    drum.fm_envelope_amount = 9.0
    drum.fm_envelope_decay = -9.0
    drum.freq = -100.0
    assert drum.accent == 1.0
    assert drum.tone == 0.0
    assert drum.decay == 1.0
    assert drum.dirtiness == 0.0
    assert drum.fm_envelope_amount == 1.0
    assert drum.fm_envelope_decay == 0.0
    assert drum.freq == 0.0