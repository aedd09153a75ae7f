# voltdsp

voltdsp is a set of audio building blocks written in pure Python. Each block works on one sample at a time.
You create a unit, set its parameters as attributes or properties, and call
`process` once for each sample. The package has no dependencies outside the
standard library.

## What is in the package

| Module | Contents |
| --- | --- |
| `voltdsp.shaping` | `clamp`, `one_pole`, `soft_limit`, `soft_clip`; `Overdrive` (drive 0–1); `Limiter`, whose `process_block(samples, pre_gain)` returns the limited block as a list |
| `voltdsp.svf` | `Svf`, a state variable filter that runs twice per sample. It has `freq`, `res` and `drive` properties. `process(value)` updates the `low`, `high`, `band`, `notch` and `peak` outputs |
| `voltdsp.filters` | `Tone` (one-pole low-pass), `ATone` (one-pole high-pass), `Biquad` (`cutoff`, `res`), `Mode` (resonant modal filter with `freq`, `q` and `clear()`), `Soap` (second-order allpass that updates `bandpass` and `bandreject`), `Allpass` (delay-line allpass over a buffer of `size` samples, with `loop_time` and `rev_time`) |
| `voltdsp.comb` | `Comb`, a feedback comb filter with `set_period`, `set_freq` and `rev_time` |
| `voltdsp.control` | `AdEnv` (triggered attack/decay with `AdEnvSegment`), `Adsr` (gate-driven envelope with `AdsrSegment`, `sustain_level`, `retrigger`), `Line` (linear ramp with a `finished` flag), `Phasor` (ramp from 0 to 1 at `freq` Hz) |
| `voltdsp.effects` | `Autowah`, `Fold` (sample-and-hold every `increment` samples), `Bitcrush` (`bit_depth`, `crush_rate`), `Decimator` (downsampling plus `set_bitcrush_factor` / `set_bits_to_crush`) |
| `voltdsp.wavefolder` | `Wavefolder(gain, offset)` |
| `voltdsp.compressor` | `Compressor`, with `ratio`, `threshold`, `attack`, `release`, `makeup`, `auto_makeup` and `gain`. It has side-chain `process(value, key)`, `apply`, `process_block(samples, key)` and `process_channels(channels, key)` |
| `voltdsp.analogdrums` | `AnalogBassDrum` and `AnalogSnareDrum` (808-style) |
| `voltdsp.synthbassdrum` | `SyntheticBassDrum`, plus its `SyntheticBassDrumClick` and `SyntheticBassDrumAttackNoise` parts |
| `voltdsp.synthsnaredrum` | `SyntheticSnareDrum` |
| `voltdsp.hihat` | `HiHat`, `SquareNoise`, and the VCA functions `swing_vca` and `linear_vca` |

Every drum has a `trig()` method. Its `process(trigger=False)` method returns the next sample, and a true
`trigger` strikes the drum. Each drum also has a `sustain` attribute that makes it ring on
indefinitely.

## Installing

```
pip install .
```

To run the tests, install with the test extra:

```
pip install ".[test]"
pytest
```

## Example

```python
from voltdsp.svf import Svf
from voltdsp.control import Adsr

sample_rate = 48000.0
env = Adsr(sample_rate)
lowpass = Svf(sample_rate)

out = []
for n in range(4800):
    level = env.process(n < 2400)  # gate held for the first half
    lowpass.process(level)
    out.append(lowpass.low)
```

Some drums use noise: `AnalogSnareDrum`, `SyntheticBassDrum`, `SyntheticSnareDrum`
and `HiHat`. These take an optional `rng` argument (a `random.Random`), so you can
repeat their output from one run to the next:

```python
import random
from voltdsp.synthsnaredrum import SyntheticSnareDrum

snare = SyntheticSnareDrum(48000.0, rng=random.Random(1))
hit = [snare.process(trigger=(i == 0)) for i in range(2000)]
```

Constructors raise `ValueError` in two cases: `Allpass` when its buffer cannot hold a loop of at least one sample, and `Comb` when its buffer is too short.

## What the package does not do

- It has no reverb.
- It has no ladder filter and no nonlinear feedback filter.
- It has no crossfader and no level-balancing unit.
- It reads and writes no audio files and talks to no audio devices. You supply samples as
  Python floats and get Python floats back.
- It has no command-line program.