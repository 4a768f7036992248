# audiobench

Building blocks for testing and analysing audio processing code. Audio
blocks are `numpy` arrays laid out as `(channels, samples)` and are
processed in place.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `audiobench.harness` – `ProcessorHarness`, an abstract base class for
  processors under test. Subclasses implement `prepare`, `process`, `reset`,
  `processor_name`, `control_name`, `default_control_value` and
  `control_range`. The harness holds control values (`set_control_value`,
  `control_value`, `num_controls`) and times every call made through
  `prepare_harness`, `process_harness` and `reset_harness`, keeping a
  `DurationStats` (minimum, maximum, total, count, `average()`) in
  milliseconds per `Routine` (`PREPARE`, `PROCESS`, `RESET`). Statistics are
  read with `statistics(routine)` or `query_by_index(routine_index,
  value_index)` (values 0–3: min, average, max, count) and cleared with
  `reset_statistics()`. Preparing with a different channel count, sample
  rate or block size clears the process statistics. `ProcessSpec` holds
  `sample_rate`, `maximum_block_size` and `num_channels`.
- `audiobench.examples` – `LpfExample`, a biquad low-pass filter whose
  control 0 maps 0..1 logarithmically to 10 Hz..20 kHz and whose control 1
  is a linear output gain; `ThruExample`, which leaves audio unchanged.
- `audiobench.parametric_eq` – `ParametricEQ`, with `Frequency`
  (20–20000, default 440) and `Gain` (−36–36, default 0) controls. It
  currently passes audio through unaltered.
- `audiobench.metering` – `PeakMeterProcessor` (instant attack, 650 ms
  release), `VUMeterProcessor` (RMS with a 600 ms time constant) and
  `ClipCounterProcessor` (clip events, clipped samples, average and maximum
  run length per channel). Levels of unknown channels read as 0, or −150 dB.
- `audiobench.transfer` – `AudioProbe`, a small queue of fixed-length
  frames that a writer publishes and observers copy out with `copy_frame()`;
  `add_listener(callback)` registers a callback run after each write and
  returns a function that removes it. `FixedBlockProcessor`, an abstract
  class that collects samples per channel with `append_data(channel, data)`
  and calls `perform_processing(channel)` each time a block is full.
- `audiobench.scope` – `AudioScopeProcessor`, which publishes frames of
  4096 samples per channel.
- `audiobench.fft` – `FftProcessor(order)`, which transforms Hann-windowed
  blocks of `2**order` samples and publishes amplitude-corrected magnitudes
  per channel (`copy_frequency_frame`), with an optional amplitude envelope
  (`amplitude_envelope_enabled`, `amplitude_envelope_release_constant`).
  The phase frame (`copy_phase_frame`) is always zeros, and every windowing
  method gives a Hann window.
- `audiobench.noise` – `Rand31`, the Park–Miller minimal standard
  generator; `WhiteNoiseGenerator` and `PinkNoiseGenerator`.
- `audiobench.pulse` – `ImpulseFunction` and `StepFunction` test signals
  with a settable `pre_delay`, `pulse_width` and `positive_polarity`.
- `audiobench.polyblep` – `PolyBlepOscillator` for band-limited sine, saw,
  square and triangle waves (`Waveform`), with frequency ramping over 50 ms
  unless forced and an optional sine lookup table.
- `audiobench.fast_approximations` – fast single-precision log, exp and
  pow approximations (`fastlog2`, `fasterexp`, `fastpow10` and the rest).

## Example

```python
import numpy as np
from audiobench.harness import ProcessSpec, Routine
from audiobench.examples import LpfExample
from audiobench.metering import PeakMeterProcessor

spec = ProcessSpec(sample_rate=48000.0, maximum_block_size=512, num_channels=2)

lpf = LpfExample()
lpf.prepare_harness(spec)
block = np.random.default_rng(0).uniform(-1, 1, (2, 512)).astype(np.float32)
lpf.process_harness(block)  # filters the block in place
print(lpf.statistics(Routine.PROCESS).average())

meter = PeakMeterProcessor()
meter.prepare(spec)
meter.process(block)
print(meter.level_db(0))
```

```python
from audiobench.noise import Rand31

rng = Rand31(1)
print([rng.next_int() for _ in range(3)])  # [16807, 282475249, 1622650073]
```

## What it does not do

This is a library only. It has no command-line tool, does not open audio
devices or files, and has no display: meters, scope frames and spectra are
returned as numbers and arrays for the caller to show or store.