"""Band-limited oscillator using PolyBLEP and PolyBLAMP corrections."""

from __future__ import annotations

import enum
import math
from typing import Callable

import numpy as np

from audiobench.harness import ProcessSpec

_TWO_PI = 2.0 * math.pi
_ONE_ON_PI = 1.0 / math.pi
_ONE_ON_TWO_PI = 1.0 / _TWO_PI
_ONE_THIRD = 1.0 / 3.0


class Waveform(enum.IntEnum):
    """Waveforms the oscillator can generate."""

    SINE = 1
    SAW = 2
    SQUARE = 3
    TRIANGLE = 4


class _SmoothedValue:
    """A value that ramps linearly towards its target over a fixed number of steps."""

    def __init__(self, initial: float) -> None:
        self.current = initial
        self.target = initial
        self._steps_to_target = 0
        self._countdown = 0
        self._step = 0.0

    def reset(self, sample_rate: float, ramp_seconds: float) -> None:
        self._steps_to_target = int(math.floor(ramp_seconds * sample_rate))
        self.set_current_and_target(self.target)

    def set_current_and_target(self, value: float) -> None:
        self.current = value
        self.target = value
        self._countdown = 0

    def set_target(self, value: float) -> None:
        if value == self.target:
            return
        if self._steps_to_target <= 0:
            self.set_current_and_target(value)
            return
        self.target = value
        self._countdown = self._steps_to_target
        self._step = (self.target - self.current) / self._countdown

    @property
    def is_smoothing(self) -> bool:
        return self._countdown > 0

    def next_value(self) -> float:
        if not self.is_smoothing:
            return self.target
        self._countdown -= 1
        if self.is_smoothing:
            self.current += self._step
        else:
            self.current = self.target
        return self.current


class _Phase:
    """Phase accumulator wrapping within 0 to 2*pi."""

    def __init__(self) -> None:
        self.value = 0.0

    def reset(self) -> None:
        self.value = 0.0

    def advance(self, increment: float) -> float:
        last = self.value
        self.value += increment
        while self.value >= _TWO_PI:
            self.value -= _TWO_PI
        return last


def _lookup_table(
    func: Callable[[float], float], low: float, high: float, num_points: int
) -> Callable[[float], float]:
    if num_points < 2:
        raise ValueError("a lookup table needs at least two points")
    xs = np.linspace(low, high, num_points)
    ys = np.array([func(float(x)) for x in xs])
    return lambda x: float(np.interp(x, xs, ys))


def _polyblep_square(t: float, dt: float) -> float:
    if t < dt:
        t = t / dt - 1.0
        return -t * t
    if t > 1.0 - dt:
        t = (t - 1.0) / dt + 1.0
        return t * t
    return 0.0


def _polyblep_saw(t: float, dt: float) -> float:
    if t < dt:
        t /= dt
        return t + t - t * t - 1.0
    if t > 1.0 - dt:
        t = (t - 1.0) / dt
        return t * t + t + t + 1.0
    return 0.0


def _polyblamp(t: float, dt: float) -> float:
    if t < dt:
        t = t / dt - 1.0
        return t * t * t * -_ONE_THIRD * 4.0 * dt
    if t > 1.0 - dt:
        t = (t - 1.0) / dt + 1.0
        return _ONE_THIRD * t * t * t * 4.0 * dt
    return 0.0


def _naive_generator(waveform: Waveform) -> Callable[[float], float]:
    if waveform is Waveform.SINE:
        return math.sin
    if waveform is Waveform.SAW:
        return lambda x: x * _ONE_ON_PI - 1.0
    if waveform is Waveform.SQUARE:
        return lambda x: 1.0 if x < math.pi else -1.0
    return lambda x: 2.0 * (abs(x * _ONE_ON_PI - 1.0) - 0.5)


class PolyBlepOscillator:
    """Oscillator whose phase runs from 0 to 2*pi.

    With a non-zero lookup table size the sine waveform is approximated by
    linear interpolation in a table; other waveforms are always computed.
    Blocks are arrays of shape (channels, samples); every channel receives
    the same signal.
    """

    def __init__(self, waveform: Waveform, lookup_table_points: int = 0) -> None:
        self.waveform = Waveform(waveform)
        self._generator = _naive_generator(self.waveform)
        if self.waveform is Waveform.SINE and lookup_table_points != 0:
            self._generator = _lookup_table(
                self._generator, 0.0, _TWO_PI, lookup_table_points
            )
        self._frequency = _SmoothedValue(440.0)
        self._sample_rate = 48000.0
        self._one_on_sr = 1.0 / self._sample_rate
        self._phase = _Phase()
        self._max_block_size: int | None = None

    @property
    def frequency(self) -> float:
        """The target frequency of the oscillator."""
        return self._frequency.target

    def set_frequency(self, frequency: float, force: bool = False) -> None:
        """Set the frequency; unless forced it ramps there over 50 ms."""
        if force:
            self._frequency.set_current_and_target(float(frequency))
        else:
            self._frequency.set_target(float(frequency))

    def prepare(self, spec: ProcessSpec) -> None:
        """Prepare for the given sample rate and block size, then reset."""
        self._sample_rate = float(spec.sample_rate)
        self._max_block_size = int(spec.maximum_block_size)
        self._one_on_sr = 1.0 / self._sample_rate
        self.reset()

    def reset(self) -> None:
        """Reset the phase and stop any frequency ramp."""
        self._phase.reset()
        if self._sample_rate > 0:
            self._frequency.reset(self._sample_rate, 0.05)

    def _sample(self, norm_increment: float) -> float:
        ph = self._phase.advance(norm_increment * _TWO_PI)
        value = self._generator(ph)
        if self.waveform is Waveform.SINE:
            return value
        t = ph * _ONE_ON_TWO_PI
        if self.waveform is Waveform.SAW:
            value -= _polyblep_saw(t, norm_increment)
        elif self.waveform is Waveform.SQUARE:
            value += _polyblep_square(t, norm_increment)
            value -= _polyblep_square(math.fmod(t + 0.5, 1.0), norm_increment)
        else:
            value -= _polyblamp(t, norm_increment)
            value += _polyblamp(math.fmod(t + 0.5, 1.0), norm_increment)
        return value

    def process_sample(self) -> float:
        """Generate one sample."""
        return self._sample(self._frequency.next_value() / self._sample_rate)

    def process(self, block: np.ndarray) -> None:
        """Overwrite the (channels, samples) block with the next samples."""
        if not isinstance(block, np.ndarray) or block.ndim != 2:
            raise ValueError("block must be a 2-D array of shape (channels, samples)")
        num_channels, num_samples = block.shape
        if num_channels == 0:
            raise ValueError("block must have at least one channel")
        if self._max_block_size is not None and num_samples > self._max_block_size:
            raise ValueError("block is longer than the prepared maximum block size")

        if self._frequency.is_smoothing:
            values = [
                self._sample(self._one_on_sr * self._frequency.next_value())
                for _ in range(num_samples)
            ]
        else:
            norm_increment = self._one_on_sr * self._frequency.next_value()
            values = [self._sample(norm_increment) for _ in range(num_samples)]
        block[0, :] = values
        block[1:, :] = block[0, :]