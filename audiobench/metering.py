"""Peak, VU and clip-counting meters."""

from __future__ import annotations

import math

import numpy as np

from audiobench.harness import ProcessSpec

_ANTI_DENORMAL = 1e-15
_NO_SIGNAL_DB = -150.0
_MINUS_INFINITY_DB = -100.0


def _gain_to_db(gain: float) -> float:
    if gain > 0.0:
        return max(_MINUS_INFINITY_DB, 20.0 * math.log10(gain))
    return _MINUS_INFINITY_DB


def _check_block(block: np.ndarray, num_channels: int) -> None:
    if not isinstance(block, np.ndarray) or block.ndim != 2:
        raise ValueError("block must be a 2-D array of shape (channels, samples)")
    if block.shape[0] != num_channels:
        raise ValueError("block channel count differs from the prepared spec")


class PeakMeterProcessor:
    """Peak envelope with instant attack and a 650 ms release."""

    def __init__(self) -> None:
        self.num_channels = 0
        self._envelope: list[float] = []
        self._release = 0.0

    def level(self, channel: int) -> float:
        """Envelope level of a channel; 0 for an unknown channel."""
        if 0 <= channel < self.num_channels:
            return self._envelope[channel]
        return 0.0

    def level_db(self, channel: int) -> float:
        """Envelope level in decibels; -150 for an unknown channel."""
        if 0 <= channel < self.num_channels:
            return _gain_to_db(self._envelope[channel])
        return _NO_SIGNAL_DB

    def prepare(self, spec: ProcessSpec) -> None:
        """Clear the envelopes and compute the release constant."""
        self.num_channels = int(spec.num_channels)
        self._envelope = [0.0] * self.num_channels
        release_time = 0.650 * float(spec.sample_rate)
        self._release = float(np.float32(1.0 - math.exp(-1.0 / release_time)))

    def process(self, block: np.ndarray) -> None:
        """Update the envelopes from a (channels, samples) block; the block is not changed."""
        _check_block(block, self.num_channels)
        release = self._release
        for ch, channel in enumerate(block):
            env = self._envelope[ch]
            for sample in channel.tolist():
                x = abs(sample) + _ANTI_DENORMAL
                if x > env:
                    env = x
                else:
                    env += release * (x - env)
            self._envelope[ch] = float(np.float32(env))

    def reset(self) -> None:
        """Zero the envelopes."""
        self._envelope = [0.0] * self.num_channels


class VUMeterProcessor:
    """RMS envelope with equal 600 ms attack and release."""

    def __init__(self) -> None:
        self.num_channels = 0
        self._envelope: list[float] = []
        self._time_constant = 0.0

    def level(self, channel: int) -> float:
        """RMS level of a channel; 0 for an unknown channel."""
        if 0 <= channel < self.num_channels:
            return math.sqrt(self._envelope[channel])
        return 0.0

    def level_db(self, channel: int) -> float:
        """RMS level in decibels; -150 for an unknown channel."""
        if 0 <= channel < self.num_channels:
            return _gain_to_db(math.sqrt(self._envelope[channel]))
        return _NO_SIGNAL_DB

    def prepare(self, spec: ProcessSpec) -> None:
        """Clear the envelopes and compute the time constant."""
        self.num_channels = int(spec.num_channels)
        self._envelope = [0.0] * self.num_channels
        response_time = 0.600 * float(spec.sample_rate)
        self._time_constant = float(np.float32(1.0 - math.exp(-1.0 / response_time)))

    def process(self, block: np.ndarray) -> None:
        """Update the envelopes from a (channels, samples) block; the block is not changed."""
        _check_block(block, self.num_channels)
        tc = self._time_constant
        floor = _ANTI_DENORMAL * _ANTI_DENORMAL
        for ch, channel in enumerate(block):
            env = self._envelope[ch]
            for sample in channel.tolist():
                x = sample * sample + floor
                env += tc * (x - env)
            self._envelope[ch] = float(np.float32(env))

    def reset(self) -> None:
        """Zero the envelopes."""
        self._envelope = [0.0] * self.num_channels


class ClipCounterProcessor:
    """Counts samples beyond full scale and the runs they form, across blocks."""

    def __init__(self) -> None:
        self.num_channels = 0
        self._events: list[int] = []
        self._max_length: list[int] = []
        self._clipped: list[int] = []
        self._run: list[int] = []

    def _valid(self, channel: int) -> bool:
        return 0 <= channel < self.num_channels

    def num_clip_events(self, channel: int) -> int:
        """Number of clip events; 0 for an unknown channel."""
        return self._events[channel] if self._valid(channel) else 0

    def avg_clip_length(self, channel: int) -> float:
        """Clipped samples per clip event; 0 when there are none."""
        if self._valid(channel) and self._events[channel] > 0:
            return self._clipped[channel] / self._events[channel]
        return 0.0

    def max_clip_length(self, channel: int) -> int:
        """Longest clip run seen so far, updated while a run continues."""
        return self._max_length[channel] if self._valid(channel) else 0

    def num_clipped_samples(self, channel: int) -> int:
        """Total number of clipped samples; 0 for an unknown channel."""
        return self._clipped[channel] if self._valid(channel) else 0

    def prepare(self, spec: ProcessSpec) -> None:
        """Set the channel count and clear all counts."""
        self.num_channels = int(spec.num_channels)
        self.reset()

    def process(self, block: np.ndarray) -> None:
        """Count clipping in a (channels, samples) block; the block is not changed."""
        _check_block(block, self.num_channels)
        for ch, channel in enumerate(block):
            run = self._run[ch]
            for sample in channel.tolist():
                if sample > 1.0 or sample < -1.0:
                    self._clipped[ch] += 1
                    if run == 0:
                        self._events[ch] += 1
                    elif run > self._max_length[ch]:
                        self._max_length[ch] = run
                    run += 1
                else:
                    run = 0
            self._run[ch] = run

    def reset(self) -> None:
        """Clear all counts."""
        n = self.num_channels
        self._events = [0] * n
        self._max_length = [0] * n
        self._clipped = [0] * n
        self._run = [0] * n