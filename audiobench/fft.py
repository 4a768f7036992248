"""Magnitude spectra computed on fixed-size blocks of audio."""

from __future__ import annotations

from typing import Any

import numpy as np

from audiobench.harness import ProcessSpec
from audiobench.transfer import AudioProbe, FixedBlockProcessor, ListenerCallback, ListenerRemover


def _hann_window(size: int) -> np.ndarray:
    """Symmetric Hann window normalised so that its samples sum to its length."""
    n = np.arange(size, dtype=np.float64)
    window = 0.5 - 0.5 * np.cos(2.0 * np.pi * n / (size - 1))
    window *= size / window.sum()
    return window.astype(np.float32)


class FftProcessor(FixedBlockProcessor):
    """Re-blocks audio into frames of 2**order samples and publishes their spectra.

    Each filled block is windowed, transformed, and its magnitudes scaled so
    that a sinusoid of amplitude A shows a peak of about A. An optional
    envelope adds a decaying copy of the previous frame to each new one.
    The magnitude transform leaves the upper half of its work buffer at zero,
    and that half is what the phase frame carries.
    """

    def __init__(self, order: int) -> None:
        if order < 1:
            raise ValueError("order must be at least 1")
        size = 1 << int(order)
        super().__init__(size)
        self._order = int(order)
        self._size = size
        self._window = np.ones(size, dtype=np.float32)
        self._correction = np.float32(0.0)
        self._envelope = np.zeros((0, size), dtype=np.float32)
        self._freq_probes: list[AudioProbe] = []
        self._phase_probes: list[AudioProbe] = []
        self.amplitude_envelope_enabled = False
        self.amplitude_envelope_release_constant = 0.0
        self.set_windowing_method("hann")

    @property
    def order(self) -> int:
        """Base-2 logarithm of the transform size."""
        return self._order

    @property
    def size(self) -> int:
        """Number of samples in each transform."""
        return self._size

    @property
    def window(self) -> np.ndarray:
        """A copy of the window applied before each transform."""
        return self._window.copy()

    def prepare(self, spec: ProcessSpec) -> None:
        """Set up buffers, envelopes and probes per channel; existing listeners are dropped."""
        super().prepare(spec)
        channels = int(spec.num_channels)
        self._envelope = np.zeros((channels, self._size), dtype=np.float32)
        self._freq_probes = [AudioProbe(self._size) for _ in range(channels)]
        self._phase_probes = [AudioProbe(self._size) for _ in range(channels)]

    def perform_processing(self, channel: int) -> None:
        """Transform the channel's filled buffer and publish the result."""
        windowed = self.buffer[channel, : self._size] * self._window
        magnitudes = np.abs(np.fft.fft(windowed)).astype(np.float32)
        magnitudes *= self._correction
        upper_half = np.zeros(self._size, dtype=np.float32)

        if self.amplitude_envelope_enabled:
            release = np.float32(self.amplitude_envelope_release_constant)
            magnitudes = magnitudes + self._envelope[channel] * release
            self._envelope[channel] = magnitudes

        self._freq_probes[channel].write_frame(magnitudes)
        self._phase_probes[channel].write_frame(upper_half)

    def _check_channel(self, channel: int) -> None:
        if not 0 <= channel < len(self._freq_probes):
            raise IndexError(f"channel out of range: {channel}")

    def copy_frequency_frame(self, channel: int) -> np.ndarray:
        """A copy of the latest magnitude frame of a channel."""
        self._check_channel(channel)
        return self._freq_probes[channel].copy_frame()

    def copy_phase_frame(self, channel: int) -> np.ndarray:
        """A copy of the latest phase frame of a channel."""
        self._check_channel(channel)
        return self._phase_probes[channel].copy_frame()

    def set_windowing_method(self, method: Any) -> None:
        """Recompute the window and amplitude correction; every method yields a Hann window."""
        self._window = _hann_window(self._size)
        integral = float(np.sum(self._window, dtype=np.float32))
        self._correction = np.float32(2.0 / integral)

    def add_listener(self, callback: ListenerCallback) -> ListenerRemover:
        """Listen to phase frames of the last channel; must be called after prepare()."""
        if self.num_channels <= 0 or len(self._phase_probes) != self.num_channels:
            raise RuntimeError("prepare() must be called before adding listeners")
        return self._phase_probes[-1].add_listener(callback)