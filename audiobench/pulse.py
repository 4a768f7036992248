"""Impulse and step test signal generators."""

from __future__ import annotations

import numpy as np

from audiobench.harness import ProcessSpec

_SIZE_MAX = 2**64 - 1


class PulseFunction:
    """Output-only generator of a single rectangular pulse after a pre-delay.

    Blocks are arrays of shape (channels, samples) and are overwritten in
    place; every channel receives the same signal.
    """

    def __init__(self) -> None:
        self._sample_index = 0
        self._pre_delay = 100
        self._pulse_width = 1
        self.positive_polarity = True

    @property
    def pre_delay(self) -> int:
        """Samples of silence before the pulse starts."""
        return self._pre_delay

    @pre_delay.setter
    def pre_delay(self, num_samples: int) -> None:
        self._pre_delay = int(num_samples)

    @property
    def pulse_width(self) -> int:
        """Length of the pulse in samples."""
        return self._pulse_width

    @pulse_width.setter
    def pulse_width(self, num_samples: int) -> None:
        self._pulse_width = int(num_samples)

    @property
    def sample_index(self) -> int:
        """Number of samples generated since the last prepare or reset."""
        return self._sample_index

    def prepare(self, spec: ProcessSpec) -> None:
        """Restart the signal."""
        self._sample_index = 0

    def reset(self) -> None:
        """Restart the signal."""
        self._sample_index = 0

    def process(self, block: np.ndarray) -> None:
        """Overwrite the (channels, samples) block with the next part of the signal."""
        if not isinstance(block, np.ndarray) or block.ndim != 2:
            raise ValueError("block must be a 2-D array of shape (channels, samples)")
        num_channels, num_samples = block.shape
        if num_channels > 0:
            pulse_value = 1.0 if self.positive_polarity else -1.0
            end = self._pre_delay + self._pulse_width
            start_offset = min(max(self._pre_delay - self._sample_index, 0), num_samples)
            stop_offset = min(max(end - self._sample_index, 0), num_samples)
            block[...] = 0.0
            block[:, start_offset:stop_offset] = pulse_value
        self._sample_index += num_samples


class ImpulseFunction(PulseFunction):
    """A pulse one sample wide by default."""


class StepFunction(PulseFunction):
    """A pulse that never ends; the pre-delay is at least one sample."""

    def __init__(self) -> None:
        super().__init__()
        self._pulse_width = _SIZE_MAX - self._pre_delay

    @property
    def pre_delay(self) -> int:
        """Samples of silence before the step; at least one."""
        return self._pre_delay

    @pre_delay.setter
    def pre_delay(self, num_samples: int) -> None:
        self._pre_delay = max(1, int(num_samples))
        self._pulse_width = _SIZE_MAX - self._pre_delay

    @property
    def pulse_width(self) -> int:
        """Width of the step; fixed to run to the end of the counter range."""
        return self._pulse_width

    @pulse_width.setter
    def pulse_width(self, num_samples: int) -> None:
        # The width of a step cannot be changed.
        pass