"""Fixed-size frames of raw audio for an oscilloscope display."""

from __future__ import annotations

import numpy as np

from audiobench.harness import ProcessSpec
from audiobench.transfer import AudioProbe, FixedBlockProcessor, ListenerCallback, ListenerRemover

FRAME_SIZE = 4096


class AudioScopeProcessor(FixedBlockProcessor):
    """Re-blocks audio into frames of FRAME_SIZE samples and publishes them per channel."""

    def __init__(self) -> None:
        super().__init__(FRAME_SIZE)
        self._probes: list[AudioProbe] = []

    def prepare(self, spec: ProcessSpec) -> None:
        """Set up the buffer and one probe per channel; existing listeners are dropped."""
        super().prepare(spec)
        self._probes = [AudioProbe(FRAME_SIZE) for _ in range(spec.num_channels)]

    def perform_processing(self, channel: int) -> None:
        """Publish the channel's filled buffer."""
        self._probes[channel].write_frame(self.buffer[channel])

    def copy_frame(self, channel: int) -> np.ndarray:
        """A copy of the latest frame of a channel."""
        if not 0 <= channel < len(self._probes):
            raise IndexError(f"channel out of range: {channel}")
        return self._probes[channel].copy_frame()

    def add_listener(self, callback: ListenerCallback) -> ListenerRemover:
        """Listen to frames of the last channel; must be called after prepare()."""
        if self.num_channels <= 0 or len(self._probes) != self.num_channels:
            raise RuntimeError("prepare() must be called before adding listeners")
        return self._probes[-1].add_listener(callback)