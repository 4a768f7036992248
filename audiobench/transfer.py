"""Utilities for moving real-time audio data between producers and observers.

AudioProbe lets a single writer publish fixed-size frames that any number of
observers can copy out whenever they like, optionally being notified on each
write. FixedBlockProcessor re-blocks a stream of samples so that processing
always happens on blocks of a fixed size, whatever size the input arrives in.
"""

from __future__ import annotations

import abc
import weakref
from typing import Callable

import numpy as np

from audiobench.harness import ProcessSpec

ListenerCallback = Callable[[], None]
ListenerRemover = Callable[[], None]


class _Listener:
    """Holds one registered callback; identity distinguishes registrations."""

    __slots__ = ("callback",)

    def __init__(self, callback: ListenerCallback) -> None:
        self.callback = callback


class AudioProbe:
    """A small queue of frames: the writer fills one slot while readers copy another.

    Observers sample the most recently written frame; there is no guarantee
    that every frame is seen. Frames are one-dimensional float32 arrays of a
    fixed length.
    """

    def __init__(self, frame_length: int, queue_length: int = 3) -> None:
        if frame_length <= 0:
            raise ValueError("frame length must be positive")
        if queue_length < 2:
            raise ValueError("queue length must be at least 2")
        self._frame_length = int(frame_length)
        self._queue = np.zeros((int(queue_length), self._frame_length), dtype=np.float32)
        self._write_index = 1
        self._read_index = 0
        self._listeners: list[_Listener] = []

    @property
    def frame_length(self) -> int:
        """Number of samples in each frame."""
        return self._frame_length

    @property
    def queue_length(self) -> int:
        """Number of frames held in the queue."""
        return self._queue.shape[0]

    def write_frame(self, frame: np.ndarray) -> None:
        """Publish a frame and notify every listener."""
        data = np.asarray(frame, dtype=np.float32)
        if data.shape != (self._frame_length,):
            raise ValueError(
                f"frame must hold exactly {self._frame_length} samples, got shape {data.shape}"
            )
        self._queue[self._write_index] = data
        self._finished_write()

    def copy_frame(self) -> np.ndarray:
        """A copy of the most recently written frame (zeros before any write)."""
        return self._queue[self._read_index].copy()

    def add_listener(self, callback: ListenerCallback) -> ListenerRemover:
        """Register a callback run after every write; returns a function that removes it.

        The remover does nothing if the probe no longer exists or the callback
        has already been removed.
        """
        entry = _Listener(callback)
        self._listeners.insert(0, entry)
        probe_ref = weakref.ref(self)

        def remove() -> None:
            probe = probe_ref()
            if probe is None:
                return
            try:
                probe._listeners.remove(entry)
            except ValueError:
                pass

        return remove

    def has_listeners(self) -> bool:
        """True if at least one listener is registered."""
        return bool(self._listeners)

    def _finished_write(self) -> None:
        self._read_index = self._write_index
        self._write_index = (self._write_index + 1) % self.queue_length
        for entry in tuple(self._listeners):
            if entry.callback is not None:
                entry.callback()


class FixedBlockProcessor(abc.ABC):
    """Collects samples per channel and calls perform_processing() on each full block.

    The internal buffer always has room for the maximum block size; the
    current block size may be reduced later.
    """

    def __init__(self, maximum_block_size: int) -> None:
        if maximum_block_size <= 0:
            raise ValueError("maximum block size must be positive")
        self._max_block_size = int(maximum_block_size)
        self._current_block_size = self._max_block_size
        self._num_channels = 0
        self._buffer = np.zeros((0, self._max_block_size), dtype=np.float32)
        self._current_index = [0] * 0

    @property
    def num_channels(self) -> int:
        """Number of channels set by prepare()."""
        return self._num_channels

    @property
    def maximum_block_size(self) -> int:
        """The block size given at construction."""
        return self._max_block_size

    @property
    def current_block_size(self) -> int:
        """The block size at which processing currently happens."""
        return self._current_block_size

    @property
    def buffer(self) -> np.ndarray:
        """The internal (channels, maximum block size) buffer."""
        return self._buffer

    def prepare(self, spec: ProcessSpec) -> None:
        """Set the number of channels and clear the buffer; the spec's block size is ignored."""
        if spec.num_channels <= 0:
            raise ValueError("spec must have at least one channel")
        self._num_channels = int(spec.num_channels)
        self._buffer = np.zeros((self._num_channels, self._max_block_size), dtype=np.float32)
        self._current_index = [0] * self._num_channels

    def modify_current_block_size(self, size: int) -> None:
        """Change the block size; larger than the maximum is truncated. Pending data is dropped."""
        if size <= 0:
            raise ValueError("block size must be positive")
        self._current_block_size = min(int(size), self._max_block_size)
        self.reset_frame()

    def reset_frame(self) -> None:
        """Restart writing at the beginning of the block on every channel."""
        self._current_index = [0] * self._num_channels

    def append_data(self, channel: int, data: np.ndarray | None) -> None:
        """Append samples to a channel, processing each block as it fills."""
        if self._num_channels == 0:
            raise RuntimeError("prepare() must be called before appending data")
        if not 0 <= channel < self._num_channels:
            raise IndexError(f"channel out of range: {channel}")
        if data is None:
            return
        samples = np.asarray(data, dtype=np.float32).ravel()
        block = self._current_block_size
        index = self._current_index[channel]
        offset = 0
        while offset < samples.size:
            count = min(samples.size - offset, block - index)
            self._buffer[channel, index:index + count] = samples[offset:offset + count]
            index += count
            offset += count
            if index == block:
                self._current_index[channel] = index
                self.perform_processing(channel)
                index = 0
        self._current_index[channel] = index

    @abc.abstractmethod
    def perform_processing(self, channel: int) -> None:
        """Called whenever a channel's block has been filled."""