"""Base class for audio processors with control values and timing statistics."""

from __future__ import annotations

import abc
import dataclasses
import enum
import math
import time
from dataclasses import dataclass
from typing import Any, Callable


@dataclass(frozen=True)
class ProcessSpec:
    """Describes the audio stream a processor is prepared for."""

    sample_rate: float = 0.0
    maximum_block_size: int = 0
    num_channels: int = 0


class Routine(enum.IntEnum):
    """The harnessed routines whose durations are measured."""

    PREPARE = 0
    PROCESS = 1
    RESET = 2


@dataclass
class DurationStats:
    """Running minimum, maximum, sum and count of durations in milliseconds."""

    minimum: float = 1.0e100
    maximum: float = -1.0
    total: float = 0.0
    count: int = 0

    def record(self, duration: float) -> None:
        """Add one measured duration."""
        if duration < self.minimum:
            self.minimum = duration
        if duration > self.maximum:
            self.maximum = duration
        self.total += duration
        self.count += 1

    def average(self) -> float:
        """Mean duration, or NaN when nothing has been recorded."""
        if self.count == 0:
            return math.nan
        return self.total / self.count

    def clear(self) -> None:
        """Return to the empty state."""
        self.minimum = 1.0e100
        self.maximum = -1.0
        self.total = 0.0
        self.count = 0


_NUM_QUERY_VALUES = 4


def _check_query(routine_index: int, value_index: int) -> None:
    if not 0 <= routine_index < len(Routine):
        raise IndexError(f"routine index out of range: {routine_index}")
    if not 0 <= value_index < _NUM_QUERY_VALUES:
        raise IndexError(f"value index out of range: {value_index}")


class ProcessorHarness(abc.ABC):
    """Subclass this and implement the abstract methods to build a processor.

    The *_harness methods wrap prepare, process and reset and keep timing
    statistics for each of them.
    """

    def __init__(self, num_controls: int) -> None:
        self._control_values = [0.0] * num_controls
        self._spec = ProcessSpec()
        self._stats = {routine: DurationStats() for routine in Routine}

    # -- to be implemented by subclasses ---------------------------------

    @abc.abstractmethod
    def prepare(self, spec: ProcessSpec) -> None:
        """Prepare for processing with the given spec."""

    @abc.abstractmethod
    def process(self, block: Any) -> None:
        """Process a block of audio in place."""

    @abc.abstractmethod
    def reset(self) -> None:
        """Reset the processing state."""

    @abc.abstractmethod
    def processor_name(self) -> str:
        """Name of the processor."""

    @abc.abstractmethod
    def control_name(self, index: int) -> str:
        """Name of a control."""

    @abc.abstractmethod
    def default_control_value(self, index: int) -> float:
        """Default value of a control."""

    @abc.abstractmethod
    def control_range(self, index: int) -> tuple[float, float]:
        """(low, high) range of a control."""

    # -- harness ---------------------------------------------------------

    def _timed(self, routine: Routine, func: Callable[..., None], *args: Any) -> None:
        start = time.perf_counter()
        func(*args)
        duration = (time.perf_counter() - start) * 1000.0
        self._stats[routine].record(duration)

    def prepare_harness(self, spec: ProcessSpec) -> None:
        """Call prepare() and time it; a changed spec invalidates process statistics."""
        current = self._spec
        if (
            current.num_channels != spec.num_channels
            or int(current.sample_rate) != int(spec.sample_rate)
            or current.maximum_block_size != spec.maximum_block_size
        ):
            self._stats[Routine.PROCESS] = DurationStats(minimum=0.0, maximum=0.0)
        self._spec = spec
        self._timed(Routine.PREPARE, self.prepare, spec)

    def process_harness(self, block: Any) -> None:
        """Call process() and time it."""
        self._timed(Routine.PROCESS, self.process, block)

    def reset_harness(self) -> None:
        """Call reset() and time it."""
        self._timed(Routine.RESET, self.reset)

    # -- controls --------------------------------------------------------

    def num_controls(self) -> int:
        """Number of control values."""
        return len(self._control_values)

    def _check_control(self, index: int) -> None:
        if not 0 <= index < len(self._control_values):
            raise IndexError(f"control index out of range: {index}")

    def set_control_value(self, index: int, value: float) -> None:
        """Set a control value."""
        self._check_control(index)
        self._control_values[index] = float(value)

    def control_value(self, index: int) -> float:
        """Get a control value."""
        self._check_control(index)
        return self._control_values[index]

    @property
    def current_spec(self) -> ProcessSpec:
        """The spec most recently passed to prepare_harness()."""
        return self._spec

    # -- statistics ------------------------------------------------------

    def statistics(self, routine: Routine) -> DurationStats:
        """A snapshot of the duration statistics for one routine."""
        return dataclasses.replace(self._stats[Routine(routine)])

    def query_by_index(self, routine_index: int, value_index: int) -> float:
        """Min, average, max or count (value index 0..3) for a routine (0..2)."""
        _check_query(routine_index, value_index)
        stats = self._stats[Routine(routine_index)]
        values = (stats.minimum, stats.average(), stats.maximum, float(stats.count))
        return values[value_index]

    @staticmethod
    def query_index(routine_index: int, value_index: int) -> int:
        """Flat index of a (routine, value) pair."""
        _check_query(routine_index, value_index)
        return routine_index * _NUM_QUERY_VALUES + value_index

    def reset_statistics(self) -> None:
        """Clear the statistics of every routine."""
        for stats in self._stats.values():
            stats.clear()