"""Parametric equaliser processor (currently passes audio through)."""

from __future__ import annotations

import enum

import numpy as np

from audiobench.harness import ProcessorHarness, ProcessSpec


class Control(enum.IntEnum):
    """Indices of the equaliser's controls."""

    FREQUENCY = 0
    GAIN = 1


_NAMES = {Control.FREQUENCY: "Frequency", Control.GAIN: "Gain"}
_DEFAULTS = {Control.FREQUENCY: 440.0, Control.GAIN: 0.0}
_RANGES = {Control.FREQUENCY: (20.0, 20000.0), Control.GAIN: (-36.0, 36.0)}


class ParametricEQ(ProcessorHarness):
    """Equaliser with frequency and gain controls; audio is passed through unaltered."""

    def __init__(self) -> None:
        super().__init__(len(Control))
        self.num_channels = 0

    def prepare(self, spec: ProcessSpec) -> None:
        self.num_channels = int(spec.num_channels)

    def process(self, block: np.ndarray) -> None:
        # Processing is in place, so the output already equals the input.
        if not isinstance(block, np.ndarray) or block.ndim != 2:
            raise ValueError("block must be a 2-D array of shape (channels, samples)")

    def reset(self) -> None:
        pass

    def processor_name(self) -> str:
        return "PEQ"

    def control_name(self, index: int) -> str:
        return _NAMES.get(index, "")

    def default_control_value(self, index: int) -> float:
        return _DEFAULTS.get(index, 0.0)

    def control_range(self, index: int) -> tuple[float, float]:
        return _RANGES.get(index, (0.0, 1.0))