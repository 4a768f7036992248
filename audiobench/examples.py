"""Example processors: a biquad low-pass filter and a pass-through."""

from __future__ import annotations

import math

import numpy as np

from audiobench.harness import ProcessorHarness, ProcessSpec


def _check_block(block: np.ndarray) -> None:
    if not isinstance(block, np.ndarray) or block.ndim != 2:
        raise ValueError("block must be a 2-D array of shape (channels, samples)")


class LpfExample(ProcessorHarness):
    """Low-pass biquad; control 0 maps 0..1 logarithmically to 10 Hz..20 kHz,
    control 1 is a linear output gain."""

    def __init__(self) -> None:
        super().__init__(2)
        self._num_channels = 0
        self._freq_conversion_factor = 0.0
        self._z1 = np.zeros(0)
        self._z2 = np.zeros(0)
        self._init()

    def prepare(self, spec: ProcessSpec) -> None:
        self._num_channels = int(spec.num_channels)
        self._freq_conversion_factor = math.pi / spec.sample_rate
        self._z1 = np.zeros(self._num_channels)
        self._z2 = np.zeros(self._num_channels)

    def process(self, block: np.ndarray) -> None:
        _check_block(block)
        if block.shape[0] != self._num_channels:
            raise ValueError("block channel count differs from the prepared spec")
        self._calculate_coefficients()
        a0, a1, b1, b2 = self._a0, self._a1, self._b1, self._b2
        gain = self.control_value(1)
        for ch, channel in enumerate(block):
            z1 = float(self._z1[ch])
            z2 = float(self._z2[ch])
            out = []
            for x in channel.tolist():
                sample = x * a0 + z1
                z1 = x * a1 + z2 - b1 * sample
                z2 = x * a0 - b2 * sample
                out.append(float(np.float32(sample * gain)))
            channel[:] = out
            self._z1[ch] = z1
            self._z2[ch] = z2

    def reset(self) -> None:
        self._init()

    def processor_name(self) -> str:
        return "LPF"

    def control_name(self, index: int) -> str:
        return {0: "Frequency", 1: "Linear gain"}.get(index, f"Control {index}")

    def default_control_value(self, index: int) -> float:
        return {0: 0.75, 1: 1.0}.get(index, 0.0)

    def control_range(self, index: int) -> tuple[float, float]:
        return (0.0, 1.0)

    def _init(self) -> None:
        self._a0 = 1.0
        self._a1 = 0.0
        self._b1 = 0.0
        self._b2 = 0.0
        self._z1[:] = 0.0
        self._z2[:] = 0.0

    def _calculate_coefficients(self) -> None:
        freq = (
            10.0 ** (self.control_value(0) * 3.30103 + 1.0)
            * self._freq_conversion_factor
        )
        k = math.tan(freq)
        kk = k * k
        norm = 1.0 / (1.0 + k + kk)
        self._a0 = kk * norm
        self._a1 = 2.0 * self._a0
        self._b1 = 2.0 * (kk - 1.0) * norm
        self._b2 = (1.0 - k + kk) * norm


class ThruExample(ProcessorHarness):
    """Passes audio through unaltered."""

    def __init__(self) -> None:
        super().__init__(0)

    def prepare(self, spec: ProcessSpec) -> None:
        pass

    def process(self, block: np.ndarray) -> None:
        # Processing is in place, so the output already equals the input.
        _check_block(block)

    def reset(self) -> None:
        pass

    def processor_name(self) -> str:
        return "Thru"

    def control_name(self, index: int) -> str:
        return ""

    def default_control_value(self, index: int) -> float:
        return 0.0

    def control_range(self, index: int) -> tuple[float, float]:
        return (0.0, 1.0)