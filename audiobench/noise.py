"""Pseudo-random number generation and white/pink noise generators."""

from __future__ import annotations

import numpy as np

_MULTIPLIER = 16807
_MODULUS = 0x7FFFFFFF
_MASK32 = 0xFFFFFFFF


class Rand31:
    """Park-Miller "minimal standard" generator using Carta's method.

    Outputs 31-bit integers in the range 1 to 2**31 - 2; the sequence
    repeats after 2**31 - 2 values. A seed of zero is replaced by one.
    """

    def __init__(self, seed: int = 1) -> None:
        self._seed = 1
        self.reseed(seed)

    @property
    def seed(self) -> int:
        """The current state, which is also the last value returned."""
        return self._seed

    def reseed(self, value: int) -> None:
        """Set the state; zero becomes one."""
        value &= _MASK32
        self._seed = value if value != 0 else 1

    def next_int(self) -> int:
        """Next pseudo-random value as an integer."""
        seed = self._seed
        lo = (_MULTIPLIER * (seed & 0xFFFF)) & _MASK32
        hi = (_MULTIPLIER * (seed >> 16)) & _MASK32
        lo = (lo + ((hi & 0x7FFF) << 16)) & _MASK32
        lo = (lo + (hi >> 15)) & _MASK32
        if lo > _MODULUS:
            lo -= _MODULUS
        self._seed = lo
        return lo

    def rand(self) -> float:
        """Next value as a double in the range 0 to 1."""
        return self.next_int() * 4.656612875245796924105750827168e-10

    def rand2(self) -> float:
        """Next value as a double in the range -1 to 1."""
        return self.next_int() * 9.31322574615478515625e-10 - 1.0

    def ranf(self) -> float:
        """Next value in the range 0 to 1, rounded to single precision."""
        return float(np.float32(self.rand()))

    def ranf2(self) -> float:
        """Next value in the range -1 to 1, rounded to single precision."""
        return float(np.float32(self.rand2()))


def _check_block(block: np.ndarray) -> None:
    if not isinstance(block, np.ndarray) or block.ndim != 2:
        raise ValueError("block must be a 2-D array of shape (channels, samples)")


class WhiteNoiseGenerator:
    """Fills every channel with different uniform white noise."""

    def __init__(self) -> None:
        self._prng = Rand31()

    def process(self, block: np.ndarray) -> None:
        """Overwrite the (channels, samples) block with noise, channel by channel."""
        _check_block(block)
        values = [self._prng.ranf2() for _ in range(block.size)]
        block[...] = np.asarray(values, dtype=np.float32).reshape(block.shape)

    def reset(self) -> None:
        """Restart the noise sequence from its beginning."""
        self._prng.reseed(1)


class PinkNoiseGenerator:
    """Pink noise made by filtering white noise with a weighted sum of first-order filters.

    Samples may very occasionally fall outside -1 to +1.
    """

    _SCALE = np.float32(0.12348)

    def __init__(self) -> None:
        self._prng = Rand31()
        self._b = [0.0] * 7

    def _next(self) -> np.float32:
        white = self._prng.rand2()
        b = self._b
        b[0] = 0.99886 * b[0] + white * 0.0555179
        b[1] = 0.99332 * b[1] + white * 0.0750759
        b[2] = 0.96900 * b[2] + white * 0.1538520
        b[3] = 0.86650 * b[3] + white * 0.3104856
        b[4] = 0.55000 * b[4] + white * 0.5329522
        b[5] = -0.7616 * b[5] - white * 0.0168980
        value = np.float32(b[0] + b[1] + b[2] + b[3] + b[4] + b[5] + b[6] + white * 0.5362)
        b[6] = white * 0.115926
        return value * self._SCALE

    def process(self, block: np.ndarray) -> None:
        """Overwrite the (channels, samples) block with noise, channel by channel."""
        _check_block(block)
        values = [self._next() for _ in range(block.size)]
        block[...] = np.asarray(values, dtype=np.float32).reshape(block.shape)