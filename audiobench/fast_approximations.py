"""Fast single-precision approximations of logarithms and exponentials.

The functions work on the IEEE 754 bit pattern of 32-bit floats and compute
in single precision; results are returned as Python floats.
"""

from __future__ import annotations

import numpy as np

_f32 = np.float32


def _bits(x: float) -> int:
    return int(np.array(x, dtype=np.float32).view(np.uint32))


def _from_bits(i: int) -> np.float32:
    return np.array(i, dtype=np.uint32).view(np.float32)[()]


def _to_uint32(value: np.float32) -> int:
    as_int = int(value)
    if not 0 <= as_int <= 0xFFFFFFFF:
        raise OverflowError("result out of single-precision range")
    return as_int


def fastlog2(x: float) -> float:
    """Approximate log2(x)."""
    vx = _bits(x)
    mx = _from_bits((vx & 0x007FFFFF) | 0x3F000000)
    y = _f32(vx) * _f32(1.1920928955078125e-7)
    return float(
        y
        - _f32(124.22551499)
        - _f32(1.498030302) * mx
        - _f32(1.72587999) / (_f32(0.3520887068) + mx)
    )


def fastlog(x: float) -> float:
    """Approximate natural logarithm."""
    return float(_f32(0.69314718) * _f32(fastlog2(x)))


def fastlog10(x: float) -> float:
    """Approximate base-10 logarithm."""
    return float(_f32(0.30103) * _f32(fastlog2(x)))


def fasterlog2(x: float) -> float:
    """Coarse approximation of log2(x)."""
    y = _f32(_bits(x)) * _f32(1.1920928955078125e-7)
    return float(y - _f32(126.94269504))


def fasterlog(x: float) -> float:
    """Coarse approximation of the natural logarithm."""
    y = _f32(_bits(x)) * _f32(8.2629582881927490e-8)
    return float(y - _f32(87.989971088))


def fasterlog10(x: float) -> float:
    """Coarse approximation of the base-10 logarithm."""
    y = _f32(_bits(x)) * _f32(3.5885571916577900e-08)
    return float(y - _f32(38.2135589375))


def fastpow2(p: float) -> float:
    """Approximate 2**p; arguments below -126 are clipped."""
    p = _f32(p)
    offset = _f32(1.0) if p < 0 else _f32(0.0)
    clipp = _f32(-126.0) if p < -126 else p
    w = int(clipp)
    z = clipp - _f32(w) + offset
    value = _f32(1 << 23) * (
        clipp
        + _f32(121.2740575)
        + _f32(27.7280233) / (_f32(4.84252568) - z)
        - _f32(1.49012907) * z
    )
    return float(_from_bits(_to_uint32(value)))


def fastexp(p: float) -> float:
    """Approximate e**p."""
    return fastpow2(float(_f32(1.442695040) * _f32(p)))


def fastpow10(p: float) -> float:
    """Approximate 10**p."""
    return fastpow2(float(_f32(3.321928095) * _f32(p)))


def fasterpow2(p: float) -> float:
    """Coarse approximation of 2**p; arguments below -126 are clipped."""
    p = _f32(p)
    clipp = _f32(-126.0) if p < -126 else p
    value = _f32(1 << 23) * (clipp + _f32(126.94269504))
    return float(_from_bits(_to_uint32(value)))


def fasterexp(p: float) -> float:
    """Coarse approximation of e**p."""
    return fasterpow2(float(_f32(1.442695040) * _f32(p)))


def fasterpow10(p: float) -> float:
    """Coarse approximation of 10**p."""
    return fasterpow2(float(_f32(3.321928095) * _f32(p)))