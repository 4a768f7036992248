import math

import pytest

from audiobench import fast_approximations as fa

POSITIVES = [1e-6, 0.01, 0.3, 1.0, 2.0, 3.7, 10.0, 1000.0, 123456.0]
EXPONENTS = [-20.0, -5.5, -1.0, -0.3, 0.0, 0.5, 1.0, 7.25, 20.0]


@pytest.mark.parametrize("x", POSITIVES)
def test_fast_logs_are_close(x):
    assert fa.fastlog2(x) == pytest.approx(math.log2(x), abs=1e-3)
    assert fa.fastlog(x) == pytest.approx(math.log(x), abs=1e-3)
    assert fa.fastlog10(x) == pytest.approx(math.log10(x), abs=1e-3)


@pytest.mark.parametrize("x", POSITIVES)
def test_faster_logs_are_roughly_close(x):
    assert fa.fasterlog2(x) == pytest.approx(math.log2(x), abs=0.1)
    assert fa.fasterlog(x) == pytest.approx(math.log(x), abs=0.1)
    assert fa.fasterlog10(x) == pytest.approx(math.log10(x), abs=0.05)


@pytest.mark.parametrize("p", EXPONENTS)
def test_fast_pows_are_close(p):
    assert fa.fastpow2(p) == pytest.approx(2.0 ** p, rel=1e-3)
    assert fa.fastexp(p / 4) == pytest.approx(math.exp(p / 4), rel=1e-3)
    assert fa.fastpow10(p / 4) == pytest.approx(10.0 ** (p / 4), rel=1e-3)


@pytest.mark.parametrize("p", EXPONENTS)
def test_faster_pows_are_roughly_close(p):
    assert fa.fasterpow2(p) == pytest.approx(2.0 ** p, rel=0.1)
    assert fa.fasterexp(p / 4) == pytest.approx(math.exp(p / 4), rel=0.1)
    assert fa.fasterpow10(p / 4) == pytest.approx(10.0 ** (p / 4), rel=0.1)


def test_fastpow2_underflow_is_clipped():
    clipped = fa.fastpow2(-126.0)
    assert clipped > 0.0
    assert fa.fastpow2(-1000.0) == clipped
    assert fa.fasterpow2(-500.0) == fa.fasterpow2(-126.0)


def test_log_and_pow_round_trip():
    for x in POSITIVES:
        assert fa.fastpow2(fa.fastlog2(x)) == pytest.approx(x, rel=2e-3)


def test_fastlog2_is_monotonic():
    values = [fa.fastlog2(x) for x in POSITIVES]
    assert values == sorted(values)


def test_fastpow2_is_monotonic():
    values = [fa.fastpow2(p) for p in EXPONENTS]
    assert values == sorted(values)


def test_fasterlog2_scaled_versions_agree():
    for x in POSITIVES:
        assert fa.fasterlog(x) == pytest.approx(math.log(2) * fa.fasterlog2(x), abs=1e-3)


def test_pow_overflow_raises():
    with pytest.raises(OverflowError):
        fa.fasterpow2(1000.0)