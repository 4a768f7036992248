import math

import numpy as np
import pytest

from audiobench.harness import ProcessSpec
from audiobench.polyblep import PolyBlepOscillator, Waveform


def _prepared(waveform, sample_rate, frequency, block_size=1024, channels=2, points=0):
    osc = PolyBlepOscillator(waveform, points)
    osc.prepare(ProcessSpec(sample_rate, block_size, channels))
    osc.set_frequency(frequency, force=True)
    return osc


def test_sine_quarter_period_samples():
    osc = _prepared(Waveform.SINE, 4, 1.0, block_size=4)
    block = np.zeros((2, 4))
    osc.process(block)
    assert block[0] == pytest.approx([0.0, 1.0, 0.0, -1.0], abs=1e-12)
    assert np.array_equal(block[0], block[1])


def test_sine_matches_math_sin():
    osc = _prepared(Waveform.SINE, 48000, 1000.0, channels=1)
    block = np.zeros((1, 200))
    osc.process(block)
    expected = [math.sin(2 * math.pi * 1000.0 * n / 48000) for n in range(200)]
    assert block[0] == pytest.approx(expected, abs=1e-9)


def test_lookup_table_sine_is_close_to_sine():
    osc = _prepared(Waveform.SINE, 48000, 1000.0, channels=1, points=1024)
    block = np.zeros((1, 200))
    osc.process(block)
    expected = [math.sin(2 * math.pi * 1000.0 * n / 48000) for n in range(200)]
    assert block[0] == pytest.approx(expected, abs=1e-4)


def test_lookup_table_needs_two_points():
    with pytest.raises(ValueError):
        PolyBlepOscillator(Waveform.SINE, 1)


@pytest.mark.parametrize("waveform", [Waveform.SAW, Waveform.SQUARE])
def test_discontinuity_starts_at_midpoint(waveform):
    osc = _prepared(waveform, 1000, 10.0, channels=1)
    block = np.zeros((1, 10))
    osc.process(block)
    assert block[0, 0] == pytest.approx(0.0, abs=1e-12)


def test_square_is_flat_away_from_edges():
    osc = _prepared(Waveform.SQUARE, 1000, 10.0, channels=1)
    block = np.zeros((1, 100))
    osc.process(block)
    assert block[0, 25] == pytest.approx(1.0)
    assert block[0, 75] == pytest.approx(-1.0)


@pytest.mark.parametrize("waveform", list(Waveform))
def test_output_is_bounded_and_centred(waveform):
    osc = _prepared(waveform, 1000, 10.0, channels=1)
    block = np.zeros((1, 1000))
    osc.process(block)
    assert np.max(np.abs(block)) <= 1.05
    assert abs(float(np.mean(block))) < 0.05


@pytest.mark.parametrize("waveform", list(Waveform))
def test_block_matches_sample_by_sample(waveform):
    a = _prepared(waveform, 1000, 37.0, channels=1)
    b = _prepared(waveform, 1000, 37.0, channels=1)
    block = np.zeros((1, 300))
    a.process(block)
    samples = [b.process_sample() for _ in range(300)]
    assert block[0] == pytest.approx(samples, rel=1e-9, abs=1e-9)


def test_smoothed_frequency_change():
    a = _prepared(Waveform.SAW, 1000, 440.0, channels=1, block_size=100)
    b = _prepared(Waveform.SAW, 1000, 440.0, channels=1, block_size=100)
    a.set_frequency(200.0)
    b.set_frequency(200.0)
    assert a.frequency == 200.0
    block = np.zeros((1, 60))
    a.process(block)
    samples = [b.process_sample() for _ in range(60)]
    assert block[0] == pytest.approx(samples, rel=1e-9, abs=1e-9)


def test_reset_restarts_phase():
    osc = _prepared(Waveform.SINE, 1000, 50.0, channels=1)
    first = np.zeros((1, 64))
    osc.process(first)
    osc.reset()
    second = np.zeros((1, 64))
    osc.process(second)
    assert np.array_equal(first, second)


def test_block_longer_than_prepared_raises():
    osc = _prepared(Waveform.SINE, 1000, 50.0, block_size=16)
    with pytest.raises(ValueError):
        osc.process(np.zeros((2, 32)))


def test_block_without_channels_raises():
    osc = _prepared(Waveform.SINE, 1000, 50.0)
    with pytest.raises(ValueError):
        osc.process(np.zeros((0, 8)))