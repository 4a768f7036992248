import numpy as np
import pytest

from audiobench.harness import ProcessSpec, Routine
from audiobench.parametric_eq import Control, ParametricEQ


def test_description():
    eq = ParametricEQ()
    assert eq.processor_name() == "PEQ"
    assert eq.num_controls() == 2
    assert eq.control_name(Control.FREQUENCY) == "Frequency"
    assert eq.control_name(Control.GAIN) == "Gain"
    assert eq.control_name(9) == ""


def test_defaults_and_ranges():
    eq = ParametricEQ()
    assert eq.default_control_value(Control.FREQUENCY) == 440.0
    assert eq.default_control_value(Control.GAIN) == 0.0
    assert eq.default_control_value(4) == 0.0
    assert eq.control_range(Control.FREQUENCY) == (20.0, 20000.0)
    assert eq.control_range(Control.GAIN) == (-36.0, 36.0)
    assert eq.control_range(4) == (0.0, 1.0)


def test_defaults_lie_within_ranges():
    eq = ParametricEQ()
    for control in Control:
        low, high = eq.control_range(control)
        assert low <= eq.default_control_value(control) <= high


def test_prepare_records_channels():
    eq = ParametricEQ()
    eq.prepare_harness(ProcessSpec(44100, 256, 3))
    assert eq.num_channels == 3
    assert eq.current_spec.num_channels == 3
    assert eq.statistics(Routine.PREPARE).count == 1


def test_process_passes_audio_through():
    eq = ParametricEQ()
    eq.prepare(ProcessSpec(44100, 64, 2))
    data = np.random.default_rng(7).standard_normal((2, 64)).astype(np.float32)
    block = data.copy()
    eq.process_harness(block)
    assert np.array_equal(block, data)


def test_control_values_round_trip():
    eq = ParametricEQ()
    eq.set_control_value(Control.FREQUENCY, 1000.0)
    eq.set_control_value(Control.GAIN, -6.0)
    assert eq.control_value(Control.FREQUENCY) == 1000.0
    assert eq.control_value(Control.GAIN) == -6.0


def test_control_index_out_of_range():
    eq = ParametricEQ()
    with pytest.raises(IndexError):
        eq.set_control_value(2, 1.0)


def test_process_rejects_non_block():
    with pytest.raises(ValueError):
        ParametricEQ().process(np.zeros(16))