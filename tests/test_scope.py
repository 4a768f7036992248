import numpy as np
import pytest

from audiobench.harness import ProcessSpec
from audiobench.scope import FRAME_SIZE, AudioScopeProcessor


def spec(channels):
    return ProcessSpec(sample_rate=44100.0, maximum_block_size=256, num_channels=channels)


def test_frame_size_matches_block_size():
    scope = AudioScopeProcessor()
    assert FRAME_SIZE == 4096
    assert scope.maximum_block_size == FRAME_SIZE


def test_frame_published_when_full():
    scope = AudioScopeProcessor()
    scope.prepare(spec(2))
    data = np.linspace(-1.0, 1.0, FRAME_SIZE, dtype=np.float32)
    scope.append_data(1, data[:1000])
    np.testing.assert_array_equal(scope.copy_frame(1), np.zeros(FRAME_SIZE, dtype=np.float32))
    scope.append_data(1, data[1000:])
    np.testing.assert_array_equal(scope.copy_frame(1), data)
    np.testing.assert_array_equal(scope.copy_frame(0), np.zeros(FRAME_SIZE, dtype=np.float32))


def test_copy_frame_bad_channel():
    scope = AudioScopeProcessor()
    scope.prepare(spec(1))
    with pytest.raises(IndexError):
        scope.copy_frame(1)


def test_listener_on_last_channel():
    scope = AudioScopeProcessor()
    scope.prepare(spec(2))
    calls = []
    remove = scope.add_listener(lambda: calls.append(True))
    scope.append_data(0, np.ones(FRAME_SIZE))
    assert calls == []
    scope.append_data(1, np.ones(FRAME_SIZE))
    assert len(calls) == 1
    remove()
    scope.append_data(1, np.ones(FRAME_SIZE))
    assert len(calls) == 1


def test_listener_before_prepare_fails():
    with pytest.raises(RuntimeError):
        AudioScopeProcessor().add_listener(lambda: None)


def test_prepare_drops_listeners():
    scope = AudioScopeProcessor()
    scope.prepare(spec(1))
    calls = []
    scope.add_listener(lambda: calls.append(True))
    scope.prepare(spec(1))
    scope.append_data(0, np.ones(FRAME_SIZE))
    assert calls == []


def test_smaller_block_size_publishes_sooner():
    scope = AudioScopeProcessor()
    scope.prepare(spec(1))
    scope.modify_current_block_size(64)
    data = np.arange(64, dtype=np.float32)
    scope.append_data(0, data)
    np.testing.assert_array_equal(scope.copy_frame(0)[:64], data)