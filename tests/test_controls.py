from datetime import timedelta

import pytest

from wavecraft.buffers import StaticSamplesBuffer
from wavecraft.controls import (
    Pausable,
    PeriodicAccess,
    Skippable,
    Speed,
    Stoppable,
    TrackPosition,
    pausable,
    periodic,
    skippable,
    speed,
    stoppable,
    track_position,
)
from wavecraft.core import Source
from wavecraft.errors import SeekNotSupportedError

SAMPLES = [10.0, -10.0, 10.0, -10.0, 20.0, -20.0]


class _SeekableBuffer(Source):
    def __init__(self, channels, rate, data):
        self._channels = channels
        self._rate = rate
        self._data = list(data)
        self._index = 0
        self.last_seek = None

    def __next__(self):
        if self._index >= len(self._data):
            raise StopIteration
        value = self._data[self._index]
        self._index += 1
        return value

    def current_span_len(self):
        return None

    def channels(self):
        return self._channels

    def sample_rate(self):
        return self._rate

    def total_duration(self):
        return timedelta(seconds=len(self._data) / self._rate / self._channels)

    def try_seek(self, pos):
        self.last_seek = pos
        frame = int(pos.total_seconds() * self._rate)
        self._index = min(frame * self._channels, len(self._data))


def test_periodic_stereo_access():
    inner = StaticSamplesBuffer(2, 1, SAMPLES)
    calls = []
    source = inner.periodic_access(timedelta(milliseconds=1000), calls.append)
    assert isinstance(source, PeriodicAccess)

    assert len(calls) == 0
    assert next(source) == 10.0
    assert len(calls) == 1
    assert next(source) == -10.0
    assert len(calls) == 1
    assert next(source) == 10.0
    assert len(calls) == 2
    assert next(source) == -10.0
    assert len(calls) == 2
    assert next(source) == 20.0
    assert len(calls) == 3
    assert next(source) == -20.0
    assert len(calls) == 3
    assert calls[0] is inner


def test_periodic_fast_access_does_not_overflow():
    inner = StaticSamplesBuffer(1, 1, SAMPLES)
    calls = []
    source = periodic(inner, timedelta(milliseconds=5), calls.append)
    assert next(source) == 10.0
    assert next(source) == -10.0
    assert len(calls) == 2


def test_position():
    source = track_position(_SeekableBuffer(1, 1, SAMPLES))
    assert isinstance(source, TrackPosition)

    assert source.get_pos().total_seconds() == 0.0
    next(source)
    assert source.get_pos().total_seconds() == 1.0
    next(source)
    assert source.get_pos().total_seconds() == 2.0

    source.try_seek(timedelta(seconds=1))
    assert source.get_pos().total_seconds() == 1.0


def test_position_in_presence_of_speedup():
    source = track_position(speed(_SeekableBuffer(1, 1, SAMPLES), 2.0))

    assert source.get_pos().total_seconds() == 0.0
    next(source)
    assert source.get_pos().total_seconds() == 0.5
    next(source)
    assert source.get_pos().total_seconds() == 1.0

    source.try_seek(timedelta(seconds=1))
    assert source.get_pos().total_seconds() == 1.0


def test_position_unchanged_when_seek_fails():
    source = track_position(StaticSamplesBuffer(1, 1, SAMPLES))
    next(source)
    next(source)
    with pytest.raises(SeekNotSupportedError):
        source.try_seek(timedelta(seconds=1))
    assert source.get_pos().total_seconds() == 2.0


def test_pausable_initially_paused_yields_silence_without_consuming():
    source = StaticSamplesBuffer(2, 1, [1.0, 2.0, 3.0, 4.0]).pausable(True)
    assert isinstance(source, Pausable)
    assert [next(source) for _ in range(3)] == [0.0, 0.0, 0.0]
    source.set_paused(False)
    # the paused frame is completed before playback resumes
    assert next(source) == 0.0
    assert list(source) == [1.0, 2.0, 3.0, 4.0]


def test_pausable_pause_mid_stream():
    source = pausable(StaticSamplesBuffer(1, 1, [1.0, 2.0, 3.0]), False)
    assert next(source) == 1.0
    source.set_paused(True)
    assert next(source) == 0.0
    assert next(source) == 0.0
    source.set_paused(False)
    assert list(source) == [2.0, 3.0]


def test_pausable_delegates_format():
    source = pausable(StaticSamplesBuffer(2, 44100, [0.0] * 4), False)
    assert source.channels() == 2
    assert source.sample_rate() == 44100


def test_skippable_ends_early():
    source = StaticSamplesBuffer(1, 1, SAMPLES).skippable()
    assert isinstance(source, Skippable)
    assert next(source) == 10.0
    source.skip()
    assert list(source) == []


def test_skippable_unskipped_plays_everything():
    source = skippable(StaticSamplesBuffer(1, 1, SAMPLES))
    assert list(source) == SAMPLES


def test_stoppable_ends_early():
    source = StaticSamplesBuffer(1, 1, SAMPLES).stoppable()
    assert isinstance(source, Stoppable)
    assert next(source) == 10.0
    assert next(source) == -10.0
    source.stop()
    with pytest.raises(StopIteration):
        next(source)


def test_stoppable_inner_is_wrapped_source():
    inner = StaticSamplesBuffer(1, 1, SAMPLES)
    source = stoppable(inner)
    assert source.inner is inner


def test_speed_scales_sample_rate_and_duration():
    inner = StaticSamplesBuffer(1, 4, [0.0] * 8)
    source = inner.speed(2.0)
    assert isinstance(source, Speed)
    assert source.sample_rate() == 8
    assert source.total_duration() == timedelta(seconds=1)
    source.set_factor(0.5)
    assert source.sample_rate() == 2
    assert source.total_duration() == timedelta(seconds=4)


def test_speed_truncates_sample_rate():
    source = speed(StaticSamplesBuffer(1, 3, [0.0]), 0.5)
    assert source.sample_rate() == 1


def test_speed_seek_accounts_for_factor():
    inner = _SeekableBuffer(1, 1, SAMPLES)
    source = speed(inner, 2.0)
    source.try_seek(timedelta(seconds=1))
    assert inner.last_seek == timedelta(seconds=2)
    assert next(source) == 10.0


def test_speed_keeps_samples():
    source = speed(StaticSamplesBuffer(1, 1, SAMPLES), 3.0)
    assert list(source) == SAMPLES
    assert source.channels() == 1