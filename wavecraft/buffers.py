"""A source whose samples come from a fixed, read-only buffer."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import timedelta

from .core import Source
from .errors import SeekNotSupportedError

_NANOS_PER_SECOND = 1_000_000_000
_U64_MAX = 2**64 - 1


class StaticSamplesBuffer(Source):
    """A fixed buffer of samples played as a source.

    Raises ``ValueError`` if the channel count or sample rate is zero, and
    ``OverflowError`` if the buffer is too long for its duration to be computed.
    """

    def __init__(self, channels: int, sample_rate: int, data: Sequence[float]) -> None:
        if channels == 0:
            raise ValueError("channel count must not be zero")
        if sample_rate == 0:
            raise ValueError("sample rate must not be zero")

        samples = tuple(data)
        total_nanos = _NANOS_PER_SECOND * len(samples)
        if total_nanos > _U64_MAX:
            raise OverflowError("buffer is too long to compute its duration")
        duration_nanos = total_nanos // sample_rate // channels

        self._data = samples
        self._position = 0
        self._channels = channels
        self._sample_rate = sample_rate
        self._duration = timedelta(
            seconds=duration_nanos // _NANOS_PER_SECOND,
            microseconds=(duration_nanos % _NANOS_PER_SECOND) // 1000,
        )

    def __next__(self) -> float:
        if self._position >= len(self._data):
            raise StopIteration
        sample = self._data[self._position]
        self._position += 1
        return sample

    def __length_hint__(self) -> int:
        return len(self._data) - self._position

    def current_span_len(self) -> int | None:
        return None

    def channels(self) -> int:
        return self._channels

    def sample_rate(self) -> int:
        return self._sample_rate

    def total_duration(self) -> timedelta | None:
        return self._duration

    def try_seek(self, pos: timedelta) -> None:
        raise SeekNotSupportedError(type(self).__name__)