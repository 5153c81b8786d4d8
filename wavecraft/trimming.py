"""Sources that skip, truncate or repeat another source."""

from __future__ import annotations

import copy
import enum
import itertools
from collections import deque
from dataclasses import dataclass
from datetime import timedelta

from .core import Source
from .errors import SeekNotSupportedError

_NANOS_PER_SECOND = 1_000_000_000
_MAX_SPAN_LEN = 32768


def _to_nanos(duration: timedelta) -> int:
    return duration // timedelta(microseconds=1) * 1000


def _from_nanos(nanos: int) -> timedelta:
    return timedelta(microseconds=nanos // 1000)


def _skip_samples(source: Source, count: int) -> None:
    """Consume up to ``count`` samples, stopping early if the source ends."""
    deque(itertools.islice(source, max(count, 0)), maxlen=0)


def _skip_nanos_unchecked(source: Source, nanos: int) -> None:
    """Skip ``nanos`` assuming the channel count and sample rate never change."""
    samples_per_channel = nanos * source.sample_rate() // _NANOS_PER_SECOND
    _skip_samples(source, samples_per_channel * source.channels())


def _skip_nanos(source: Source, nanos: int) -> None:
    while nanos > 0:
        span_len = source.current_span_len()
        if span_len is None:
            _skip_nanos_unchecked(source, nanos)
            return
        if span_len == 0:
            return

        ns_per_sample = _NANOS_PER_SECOND // source.sample_rate() // source.channels()
        if span_len * ns_per_sample > nanos:
            _skip_samples(source, nanos // ns_per_sample)
            return

        _skip_samples(source, span_len)
        nanos -= span_len * ns_per_sample


class _Wrapper(Source):
    """Forwards everything to the wrapped source."""

    def __init__(self, source: Source) -> None:
        self._input = source

    @property
    def inner(self) -> Source:
        """The wrapped source."""
        return self._input

    def __next__(self) -> float:
        return next(self._input)

    def current_span_len(self) -> int | None:
        return self._input.current_span_len()

    def channels(self) -> int:
        return self._input.channels()

    def sample_rate(self) -> int:
        return self._input.sample_rate()

    def total_duration(self) -> timedelta | None:
        return self._input.total_duration()

    def try_seek(self, pos: timedelta) -> None:
        self._input.try_seek(pos)


class SkipDuration(_Wrapper):
    """A source that immediately skips a duration of the wrapped source."""

    def __init__(self, source: Source, duration: timedelta) -> None:
        super().__init__(source)
        _skip_nanos(source, _to_nanos(duration))
        self._skipped_duration = duration

    def total_duration(self) -> timedelta | None:
        duration = self._input.total_duration()
        if duration is None:
            return None
        return max(duration - self._skipped_duration, timedelta(0))


class _DurationFilter(enum.Enum):
    FADE_OUT = "fade_out"


class TakeDuration(_Wrapper):
    """A source that truncates the wrapped source to a duration."""

    def __init__(self, source: Source, duration: timedelta) -> None:
        super().__init__(source)
        self._span_len: int | None = source.current_span_len()
        self._nanos_per_sample = self._duration_per_sample()
        self._requested_duration = duration
        self._requested_nanos = _to_nanos(duration)
        self._remaining_nanos = self._requested_nanos
        self._filter: _DurationFilter | None = None

    def _duration_per_sample(self) -> int:
        return _NANOS_PER_SECOND // (self._input.sample_rate() * self._input.channels())

    def set_filter_fadeout(self) -> None:
        """Fade out over the whole length of the truncated source."""
        self._filter = _DurationFilter.FADE_OUT

    def clear_filter(self) -> None:
        """Remove any filter set."""
        self._filter = None

    def _apply_filter(self, sample: float) -> float:
        if self._filter is _DurationFilter.FADE_OUT:
            remaining = float(self._remaining_nanos // 1_000_000)
            total = float(self._requested_nanos // 1_000_000)
            return sample * remaining / total
        return sample

    def __next__(self) -> float:
        if self._span_len is not None:
            if self._span_len > 0:
                self._span_len -= 1
            else:
                self._span_len = self._input.current_span_len()
                # The sample rate may have changed with the new span.
                self._nanos_per_sample = self._duration_per_sample()

        if self._remaining_nanos <= self._nanos_per_sample:
            raise StopIteration
        sample = next(self._input)
        sample = self._apply_filter(sample)
        self._remaining_nanos -= self._nanos_per_sample
        return sample

    def current_span_len(self) -> int | None:
        remaining_samples = self._remaining_nanos // self._nanos_per_sample
        inner = self._input.current_span_len()
        if inner is not None and inner < remaining_samples:
            return inner
        return remaining_samples

    def total_duration(self) -> timedelta | None:
        duration = self._input.total_duration()
        if duration is None:
            return None
        return min(duration, self._requested_duration)


@dataclass(frozen=True)
class _Span:
    data: tuple[float, ...]
    channels: int
    sample_rate: int


class _SpanStore:
    """Lazily records the spans of a source so they can be replayed."""

    def __init__(self, source: Source) -> None:
        self._input = source
        self._spans: list[_Span] = []
        self._ended = False
        self.total_duration = source.total_duration()

    def span(self, index: int) -> _Span | None:
        while len(self._spans) <= index and not self._ended:
            self._extract()
        return self._spans[index] if index < len(self._spans) else None

    def _extract(self) -> None:
        span_len = self._input.current_span_len()
        limit = _MAX_SPAN_LEN if span_len is None else min(span_len, _MAX_SPAN_LEN)
        channels = self._input.channels()
        rate = self._input.sample_rate()
        data = tuple(itertools.islice(self._input, limit))
        if data:
            self._spans.append(_Span(data, channels, rate))
        else:
            self._ended = True

    @property
    def fallback_channels(self) -> int:
        return self._input.channels()

    @property
    def fallback_sample_rate(self) -> int:
        return self._input.sample_rate()


class _Buffered(Source):
    """A cursor over a shared span store; copies resume from the same position."""

    def __init__(self, store: _SpanStore) -> None:
        self._store = store
        self._index = 0
        self._position = 0

    def clone(self) -> _Buffered:
        return copy.copy(self)

    def __next__(self) -> float:
        span = self._store.span(self._index)
        if span is None:
            raise StopIteration
        sample = span.data[self._position]
        self._position += 1
        if self._position >= len(span.data):
            self._index += 1
            self._position = 0
            self._store.span(self._index)
        return sample

    def current_span_len(self) -> int | None:
        span = self._store.span(self._index)
        if span is None:
            return 0
        return len(span.data) - self._position

    def channels(self) -> int:
        span = self._store.span(self._index)
        return self._store.fallback_channels if span is None else span.channels

    def sample_rate(self) -> int:
        span = self._store.span(self._index)
        return self._store.fallback_sample_rate if span is None else span.sample_rate

    def total_duration(self) -> timedelta | None:
        return self._store.total_duration

    def try_seek(self, pos: timedelta) -> None:
        raise SeekNotSupportedError(type(self).__name__)


class Repeat(Source):
    """A source that repeats the wrapped source forever."""

    def __init__(self, source: Source) -> None:
        buffered = _Buffered(_SpanStore(source))
        self._inner = buffered.clone()
        self._next = buffered

    def __copy__(self) -> Repeat:
        clone = Repeat.__new__(Repeat)
        clone._inner = self._inner.clone()
        clone._next = self._next.clone()
        return clone

    def __next__(self) -> float:
        try:
            return next(self._inner)
        except StopIteration:
            self._inner = self._next.clone()
            return next(self._inner)

    def current_span_len(self) -> int | None:
        span_len = self._inner.current_span_len()
        if span_len == 0:
            return self._next.current_span_len()
        return span_len

    def channels(self) -> int:
        if self._inner.current_span_len() == 0:
            return self._next.channels()
        return self._inner.channels()

    def sample_rate(self) -> int:
        if self._inner.current_span_len() == 0:
            return self._next.sample_rate()
        return self._inner.sample_rate()

    def total_duration(self) -> timedelta | None:
        return None

    def try_seek(self, pos: timedelta) -> None:
        self._inner.try_seek(pos)


def skip_duration(source: Source, duration: timedelta) -> SkipDuration:
    """Skip ``duration`` of ``source`` from its current position."""
    return SkipDuration(source, duration)


def take_duration(source: Source, duration: timedelta) -> TakeDuration:
    """Truncate ``source`` to ``duration``."""
    return TakeDuration(source, duration)


def repeat(source: Source) -> Repeat:
    """Repeat ``source`` forever."""
    return Repeat(source)