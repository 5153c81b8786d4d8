"""Sources that wrap another source to control how it plays."""

from __future__ import annotations

import operator
from collections.abc import Callable
from datetime import timedelta
from typing import Any

from .core import Source

_MILLISECOND = timedelta(milliseconds=1)


class _Wrapper(Source):
    """A source that forwards everything to the source it wraps."""

    def __init__(self, source: Source) -> None:
        self._input = source

    @property
    def inner(self) -> Source:
        """The wrapped source."""
        return self._input

    def __next__(self) -> float:
        return next(self._input)

    def __length_hint__(self) -> int:
        return operator.length_hint(self._input)

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


class Pausable(_Wrapper):
    """A source that yields silence instead of its samples while paused.

    Pausing always completes the current frame, so the channels stay aligned.
    """

    def __init__(self, source: Source, paused: bool) -> None:
        super().__init__(source)
        self._paused_channels: int | None = source.channels() if paused else None
        self._remaining_paused_samples = 0

    def set_paused(self, paused: bool) -> None:
        """Pause or resume; a paused source does not consume its input."""
        if paused and self._paused_channels is None:
            self._paused_channels = self._input.channels()
        elif not paused and self._paused_channels is not None:
            self._paused_channels = None

    def __next__(self) -> float:
        if self._remaining_paused_samples > 0:
            self._remaining_paused_samples -= 1
            return 0.0
        if self._paused_channels is not None:
            self._remaining_paused_samples = self._paused_channels - 1
            return 0.0
        return next(self._input)


class PeriodicAccess(_Wrapper):
    """Calls a function with the wrapped source on the first sample and every period."""

    def __init__(
        self, source: Source, period: timedelta, modifier: Callable[[Any], None]
    ) -> None:
        super().__init__(source)
        update_ms = period // _MILLISECOND
        update_frequency = (update_ms * source.sample_rate()) // 1000 * source.channels()
        self._modifier = modifier
        self._update_frequency = update_frequency or 1
        self._samples_until_update = 1

    def __next__(self) -> float:
        self._samples_until_update -= 1
        if self._samples_until_update == 0:
            self._modifier(self._input)
            self._samples_until_update = self._update_frequency
        return next(self._input)


class TrackPosition(_Wrapper):
    """Tracks the elapsed time since the start of the wrapped source."""

    def __init__(self, source: Source) -> None:
        super().__init__(source)
        self._samples_counted = 0
        self._offset_duration = 0.0
        self._span_sample_rate = 0
        self._span_channels = 0
        self._span_len: int | None = None

    def get_pos(self) -> timedelta:
        """Return the position in the wrapped source relative to its start.

        Speed changes or delays applied on top of this wrapper are not reflected.
        """
        seconds = (
            self._samples_counted / self._input.sample_rate() / self._input.channels()
            + self._offset_duration
        )
        return timedelta(seconds=seconds)

    def _set_current_span(self) -> None:
        self._span_len = self.current_span_len()
        self._span_sample_rate = self.sample_rate()
        self._span_channels = self.channels()

    def __next__(self) -> float:
        if self._span_len is None:
            self._set_current_span()

        sample = next(self._input)
        self._samples_counted += 1

        span_len = self.current_span_len()
        if span_len is not None and self._samples_counted == span_len:
            self._offset_duration += (
                self._samples_counted / self._span_sample_rate / self._span_channels
            )
            self._samples_counted = 0
            self._set_current_span()
        return sample

    def try_seek(self, pos: timedelta) -> None:
        self._input.try_seek(pos)
        self._offset_duration = pos.total_seconds()
        # Seeking is assumed to land at the start of a span.
        self._samples_counted = 0


class Skippable(_Wrapper):
    """A source that can be ended early by calling :meth:`skip`."""

    def __init__(self, source: Source) -> None:
        super().__init__(source)
        self._do_skip = False

    def skip(self) -> None:
        """End the source; further iteration stops immediately."""
        self._do_skip = True

    def __next__(self) -> float:
        if self._do_skip:
            raise StopIteration
        return next(self._input)


class Stoppable(_Wrapper):
    """A source that can be ended early by calling :meth:`stop`."""

    def __init__(self, source: Source) -> None:
        super().__init__(source)
        self._stopped = False

    def stop(self) -> None:
        """Stop the sound; further iteration stops immediately."""
        self._stopped = True

    def __next__(self) -> float:
        if self._stopped:
            raise StopIteration
        return next(self._input)


class Speed(_Wrapper):
    """Plays the wrapped source faster or slower by scaling its sample rate."""

    def __init__(self, source: Source, factor: float) -> None:
        super().__init__(source)
        self._factor = factor

    def set_factor(self, factor: float) -> None:
        """Change the speed factor."""
        self._factor = factor

    def sample_rate(self) -> int:
        return int(self._input.sample_rate() * self._factor)

    def total_duration(self) -> timedelta | None:
        duration = self._input.total_duration()
        if duration is None:
            return None
        return duration / self._factor

    def try_seek(self, pos: timedelta) -> None:
        self._input.try_seek(pos * self._factor)


def pausable(source: Source, paused: bool) -> Pausable:
    """Wrap ``source`` so it can be paused, starting paused if ``paused``."""
    return Pausable(source, paused)


def periodic(
    source: Source, period: timedelta, modifier: Callable[[Any], None]
) -> PeriodicAccess:
    """Wrap ``source`` so ``modifier`` is called with it every ``period``."""
    return PeriodicAccess(source, period, modifier)


def track_position(source: Source) -> TrackPosition:
    """Wrap ``source`` to track its playback position."""
    return TrackPosition(source)


def skippable(source: Source) -> Skippable:
    """Wrap ``source`` so it can be skipped."""
    return Skippable(source)


def stoppable(source: Source) -> Stoppable:
    """Wrap ``source`` so it can be stopped."""
    return Stoppable(source)


def speed(source: Source, factor: float) -> Speed:
    """Wrap ``source`` to play at ``factor`` times its speed."""
    return Speed(source, factor)