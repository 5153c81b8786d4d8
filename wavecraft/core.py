"""The abstract audio source and the chainable operations it offers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from datetime import timedelta
from typing import Any

from .errors import SeekNotSupportedError


class Source(ABC, Iterator[float]):
    """A stream of interleaved audio samples.

    A source is an iterator of float samples with a channel count and a
    sample rate. Channels are always interleaved: the first sample of every
    channel comes first, then the second sample of every channel, and so on.

    The channel count and sample rate may change between spans.
    ``current_span_len`` tells how many samples remain before they may change;
    ``None`` means they stay the same until the source ends.
    """

    def __iter__(self) -> Source:
        return self

    @abstractmethod
    def __next__(self) -> float:
        """Return the next sample or raise ``StopIteration`` when the sound ends."""

    @abstractmethod
    def current_span_len(self) -> int | None:
        """Return the number of samples left in the current span, or ``None`` if unbounded."""

    @abstractmethod
    def channels(self) -> int:
        """Return the number of interleaved channels."""

    @abstractmethod
    def sample_rate(self) -> int:
        """Return the number of samples per second per channel."""

    @abstractmethod
    def total_duration(self) -> timedelta | None:
        """Return the total duration, or ``None`` if infinite or unknown."""

    def try_seek(self, pos: timedelta) -> None:
        """Seek to ``pos``.

        Raises :class:`SeekNotSupportedError` unless a subclass supports seeking.
        """
        raise SeekNotSupportedError(type(self).__name__)

    def take_duration(self, duration: timedelta) -> Source:
        """Play only the first ``duration`` of this source."""
        from .trimming import take_duration

        return take_duration(self, duration)

    def skip_duration(self, duration: timedelta) -> Source:
        """Immediately skip ``duration`` of this source, saturating at its end."""
        from .trimming import skip_duration

        return skip_duration(self, duration)

    def repeat_infinite(self) -> Source:
        """Repeat this source forever, buffering its samples."""
        from .trimming import repeat

        return repeat(self)

    def periodic_access(self, period: timedelta, access: Callable[[Any], None]) -> Source:
        """Call ``access`` with this source on the first sample and then every ``period``."""
        from .controls import periodic

        return periodic(self, period, access)

    def speed(self, ratio: float) -> Source:
        """Change the playback speed, and with it the pitch, by ``ratio``."""
        from .controls import speed

        return speed(self, ratio)

    def pausable(self, initially_paused: bool) -> Source:
        """Make the source pausable; a paused source yields silence."""
        from .controls import pausable

        return pausable(self, initially_paused)

    def stoppable(self) -> Source:
        """Make the source stoppable."""
        from .controls import stoppable

        return stoppable(self)

    def skippable(self) -> Source:
        """Make the source skippable; a skipped source ends immediately."""
        from .controls import skippable

        return skippable(self)

    def track_position(self) -> Source:
        """Track the elapsed time since the start of this source."""
        from .controls import track_position

        return track_position(self)