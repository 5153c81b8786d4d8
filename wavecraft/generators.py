"""Periodic test waveforms, silence and noise sources."""

from __future__ import annotations

import enum
import math
import random
import struct
from collections.abc import Callable
from datetime import timedelta

from .core import Source

GeneratorFunction = Callable[[float], float]

_U32_MAX = 2**32 - 1
_DEFAULT_WAVE_RATE = 48000


def _f32(value: float) -> float:
    """Round ``value`` to single precision."""
    return struct.unpack("<f", struct.pack("<f", value))[0]


_TAU = _f32(math.tau)


def _sine_signal(phase: float) -> float:
    return _f32(math.sin(_f32(_TAU * phase)))


def _triangle_signal(phase: float) -> float:
    return _f32(4.0 * abs(phase - math.floor(_f32(phase + 0.5))) - 1.0)


def _square_signal(phase: float) -> float:
    return 1.0 if math.fmod(phase, 1.0) < 0.5 else -1.0


def _sawtooth_signal(phase: float) -> float:
    return _f32(2.0 * _f32(phase - math.floor(_f32(phase + 0.5))))


class Function(enum.Enum):
    """Waveform shapes available to :class:`SignalGenerator`."""

    SINE = "sine"
    TRIANGLE = "triangle"
    SQUARE = "square"
    SAWTOOTH = "sawtooth"

    @property
    def generator(self) -> GeneratorFunction:
        """The function mapping a normalised phase to a signal level."""
        return _GENERATORS[self]


_GENERATORS: dict[Function, GeneratorFunction] = {
    Function.SINE: _sine_signal,
    Function.TRIANGLE: _triangle_signal,
    Function.SQUARE: _square_signal,
    Function.SAWTOOTH: _sawtooth_signal,
}


class SignalGenerator(Source):
    """An infinite mono source producing a periodic waveform in [-1.0, 1.0].

    Raises ``ValueError`` if ``frequency`` is zero.
    """

    def __init__(self, sample_rate: int, frequency: float, function: Function) -> None:
        self._setup(sample_rate, frequency, function.generator)

    @classmethod
    def with_function(
        cls, sample_rate: int, frequency: float, generator_function: GeneratorFunction
    ) -> SignalGenerator:
        """Build a generator from a custom function of the normalised phase."""
        generator = cls.__new__(cls)
        SignalGenerator._setup(generator, sample_rate, frequency, generator_function)
        return generator

    def _setup(
        self, sample_rate: int, frequency: float, function: GeneratorFunction
    ) -> None:
        if frequency == 0.0:
            raise ValueError("frequency must be greater than zero")
        self._sample_rate = sample_rate
        self._function = function
        self._period = _f32(_f32(float(sample_rate)) / _f32(frequency))
        self._phase_step = _f32(1.0 / self._period)
        self._phase = 0.0

    def __next__(self) -> float:
        value = self._function(self._phase)
        self._phase = _f32(_f32(self._phase + self._phase_step) % 1.0)
        return value

    def current_span_len(self) -> int | None:
        return None

    def channels(self) -> int:
        return 1

    def sample_rate(self) -> int:
        return self._sample_rate

    def total_duration(self) -> timedelta | None:
        return None

    def try_seek(self, pos: timedelta) -> None:
        seconds = _f32(pos.total_seconds())
        seek = _f32(_f32(seconds * _f32(float(self._sample_rate))) / self._period)
        self._phase = _f32(seek % 1.0)


class SineWave(SignalGenerator):
    """An infinite 48 kHz mono sine wave."""

    def __init__(self, frequency: float) -> None:
        super().__init__(_DEFAULT_WAVE_RATE, frequency, Function.SINE)


class SquareWave(SignalGenerator):
    """An infinite 48 kHz mono square wave."""

    def __init__(self, frequency: float) -> None:
        super().__init__(_DEFAULT_WAVE_RATE, frequency, Function.SQUARE)


class SawtoothWave(SignalGenerator):
    """An infinite 48 kHz mono rising sawtooth wave."""

    def __init__(self, frequency: float) -> None:
        super().__init__(_DEFAULT_WAVE_RATE, frequency, Function.SAWTOOTH)


class TriangleWave(SignalGenerator):
    """An infinite 48 kHz mono triangle wave."""

    def __init__(self, frequency: float) -> None:
        super().__init__(_DEFAULT_WAVE_RATE, frequency, Function.TRIANGLE)


class Zero(Source):
    """Silence: endless when ``num_samples`` is ``None``, otherwise that many samples."""

    def __init__(self, channels: int, sample_rate: int, num_samples: int | None = None) -> None:
        self._channels = channels
        self._sample_rate = sample_rate
        self._num_samples = num_samples

    def __next__(self) -> float:
        if self._num_samples is None:
            return 0.0
        if self._num_samples == 0:
            raise StopIteration
        self._num_samples -= 1
        return 0.0

    def current_span_len(self) -> int | None:
        return self._num_samples

    def channels(self) -> int:
        return self._channels

    def sample_rate(self) -> int:
        return self._sample_rate

    def total_duration(self) -> timedelta | None:
        return None

    def try_seek(self, pos: timedelta) -> None:
        return None


class WhiteNoise(Source):
    """An infinite mono stream of random samples in [-1.0, 1.0].

    Seeded from system entropy unless ``seed`` is given.
    """

    def __init__(self, sample_rate: int, seed: int | None = None) -> None:
        self._sample_rate = sample_rate
        self._rng = random.Random(seed)

    def __next__(self) -> float:
        value = _f32(self._rng.getrandbits(32) / _U32_MAX)
        return _f32(value * 2.0 - 1.0)

    def current_span_len(self) -> int | None:
        return None

    def channels(self) -> int:
        return 1

    def sample_rate(self) -> int:
        return self._sample_rate

    def total_duration(self) -> timedelta | None:
        return None

    def try_seek(self, pos: timedelta) -> None:
        return None


class PinkNoise(Source):
    """An infinite mono stream of pink noise.

    White noise filtered by a weighted sum of seven first-order filters.
    """

    _POLES = (0.99886, 0.99332, 0.969, 0.8665, 0.550)
    _GAINS = (0.0555179, 0.0750759, 0.153852, 0.3104856, 0.5329522)

    def __init__(self, sample_rate: int, seed: int | None = None) -> None:
        self._white_noise = WhiteNoise(sample_rate, seed)
        self._b = [0.0] * 7

    def __next__(self) -> float:
        white = next(self._white_noise)
        b = self._b
        for index, (pole, gain) in enumerate(zip(self._POLES, self._GAINS)):
            b[index] = _f32(pole * b[index] + white * gain)
        b[5] = _f32(-0.7616 * b[5] - white * 0.016898)

        pink = _f32(sum(b) + white * 0.5362)
        b[6] = _f32(white * 0.115926)
        return pink

    def current_span_len(self) -> int | None:
        return None

    def channels(self) -> int:
        return 1

    def sample_rate(self) -> int:
        return self._white_noise.sample_rate()

    def total_duration(self) -> timedelta | None:
        return None

    def try_seek(self, pos: timedelta) -> None:
        return None


def white(sample_rate: int) -> WhiteNoise:
    """Create a white noise source seeded from system entropy."""
    return WhiteNoise(sample_rate)


def pink(sample_rate: int) -> PinkNoise:
    """Create a pink noise source seeded from system entropy."""
    return PinkNoise(sample_rate)