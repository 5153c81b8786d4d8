"""Saving the output of a source into a 32-bit float WAV file."""

from __future__ import annotations

import itertools
import os
import struct
import sys
from array import array

from .core import Source

_WAVE_FORMAT_IEEE_FLOAT = 3
_BITS_PER_SAMPLE = 32
_BYTES_PER_SAMPLE = _BITS_PER_SAMPLE // 8
_CHUNK_SAMPLES = 65536
_U32_MAX = 2**32 - 1


def _header(channels: int, sample_rate: int, data_size: int) -> bytes:
    block_align = channels * _BYTES_PER_SAMPLE
    return (
        b"RIFF"
        + struct.pack("<I", 36 + data_size)
        + b"WAVE"
        + b"fmt "
        + struct.pack(
            "<IHHIIHH",
            16,
            _WAVE_FORMAT_IEEE_FLOAT,
            channels,
            sample_rate,
            sample_rate * block_align,
            block_align,
            _BITS_PER_SAMPLE,
        )
        + b"data"
        + struct.pack("<I", data_size)
    )


def output_to_wav(source: Source, wav_file: str | os.PathLike[str]) -> None:
    """Write every sample of ``source`` to ``wav_file`` as 32-bit float WAV.

    Meant for testing and diagnostics without an audio device.
    Raises ``OSError`` on I/O failure and ``OverflowError`` if the data is too large.
    """
    channels = source.channels()
    sample_rate = source.sample_rate()
    data_size = 0
    with open(wav_file, "wb") as out:
        out.write(_header(channels, sample_rate, 0))
        while True:
            chunk = array("f", itertools.islice(source, _CHUNK_SAMPLES))
            if not chunk:
                break
            if sys.byteorder == "big":
                chunk.byteswap()
            data_size += len(chunk) * _BYTES_PER_SAMPLE
            if 36 + data_size > _U32_MAX:
                raise OverflowError("too much audio data for a WAV file")
            out.write(chunk.tobytes())
        out.seek(0)
        out.write(_header(channels, sample_rate, data_size))