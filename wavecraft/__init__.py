"""Composable audio sample sources, generators and stream controls."""

__version__ = "0.20.1"

__all__ = [
    "errors",
    "core",
    "buffers",
    "generators",
    "controls",
    "trimming",
    "wav_output",
]