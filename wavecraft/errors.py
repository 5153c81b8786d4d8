"""Errors raised when seeking within a source fails."""

from __future__ import annotations


class SeekError(Exception):
    """Raised when ``try_seek`` fails or is not supported by a source."""

    def source_intact(self) -> bool:
        """Return whether the source keeps playing from its position before the seek."""
        return False


class SeekNotSupportedError(SeekError):
    """One of the underlying sources does not support seeking."""

    def __init__(self, underlying_source: str) -> None:
        self.underlying_source = underlying_source
        super().__init__(f"Seeking is not supported by source: {underlying_source}")

    def source_intact(self) -> bool:
        return True


class OtherSeekError(SeekError):
    """Any other seek failure, typically raised by a custom source."""

    def __init__(self, error: BaseException) -> None:
        self.error = error
        super().__init__("An error occurred")
        self.__cause__ = error

    def source_intact(self) -> bool:
        return False