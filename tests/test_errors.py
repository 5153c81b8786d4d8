import pytest

from wavecraft.errors import OtherSeekError, SeekError, SeekNotSupportedError


def test_not_supported_message_names_source():
    err = SeekNotSupportedError("StaticSamplesBuffer")
    assert str(err) == "Seeking is not supported by source: StaticSamplesBuffer"
    assert err.underlying_source == "StaticSamplesBuffer"


def test_not_supported_leaves_source_intact():
    assert SeekNotSupportedError("Anything").source_intact() is True


def test_not_supported_is_a_seek_error():
    err = SeekNotSupportedError("Repeat")
    assert issubclass(SeekNotSupportedError, SeekError)
    assert err.underlying_source == "Repeat"
    assert str(err) == "Seeking is not supported by source: Repeat"
    assert err.source_intact() is True


def test_other_message_and_cause():
    inner = ValueError("broken stream")
    err = OtherSeekError(inner)
    assert str(err) == "An error occurred"
    assert err.__cause__ is inner
    assert err.error is inner


def test_other_does_not_leave_source_intact():
    assert OtherSeekError(RuntimeError("x")).source_intact() is False


def test_other_is_caught_as_seek_error():
    inner = OSError("disk")
    with pytest.raises(SeekError) as info:
        raise OtherSeekError(inner)
    assert info.value.__cause__ is inner
    assert info.value.source_intact() is False


def test_base_seek_error_is_not_intact():
    assert SeekError("failure").source_intact() is False