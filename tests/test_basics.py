"""Basic unit tests for the honeywire package."""

from honeywire import (
    AddressError,
    EncodingOverflowError,
    FrameTooLargeError,
    MessageType,
    ProtocolError,
    TagMismatchError,
    TruncatedBufferError,
    UnknownMessageError,
    __version__,
)


def test_version():
    assert __version__ == "0.1.0"


def test_error_hierarchy():
    for cls in (
        TagMismatchError,
        TruncatedBufferError,
        EncodingOverflowError,
        UnknownMessageError,
        AddressError,
        FrameTooLargeError,
    ):
        assert issubclass(cls, ProtocolError)


def test_error_attributes():
    err = ProtocolError(code="test_code", message="something broke")
    assert err.code == "test_code"
    assert str(err) == "something broke"
    assert err.details is None

    truncated = TruncatedBufferError(needed=4, remaining=1)
    assert truncated.code == "truncated_buffer"
    assert truncated.details == {"needed": 4, "remaining": 1}

    mismatch = TagMismatchError("not a hello packet", expected=0, actual=5)
    assert mismatch.code == "tag_mismatch"
    assert mismatch.details == {"expected": 0, "actual": 5}


def test_type_tags():
    assert MessageType.HELLO == 0x00
    assert MessageType.READ_WRITE == 0x01
    assert MessageType.HANDSHAKE == 0x02
    assert MessageType.HANDSHAKE_RESPONSE == 0x03
    assert MessageType.EOF == 0x04
    assert MessageType.PING == 0x05
