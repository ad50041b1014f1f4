"""
Type-tag dispatch: decode any message without knowing its kind up front.
"""

import logging

from honeywire.errors import ProtocolError, TruncatedBufferError, UnknownMessageError
from honeywire.models.messages import (
    EOF,
    Handshake,
    HandshakeResponse,
    Hello,
    Message,
    MessageType,
    Ping,
    ReadWrite,
)

logger = logging.getLogger(__name__)

MESSAGE_TYPES: dict[MessageType, type[Message]] = {
    MessageType.HELLO: Hello,
    MessageType.READ_WRITE: ReadWrite,
    MessageType.HANDSHAKE: Handshake,
    MessageType.HANDSHAKE_RESPONSE: HandshakeResponse,
    MessageType.EOF: EOF,
    MessageType.PING: Ping,
}

_missing = set(MessageType) - set(MESSAGE_TYPES)
if _missing:
    raise RuntimeError(f"no message class registered for {sorted(_missing)}")


def peek_type(data: bytes) -> MessageType:
    """Return the message type of an encoded message without decoding it."""
    if not data:
        raise TruncatedBufferError(1, 0)
    try:
        return MessageType(data[0])
    except ValueError:
        raise UnknownMessageError(data[0]) from None


def encode_message(message: Message) -> bytes:
    return message.marshal_binary()


def decode_message(data: bytes) -> Message:
    """Decode a message of any kind. Raises ProtocolError on malformed input."""
    kind = peek_type(data)
    try:
        message = MESSAGE_TYPES[kind].unmarshal_binary(data)
    except ProtocolError as e:
        logger.debug(f"Rejected {kind.name} message ({len(data)} bytes): {e}")
        raise
    logger.debug(f"Decoded {kind.name} message ({len(data)} bytes)")
    return message
