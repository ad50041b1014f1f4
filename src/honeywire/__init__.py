"""
honeywire: agent/listener wire protocol for honeypot sensors.

Binary message codec for multiplexing remote connections over a single
agent-to-listener link.
"""

from honeywire.errors import (
    AddressError,
    EncodingOverflowError,
    FrameTooLargeError,
    ProtocolError,
    TagMismatchError,
    TruncatedBufferError,
    UnknownMessageError,
)
from honeywire.models.address import Address, Network
from honeywire.models.messages import EOF, Handshake, HandshakeResponse, Hello, Message, MessageType, Ping, ReadWrite
from honeywire.transport.envelope import decode_message, encode_message, peek_type

__version__ = "0.1.0"
__all__ = [
    "Address",
    "Network",
    "Message",
    "MessageType",
    "Handshake",
    "HandshakeResponse",
    "Hello",
    "Ping",
    "EOF",
    "ReadWrite",
    "decode_message",
    "encode_message",
    "peek_type",
    "ProtocolError",
    "TagMismatchError",
    "TruncatedBufferError",
    "EncodingOverflowError",
    "UnknownMessageError",
    "AddressError",
    "FrameTooLargeError",
]
