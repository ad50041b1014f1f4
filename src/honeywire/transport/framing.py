"""
Length-prefixed framing over asyncio streams.

Frame: [4B big-endian length][message bytes]. Messages carry no length of
their own, so the agent and listener wrap each one in a frame on the link.
"""

import asyncio
import logging
import struct
from typing import Optional

from honeywire.errors import FrameTooLargeError, ProtocolError, TruncatedBufferError
from honeywire.models.messages import Message
from honeywire.transport.envelope import decode_message, encode_message

logger = logging.getLogger(__name__)

FRAME_HEADER = struct.Struct(">I")
DEFAULT_MAX_FRAME_SIZE = 1024 * 1024


def frame(payload: bytes) -> bytes:
    return FRAME_HEADER.pack(len(payload)) + payload


def unframe(data: bytes, max_size: int = DEFAULT_MAX_FRAME_SIZE) -> bytes:
    """Strip the header from a single complete frame held in memory."""
    if len(data) < FRAME_HEADER.size:
        raise TruncatedBufferError(FRAME_HEADER.size, len(data))
    (size,) = FRAME_HEADER.unpack_from(data)
    if size > max_size:
        raise FrameTooLargeError(size, max_size)
    body = data[FRAME_HEADER.size:]
    if len(body) < size:
        raise TruncatedBufferError(size, len(body))
    if len(body) > size:
        extra = len(body) - size
        raise ProtocolError("trailing_bytes", f"{extra} unexpected bytes after frame", {"remaining": extra})
    return body


async def write_frame(writer: asyncio.StreamWriter, payload: bytes) -> None:
    writer.write(frame(payload))
    await writer.drain()


async def read_frame(
    reader: asyncio.StreamReader,
    max_size: int = DEFAULT_MAX_FRAME_SIZE,
) -> Optional[bytes]:
    """Read one frame. Returns None if the stream ends cleanly between frames."""
    try:
        header = await reader.readexactly(FRAME_HEADER.size)
    except asyncio.IncompleteReadError as e:
        if not e.partial:
            return None
        raise TruncatedBufferError(FRAME_HEADER.size, len(e.partial)) from e

    (size,) = FRAME_HEADER.unpack(header)
    if size > max_size:
        logger.warning(f"Refusing frame of {size} bytes (limit {max_size})")
        raise FrameTooLargeError(size, max_size)

    try:
        return await reader.readexactly(size)
    except asyncio.IncompleteReadError as e:
        raise TruncatedBufferError(size, len(e.partial)) from e


async def send_message(writer: asyncio.StreamWriter, message: Message) -> None:
    await write_frame(writer, encode_message(message))


async def recv_message(
    reader: asyncio.StreamReader,
    max_size: int = DEFAULT_MAX_FRAME_SIZE,
) -> Optional[Message]:
    """Read and decode the next message, or None at end of stream."""
    data = await read_frame(reader, max_size=max_size)
    if data is None:
        return None
    return decode_message(data)
