"""
Agent <-> listener message kinds.

Each kind writes its type tag first. Hello, Ping, EOF and ReadWrite follow it
with a protocol version byte (always PROTOCOL_VERSION, ignored on read) and
then their fields in declaration order.
"""

from enum import IntEnum
from typing import Any, ClassVar, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

from honeywire.errors import EncodingOverflowError, TagMismatchError
from honeywire.models.address import Address
from honeywire.transport.codec import MAX_ADDRESSES, PROTOCOL_VERSION, Decoder, Encoder

M = TypeVar("M", bound="Message")


class MessageType(IntEnum):
    HELLO = 0x00
    READ_WRITE = 0x01
    HANDSHAKE = 0x02
    HANDSHAKE_RESPONSE = 0x03
    EOF = 0x04
    PING = 0x05


class Message(BaseModel):
    model_config = ConfigDict(extra="forbid")

    TYPE: ClassVar[MessageType]
    KIND: ClassVar[str]
    HAS_VERSION: ClassVar[bool] = True

    def _write_fields(self, e: Encoder) -> None:
        pass

    @classmethod
    def _read_fields(cls, d: Decoder) -> dict[str, Any]:
        return {}

    def marshal_binary(self) -> bytes:
        e = Encoder()
        e.write_uint8(self.TYPE)
        if self.HAS_VERSION:
            e.write_uint8(PROTOCOL_VERSION)
        self._write_fields(e)
        return e.getvalue()

    @classmethod
    def unmarshal_binary(cls: type[M], data: bytes) -> M:
        d = Decoder(data)
        tag = d.read_uint8()
        if tag != cls.TYPE:
            raise TagMismatchError(f"not a {cls.KIND} packet", expected=int(cls.TYPE), actual=tag)
        if cls.HAS_VERSION:
            d.read_uint8()  # protocol
        fields = cls._read_fields(d)
        d.finish()
        return cls(**fields)


class Handshake(Message):
    """Sent once by the agent to open a session."""

    TYPE: ClassVar[MessageType] = MessageType.HANDSHAKE
    KIND: ClassVar[str] = "handshake"
    HAS_VERSION: ClassVar[bool] = False


class HandshakeResponse(Message):
    """Listener reply to Handshake, advertising its addresses."""

    TYPE: ClassVar[MessageType] = MessageType.HANDSHAKE_RESPONSE
    KIND: ClassVar[str] = "handshake response"
    HAS_VERSION: ClassVar[bool] = False

    addresses: list[Optional[Address]] = []

    def _write_fields(self, e: Encoder) -> None:
        if len(self.addresses) > MAX_ADDRESSES:
            raise EncodingOverflowError(
                f"{len(self.addresses)} addresses exceed {MAX_ADDRESSES}", len(self.addresses), MAX_ADDRESSES,
            )
        e.write_uint8(len(self.addresses))
        for address in self.addresses:
            e.write_addr(address)

    @classmethod
    def _read_fields(cls, d: Decoder) -> dict[str, Any]:
        n = d.read_uint8()
        return {"addresses": [d.read_addr() for _ in range(n)]}


class _TokenMessage(Message):
    token: str = ""
    laddr: Optional[Address] = None
    raddr: Optional[Address] = None

    def _write_fields(self, e: Encoder) -> None:
        e.write_string(self.token)
        e.write_addr(self.laddr)
        e.write_addr(self.raddr)

    @classmethod
    def _read_fields(cls, d: Decoder) -> dict[str, Any]:
        token = d.read_string()
        laddr = d.read_addr()
        raddr = d.read_addr()
        return {"token": token, "laddr": laddr, "raddr": raddr}


class Hello(_TokenMessage):
    """Opens a logical connection between laddr and raddr."""

    TYPE: ClassVar[MessageType] = MessageType.HELLO
    KIND: ClassVar[str] = "hello"


class Ping(_TokenMessage):
    """Keepalive for the logical connection between laddr and raddr."""

    TYPE: ClassVar[MessageType] = MessageType.PING
    KIND: ClassVar[str] = "ping"


class EOF(Message):
    """The logical connection between laddr and raddr closed in one direction."""

    TYPE: ClassVar[MessageType] = MessageType.EOF
    KIND: ClassVar[str] = "eof"

    laddr: Optional[Address] = None
    raddr: Optional[Address] = None

    def _write_fields(self, e: Encoder) -> None:
        e.write_addr(self.laddr)
        e.write_addr(self.raddr)

    @classmethod
    def _read_fields(cls, d: Decoder) -> dict[str, Any]:
        laddr = d.read_addr()
        raddr = d.read_addr()
        return {"laddr": laddr, "raddr": raddr}


class ReadWrite(Message):
    """A chunk of connection data travelling in either direction."""

    TYPE: ClassVar[MessageType] = MessageType.READ_WRITE
    KIND: ClassVar[str] = "readwrite"

    laddr: Optional[Address] = None
    raddr: Optional[Address] = None
    payload: bytes = b""

    def _write_fields(self, e: Encoder) -> None:
        e.write_addr(self.laddr)
        e.write_addr(self.raddr)
        e.write_data(self.payload)

    @classmethod
    def _read_fields(cls, d: Decoder) -> dict[str, Any]:
        laddr = d.read_addr()
        raddr = d.read_addr()
        payload = d.read_data()
        return {"laddr": laddr, "raddr": raddr, "payload": payload}
