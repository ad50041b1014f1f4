"""
Binary primitives shared by every message kind.

Wire conventions (big-endian):
- Integers are unsigned, 1, 2 or 4 bytes wide.
- Strings are [1B len][N bytes UTF-8], at most 255 bytes.
- Data blocks are [4B len][N bytes].
- Addresses are [1B kind] for "no address", otherwise
  [1B kind][1B ip version][4 or 16 bytes ip][2B port].
"""

import ipaddress
import struct
from typing import Optional

from honeywire.errors import AddressError, EncodingOverflowError, ProtocolError, TruncatedBufferError
from honeywire.models.address import Address, Network

PROTOCOL_VERSION = 0

MAX_STRING_LENGTH = 0xFF
MAX_ADDRESSES = 0xFF
DATA_LENGTH_SIZE = 4
MAX_DATA_LENGTH = 0xFFFFFFFF

ADDR_NONE = 0x00
ADDR_TCP = 0x01
ADDR_UDP = 0x02

NETWORK_CODES = {Network.TCP: ADDR_TCP, Network.UDP: ADDR_UDP}
CODE_NETWORKS = {code: network for network, code in NETWORK_CODES.items()}

IP_LENGTHS = {4: 4, 6: 16}

_UINT8 = struct.Struct(">B")
_UINT16 = struct.Struct(">H")
_UINT32 = struct.Struct(">I")


class Encoder:
    """Append-only byte builder. Nothing written can be changed afterwards."""

    def __init__(self) -> None:
        self._buf = bytearray()

    def _pack(self, fmt: struct.Struct, value: int) -> None:
        limit = (1 << (8 * fmt.size)) - 1
        if not 0 <= value <= limit:
            raise EncodingOverflowError(f"value {value} does not fit in {fmt.size} byte(s)", value, limit)
        self._buf += fmt.pack(value)

    def write_uint8(self, value: int) -> None:
        self._pack(_UINT8, value)

    def write_uint16(self, value: int) -> None:
        self._pack(_UINT16, value)

    def write_uint32(self, value: int) -> None:
        self._pack(_UINT32, value)

    def write_string(self, value: str) -> None:
        raw = value.encode("utf-8")
        if len(raw) > MAX_STRING_LENGTH:
            raise EncodingOverflowError(
                f"string of {len(raw)} bytes exceeds {MAX_STRING_LENGTH}", len(raw), MAX_STRING_LENGTH,
            )
        self.write_uint8(len(raw))
        self._buf += raw

    def write_data(self, data: bytes) -> None:
        if len(data) > MAX_DATA_LENGTH:
            raise EncodingOverflowError(
                f"data block of {len(data)} bytes exceeds {MAX_DATA_LENGTH}", len(data), MAX_DATA_LENGTH,
            )
        self.write_uint32(len(data))
        self._buf += data

    def write_addr(self, addr: Optional[Address]) -> None:
        if addr is None:
            self.write_uint8(ADDR_NONE)
            return
        self.write_uint8(NETWORK_CODES[addr.network])
        self.write_uint8(addr.ip.version)
        self._buf += addr.ip.packed
        self.write_uint16(addr.port)

    def getvalue(self) -> bytes:
        return bytes(self._buf)


class Decoder:
    """Cursor over a complete, already received byte sequence."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def _take(self, n: int) -> bytes:
        if n > self.remaining:
            raise TruncatedBufferError(n, self.remaining)
        chunk = self._data[self._pos:self._pos + n]
        self._pos += n
        return chunk

    def _unpack(self, fmt: struct.Struct) -> int:
        return fmt.unpack(self._take(fmt.size))[0]

    def read_uint8(self) -> int:
        return self._unpack(_UINT8)

    def read_uint16(self) -> int:
        return self._unpack(_UINT16)

    def read_uint32(self) -> int:
        return self._unpack(_UINT32)

    def read_string(self) -> str:
        raw = self._take(self.read_uint8())
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ProtocolError("invalid_string", f"string is not valid UTF-8: {e}") from e

    def read_data(self) -> bytes:
        return self._take(self.read_uint32())

    def read_addr(self) -> Optional[Address]:
        kind = self.read_uint8()
        if kind == ADDR_NONE:
            return None
        network = CODE_NETWORKS.get(kind)
        if network is None:
            raise AddressError(f"unknown address kind 0x{kind:02x}", {"kind": kind})
        version = self.read_uint8()
        if version not in IP_LENGTHS:
            raise AddressError(f"unknown ip version {version}", {"version": version})
        ip = ipaddress.ip_address(self._take(IP_LENGTHS[version]))
        port = self.read_uint16()
        return Address(network=network, ip=ip, port=port)

    def finish(self) -> None:
        """Fail if bytes are left over after the last field."""
        if self.remaining:
            raise ProtocolError(
                "trailing_bytes",
                f"{self.remaining} unexpected trailing bytes",
                {"remaining": self.remaining},
            )
