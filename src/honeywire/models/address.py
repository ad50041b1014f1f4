"""
Network endpoint addresses carried in Hello, Ping, EOF, ReadWrite and HandshakeResponse.

An endpoint is one of TCP-v4, TCP-v6, UDP-v4 or UDP-v6. "No address" is
plain ``None`` wherever an Address is accepted.
"""

from enum import Enum
from typing import Any, Union
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, IPvAnyAddress, ValidationError

from honeywire.errors import AddressError


class Network(str, Enum):
    TCP = "tcp"
    UDP = "udp"


class Address(BaseModel):
    model_config = ConfigDict(frozen=True)

    network: Network
    ip: IPvAnyAddress
    port: int = Field(ge=0, le=65535)

    @property
    def version(self) -> int:
        return self.ip.version

    @property
    def sockaddr(self) -> tuple[str, int]:
        return str(self.ip), self.port

    def __str__(self) -> str:
        host = f"[{self.ip}]" if self.ip.version == 6 else str(self.ip)
        return f"{self.network.value}://{host}:{self.port}"

    @classmethod
    def from_sockaddr(cls, network: Union[Network, str], sockaddr: tuple[Any, ...]) -> "Address":
        """Build from a socket address tuple, e.g. ``sock.getpeername()``.

        IPv6 tuples carry flowinfo and scope id after the port; those are dropped.
        """
        try:
            return cls(network=network, ip=sockaddr[0], port=sockaddr[1])
        except (ValidationError, IndexError) as e:
            raise AddressError(f"invalid socket address {sockaddr!r}: {e}") from e

    @classmethod
    def parse(cls, value: str) -> "Address":
        """Parse ``tcp://10.0.0.1:22`` or ``udp://[::1]:53``."""
        try:
            parts = urlsplit(value)
        except ValueError as e:
            raise AddressError(f"invalid address {value!r}: {e}") from e
        try:
            port = parts.port
        except ValueError as e:
            raise AddressError(f"invalid port in address {value!r}") from e
        if not parts.scheme or not parts.hostname or port is None:
            raise AddressError(f"address must look like tcp://host:port, got {value!r}")
        try:
            return cls(network=parts.scheme.lower(), ip=parts.hostname, port=port)
        except ValidationError as e:
            raise AddressError(f"invalid address {value!r}: {e.errors()[0]['msg']}") from e
