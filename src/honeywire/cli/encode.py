"""CLI: honeywire encode hello|ping|eof|readwrite|handshake|handshake-response"""

from typing import Optional

import click
from rich.console import Console

from honeywire.errors import ProtocolError
from honeywire.models.address import Address
from honeywire.models.messages import EOF, Handshake, HandshakeResponse, Hello, Message, Ping, ReadWrite
from honeywire.transport.framing import frame

console = Console(stderr=True)


def _load_config() -> dict:
    from honeywire.cli.main import _load_config
    return _load_config()


class AddressParam(click.ParamType):
    name = "address"

    def convert(self, value, param, ctx):
        if isinstance(value, Address):
            return value
        try:
            return Address.parse(value)
        except ProtocolError as e:
            self.fail(str(e), param, ctx)


ADDRESS = AddressParam()


def _emit(message: Message, framed: bool) -> None:
    try:
        data = message.marshal_binary()
    except ProtocolError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)
    if framed:
        data = frame(data)
    click.echo(data.hex())


def _token(token: Optional[str]) -> str:
    if token is not None:
        return token
    return _load_config().get("token", "")


addr_options = [
    click.option("--laddr", type=ADDRESS, default=None, help="Local address, e.g. tcp://10.0.0.1:22"),
    click.option("--raddr", type=ADDRESS, default=None, help="Remote address, e.g. tcp://203.0.113.5:51234"),
]
framed_option = click.option("--framed", is_flag=True, help="Prepend the 4-byte frame length")


def with_addrs(f):
    for option in reversed(addr_options):
        f = option(f)
    return f


@click.group()
def encode():
    """Build a message and print it as hex."""


@encode.command("hello")
@click.option("--token", default=None, help="Session token (defaults to the saved token)")
@with_addrs
@framed_option
def encode_hello(token, laddr, raddr, framed):
    """Open a logical connection."""
    _emit(Hello(token=_token(token), laddr=laddr, raddr=raddr), framed)


@encode.command("ping")
@click.option("--token", default=None, help="Session token (defaults to the saved token)")
@with_addrs
@framed_option
def encode_ping(token, laddr, raddr, framed):
    """Keepalive for a logical connection."""
    _emit(Ping(token=_token(token), laddr=laddr, raddr=raddr), framed)


@encode.command("eof")
@with_addrs
@framed_option
def encode_eof(laddr, raddr, framed):
    """Close a logical connection in one direction."""
    _emit(EOF(laddr=laddr, raddr=raddr), framed)


@encode.command("readwrite")
@with_addrs
@click.option("--payload", default=None, help="Payload as UTF-8 text")
@click.option("--payload-hex", default=None, help="Payload as hex")
@framed_option
def encode_readwrite(laddr, raddr, payload, payload_hex, framed):
    """Carry connection data."""
    if payload is not None and payload_hex is not None:
        raise click.UsageError("use either --payload or --payload-hex, not both")
    if payload_hex is not None:
        try:
            data = bytes.fromhex(payload_hex)
        except ValueError:
            raise click.BadParameter("not valid hex", param_hint="--payload-hex")
    else:
        data = (payload or "").encode("utf-8")
    _emit(ReadWrite(laddr=laddr, raddr=raddr, payload=data), framed)


@encode.command("handshake")
@framed_option
def encode_handshake(framed):
    """Start a session."""
    _emit(Handshake(), framed)


@encode.command("handshake-response")
@click.argument("addresses", nargs=-1, type=ADDRESS)
@framed_option
def encode_handshake_response(addresses, framed):
    """Answer a handshake with the listener's addresses."""
    _emit(HandshakeResponse(addresses=list(addresses)), framed)
