"""CLI: honeywire decode <hex>"""

import json
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from honeywire.errors import ProtocolError
from honeywire.models.messages import Message
from honeywire.transport.envelope import decode_message
from honeywire.transport.framing import unframe

console = Console()


def _max_frame_size() -> int:
    from honeywire.cli.main import _max_frame_size
    return _max_frame_size()


def _render(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, bytes):
        return value.hex()
    if isinstance(value, list):
        return [_render(v) for v in value]
    return str(value)


def message_fields(message: Message) -> dict[str, Any]:
    """Field values as JSON-friendly text: addresses as URLs, payloads as hex."""
    return {name: _render(getattr(message, name)) for name in type(message).model_fields}


@click.command("decode")
@click.argument("hexdata")
@click.option("--framed", is_flag=True, help="Input starts with a 4-byte frame length")
@click.option("--json-output", "--json", is_flag=True)
def decode_cmd(hexdata, framed, json_output):
    """Decode a hex-encoded message."""
    try:
        data = bytes.fromhex(hexdata)
    except ValueError:
        raise click.BadParameter("not valid hex", param_hint="HEXDATA")

    try:
        if framed:
            data = unframe(data, max_size=_max_frame_size())
        message = decode_message(data)
    except ProtocolError as e:
        Console(stderr=True).print(f"[red]{e.code}: {e}[/red]")
        raise SystemExit(1)

    fields = message_fields(message)
    if json_output:
        click.echo(json.dumps({"type": message.KIND, **fields}, indent=2))
        return

    table = Table(title=f"{message.KIND} (0x{message.TYPE:02x}, {len(data)} bytes)")
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for name, value in fields.items():
        if isinstance(value, list):
            value = "\n".join(v or "-" for v in value) or "-"
        table.add_row(name, "-" if value is None else value)
    console.print(table)
