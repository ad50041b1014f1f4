"""
honeywire CLI, the `honeywire` command.

Commands:
  honeywire encode <kind>      Build a message and print it as hex
  honeywire decode <hex>       Decode a captured message
  honeywire config <cmd>       Default token and frame limit
"""

import json
import logging
from pathlib import Path

try:
    import click
    from rich.console import Console
    from rich.logging import RichHandler
except ImportError:
    raise SystemExit("CLI requires extras: pip install honeywire[cli]")

from honeywire import __version__
from honeywire.transport.framing import DEFAULT_MAX_FRAME_SIZE

console = Console()
CONFIG_FILE = Path.home() / ".honeywire" / "config.json"


def _load_config() -> dict:
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _save_config(cfg: dict) -> None:
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(cfg, indent=2))


def _max_frame_size() -> int:
    return int(_load_config().get("max_frame_size", DEFAULT_MAX_FRAME_SIZE))


@click.group()
@click.version_option(__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log protocol details")
def main(verbose: bool):
    """Agent/listener wire protocol tools."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


@click.group()
def config():
    """Manage ~/.honeywire/config.json."""


@config.command("show")
def config_show():
    """Show current settings."""
    cfg = _load_config()
    token = cfg.get("token")
    console.print(f"token: {token if token else '[dim](none)[/dim]'}")
    console.print(f"max_frame_size: {cfg.get('max_frame_size', DEFAULT_MAX_FRAME_SIZE)}")


@config.command("set-token")
@click.argument("token")
def config_set_token(token: str):
    """Save the default token for hello and ping."""
    cfg = _load_config()
    _save_config({**cfg, "token": token})
    console.print("[green]Token saved.[/green]")


@config.command("set-max-frame-size")
@click.argument("size", type=click.IntRange(min=1))
def config_set_max_frame_size(size: int):
    """Save the largest frame `decode --framed` accepts."""
    cfg = _load_config()
    _save_config({**cfg, "max_frame_size": size})
    console.print(f"[green]max_frame_size set to {size}.[/green]")


@config.command("clear")
def config_clear():
    """Clear saved settings."""
    _save_config({})
    console.print("[green]Config cleared.[/green]")


# Register subcommands from separate modules
from honeywire.cli.decode import decode_cmd
from honeywire.cli.encode import encode

main.add_command(config)
main.add_command(decode_cmd)
main.add_command(encode)


if __name__ == "__main__":
    main()
