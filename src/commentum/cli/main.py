"""
Commentum CLI — `commentum` command.

Commands:
  commentum auth login       Exchange a provider token for a session
  commentum auth status      Show cached sessions
  commentum auth logout      End a session
  commentum me               Show the current user
  commentum comments <cmd>   List, post, edit, vote on and report comments
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

try:
    import click
    from rich.console import Console
    from rich.logging import RichHandler
except ImportError:
    raise SystemExit("CLI requires extras: pip install commentum-client[cli]")

from commentum.client import AsyncCommentum
from commentum.config import CommentumConfig, Provider
from commentum.errors import CommentumError
from commentum.storage import FileTokenStore

console = Console()
CONFIG_FILE = Path.home() / ".commentum" / "config.json"
TOKEN_FILE = Path.home() / ".commentum" / "tokens.json"


def _load_config() -> dict:
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _save_config(cfg: dict) -> None:
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(cfg, indent=2))


def _get_client() -> AsyncCommentum:
    ctx = click.get_current_context()
    opts = ctx.find_root().obj or {}
    cfg = _load_config()
    base_url = opts.get("base_url") or cfg.get("base_url")
    if not base_url:
        console.print("[red]No base URL. Run `commentum --base-url URL auth login ...` first.[/red]")
        raise SystemExit(1)
    provider = cfg.get("provider")
    config = CommentumConfig(
        base_url=base_url,
        enable_logging=opts.get("verbose", False),
        verbose_logging=opts.get("verbose", False),
        preferred_provider=Provider.parse(provider) if provider else Provider.ANILIST,
    )
    return AsyncCommentum(config, storage=FileTokenStore(TOKEN_FILE))


def _run(coro):
    try:
        return asyncio.run(coro)
    except CommentumError as e:
        console.print(f"[red]Error ({e.status}): {e.message}[/red]")
        raise SystemExit(1)


@click.group()
@click.version_option("0.1.0")
@click.option("--base-url", default=None, help="Commentum API base URL")
@click.option("-v", "--verbose", is_flag=True, help="Log HTTP traffic")
@click.pass_context
def main(ctx: click.Context, base_url: Optional[str], verbose: bool):
    """Commentum CLI — comments and votes from the terminal."""
    ctx.obj = {"base_url": base_url, "verbose": verbose}
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(message)s", handlers=[RichHandler(console=console)])


# Register subcommands from separate modules
from commentum.cli.auth import auth, me
from commentum.cli.comments import comments

main.add_command(auth)
main.add_command(me)
main.add_command(comments)


if __name__ == "__main__":
    main()
