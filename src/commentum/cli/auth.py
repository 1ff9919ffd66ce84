"""CLI: commentum auth login|status|logout, commentum me"""

from typing import Optional

import click
from rich.console import Console

from commentum.config import Provider

console = Console()

PROVIDER_CHOICE = click.Choice([p.value for p in Provider], case_sensitive=False)


def _load_config() -> dict:
    from commentum.cli.main import _load_config
    return _load_config()


def _save_config(cfg: dict) -> None:
    from commentum.cli.main import _save_config
    _save_config(cfg)


def _get_client():
    from commentum.cli.main import _get_client
    return _get_client()


def _run(coro):
    from commentum.cli.main import _run
    return _run(coro)


@click.group()
def auth():
    """Authentication commands."""


@auth.command("login")
@click.option("--provider", "provider_name", type=PROVIDER_CHOICE, required=True)
@click.option("--token", default=None, help="Provider OAuth access token")
@click.pass_context
def auth_login(ctx: click.Context, provider_name: str, token: Optional[str]):
    """Exchange a provider access token for a Commentum session."""
    provider = Provider.parse(provider_name)
    token = token or click.prompt(f"{provider.name.title()} access token", hide_input=True)
    cfg = _load_config()
    base_url = ctx.find_root().obj.get("base_url")
    if base_url:
        cfg["base_url"] = base_url
        _save_config(cfg)
    client = _get_client()

    async def _login():
        async with client:
            with console.status("Logging in..."):
                await client.login(provider, token)
                user = await client.get_me()
        console.print(f"[green]Logged in as {user.username or user.id} via {provider.value}[/green]")

    _run(_login())
    _save_config({**_load_config(), "provider": provider.value})
    console.print("[dim]Session saved to ~/.commentum/tokens.json[/dim]")


@auth.command("status")
def auth_status():
    """Show cached sessions."""
    client = _get_client()

    async def _status():
        async with client:
            await client.init()
        cached = client.state.cached_providers()
        if not cached:
            console.print("[yellow]Not logged in. Run `commentum auth login`.[/yellow]")
            return
        for provider in cached:
            marker = " [green](active)[/green]" if provider == client.active_provider else ""
            console.print(f"{provider.value}{marker}")

    _run(_status())


@auth.command("logout")
@click.argument("provider_name", type=PROVIDER_CHOICE, required=False)
@click.option("--all", "all_providers", is_flag=True, help="Log out every cached provider")
def auth_logout(provider_name: Optional[str], all_providers: bool):
    """End a session (default: the active one)."""
    client = _get_client()

    async def _logout():
        async with client:
            await client.init()
            if all_providers:
                await client.logout_all()
            else:
                await client.logout(Provider.parse(provider_name) if provider_name else None)

    _run(_logout())
    console.print("[green]Logged out.[/green]")


@click.command("me")
def me():
    """Show the current user."""
    client = _get_client()

    async def _me():
        async with client:
            await client.init()
            user = await client.get_me()
        console.print(f"[bold]{user.username or user.id}[/bold] (ID: {user.id}, provider: {user.provider or '-'})")

    _run(_me())
