"""CLI: commentum comments list|replies|post|reply|edit|delete|vote|report"""

from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from commentum.models.comment import VoteType
from commentum.pagination import PageResult

console = Console()

VOTES = {"up": VoteType.UP, "down": VoteType.DOWN, "none": VoteType.NONE}


def _get_client():
    from commentum.cli.main import _get_client
    return _get_client()


def _run(coro):
    from commentum.cli.main import _run
    return _run(coro)


def _print_page(page: PageResult, title: str, json_output: bool) -> None:
    if json_output:
        click.echo(page.model_dump_json(indent=2))
        return
    total = f", {page.count} total" if page.count is not None else ""
    table = Table(title=f"{title}{total}")
    table.add_column("ID", style="bold")
    table.add_column("Author")
    table.add_column("Score", justify="right")
    table.add_column("Replies", justify="right")
    table.add_column("Content")
    for c in page.items:
        author = c.user.username if c.user else ""
        table.add_row(c.id, author, str(c.upvotes - c.downvotes), str(c.reply_count), c.content)
    console.print(table)
    if page.next_cursor:
        console.print(f"[dim]Next page: --cursor {page.next_cursor}[/dim]")


@click.group()
def comments():
    """Comment commands."""


@comments.command("list")
@click.argument("media_id")
@click.option("--limit", default=20, type=int)
@click.option("--cursor", default=None)
@click.option("--json-output", "--json", is_flag=True)
def comments_list(media_id: str, limit: int, cursor: Optional[str], json_output: bool):
    """List root comments on a media item."""
    client = _get_client()

    async def _list():
        async with client:
            await client.init()
            page = await client.list_comments(media_id, limit=limit, cursor=cursor)
        _print_page(page, f"Comments on {media_id}", json_output)

    _run(_list())


@comments.command("replies")
@click.argument("root_id")
@click.option("--parent-id", default=None)
@click.option("--limit", default=20, type=int)
@click.option("--cursor", default=None)
@click.option("--json-output", "--json", is_flag=True)
def comments_replies(root_id: str, parent_id: Optional[str], limit: int, cursor: Optional[str], json_output: bool):
    """List replies under a root comment."""
    client = _get_client()

    async def _replies():
        async with client:
            await client.init()
            page = await client.list_replies(root_id, limit=limit, cursor=cursor, parent_id=parent_id)
        _print_page(page, f"Replies to {root_id}", json_output)

    _run(_replies())


@comments.command("post")
@click.argument("media_id")
@click.argument("content")
def comments_post(media_id: str, content: str):
    """Post a root comment."""
    client = _get_client()

    async def _post():
        async with client:
            await client.init()
            with console.status("Posting..."):
                comment = await client.create_comment(media_id, content)
        console.print(f"[green]Comment posted: {comment.id}[/green]")

    _run(_post())


@comments.command("reply")
@click.argument("parent_id")
@click.argument("content")
def comments_reply(parent_id: str, content: str):
    """Reply to a comment."""
    client = _get_client()

    async def _reply():
        async with client:
            await client.init()
            with console.status("Posting reply..."):
                comment = await client.create_reply(parent_id, content)
        console.print(f"[green]Reply posted: {comment.id}[/green]")

    _run(_reply())


@comments.command("edit")
@click.argument("comment_id")
@click.argument("content")
def comments_edit(comment_id: str, content: str):
    """Replace a comment's text."""
    client = _get_client()

    async def _edit():
        async with client:
            await client.init()
            await client.update_comment(comment_id, content)
        console.print(f"[green]Comment {comment_id} updated.[/green]")

    _run(_edit())


@comments.command("delete")
@click.argument("comment_id")
@click.confirmation_option(prompt="Delete this comment?")
def comments_delete(comment_id: str):
    """Delete a comment."""
    client = _get_client()

    async def _delete():
        async with client:
            await client.init()
            with console.status("Deleting..."):
                await client.delete_comment(comment_id)
        console.print(f"[green]Comment {comment_id} deleted.[/green]")

    _run(_delete())


@comments.command("vote")
@click.argument("comment_id")
@click.argument("direction", type=click.Choice(list(VOTES)))
def comments_vote(comment_id: str, direction: str):
    """Vote up, down, or clear your vote."""
    client = _get_client()

    async def _vote():
        async with client:
            await client.init()
            await client.vote_comment(comment_id, VOTES[direction])
        console.print(f"[green]Vote recorded ({direction}).[/green]")

    _run(_vote())


@comments.command("report")
@click.argument("comment_id")
@click.argument("reason")
def comments_report(comment_id: str, reason: str):
    """Report a comment for moderation."""
    client = _get_client()

    async def _report():
        async with client:
            await client.init()
            await client.report_comment(comment_id, reason)
        console.print("[green]Report submitted.[/green]")

    _run(_report())
