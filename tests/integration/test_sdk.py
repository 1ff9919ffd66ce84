"""
Integration tests for the Commentum Python SDK — tests against a real server.

Requires environment variables:
  COMMENTUM_BASE_URL        — API base URL
  COMMENTUM_PROVIDER        — anilist | mal | simkl
  COMMENTUM_PROVIDER_TOKEN  — valid OAuth access token for that provider
  COMMENTUM_MEDIA_ID        — (optional) media to comment on, defaults to 1

Run: COMMENTUM_INTEGRATION=1 pytest tests/integration/ -v
"""

import os

import pytest

from commentum import AsyncCommentum, CommentumConfig, MemoryTokenStore, Provider, ServerError

SKIP = not os.environ.get("COMMENTUM_INTEGRATION")
PROVIDER_TOKEN = os.environ.get("COMMENTUM_PROVIDER_TOKEN", "")
MEDIA_ID = os.environ.get("COMMENTUM_MEDIA_ID", "1")

pytestmark = pytest.mark.skipif(SKIP, reason="COMMENTUM_INTEGRATION not set")


def make_client() -> AsyncCommentum:
    return AsyncCommentum(CommentumConfig.from_env(), storage=MemoryTokenStore())


class TestAuthLifecycle:
    @pytest.mark.asyncio
    async def test_login_me_logout(self):
        async with make_client() as client:
            provider = client.config.preferred_provider
            await client.login(provider, PROVIDER_TOKEN)
            assert client.is_logged_in

            me = await client.get_me()
            assert me.id

            await client.logout()
            assert not client.is_logged_in

    @pytest.mark.asyncio
    async def test_rejects_invalid_provider_token(self):
        async with make_client() as client:
            with pytest.raises(ServerError):
                await client.login(Provider.ANILIST, "invalid")
            assert not client.is_logged_in


class TestCommentCRUD:
    @pytest.mark.asyncio
    async def test_create_list_vote_delete(self):
        async with make_client() as client:
            await client.login(client.config.preferred_provider, PROVIDER_TOKEN)

            comment = await client.create_comment(MEDIA_ID, "SDK integration test")
            assert comment.id

            page = await client.list_comments(MEDIA_ID, limit=50)
            assert comment.id in [c.id for c in page.items]

            reply = await client.create_reply(comment.id, "SDK integration reply")
            replies = await client.list_replies(comment.id)
            assert reply.id in [r.id for r in replies.items]

            await comment.upvote(client)
            await comment.remove_vote(client)

            edited = await client.update_comment(comment.id, "SDK integration test (edited)")
            assert edited.content.endswith("(edited)")

            await reply.delete(client)
            await comment.delete(client)
            await client.logout()
