"""Discordクライアントのテスト"""

import json

import httpx
import pytest

from sumtube.commands import COMMANDS
from sumtube.discord_client import MESSAGE_CONTENT_LIMIT, DiscordClient, truncate_content
from sumtube.exceptions import DiscordAPIError


def test_truncate_content():
    assert truncate_content("short") == "short"

    truncated = truncate_content("x" * (MESSAGE_CONTENT_LIMIT + 10))

    assert len(truncated) == MESSAGE_CONTENT_LIMIT
    assert truncated.endswith("...")


@pytest.mark.asyncio
async def test_edit_original_response_truncates_long_content():
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json={"id": "1"})

    client = DiscordClient("https://discord.test/api/v10", transport=httpx.MockTransport(handler))
    await client.edit_original_response("app", "token", "y" * 5000)

    body = json.loads(captured[0].content)
    assert len(body["content"]) == MESSAGE_CONTENT_LIMIT


@pytest.mark.asyncio
async def test_edit_original_response_error_status():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"message": "Unknown Webhook"})

    client = DiscordClient("https://discord.test/api/v10", transport=httpx.MockTransport(handler))

    with pytest.raises(DiscordAPIError) as exc_info:
        await client.edit_original_response("app", "token", "content")

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_register_commands_puts_all_commands():
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json=[{"id": "1", "name": "about"}, {"id": "2", "name": "summarize"}])

    client = DiscordClient("https://discord.test/api/v10", transport=httpx.MockTransport(handler))
    data = await client.register_commands("bot-token", "app", COMMANDS)

    request = captured[0]
    assert request.method == "PUT"
    assert str(request.url) == "https://discord.test/api/v10/applications/app/commands"
    assert request.headers["Authorization"] == "Bot bot-token"
    assert json.loads(request.content) == COMMANDS
    assert [command["name"] for command in data] == ["about", "summarize"]
