"""テスト共通フィクスチャ"""

import json
from typing import Any, Callable

import httpx
import pytest
from fastapi.testclient import TestClient
from nacl.signing import SigningKey

from sumtube.config import Settings, get_settings
from sumtube.discord_client import DiscordClient
from sumtube.main import app, get_discord_client, get_summary_service

APPLICATION_ID = "123456789012345678"
INTERACTION_TOKEN = "interaction-token"


class FakeSummaryService:
    """要約サービスのモック（固定テキストを返し、呼び出しを記録する）"""

    def __init__(self, summary: str = "This video is about testing.") -> None:
        self.summary = summary
        self.calls: list[tuple[str, str]] = []

    async def summarize(self, video_url: str, video_id: str) -> str:
        self.calls.append((video_url, video_id))
        return self.summary


class DiscordRecorder:
    """Discord APIへのリクエストを記録するMockTransportのハンドラー"""

    def __init__(self, statuses: list[int] | None = None) -> None:
        self.statuses = list(statuses or [])
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status = self.statuses.pop(0) if self.statuses else 200
        if request.method == "PUT":
            return httpx.Response(status, json=json.loads(request.content))
        return httpx.Response(status, json={"id": "1"} if status < 400 else {"message": "error"})

    @property
    def bodies(self) -> list[Any]:
        return [json.loads(request.content) for request in self.requests]


@pytest.fixture
def signing_key() -> SigningKey:
    return SigningKey.generate()


@pytest.fixture
def settings(signing_key: SigningKey) -> Settings:
    return Settings(
        _env_file=None,
        discord_token="bot-token",
        discord_public_key=signing_key.verify_key.encode().hex(),
        discord_application_id=APPLICATION_ID,
        gemini_api_key="gemini-key",
    )


@pytest.fixture
def discord_recorder() -> DiscordRecorder:
    return DiscordRecorder()


@pytest.fixture
def summary_service() -> FakeSummaryService:
    return FakeSummaryService()


@pytest.fixture
def client(settings, discord_recorder, summary_service):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_discord_client] = lambda: DiscordClient.from_settings(
        settings, transport=httpx.MockTransport(discord_recorder)
    )
    app.dependency_overrides[get_summary_service] = lambda: summary_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def signed_post(client: TestClient, signing_key: SigningKey) -> Callable[..., httpx.Response]:
    """署名付きでインタラクションを送信するヘルパー"""

    def _post(payload: dict[str, Any]) -> httpx.Response:
        body = json.dumps(payload).encode()
        timestamp = "1700000000"
        signature = signing_key.sign(timestamp.encode() + body).signature.hex()
        return client.post(
            "/discord",
            content=body,
            headers={
                "Content-Type": "application/json",
                "X-Signature-Ed25519": signature,
                "X-Signature-Timestamp": timestamp,
            },
        )

    return _post
