"""Discord REST API クライアント

インタラクションのフォローアップ編集とスラッシュコマンド登録を行う HTTP クライアント。
共通リクエストメソッドでエラーハンドリングとログを統一しています。
"""

import logging
from typing import Any, Optional

import httpx

from sumtube.config import Settings
from sumtube.exceptions import DiscordAPIError

logger = logging.getLogger(__name__)

# Discordメッセージ本文の最大文字数
MESSAGE_CONTENT_LIMIT = 2000


def truncate_content(content: str, limit: int = MESSAGE_CONTENT_LIMIT) -> str:
    """メッセージ本文をDiscordの上限文字数に収める"""
    if len(content) <= limit:
        return content
    return content[:limit - 3] + "..."


class DiscordClient:
    """Discord REST API と通信するクライアント"""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """クライアントを初期化

        Args:
            base_url: Discord APIのベースURL
            timeout: リクエストタイムアウト秒数
            transport: httpxのトランスポート（主にテスト用）
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "DiscordClient":
        """設定からクライアントを生成"""
        return cls(
            base_url=settings.discord_api_base,
            timeout=settings.http_timeout,
            transport=transport,
        )

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        json_data: Optional[Any] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> httpx.Response:
        """共通HTTPリクエストメソッド

        Args:
            method: HTTPメソッド（PATCH, PUT等）
            endpoint: エンドポイントパス
            json_data: JSONボディ
            headers: 追加ヘッダー

        Returns:
            成功したレスポンス

        Raises:
            DiscordAPIError: 通信失敗、または2xx以外のステータスの場合
        """
        url = f"{self.base_url}{endpoint}"
        # トークンを含むURLはログに出さない
        log_endpoint = "/webhooks/..." if endpoint.startswith("/webhooks/") else endpoint

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.request(
                    method=method,
                    url=url,
                    json=json_data,
                    headers=headers,
                )
        except httpx.TimeoutException as e:
            logger.error(
                "Discord request timeout",
                extra={"endpoint": log_endpoint, "timeout": self.timeout},
            )
            raise DiscordAPIError(
                f"Request timeout after {self.timeout}s",
                details={"method": method}
            ) from e
        except httpx.RequestError as e:
            logger.error(
                "Discord request error",
                extra={"endpoint": log_endpoint, "error": str(e)},
            )
            raise DiscordAPIError(
                f"Request failed: {str(e)}",
                details={"method": method}
            ) from e

        logger.info(
            f"{method} request completed",
            extra={"endpoint": log_endpoint, "status_code": response.status_code}
        )

        if not response.is_success:
            raise DiscordAPIError(
                f"Discord API request failed: {response.status_code} {response.text}",
                status_code=response.status_code,
                details={"method": method, "body": response.text},
            )

        return response

    async def edit_original_response(
        self,
        application_id: str,
        interaction_token: str,
        content: str,
    ) -> None:
        """遅延応答のプレースホルダーメッセージを編集する

        Args:
            application_id: アプリケーションID
            interaction_token: インタラクションのトークン
            content: 新しいメッセージ本文（上限を超える場合は切り詰め）

        Raises:
            DiscordAPIError: 編集に失敗した場合
        """
        await self._make_request(
            method="PATCH",
            endpoint=f"/webhooks/{application_id}/{interaction_token}/messages/@original",
            json_data={"content": truncate_content(content)},
        )

    async def register_commands(
        self,
        bot_token: str,
        application_id: str,
        commands: list[dict[str, Any]],
    ) -> Any:
        """スラッシュコマンドを一括登録（PUTで上書き）

        Args:
            bot_token: Botトークン
            application_id: アプリケーションID
            commands: コマンド定義のリスト

        Returns:
            Discordが返した登録済みコマンドのJSON

        Raises:
            DiscordAPIError: 登録に失敗した場合
        """
        logger.info(
            "Registering commands",
            extra={"commands": [command["name"] for command in commands]}
        )

        response = await self._make_request(
            method="PUT",
            endpoint=f"/applications/{application_id}/commands",
            json_data=commands,
            headers={"Authorization": f"Bot {bot_token}"},
        )
        return response.json()
