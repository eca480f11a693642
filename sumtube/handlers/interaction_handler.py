"""インタラクションハンドリングサービス

署名検証済みのインタラクションを種別・コマンド名で振り分け、
Discordへの即時レスポンスを組み立てます。
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from sumtube.commands import (
    ABOUT_COMMAND,
    ABOUT_MESSAGE,
    GREETING_MESSAGE,
    INVALID_URL_MESSAGE,
    MISSING_APPLICATION_ID_MESSAGE,
    MISSING_TOKEN_MESSAGE,
    MISSING_URL_MESSAGE,
    SUMMARIZE_COMMAND,
)
from sumtube.models.interactions import (
    Interaction,
    InteractionResponseType,
    InteractionType,
)
from sumtube.models.responses import ErrorResponse, InteractionResponse
from sumtube.services.delivery_service import DeliveryService
from sumtube.youtube import build_watch_url, extract_youtube_links

logger = logging.getLogger(__name__)


@dataclass
class DispatchResult:
    """ディスパッチ結果

    body と status_code は即時レスポンス、background は応答送信後に実行するタスク。
    """
    body: dict[str, Any]
    status_code: int = 200
    background: Optional[Callable[..., Any]] = None
    background_kwargs: dict[str, Any] = field(default_factory=dict)


def channel_message(content: str) -> InteractionResponse:
    """CHANNEL_MESSAGE_WITH_SOURCE レスポンスを構築"""
    return InteractionResponse(
        type=InteractionResponseType.CHANNEL_MESSAGE_WITH_SOURCE,
        data={"content": content},
    )


class InteractionHandler:
    """インタラクションハンドリングサービス

    責務:
    - PING への応答
    - コマンド名によるディスパッチ
    - summarize の入力検証と遅延応答タスクの準備
    """

    def __init__(self, delivery_service: DeliveryService) -> None:
        """初期化

        Args:
            delivery_service: 遅延応答の完了通知サービス
        """
        self.delivery_service = delivery_service

    def handle(self, interaction: Interaction) -> DispatchResult:
        """インタラクションを処理

        Args:
            interaction: 署名検証済みのインタラクション

        Returns:
            ディスパッチ結果
        """
        if interaction.kind == InteractionType.PING:
            return DispatchResult(body=InteractionResponse(type=InteractionResponseType.PONG))

        if interaction.kind == InteractionType.APPLICATION_COMMAND:
            return self._handle_command(interaction)

        logger.info(
            "Unhandled interaction type",
            extra={"interaction_type": interaction.type}
        )
        return DispatchResult(body=channel_message(GREETING_MESSAGE))

    def _handle_command(self, interaction: Interaction) -> DispatchResult:
        """スラッシュコマンドを処理"""
        command_name = interaction.command_name
        logger.info("Received command", extra={"command": command_name})

        if command_name == ABOUT_COMMAND["name"]:
            return DispatchResult(body=channel_message(ABOUT_MESSAGE))

        if command_name == SUMMARIZE_COMMAND["name"]:
            return self._handle_summarize(interaction)

        logger.warning("Unknown command", extra={"command": command_name})
        return DispatchResult(body=ErrorResponse(error="Unknown Command"), status_code=400)

    def _handle_summarize(self, interaction: Interaction) -> DispatchResult:
        """summarizeコマンドを処理

        URLが不正な場合は同期的にエラーメッセージを返し、外部呼び出しは行わない。
        """
        url = interaction.get_option("url")
        if not url:
            return DispatchResult(body=channel_message(MISSING_URL_MESSAGE))

        url = str(url)
        links = extract_youtube_links(url)
        if not links:
            logger.info("No YouTube link found in summarize input")
            return DispatchResult(body=channel_message(INVALID_URL_MESSAGE))

        if not interaction.token:
            # トークンがなければ遅延応答を編集できない
            logger.warning("Summarize interaction without token")
            return DispatchResult(body=channel_message(MISSING_TOKEN_MESSAGE))

        # 設定値を優先し、未設定ならインタラクション自身のアプリケーションIDを使う
        application_id = self.delivery_service.application_id or interaction.application_id
        if not application_id:
            logger.error("Application ID is not available for follow-up edit")
            return DispatchResult(body=channel_message(MISSING_APPLICATION_ID_MESSAGE))

        video_id = links[0].video_id
        logger.info("Deferring summarize command", extra={"video_id": video_id})

        return DispatchResult(
            body=InteractionResponse(
                type=InteractionResponseType.DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE
            ),
            background=self.delivery_service.run_summarize_task,
            background_kwargs={
                "interaction_token": interaction.token,
                "original_url": url,
                "video_url": build_watch_url(video_id),
                "video_id": video_id,
                "application_id": application_id,
            },
        )
