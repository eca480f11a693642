"""遅延応答の完了通知サービス

即時応答（DEFERRED）の後にバックグラウンドで要約を生成し、
プレースホルダーメッセージを編集して結果を届けます。
"""

import logging
from typing import Optional

from sumtube.discord_client import DiscordClient
from sumtube.exceptions import DiscordAPIError
from sumtube.services.summary_service import SummaryService

logger = logging.getLogger(__name__)


def format_summary_message(original_url: str, summary: str) -> str:
    """要約結果のメッセージ本文を構築"""
    return (
        f"🎥 **YouTube Video Summary**\n\n"
        f"📹 **Video:** {original_url}\n\n"
        f"{summary}\n\n"
        f"✨ *Powered by Gemini*"
    )


def format_failure_message(original_url: str) -> str:
    """要約に失敗した場合のメッセージ本文を構築"""
    return (
        f"❌ Sorry, I couldn't summarize this video. Please try again later.\n\n"
        f"📹 **Video:** {original_url}"
    )


class DeliveryService:
    """遅延応答の完了通知サービスクラス

    1回のsummarizeコマンドにつき、フォローアップ編集を1回（失敗時は縮退した内容で
    もう1回だけ）行います。例外は外に漏らしません。
    """

    def __init__(
        self,
        summary_service: SummaryService,
        discord_client: DiscordClient,
        application_id: str,
    ) -> None:
        """初期化

        Args:
            summary_service: 動画要約サービス
            discord_client: Discord APIクライアント
            application_id: アプリケーションID
        """
        self.summary_service = summary_service
        self.discord_client = discord_client
        self.application_id = application_id

    async def run_summarize_task(
        self,
        interaction_token: str,
        original_url: str,
        video_url: str,
        video_id: str,
        application_id: Optional[str] = None,
    ) -> None:
        """要約を生成して遅延応答を編集する（バックグラウンドタスク本体）

        Args:
            interaction_token: インタラクションのトークン
            original_url: ユーザーが入力したURL
            video_url: 正規化されたYouTube視聴URL
            video_id: 動画ID
            application_id: 編集先のアプリケーションID（省略時は設定値）
        """
        logger.info(
            "Background summarize task started",
            extra={"video_id": video_id}
        )

        try:
            summary = await self.summary_service.summarize(video_url, video_id)
            content = format_summary_message(original_url, summary)
        except Exception as e:
            logger.error(
                "Unexpected error while processing summary",
                extra={"video_id": video_id, "error": str(e)},
                exc_info=True,
            )
            content = format_failure_message(original_url)

        try:
            await self.deliver(interaction_token, content, original_url, application_id)
        except Exception as e:
            logger.error(
                "Unexpected error while delivering summary",
                extra={"video_id": video_id, "error": str(e)},
                exc_info=True,
            )
            return

        logger.info(
            "Background summarize task finished",
            extra={"video_id": video_id}
        )

    async def deliver(
        self,
        interaction_token: str,
        content: str,
        original_url: str,
        application_id: Optional[str] = None,
    ) -> bool:
        """プレースホルダーメッセージを編集する

        失敗した場合は元の本文ではなく縮退したエラーメッセージで1回だけ再試行する。

        Args:
            interaction_token: インタラクションのトークン
            content: 編集後のメッセージ本文
            original_url: ユーザーが入力したURL
            application_id: 編集先のアプリケーションID（省略時は設定値）

        Returns:
            いずれかの編集が成功した場合True
        """
        application_id = application_id or self.application_id
        try:
            await self.discord_client.edit_original_response(
                application_id, interaction_token, content
            )
            return True
        except DiscordAPIError as e:
            logger.warning(
                "Follow-up edit failed, retrying with fallback message",
                extra={"status_code": e.status_code, "error": e.message},
            )

        try:
            await self.discord_client.edit_original_response(
                application_id,
                interaction_token,
                format_failure_message(original_url),
            )
            return True
        except DiscordAPIError as e:
            logger.error(
                "Fallback follow-up edit failed, giving up",
                extra={"status_code": e.status_code, "error": e.message},
            )
            return False
