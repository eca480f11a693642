"""動画要約サービス

Gemini への要約リクエストと、失敗時のユーザー向けメッセージへの変換を担当します。
"""

import logging
from typing import Optional

from sumtube.exceptions import GeminiHTTPError
from sumtube.gemini_client import GeminiClient
from sumtube.youtube import build_timestamp_url

logger = logging.getLogger(__name__)

MISSING_API_KEY_MESSAGE = (
    "❌ Gemini API key not configured. "
    "Please add GEMINI_API_KEY to your environment variables."
)
INVALID_API_KEY_MESSAGE = (
    "❌ Invalid API key. Please check your GEMINI_API_KEY environment variable."
)
QUOTA_EXCEEDED_MESSAGE = (
    "❌ API quota exceeded. "
    "Please try again later or check your Gemini API usage limits."
)
CONTENT_BLOCKED_MESSAGE = (
    "❌ Content was blocked. "
    "The video might contain restricted content or be unavailable."
)
VIDEO_NOT_FOUND_MESSAGE = (
    "❌ Video not found. "
    "Please check if the YouTube URL is valid and the video is publicly accessible."
)
NO_SUMMARY_MESSAGE = (
    "❌ Gemini API did not return a summary. "
    "The video might be private, unavailable, or the API encountered an issue."
)

# エラーメッセージ中の部分文字列とユーザー向けメッセージの対応（先勝ち）
ERROR_CLASSIFICATION: list[tuple[str, str]] = [
    ("API key", INVALID_API_KEY_MESSAGE),
    ("quota", QUOTA_EXCEEDED_MESSAGE),
    ("blocked", CONTENT_BLOCKED_MESSAGE),
    ("not found", VIDEO_NOT_FOUND_MESSAGE),
]

SUMMARY_PROMPT_TEMPLATE = (
    "Analyze the following YouTube video content. "
    "Provide a concise summary in discord message format, no longer than 1500 characters. "
    "Add relevant timestamps to the summary with hyperlinks to the timestamps, "
    "use {timestamp_url} where TIMESTAMP is the timestamp in seconds. "
    "Keep formatting minimal. Do not include any other text than the summary."
)


def build_summary_prompt(video_id: str) -> str:
    """要約用の指示プロンプトを構築"""
    return SUMMARY_PROMPT_TEMPLATE.format(
        timestamp_url=build_timestamp_url(video_id, "TIMESTAMP")
    )


def classify_error(message: str) -> str:
    """上流のエラーメッセージをユーザー向けメッセージに変換

    Gemini のエラー本文に対する部分一致による分類で、厳密な契約ではない。

    Args:
        message: 例外のメッセージ

    Returns:
        ユーザー向けエラーメッセージ
    """
    for needle, user_message in ERROR_CLASSIFICATION:
        if needle in message:
            return user_message
    return f"❌ Error calling Gemini API: {message or 'Unknown error occurred'}"


class SummaryService:
    """動画要約サービスクラス

    失敗時も例外を送出せず、ユーザー向けのエラーメッセージを返します。
    """

    def __init__(self, gemini_client: Optional[GeminiClient]) -> None:
        """初期化

        Args:
            gemini_client: Geminiクライアント（APIキー未設定の場合はNone）
        """
        self.gemini_client = gemini_client

    async def summarize(self, video_url: str, video_id: str) -> str:
        """動画を要約する

        Args:
            video_url: 正規化されたYouTube視聴URL
            video_id: 動画ID

        Returns:
            要約テキスト、またはユーザー向けエラーメッセージ
        """
        if self.gemini_client is None or not self.gemini_client.api_key:
            logger.error("Gemini API key is not configured")
            return MISSING_API_KEY_MESSAGE

        logger.info(
            "Starting video summary generation",
            extra={"video_id": video_id}
        )

        try:
            summary = await self.gemini_client.generate_content(
                prompt=build_summary_prompt(video_id),
                file_uri=video_url,
            )
        except GeminiHTTPError as e:
            logger.error(
                "Gemini API request failed",
                extra={"video_id": video_id, "status_code": e.status_code}
            )
            return (
                f"❌ Gemini API request failed with status {e.status_code}:\n"
                f"{e.body}"
            )
        except Exception as e:
            logger.error(
                "Gemini API error",
                extra={"video_id": video_id, "error": str(e)},
                exc_info=True,
            )
            return classify_error(str(e))

        if not summary or not summary.strip():
            logger.warning(
                "Gemini returned an empty summary",
                extra={"video_id": video_id}
            )
            return NO_SUMMARY_MESSAGE

        logger.info(
            "Summary generated successfully",
            extra={"video_id": video_id, "summary_length": len(summary)}
        )
        return summary.strip()
