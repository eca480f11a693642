"""
Gemini API クライアント

Google Gemini の generateContent REST エンドポイントと通信するクライアント。
テキストプロンプトと動画URL（file_data）を同時に送信できる。
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from sumtube.config import Settings
from sumtube.exceptions import GeminiAPIError, GeminiHTTPError

logger = logging.getLogger(__name__)


class GeminiClient:
    """Gemini API とのやり取りを行うクライアント"""

    def __init__(
        self,
        api_key: str,
        model: str,
        api_url: str,
        timeout: float = 300.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Args:
            api_key: Gemini APIキー
            model: 使用するモデル名
            api_url: Gemini APIのベースURL
            timeout: HTTPリクエストのタイムアウト（秒）
            transport: httpxのトランスポート（主にテスト用）
        """
        self.api_key = api_key
        self.model = model
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "GeminiClient":
        """設定からクライアントを生成"""
        return cls(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            api_url=settings.gemini_api_base,
            timeout=settings.gemini_timeout,
            transport=transport,
        )

    def _build_headers(self) -> Dict[str, str]:
        """APIリクエスト用のヘッダーを構築"""
        return {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }

    async def generate_content(self, prompt: str, file_uri: Optional[str] = None) -> str:
        """
        コンテンツ生成APIを呼び出す

        Args:
            prompt: テキストプロンプト
            file_uri: プロンプトと一緒に渡すリモートファイル（YouTube動画URLなど）

        Returns:
            生成されたテキスト（候補が空の場合は空文字列）

        Raises:
            GeminiHTTPError: 2xx以外のステータスが返された場合
            GeminiAPIError: プロンプトがブロックされた、またはレスポンスが不正な場合
            httpx.HTTPError: 通信に失敗した場合
        """
        parts: List[Dict[str, Any]] = [{"text": prompt}]
        if file_uri:
            parts.append({"file_data": {"file_uri": file_uri}})

        payload = {"contents": [{"parts": parts}]}
        url = f"{self.api_url}/models/{self.model}:generateContent"

        logger.info(
            "Calling Gemini generateContent",
            extra={"model": self.model, "has_file": file_uri is not None}
        )

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.post(url, headers=self._build_headers(), json=payload)

        if not response.is_success:
            # APIキーはヘッダーで送っているため、ボディに含まれることはない
            logger.error(
                "Gemini API returned error status",
                extra={"status_code": response.status_code}
            )
            raise GeminiHTTPError(response.status_code, response.text)

        try:
            data: Dict[str, Any] = response.json()
        except ValueError as e:
            raise GeminiAPIError("Invalid response structure from Gemini API") from e

        block_reason = (data.get("promptFeedback") or {}).get("blockReason")
        if block_reason:
            raise GeminiAPIError(
                f"Content was blocked: {block_reason}",
                details={"block_reason": block_reason}
            )

        return self._extract_text(data)

    @staticmethod
    def _extract_text(data: Dict[str, Any]) -> str:
        """最初の候補からテキストパートを連結して取り出す"""
        candidates = data.get("candidates") or []
        if not candidates:
            return ""

        content = candidates[0].get("content") or {}
        texts = [
            part["text"]
            for part in content.get("parts") or []
            if isinstance(part.get("text"), str)
        ]
        return "".join(texts)
