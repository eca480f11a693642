"""カスタム例外定義

アプリケーション全体で使用するカスタム例外階層を定義します。
外部サービスのエラーはここで定義した例外に包んでから扱います。
"""

from typing import Any, Optional


class SumTubeBotError(Exception):
    """基底例外クラス

    全てのカスタム例外の基底となるクラス。
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(SumTubeBotError):
    """設定エラー

    必須の環境変数が設定されていない場合に発生します。
    """
    pass


class InvalidInteractionError(SumTubeBotError):
    """不正なインタラクションエラー

    署名検証は通ったが、ペイロードを解釈できない場合に発生します。
    """
    pass


class GeminiAPIError(SumTubeBotError):
    """Gemini APIエラー

    Gemini APIがエラーを返した、またはコンテンツがブロックされた場合に発生します。
    """
    pass


class GeminiHTTPError(GeminiAPIError):
    """Gemini HTTPエラー

    Gemini APIが2xx以外のステータスを返した場合に発生します。
    """

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(
            f"Gemini API returned status {status_code}",
            details={"status_code": status_code, "body": body},
        )


class DiscordAPIError(SumTubeBotError):
    """Discord APIエラー

    Discord REST APIの呼び出しに失敗した場合に発生します。
    通信エラーの場合 status_code は None になります。
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        super().__init__(message, details)
