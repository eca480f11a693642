"""レスポンスの型定義

TypedDictを使用してレスポンスの型安全性を確保します。
"""

from typing_extensions import NotRequired, TypedDict


class MessageData(TypedDict):
    """メッセージ本文"""
    content: str


class InteractionResponse(TypedDict):
    """Discordインタラクションへのレスポンス"""
    type: int
    data: NotRequired[MessageData]


class HealthResponse(TypedDict):
    """ヘルスチェックレスポンス"""
    status: str
    version: str


class ErrorResponse(TypedDict):
    """エラーレスポンス"""
    error: str
