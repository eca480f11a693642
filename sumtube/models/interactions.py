"""Discordインタラクションの型定義

受信したインタラクションペイロードをpydanticモデルとして解釈します。
未知のフィールドは無視されます。
"""

from enum import IntEnum
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from sumtube.exceptions import InvalidInteractionError


class InteractionType(IntEnum):
    """Discordインタラクション種別"""
    PING = 1
    APPLICATION_COMMAND = 2


class InteractionResponseType(IntEnum):
    """Discordインタラクションレスポンス種別"""
    PONG = 1
    CHANNEL_MESSAGE_WITH_SOURCE = 4
    DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE = 5


class InteractionOption(BaseModel):
    """スラッシュコマンドの引数"""
    name: str
    value: Any = None


class InteractionData(BaseModel):
    """スラッシュコマンドのデータ部"""
    name: str = ""
    options: list[InteractionOption] = Field(default_factory=list)

    @field_validator("options", mode="before")
    @classmethod
    def _null_options_as_empty(cls, value: Any) -> Any:
        """options: null は引数なしとして扱う"""
        return [] if value is None else value


class Interaction(BaseModel):
    """Discordから受信したインタラクション

    リクエスト毎に生成され、レスポンスサイクル終了後に破棄されます。
    """
    type: int
    token: Optional[str] = None
    application_id: Optional[str] = None
    data: Optional[InteractionData] = None

    @property
    def kind(self) -> Optional[InteractionType]:
        """インタラクション種別（PING / APPLICATION_COMMAND 以外は None）"""
        try:
            return InteractionType(self.type)
        except ValueError:
            return None

    @property
    def command_name(self) -> str:
        """コマンド名（小文字化済み）"""
        return self.data.name.lower() if self.data else ""

    def get_option(self, name: str) -> Optional[Any]:
        """指定した名前の引数値を取得

        Args:
            name: 引数名

        Returns:
            引数値（存在しない場合はNone）
        """
        if self.data is None:
            return None
        for option in self.data.options:
            if option.name == name:
                return option.value
        return None


def parse_interaction(body: bytes) -> Interaction:
    """生のリクエストボディをインタラクションとして解釈

    Raises:
        InvalidInteractionError: JSONとして不正、または必須フィールドが欠落している場合
    """
    try:
        return Interaction.model_validate_json(body)
    except ValidationError as e:
        raise InvalidInteractionError(
            "Invalid interaction payload",
            details={"errors": e.error_count()}
        ) from e
