"""インタラクションハンドラーモジュール

Modules:
    interaction_handler: Discordインタラクションの振り分けと即時レスポンスの構築
"""

from sumtube.handlers.interaction_handler import DispatchResult, InteractionHandler

__all__ = ["DispatchResult", "InteractionHandler"]
