"""アプリケーション設定管理モジュール

Discord / Gemini の認証情報は環境変数から読み込み、その他は適切なデフォルト値を持つ。
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """アプリケーション設定クラス

    環境変数から設定を読み込み、型チェックとバリデーションを実行します。
    認証情報が未設定でもサーバーは起動し、各エンドポイントで不足を報告します。
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # === Discord関連 ===
    discord_token: str = ""
    discord_public_key: str = ""
    discord_application_id: str = ""

    # === Gemini関連 ===
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"

    # === サーバー関連 ===
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # === ハードコード定数（環境変数不要） ===
    @property
    def api_version(self) -> str:
        """APIバージョン"""
        return "1.0.0"

    @property
    def discord_api_base(self) -> str:
        """Discord REST APIのベースURL"""
        return "https://discord.com/api/v10"

    @property
    def gemini_api_base(self) -> str:
        """Gemini REST APIのベースURL"""
        return "https://generativelanguage.googleapis.com/v1beta"

    @property
    def http_timeout(self) -> float:
        """Discord APIタイムアウト（秒）"""
        return 30.0

    @property
    def gemini_timeout(self) -> float:
        """Gemini APIタイムアウト（秒）

        動画の解析には時間がかかるため長めに設定。
        """
        return 300.0


# グローバル設定インスタンス
_settings: Settings | None = None


def get_settings() -> Settings:
    """設定インスタンスを取得（シングルトン）"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """設定を再読み込み（主にテスト用）"""
    global _settings
    _settings = Settings()
    return _settings
