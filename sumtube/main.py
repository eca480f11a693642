"""SumTube Bot

Discordのスラッシュコマンド（HTTPインタラクション）を受け取り、
YouTube動画の要約をGeminiで生成して返すWebhookサーバー。
"""

import json
import logging
from typing import Optional

from fastapi import BackgroundTasks, Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse

from sumtube.commands import COMMANDS
from sumtube.config import Settings, get_settings
from sumtube.discord_client import DiscordClient
from sumtube.exceptions import ConfigurationError, DiscordAPIError, InvalidInteractionError
from sumtube.gemini_client import GeminiClient
from sumtube.handlers import InteractionHandler
from sumtube.models.interactions import parse_interaction
from sumtube.models.responses import ErrorResponse, HealthResponse
from sumtube.services.delivery_service import DeliveryService
from sumtube.services.summary_service import SummaryService
from sumtube.signature import verify_discord_request

# ログ設定
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# FastAPIアプリケーション初期化
app = FastAPI(
    title="SumTube Bot",
    description="Discord interactions endpoint that summarizes YouTube videos with Gemini",
    version=get_settings().api_version,
)

HOME_PAGE = """<!DOCTYPE html>
<html>
<head><title>SumTube Bot - Running</title></head>
<body>
  <h1>📺 SumTube Bot</h1>
  <p>Discord YouTube Summarizer Bot is running!</p>
  <p>✅ Ready to receive Discord interactions</p>
</body>
</html>
"""


# === サービスの依存性注入 ===

def get_discord_client(settings: Settings = Depends(get_settings)) -> DiscordClient:
    """DiscordClientを取得

    FastAPIの依存性注入で使用されます。
    """
    return DiscordClient.from_settings(settings)


def get_gemini_client(settings: Settings = Depends(get_settings)) -> Optional[GeminiClient]:
    """GeminiClientを取得（APIキー未設定の場合はNone）"""
    if not settings.gemini_api_key:
        return None
    return GeminiClient.from_settings(settings)


def get_summary_service(
    gemini_client: Optional[GeminiClient] = Depends(get_gemini_client),
) -> SummaryService:
    """SummaryServiceを取得"""
    return SummaryService(gemini_client=gemini_client)


def get_interaction_handler(
    settings: Settings = Depends(get_settings),
    summary_service: SummaryService = Depends(get_summary_service),
    discord_client: DiscordClient = Depends(get_discord_client),
) -> InteractionHandler:
    """InteractionHandlerを取得

    リクエスト毎に生成し、設定は引数として引き回します。
    """
    delivery_service = DeliveryService(
        summary_service=summary_service,
        discord_client=discord_client,
        application_id=settings.discord_application_id,
    )
    return InteractionHandler(delivery_service=delivery_service)


def _require_registration_credentials(settings: Settings) -> None:
    """コマンド登録に必要な設定値を確認

    Raises:
        ConfigurationError: 設定値が不足している場合
    """
    if not settings.discord_token:
        raise ConfigurationError("DISCORD_TOKEN environment variable is required.")
    if not settings.discord_application_id:
        raise ConfigurationError("DISCORD_APPLICATION_ID environment variable is required.")


# === エンドポイント ===

@app.get("/", response_class=HTMLResponse)
async def root() -> str:
    """ルートエンドポイント

    Botが稼働していることを確認するための簡単なページを返します。
    """
    return HOME_PAGE


@app.get("/health")
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """ヘルスチェックエンドポイント"""
    return HealthResponse(status="ok", version=settings.api_version)


@app.get("/id", response_class=PlainTextResponse)
async def application_id(settings: Settings = Depends(get_settings)) -> str:
    """設定されているアプリケーションIDを返す（動作確認用）"""
    return settings.discord_application_id or "DISCORD_APPLICATION_ID not set"


@app.post("/register")
async def register_commands(
    settings: Settings = Depends(get_settings),
    discord_client: DiscordClient = Depends(get_discord_client),
) -> PlainTextResponse:
    """スラッシュコマンドをDiscordに登録

    about / summarize の2コマンドをPUTで上書き登録します。
    """
    try:
        _require_registration_credentials(settings)
    except ConfigurationError as e:
        logger.error("Command registration is not configured", extra={"error": e.message})
        return PlainTextResponse(e.message, status_code=500)

    try:
        data = await discord_client.register_commands(
            bot_token=settings.discord_token,
            application_id=settings.discord_application_id,
            commands=COMMANDS,
        )
    except DiscordAPIError as e:
        logger.error(
            "Error registering commands",
            extra={"status_code": e.status_code, "error": e.message}
        )
        if e.status_code is None:
            return PlainTextResponse(
                f"❌ Error registering commands: {e.message}", status_code=500
            )
        return PlainTextResponse(
            f"❌ Error registering commands:\n{e.status_code}\n\n{e.details.get('body', '')}",
            status_code=e.status_code,
        )

    logger.info("Registered all commands")
    return PlainTextResponse(
        f"✅ Successfully registered Discord commands!\n\n{json.dumps(data, indent=2)}"
    )


@app.post("/discord")
async def discord_interactions(
    request: Request,
    background_tasks: BackgroundTasks,
    settings: Settings = Depends(get_settings),
    handler: InteractionHandler = Depends(get_interaction_handler),
):
    """Discordインタラクションエンドポイント

    1. 署名を検証（失敗時は401を返し、以降の処理は行わない）
    2. ペイロードを解釈してディスパッチ
    3. 即時レスポンスを返し、必要ならレスポンス送信後にバックグラウンドタスクを実行
    """
    body = await request.body()
    is_valid = verify_discord_request(
        body,
        request.headers.get("x-signature-ed25519"),
        request.headers.get("x-signature-timestamp"),
        settings.discord_public_key,
    )
    if not is_valid:
        return PlainTextResponse("Bad request signature.", status_code=401)

    try:
        interaction = parse_interaction(body)
    except InvalidInteractionError as e:
        logger.warning("Invalid interaction payload", extra={"details": e.details})
        return JSONResponse(ErrorResponse(error=e.message), status_code=400)

    result = handler.handle(interaction)

    if result.background is not None:
        # レスポンス送信後に実行され、サーバーは完了まで待機する
        background_tasks.add_task(result.background, **result.background_kwargs)

    return JSONResponse(result.body, status_code=result.status_code)


@app.api_route(
    "/{path:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"],
    include_in_schema=False,
)
async def not_found(path: str) -> PlainTextResponse:
    """その他の全てのリクエスト"""
    return PlainTextResponse("Not Found.", status_code=404)


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    logger.info(
        "Starting SumTube Bot server",
        extra={"host": settings.api_host, "port": settings.api_port}
    )

    uvicorn.run(
        "sumtube.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level="info",
    )
