"""スラッシュコマンド定義

コマンド登録と実行時のディスパッチの両方で共有するメタデータ。
"""

from typing import Any

# Discordのアプリケーションコマンド引数型
STRING_OPTION_TYPE = 3

ABOUT_COMMAND: dict[str, Any] = {
    "name": "about",
    "description": "Learn about this YouTube summarizer bot and get the homepage link",
}

SUMMARIZE_COMMAND: dict[str, Any] = {
    "name": "summarize",
    "description": "Summarize a YouTube video",
    "options": [
        {
            "name": "url",
            "description": "YouTube video URL to summarize",
            "type": STRING_OPTION_TYPE,
            "required": True,
        },
    ],
}

COMMANDS: list[dict[str, Any]] = [ABOUT_COMMAND, SUMMARIZE_COMMAND]

ABOUT_MESSAGE = (
    "🎥 **YouTube Summarizer Bot**\n\n"
    "📝 **Purpose**: I provide AI-powered summaries of YouTube videos!\n\n"
    "🔗 **How to use**:\n"
    "• Use `/summarize <youtube-url>` to get a video summary\n"
    "• Works with any YouTube URL format\n"
    "• Powered by Google Gemini for intelligent analysis\n\n"
    "✨ **Commands**:\n"
    "• `/about` - Show this information\n"
    "• `/summarize <url>` - Summarize a YouTube video"
)

GREETING_MESSAGE = (
    "👋 I'm a YouTube summarizer bot! "
    "Use `/summarize` with a YouTube link and I'll summarize it for you!"
)

MISSING_URL_MESSAGE = "❌ Please provide a YouTube URL to summarize."

INVALID_URL_MESSAGE = (
    "❌ Please provide a valid YouTube URL. Supported formats:\n"
    "• https://www.youtube.com/watch?v=VIDEO_ID\n"
    "• https://youtu.be/VIDEO_ID\n"
    "• And other YouTube URL variations"
)

MISSING_TOKEN_MESSAGE = "❌ Could not process this request. Please try again."

MISSING_APPLICATION_ID_MESSAGE = (
    "❌ This bot is not fully configured (DISCORD_APPLICATION_ID is missing). "
    "Please contact the bot administrator."
)
