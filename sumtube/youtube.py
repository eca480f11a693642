"""YouTube URL抽出モジュール

任意のテキストからYouTube動画のURLと動画IDを検出する。
"""

import re
from dataclasses import dataclass
from typing import Union

# YouTube URL検出用の正規表現パターン
# watch?v= / 任意順のクエリ / v/ / e/ / embed/ / youtu.be/ の各形式に対応
YOUTUBE_URL_PATTERN = re.compile(
    r"(?:https?://)?(?:www\.)?"
    r"(?:youtube\.com/(?:[^/\s]+/\S+/|(?:v|e(?:mbed)?)/|\S*?[?&]v=)|youtu\.be/)"
    r"([A-Za-z0-9_-]{11})",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class ExtractedLink:
    """テキストから抽出したYouTubeリンク"""
    url: str  # マッチしたURL文字列（入力そのまま）
    video_id: str


def contains_youtube_link(text: str) -> bool:
    """テキストにYouTubeリンクが含まれるか判定"""
    return YOUTUBE_URL_PATTERN.search(text) is not None


def extract_youtube_links(text: str) -> list[ExtractedLink]:
    """テキストからYouTubeリンクを全て抽出

    Args:
        text: 任意のテキスト

    Returns:
        出現順のリンクのリスト（見つからない場合は空リスト）
    """
    return [
        ExtractedLink(url=match.group(0), video_id=match.group(1))
        for match in YOUTUBE_URL_PATTERN.finditer(text)
    ]


def build_watch_url(video_id: str) -> str:
    """動画IDから正規化された視聴URLを構築"""
    return f"https://www.youtube.com/watch?v={video_id}"


def build_timestamp_url(video_id: str, seconds: Union[int, str]) -> str:
    """指定秒数から再生するURLを構築"""
    return f"youtube.com/watch?v={video_id}#t={seconds}"
