"""YouTube URL抽出のテスト"""

import pytest

from sumtube.youtube import (
    build_timestamp_url,
    build_watch_url,
    contains_youtube_link,
    extract_youtube_links,
)


@pytest.mark.parametrize(
    "text",
    [
        "https://youtu.be/dQw4w9WgXcQ",
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        "http://youtube.com/watch?v=dQw4w9WgXcQ&t=42s",
        "https://www.youtube.com/watch?feature=share&v=dQw4w9WgXcQ",
        "https://www.youtube.com/embed/dQw4w9WgXcQ",
        "https://www.youtube.com/v/dQw4w9WgXcQ",
        "www.youtube.com/e/dQw4w9WgXcQ",
        "youtu.be/dQw4w9WgXcQ",
        "HTTPS://WWW.YOUTUBE.COM/WATCH?V=dQw4w9WgXcQ",
        "check this out: https://youtu.be/dQw4w9WgXcQ?si=abc it's great",
    ],
)
def test_recognized_url_variants(text):
    assert contains_youtube_link(text)
    links = extract_youtube_links(text)
    assert links
    assert links[0].video_id == "dQw4w9WgXcQ"
    assert len(links[0].video_id) == 11


@pytest.mark.parametrize(
    "text",
    [
        "",
        "no links here",
        "https://example.com/watch?v=dQw4w9WgXcQ",
        "https://youtu.be/short",
        "https://www.youtube.com/channel",
    ],
)
def test_text_without_youtube_url(text):
    assert not contains_youtube_link(text)
    assert extract_youtube_links(text) == []


def test_short_link_scenario():
    links = extract_youtube_links("https://youtu.be/dQw4w9WgXcQ")

    assert links[0].url == "https://youtu.be/dQw4w9WgXcQ"
    assert links[0].video_id == "dQw4w9WgXcQ"
    assert build_watch_url(links[0].video_id) == "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


def test_multiple_links_in_order_of_appearance():
    text = (
        "first https://www.youtube.com/watch?v=AAAAAAAAAAA "
        "then https://youtu.be/BBBBBBBBBBB "
        "and https://www.youtube.com/watch?v=CCCCCCCCCCC"
    )

    assert [link.video_id for link in extract_youtube_links(text)] == [
        "AAAAAAAAAAA",
        "BBBBBBBBBBB",
        "CCCCCCCCCCC",
    ]


def test_timestamp_url():
    assert build_timestamp_url("dQw4w9WgXcQ", 90) == "youtube.com/watch?v=dQw4w9WgXcQ#t=90"
