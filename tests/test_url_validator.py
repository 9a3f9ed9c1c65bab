import pytest

from ytdlmini.url_validator import extract_video_id, is_valid_youtube_url


@pytest.mark.parametrize(
    "url",
    [
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        "https://youtube.com/watch?v=dQw4w9WgXcQ",
        "https://youtu.be/dQw4w9WgXcQ",
        "https://m.youtube.com/watch?v=dQw4w9WgXcQ",
        "https://music.youtube.com/watch?v=dQw4w9WgXcQ",
        "HTTPS://WWW.YOUTUBE.COM/watch?v=abc",
    ],
)
def test_valid_youtube_urls(url):
    assert is_valid_youtube_url(url) is True


@pytest.mark.parametrize(
    "url",
    [
        "https://www.google.com",
        "not a url",
        "",
        "youtube.com/watch?v=dQw4w9WgXcQ",
        "//youtube.com/watch?v=dQw4w9WgXcQ",
        "https://notyoutube.com/watch?v=x",
        "mailto:someone@example.com",
    ],
)
def test_invalid_urls(url):
    assert is_valid_youtube_url(url) is False


def test_extract_video_id_watch_url():
    assert extract_video_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ") == "dQw4w9WgXcQ"


def test_extract_video_id_short_url():
    assert extract_video_id("https://youtu.be/dQw4w9WgXcQ") == "dQw4w9WgXcQ"


def test_extract_video_id_mobile_and_first_v():
    assert extract_video_id("https://m.youtube.com/watch?x=1&v=first&v=second") == "first"


def test_extract_video_id_short_url_with_extra_segments():
    assert extract_video_id("https://youtu.be/abc123/extra?t=10") == "abc123"


def test_extract_video_id_missing_parameter():
    assert extract_video_id("https://www.youtube.com/watch?list=xyz") is None


def test_extract_video_id_music_host_not_supported():
    assert extract_video_id("https://music.youtube.com/watch?v=dQw4w9WgXcQ") is None


def test_extract_video_id_other_host_and_garbage():
    assert extract_video_id("https://www.google.com/watch?v=abc") is None
    assert extract_video_id("not a url") is None