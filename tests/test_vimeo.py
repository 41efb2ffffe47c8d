import json

import pytest
import responses

from lux.extractors.vimeo import VimeoExtractor
from lux.models import DataType, Options, URLParseError


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


def _player_page(title, progressive):
    config = {"request": {"files": {"progressive": progressive}}, "video": {"title": title}}
    return (
        "<html><script>(function(document){var config = "
        + json.dumps(config)
        + "; if (!config.request) {}})(document);</script></html>"
    )


def _register(mocked, player_url, title, sizes):
    progressive = [
        {"profile": 174, "width": 1280, "height": 720, "quality": "720p",
         "url": "https://vod.example.com/720.mp4"},
        {"profile": 175, "width": 1920, "height": 1080, "quality": "1080p",
         "url": "https://vod.example.com/1080.mp4"},
    ]
    mocked.add(responses.GET, player_url, body=_player_page(title, progressive))
    for video, size in zip(progressive, sizes):
        mocked.add(
            responses.GET, video["url"], body=b"", headers={"Content-Length": str(size)}
        )


def _largest(data):
    return max(data.streams.values(), key=lambda s: s.size)


def test_player_url(mocked):
    url = "https://player.vimeo.com/video/259325107"
    _register(mocked, url, "prfm 20180309", [60000000, 131051118])

    data = VimeoExtractor().extract(url, Options())[0]

    assert data.title == "prfm 20180309"
    assert data.type == DataType.VIDEO
    assert sorted(data.streams) == ["174", "175"]
    stream = _largest(data)
    assert stream.size == 131051118
    assert stream.quality == "1080p"
    assert stream.parts[0].ext == "mp4"


def test_page_url_uses_player(mocked):
    _register(
        mocked,
        "https://player.vimeo.com/video/254865724",
        "MAGIC DINER PT. II",
        [70000000, 138966306],
    )

    data = VimeoExtractor().extract("https://vimeo.com/254865724", Options())[0]

    assert data.title == "MAGIC DINER PT. II"
    assert data.url == "https://vimeo.com/254865724"
    stream = _largest(data)
    assert stream.size == 138966306
    assert stream.quality == "1080p"


def test_url_without_id():
    with pytest.raises(URLParseError):
        VimeoExtractor().extract("https://vimeo.com/channels/staff", Options())


def test_page_without_config(mocked):
    url = "https://player.vimeo.com/video/1"
    mocked.add(responses.GET, url, body="<html></html>")

    with pytest.raises(URLParseError):
        VimeoExtractor().extract(url, Options())