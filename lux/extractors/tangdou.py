"""Extractor for tangdou.com square-dance videos."""

from __future__ import annotations

from typing import Optional

from lux import request
from lux.models import Data, DataType, Extractor, Options, Part, Stream, URLParseError, empty_data
from lux.utils import match_one_of

_DEFAULT_HEADERS = {
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "cross-site",
    "Sec-GPC": "1",
    "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10.15; rv:98.0) Gecko/20100101 Firefox/98.0",
}


def _download(uri: str) -> Data:
    try:
        html = request.get(uri, uri, _DEFAULT_HEADERS)
    except request.RequestError as exc:
        return empty_data(uri, exc)

    titles = match_one_of(
        html,
        r'<div class="title">(.+?)</div>',
        r'<meta name="description" content="(.+?)"',
        r"<title>(.+?)</title>",
    )
    if titles is None or len(titles) < 2:
        return empty_data(uri, URLParseError())
    title = titles[1]

    video_urls = match_one_of(
        html,
        r"video:'(.+?)'",
        r'video:"(.+?)"',
        r'<video[^>]*src="(.+?)"',
        r'play_url:\s*"(.+?)",',
    )
    if video_urls is None or len(video_urls) < 2:
        return empty_data(uri, URLParseError())
    real_url = video_urls[1].replace("\\u002F", "/")

    try:
        size = request.size(real_url, uri)
    except (request.RequestError, ValueError) as exc:
        return empty_data(uri, exc)

    return Data(
        site="糖豆广场舞 tangdou.com",
        title=title,
        type=DataType.VIDEO,
        streams={
            "default": Stream(parts=[Part(url=real_url, size=size, ext="mp4")], size=size),
        },
        url=uri,
    )


class TangdouExtractor(Extractor):
    """Extracts a single tangdou video; failures are recorded in ``Data.err``."""

    def extract(self, url: str, option: Optional[Options] = None) -> list[Data]:
        return [_download(url)]