"""Extractor for video.udn.com."""

from __future__ import annotations

import re
from typing import Optional

from lux import request
from lux.models import Data, DataType, Extractor, Options, Part, Stream, URLParseError
from lux.utils import match_one_of

_START_FLAG = "',\n            mp4: '//"
_END_FLAG = "'\n        },\n        subtitles"
_CDN_RE = re.escape(_START_FLAG) + "(.+?)" + re.escape(_END_FLAG)
_TITLE_RE = "title: '(.+?)',\n        link:"
_EMBED_PREFIX = "https://video.udn.com/embed/"
_QUALITY = "normal"


def get_cdn_url(html: str) -> str:
    """Return the protocol-less CDN address of the player page, or ''."""
    found = match_one_of(html, _CDN_RE)
    if found is not None and len(found) > 1 and found[1]:
        return found[1]
    return ""


def prepare_embed_url(url: str) -> str:
    """Turn a udn news URL into its embedded player URL."""
    if _EMBED_PREFIX in url:
        return url
    return _EMBED_PREFIX + "news/" + url.split("/")[-1]


class UdnExtractor(Extractor):
    """Extracts the video of a udn news player page."""

    def extract(self, url: str, option: Optional[Options] = None) -> list[Data]:
        url = prepare_embed_url(url)
        if not url:
            raise URLParseError()

        html = request.get(url, url, None)
        found = match_one_of(html, _TITLE_RE)
        title = found[1] if found is not None and len(found) > 1 else "udn"

        cdn_url = get_cdn_url(html)
        if not cdn_url:
            raise URLParseError("empty list")
        src_url = request.get("http://" + cdn_url, url, None)
        size = request.size(src_url, url)

        return [
            Data(
                site="udn udn.com",
                title=title,
                type=DataType.VIDEO,
                streams={
                    _QUALITY: Stream(
                        parts=[Part(url=src_url, size=size, ext="mp4")],
                        size=size,
                        quality=_QUALITY,
                    )
                },
                url=url,
            )
        ]