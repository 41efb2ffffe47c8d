"""Extractor for TikTok videos."""

from __future__ import annotations

import re
from typing import Optional

from lux import request
from lux.models import Data, DataType, Extractor, Options, Part, Stream, URLParseError

_USER_AGENT = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10.15; rv:98.0) Gecko/20100101 Firefox/98.0"
_DOWNLOAD_RE = re.compile(r'"downloadAddr":\s*"([^"]+)"')
_TITLE_RE = re.compile(r"<title[^>]*>([^<]+)</title>")


class TiktokExtractor(Extractor):
    """Extracts the download address of a TikTok video page."""

    def extract(self, url: str, option: Optional[Options] = None) -> list[Data]:
        # TikTok refuses requests without a browser user agent.
        html = request.get(url, url, {"User-Agent": _USER_AGENT})

        download = _DOWNLOAD_RE.search(html)
        if download is None:
            raise URLParseError()
        video_url = download.group(1).replace("\\u002F", "/")

        title_match = _TITLE_RE.search(html)
        if title_match is None:
            raise URLParseError()
        title = "|".join(title_match.group(1).split("|")[:-1]).strip()

        size = request.size(video_url, url)
        return [
            Data(
                site="TikTok tiktok.com",
                title=title,
                type=DataType.VIDEO,
                streams={
                    "default": Stream(parts=[Part(url=video_url, size=size, ext="mp4")], size=size),
                },
                url=url,
            )
        ]