"""Extractor for Tumblr image and video posts."""

from __future__ import annotations

import json
from typing import Optional

from lux import parser, request
from lux.models import Data, DataType, Extractor, Options, Part, Stream, URLParseError
from lux.utils import get_name_and_ext, match_one_of

_SITE = "Tumblr tumblr.com"


def _gen_url_data(url: str, referer: str) -> Part:
    size = request.size(url, referer)
    _, ext = get_name_and_ext(url)
    return Part(url=url, size=size, ext=ext)


def _image_download(url: str, html: str, title: str) -> list[Data]:
    found = match_one_of(html, r'<script type="application/ld\+json">\s*(.+?)</script>')
    if found is None or len(found) < 2:
        raise URLParseError()
    json_string = found[1]
    document = json.loads(json_string)
    if not isinstance(document, dict):
        raise URLParseError()

    # The "image" field holds either a list object or a single URL.
    if '"image":{"@list"' in json_string:
        image_urls = (document.get("image") or {}).get("@list") or []
    else:
        image_urls = [document.get("image") or ""]
    parts = [_gen_url_data(image_url, url) for image_url in image_urls]

    return [
        Data(
            site=_SITE,
            title=title,
            type=DataType.IMAGE,
            streams={"default": Stream(parts=parts, size=sum(p.size for p in parts))},
            url=url,
        )
    ]


def _video_download(url: str, html: str, title: str) -> list[Data]:
    found = match_one_of(html, r"<iframe src='(.+?)'")
    if found is None or len(found) < 2:
        raise URLParseError()
    video_url = found[1]
    if "tumblr.com/video" not in video_url:
        raise ValueError("lux doesn't support this URL right now")

    video_html = request.get(video_url, url, None)
    sources = match_one_of(video_html, r'source src="(.+?)"')
    if sources is None or len(sources) < 2:
        raise URLParseError()
    part = _gen_url_data(sources[1], url)

    return [
        Data(
            site=_SITE,
            title=title,
            type=DataType.VIDEO,
            streams={"default": Stream(parts=[part], size=part.size)},
            url=url,
        )
    ]


class TumblrExtractor(Extractor):
    """Extracts the images or the video of a Tumblr post."""

    def extract(self, url: str, option: Optional[Options] = None) -> list[Data]:
        html = request.get(url, url, None)
        title = parser.title(parser.get_doc(html))
        if "<iframe src=" in html:
            return _video_download(url, html, title)
        return _image_download(url, html, title)