"""Extractor for xvideos.com videos."""

from __future__ import annotations

from typing import NamedTuple, Optional

from lux import request
from lux.models import Data, DataType, Extractor, Options, Part, Stream
from lux.utils import match_one_of

_LOW_FLAG = "html5player.setVideoUrlLow('"
_LOW_FINAL_FLAG = "');\n\t    html5player.setVideoUrlHigh("
_HIGH_FLAG = "html5player.setVideoUrlHigh('"
_HIGH_FINAL_FLAG = "');\n\t    html5player.setVideoHLS("
_QUALITY_LOW = "low"
_QUALITY_HIGH = "high"


class _Source(NamedTuple):
    url: str
    quality: str


def _between(html: str, start_flag: str, end_flag: str) -> Optional[str]:
    start = html.find(start_flag)
    end = html.find(end_flag)
    if start == -1 or end == -1:
        return None
    return html[start + len(start_flag):end]


def get_src(html: str) -> list[_Source]:
    """Return the low and high quality video addresses found in the player script."""
    sources = []
    for start_flag, end_flag, quality in (
        (_LOW_FLAG, _LOW_FINAL_FLAG, _QUALITY_LOW),
        (_HIGH_FLAG, _HIGH_FINAL_FLAG, _QUALITY_HIGH),
    ):
        url = _between(html, start_flag, end_flag)
        if url is not None:
            sources.append(_Source(url=url, quality=quality))
    return sources


class XvideosExtractor(Extractor):
    """Extracts the low and high quality streams of a video page."""

    def extract(self, url: str, option: Optional[Options] = None) -> list[Data]:
        html = request.get(url, url, None)
        found = match_one_of(html, r"<title>(.+?)</title>")
        title = found[1] if found is not None and len(found) > 1 else "xvideos"

        streams = {}
        for source in get_src(html):
            size = request.size(source.url, url)
            streams[source.quality] = Stream(
                parts=[Part(url=source.url, size=size, ext="mp4")],
                size=size,
                quality=source.quality,
            )

        return [
            Data(
                site="XVIDEOS xvideos.com",
                title=title,
                type=DataType.VIDEO,
                streams=streams,
                url=url,
            )
        ]