"""Extractor for vimeo.com videos."""

from __future__ import annotations

import json
from typing import Optional

from lux import request
from lux.models import Data, DataType, Extractor, Options, Part, Stream, URLParseError
from lux.utils import match_one_of

_PLAYER_URL = "https://player.vimeo.com/video/"
_CONFIG_RE = r"var \w+\s?=\s?({.+?});"


class VimeoExtractor(Extractor):
    """Extracts the progressive streams of a Vimeo video."""

    def extract(self, url: str, option: Optional[Options] = None) -> list[Data]:
        if "player.vimeo.com" in url:
            html = request.get(url, url, None)
        else:
            vids = match_one_of(url, r"vimeo\.com/(\d+)")
            if vids is None or len(vids) < 2:
                raise URLParseError()
            html = request.get(_PLAYER_URL + vids[1], url, None)

        found = match_one_of(html, _CONFIG_RE)
        if found is None or len(found) < 2:
            raise URLParseError()
        config = json.loads(found[1])
        if not isinstance(config, dict):
            raise URLParseError()

        files = ((config.get("request") or {}).get("files") or {})
        streams: dict[str, Stream] = {}
        for video in files.get("progressive") or []:
            video_url = video.get("url") or ""
            size = request.size(video_url, url)
            streams[str(int(video.get("profile") or 0))] = Stream(
                parts=[Part(url=video_url, size=size, ext="mp4")],
                size=size,
                quality=video.get("quality") or "",
            )

        return [
            Data(
                site="Vimeo vimeo.com",
                title=(config.get("video") or {}).get("title") or "",
                type=DataType.VIDEO,
                streams=streams,
                url=url,
            )
        ]