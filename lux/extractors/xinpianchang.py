"""Extractor for xinpianchang.com videos."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Optional

from lux import request
from lux.models import Data, DataType, Extractor, Options, Part, Stream, URLParseError

_USER_AGENT = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10.15; rv:98.0) Gecko/20100101 Firefox/98.0"
_VID_RE = re.compile(r'vid = "(.+?)";')
_APP_KEY_RE = re.compile(r'modeServerAppKey = "(.+?)";')
_MEDIA_API = "https://mod-api.xinpianchang.com/mod/api/v2/media/{vid}?appKey={app_key}"


@dataclass(frozen=True)
class _Quality:
    quality: str
    size: int
    url: str
    ext: str


def _search(pattern: re.Pattern, html: str) -> str:
    found = pattern.search(html)
    if found is None:
        raise URLParseError()
    return found.group(1)


def _parse_media(document: Any) -> tuple[str, list[_Quality]]:
    """Read the title and the progressive qualities of a media document."""
    if not isinstance(document, dict):
        raise URLParseError()
    data = document.get("data") or {}
    if not isinstance(data, dict):
        raise URLParseError()
    resource = data.get("resource") or {}
    progressive = resource.get("progressive") if isinstance(resource, dict) else None
    if not isinstance(progressive, list):
        raise URLParseError("cannot iterate over progressive resources")

    qualities = []
    for entry in progressive:
        if not isinstance(entry, dict):
            raise URLParseError()
        mime = entry.get("mime") or ""
        mime_parts = mime.split("/")
        if len(mime_parts) < 2:
            raise URLParseError(f"unexpected mime type {mime!r}")
        qualities.append(
            _Quality(
                quality=entry.get("quality") or "",
                size=int(entry.get("filesize") or 0),
                url=entry.get("url") or "",
                ext=mime_parts[1],
            )
        )
    return data.get("title") or "", qualities


class XinpianchangExtractor(Extractor):
    """Extracts every progressive quality of a xinpianchang video."""

    def extract(self, url: str, option: Optional[Options] = None) -> list[Data]:
        headers = {"User-Agent": _USER_AGENT}
        html = request.get(url, url, headers)

        vid = _search(_VID_RE, html)
        app_key = _search(_APP_KEY_RE, html)

        body = request.get(_MEDIA_API.format(vid=vid, app_key=app_key), url, headers)
        title, qualities = _parse_media(json.loads(body))

        streams = {
            q.quality: Stream(
                size=q.size,
                quality=q.quality,
                parts=[Part(url=q.url, size=q.size, ext=q.ext)],
            )
            for q in qualities
        }

        return [
            Data(
                site="新片场 xinpianchang.com",
                title=title,
                type=DataType.VIDEO,
                streams=streams,
                url=url,
            )
        ]