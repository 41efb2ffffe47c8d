"""Extractor for yinyuetai.com music videos."""

from __future__ import annotations

import json
from typing import Optional

from lux import request
from lux.models import Data, DataType, Extractor, Options, Part, Stream, URLParseError
from lux.utils import match_one_of

_API = "https://ext.yinyuetai.com/main/"
_ACTION_GET_MV_INFO = "get-h-mv-info"
_URL_PATTERNS = (
    r"https?://v.yinyuetai.com/video/(\d+)(?:\?vid=\d+)?",
    r"https?://v.yinyuetai.com/video/h5/(\d+)(?:\?vid=\d+)?",
    r"https?://m2.yinyuetai.com/video.html\?id=(\d+)",
)


def gen_api(action: str, param: str) -> str:
    """Build the API address of an action with its query parameters."""
    return f"{_API}{action}?json=true&{param}"


def _load(raw: str) -> dict:
    try:
        document = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise URLParseError() from exc
    if not isinstance(document, dict):
        raise URLParseError()
    return document


class YinyuetaiExtractor(Extractor):
    """Extracts every quality of a yinyuetai music video."""

    def extract(self, url: str, option: Optional[Options] = None) -> list[Data]:
        vid = match_one_of(url, *_URL_PATTERNS)
        if vid is None or len(vid) < 2:
            raise ValueError("invalid url for yinyuetai")

        api_url = gen_api(_ACTION_GET_MV_INFO, f"videoId={vid[1]}")
        document = _load(request.get(api_url, url, None))

        if document.get("error"):
            raise RuntimeError(document.get("message") or "")
        core = (document.get("videoInfo") or {}).get("coreVideoInfo") or {}
        if core.get("error"):
            raise RuntimeError(core.get("errorMsg") or "")

        streams = {}
        for model in core.get("videoURLModels") or []:
            file_size = int(model.get("fileSize") or 0)
            streams[model.get("qualityLevel") or ""] = Stream(
                parts=[Part(url=model.get("videoURL") or "", size=file_size, ext="mp4")],
                size=file_size,
                quality=model.get("qualityLevelName") or "",
            )

        return [
            Data(
                site="音悦台 yinyuetai.com",
                title=core.get("videoName") or "",
                type=DataType.VIDEO,
                streams=streams,
                url=url,
            )
        ]