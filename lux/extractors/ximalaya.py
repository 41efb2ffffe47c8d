"""Extractor for ximalaya.com audio tracks."""

from __future__ import annotations

import json
from typing import Optional

from lux import parser, request
from lux.models import Data, DataType, Extractor, Options, Part, Stream, URLParseError
from lux.utils import get_name_and_ext, match_one_of

_AUDIO_API = "https://www.ximalaya.com/revision/play/v1/audio?id={item_id}&ptype=1"


def _audio_source(raw: str) -> str:
    """Return the audio address from the play API response."""
    document = json.loads(raw)
    if not isinstance(document, dict):
        raise URLParseError()
    data = document.get("data") or {}
    if not isinstance(data, dict):
        raise URLParseError()
    src = data.get("src") or ""
    if not src:
        raise URLParseError()
    return src


class XimalayaExtractor(Extractor):
    """Extracts the audio file of a ximalaya sound page."""

    def extract(self, url: str, option: Optional[Options] = None) -> list[Data]:
        html = request.get(url, url, None)
        title = parser.title(parser.get_doc(html))

        item_ids = match_one_of(url, r"/sound/(\d+)")
        if not item_ids:
            raise ValueError("unable to get audio ID")
        if len(item_ids) < 2:
            raise URLParseError()
        item_id = item_ids[-1]

        raw = request.get(_AUDIO_API.format(item_id=item_id), url, None)
        real_url = _audio_source(raw)

        total_size = request.size(real_url, url)
        _, ext = get_name_and_ext(real_url)
        parts = [Part(url=real_url, size=total_size, ext=ext)]

        return [
            Data(
                site="喜马拉雅 ximalaya.com",
                title=title,
                type=DataType.AUDIO,
                streams={"default": Stream(parts=parts, size=total_size)},
                url=url,
            )
        ]