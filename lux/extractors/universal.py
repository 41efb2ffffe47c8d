"""Extractor for direct links to media files."""

from __future__ import annotations

from typing import Optional

from lux import request
from lux.models import Data, Extractor, Options, Part, Stream
from lux.utils import get_name_and_ext


class UniversalExtractor(Extractor):
    """Treats the URL itself as the single downloadable file."""

    def extract(self, url: str, option: Optional[Options] = None) -> list[Data]:
        filename, ext = get_name_and_ext(url)
        size = request.size(url, url)
        streams = {
            "default": Stream(parts=[Part(url=url, size=size, ext=ext)], size=size),
        }
        media_type = request.content_type(url, url)
        return [
            Data(
                site="Universal",
                title=filename,
                type=media_type,
                streams=streams,
                url=url,
            )
        ]