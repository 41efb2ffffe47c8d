"""Extractor for pixivision illustration articles."""

from __future__ import annotations

from typing import Optional

from lux import parser, request
from lux.models import Data, DataType, Extractor, Options, Part, Stream
from lux.utils import get_name_and_ext

_IMAGE_CLASS = "am__work__illust  "


class PixivisionExtractor(Extractor):
    """Collects every illustration of a pixivision article."""

    def extract(self, url: str, option: Optional[Options] = None) -> list[Data]:
        html = request.get(url, url, None)
        title, urls = parser.get_images(html, _IMAGE_CLASS, None)

        parts = []
        for image_url in urls:
            _, ext = get_name_and_ext(image_url)
            size = request.size(image_url, url)
            parts.append(Part(url=image_url, size=size, ext=ext))

        return [
            Data(
                site="pixivision pixivision.net",
                title=title,
                type=DataType.IMAGE,
                streams={"default": Stream(parts=parts)},
                url=url,
            )
        ]