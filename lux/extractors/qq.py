"""Extractor for v.qq.com (Tencent Video)."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional

from lux import request
from lux.models import Data, DataType, Extractor, Options, Part, Stream, URLParseError
from lux.utils import match_one_of

_PLAYER_VERSION = "3.2.19.333"
_INFO_API = (
    "http://vv.video.qq.com/getinfo?otype=json&platform=11&defnpayver=1"
    "&appver={version}&defn={defn}&vid={vid}"
)
_KEY_API = (
    "http://vv.video.qq.com/getkey?otype=json&platform=11"
    "&appver={version}&filename={filename}&format={format}&vid={vid}"
)
_OUTPUT_JSON_RE = r"QZOutputJson=(.+);$"
# Formats whose file names are derived from the format id.
_ID_NAMED_FORMATS = ("shd", "fhd")


@dataclass(frozen=True)
class _Format:
    id: int
    name: str
    cname: str


@dataclass(frozen=True)
class _VideoItem:
    fn: str
    ti: str
    fvkey: str
    clips: int
    cdn_urls: tuple[str, ...]


@dataclass(frozen=True)
class _VideoInfo:
    formats: tuple[_Format, ...]
    items: tuple[_VideoItem, ...]
    msg: str

    @classmethod
    def from_json(cls, raw: Any) -> "_VideoInfo":
        raw = raw if isinstance(raw, dict) else {}
        fl = raw.get("fl") or {}
        vl = raw.get("vl") or {}
        formats = tuple(
            _Format(
                id=int(fi.get("id") or 0),
                name=fi.get("name") or "",
                cname=fi.get("cname") or "",
            )
            for fi in fl.get("fi") or []
        )
        items = tuple(
            _VideoItem(
                fn=vi.get("fn") or "",
                ti=vi.get("ti") or "",
                fvkey=vi.get("fvkey") or "",
                clips=int((vi.get("cl") or {}).get("fc") or 0),
                cdn_urls=tuple(
                    ui.get("url") or "" for ui in (vi.get("ul") or {}).get("ui") or []
                ),
            )
            for vi in vl.get("vi") or []
        )
        return cls(formats=formats, items=items, msg=raw.get("msg") or "")

    def first_item(self) -> _VideoItem:
        if not self.items:
            raise URLParseError()
        return self.items[0]


def _output_json(text: str) -> Any:
    found = match_one_of(text, _OUTPUT_JSON_RE)
    if found is None or len(found) < 2:
        raise URLParseError()
    return json.loads(found[1])


def _get_vinfo(vid: str, defn: str, refer: str) -> _VideoInfo:
    html = request.get(
        _INFO_API.format(version=_PLAYER_VERSION, defn=defn, vid=vid), refer, None
    )
    return _VideoInfo.from_json(_output_json(html))


def _gen_streams(vid: str, cdn: str, data: _VideoInfo) -> dict[str, Stream]:
    item = data.first_item()
    streams: dict[str, Stream] = {}
    for fmt in data.formats:
        if fmt.name in _ID_NAMED_FORMATS:
            prefixed = True
            fns = [item.fn.split(".")[0], f"p{fmt.id % 10000}", "mp4"]
            clips = item.clips or 1
        else:
            other = _get_vinfo(vid, fmt.name, cdn).first_item()
            fns = other.fn.split(".")
            prefixed = len(fns) >= 3 and match_one_of(fns[1], r"^p(\d{3})$") is not None
            clips = other.clips or 1

        parts = []
        for part in range(1, clips + 1):
            if prefixed:
                # n0687peq62x.p709.mp4 -> n0687peq62x.p709.1.mp4
                if len(fns) < 4:
                    fns.insert(2, str(part))
                else:
                    fns[2] = str(part)
            filename = ".".join(fns)
            key_html = request.get(
                _KEY_API.format(
                    version=_PLAYER_VERSION, filename=filename, format=fmt.id, vid=vid
                ),
                "",
                None,
            )
            key_data = _output_json(key_html)
            vkey = (key_data.get("key") if isinstance(key_data, dict) else "") or item.fvkey
            real_url = f"{cdn}{filename}?vkey={vkey}"
            size = request.size(real_url, cdn)
            parts.append(Part(url=real_url, size=size, ext="mp4"))

        streams[fmt.name] = Stream(
            parts=parts, size=sum(p.size for p in parts), quality=fmt.cname
        )
    return streams


class QQExtractor(Extractor):
    """Extracts every available quality of a Tencent video."""

    def extract(self, url: str, option: Optional[Options] = None) -> list[Data]:
        vids = match_one_of(url, r"vid=(\w+)", r"/(\w+)\.html")
        if vids is None or len(vids) < 2:
            raise URLParseError()
        vid = vids[1]

        if len(vid) != 11:
            page = request.get(url, url, None)
            vids = match_one_of(
                page, r"vid=(\w+)", r"vid:\s*[\"'](\w+)", r"vid\s*=\s*[\"']\s*(\w+)"
            )
            if vids is None or len(vids) < 2:
                raise URLParseError()
            vid = vids[1]

        data = _get_vinfo(vid, "shd", url)
        if data.msg:
            raise RuntimeError(data.msg)
        item = data.first_item()
        if not item.cdn_urls:
            raise URLParseError()
        streams = _gen_streams(vid, item.cdn_urls[0], data)

        return [
            Data(
                site="腾讯视频 v.qq.com",
                title=item.ti,
                type=DataType.VIDEO,
                streams=streams,
                url=url,
            )
        ]