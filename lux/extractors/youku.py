"""Extractor for youku.com videos."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import random
import struct
import time
from typing import Any, Optional
from urllib.parse import quote_plus

from lux import request
from lux.models import Data, DataType, Extractor, Options, Part, Stream, URLParseError
from lux.utils import match_one_of

_REFERER = "https://v.youku.com"
_COOKIE_URL = "http://log.mmstat.com/eg.js"
_UPS_API = (
    "https://ups.youku.com/ups/get.json?vid={vid}&ccode={ccode}"
    "&client_ip=192.168.1.1&client_ts={ts}&utid={utid}&ckey={ckey}"
)
# This client code needs a locally generated device id instead of the cookie one.
_UTDID_CCODE = "0103010102"
_UTDID_HMAC_KEY = b"d6fc3a4a06adbde89223bvefedc24fecde188aaa9161"
_INT31_MAX = 2**31 - 1

_AUDIO_LANGS = {
    "guoyu": "国语",
    "ja": "日语",
    "yue": "粤语",
}


def get_audio_lang(lang: str) -> str:
    """Return the display name of an audio language code."""
    return _AUDIO_LANGS.get(lang, lang)


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _int32_bytes(value: int) -> bytes:
    return struct.pack(">i", _to_int32(value))


def hash_code(s: str) -> int:
    """Return the 32-bit signed string hash ``h = h * 31 + c``."""
    result = 0
    for char in s:
        result = _to_int32(result * 31 + ord(char))
    return result


def generate_utdid() -> str:
    """Generate a random device id in the format the player uses."""
    timestamp = _to_int32(int(time.time()))
    buffer = bytearray()
    buffer += _int32_bytes(timestamp - 60 * 60 * 8)
    buffer += _int32_bytes(random.randint(0, _INT31_MAX - 1))
    buffer += b"\x03\x00"
    imei = str(random.randint(0, _INT31_MAX - 1))
    buffer += _int32_bytes(hash_code(imei))
    digest = hmac.new(_UTDID_HMAC_KEY, bytes(buffer), hashlib.sha1).digest()
    buffer += _int32_bytes(hash_code(base64.b64encode(digest).decode("ascii")))
    return base64.b64encode(bytes(buffer)).decode("ascii")


def gen_data(youku_data: dict[str, Any]) -> dict[str, Stream]:
    """Build the streams from the ``data`` section of an ups response."""
    streams: dict[str, Stream] = {}
    for entry in youku_data.get("stream") or []:
        stream_type = entry.get("stream_type") or ""
        audio_lang = entry.get("audio_lang") or ""
        width = int(entry.get("width") or 0)
        height = int(entry.get("height") or 0)
        if audio_lang == "default":
            key = stream_type
            quality = f"{stream_type} {width}x{height}"
        else:
            key = f"{stream_type}-{audio_lang}"
            quality = f"{stream_type} {width}x{height} {get_audio_lang(audio_lang)}"

        segs = entry.get("segs") or []
        if not segs:
            raise URLParseError(f"stream {key!r} has no segments")
        ext = (segs[0].get("cdn_url") or "").split("?")[0].split(".")[-1]
        parts = [
            Part(url=seg.get("cdn_url") or "", size=int(seg.get("size") or 0), ext=ext)
            for seg in segs
        ]
        streams[key] = Stream(parts=parts, size=int(entry.get("size") or 0), quality=quality)
    return streams


def _utid(option: Options) -> str:
    if "cna" in option.cookie:
        utids = match_one_of(option.cookie, r"cna=(.+?);", r"cna\s+(.+?)\s", r"cna\s+(.+?)$")
    else:
        set_cookie = request.headers(_COOKIE_URL, _REFERER).get("Set-Cookie", "")
        utids = match_one_of(set_cookie, r"cna=(.+?);")
    if utids is None or len(utids) < 2:
        raise URLParseError()
    return utids[1]


def _youku_ups(vid: str, option: Options) -> dict[str, Any]:
    utid = _utid(option)
    ccode = option.youku_ccode
    if ccode == _UTDID_CCODE:
        utid = generate_utdid()
    url = _UPS_API.format(
        vid=vid,
        ccode=ccode,
        ts=int(time.time()) // 1000,
        utid=quote_plus(utid),
        ckey=quote_plus(option.youku_ckey),
    )
    if option.youku_password:
        url = f"{url}&password={option.youku_password}"
    document = json.loads(request.get_bytes(url, _REFERER, None))
    if not isinstance(document, dict):
        raise URLParseError()
    data = document.get("data") or {}
    if not isinstance(data, dict):
        raise URLParseError()
    return data


class YoukuExtractor(Extractor):
    """Extracts every stream of a youku video."""

    def extract(self, url: str, option: Optional[Options] = None) -> list[Data]:
        option = option or Options()
        vids = match_one_of(url, r"id_(.+?)\.html", r"id_(.+)")
        if vids is None or len(vids) < 2:
            raise URLParseError()

        data = _youku_ups(vids[1], option)
        error = data.get("error") or {}
        if int(error.get("code") or 0) != 0:
            raise RuntimeError(error.get("note") or "")

        streams = gen_data(data)
        video_title = (data.get("video") or {}).get("title") or ""
        show_title = (data.get("show") or {}).get("title") or ""
        if not show_title or show_title in video_title:
            title = video_title
        else:
            title = f"{show_title} {video_title}"

        return [
            Data(
                site="优酷 youku.com",
                title=title,
                type=DataType.VIDEO,
                streams=streams,
                url=url,
            )
        ]