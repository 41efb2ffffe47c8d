"""General helpers: pattern matching, file names, playlists and URLs."""

from __future__ import annotations

import hashlib
import os
import re
import sys
from typing import IO, Any, Optional, Sequence
from urllib.parse import unquote, urljoin, urlsplit

from lux import request

_ELLIPSES = "..."
_CHUNK_SIZE = 32 * 1024
_INT_RE = re.compile(r"[+-]?[0-9]+")

_DOMAIN_PATTERN = (
    r"([a-z0-9][-a-z0-9]{0,62})\."
    r"(com\.cn|com\.hk|"
    r"cn|com|net|edu|gov|biz|org|info|pro|name|xxx|xyz|be|"
    r"me|top|cc|tv|tt)"
)

# Order matters: at one position the earlier key wins, so ": " beats ":".
_NAME_REPLACEMENTS = {
    "\n": " ",
    "/": " ",
    "|": "-",
    ": ": "：",
    ":": "：",
    "'": "’",
}
_WINDOWS_REPLACEMENTS = {
    '"': " ",
    "?": " ",
    "*": " ",
    "\\": " ",
    "<": " ",
    ">": " ",
}


def _replacer(table: dict[str, str]):
    pattern = re.compile("|".join(re.escape(key) for key in table))
    return lambda text: pattern.sub(lambda m: table[m.group()], text)


_replace_name = _replacer(_NAME_REPLACEMENTS)
_replace_windows = _replacer(_WINDOWS_REPLACEMENTS)


def _atoi(text: str) -> int:
    """Parse a decimal integer, giving 0 for anything that is not one."""
    text = text.strip()
    return int(text) if _INT_RE.fullmatch(text) else 0


def need_download_list(items: str, item_start: int, item_end: int, length: int) -> list[int]:
    """Return the 1-based playlist indices that should be downloaded."""
    if items:
        selected: list[int] = []
        for selection in items.split(","):
            bounds = selection.split("-")
            sel_start = _atoi(bounds[0])
            sel_end = _atoi(bounds[1]) if len(bounds) >= 2 else sel_start
            selected.extend(range(sel_start, sel_end + 1))
        return selected

    item_start = max(item_start, 1)
    if item_end == 0:
        item_end = length
    item_end = max(item_end, item_start)
    return int_range(item_start, item_end)


def match_one_of(text: str, *args: str) -> Optional[list[str]]:
    """Return the match and its groups for the first pattern that matches."""
    for pattern in args:
        found = re.search(pattern, text)
        if found:
            return [found.group(0), *(group or "" for group in found.groups())]
    return None


def match_all(text: str, pattern: str) -> list[list[str]]:
    """Return the match and groups of every non-overlapping match."""
    return [
        [found.group(0), *(group or "" for group in found.groups())]
        for found in re.finditer(pattern, text)
    ]


def file_size(file_path: str) -> tuple[int, bool]:
    """Return the size of a file and whether it exists."""
    try:
        stat = os.stat(file_path)
    except FileNotFoundError:
        return 0, False
    return stat.st_size, True


def domain(url: str) -> str:
    """Return the second-level domain name of a URL, or an empty string."""
    found = match_one_of(url, _DOMAIN_PATTERN)
    return found[1] if found is not None else ""


def limit_length(s: str, length: int) -> str:
    """Shorten ``s`` to ``length`` characters with an ellipsis; 0 means no limit."""
    if length == 0 or len(s) <= length:
        return s
    if length < len(_ELLIPSES):
        raise ValueError(f"length {length} is too short to hold an ellipsis")
    return s[: length - len(_ELLIPSES)] + _ELLIPSES


def file_name(name: str, ext: str, length: int) -> str:
    """Turn a string into a valid file name with an optional extension."""
    name = _replace_name(name)
    if sys.platform == "win32":
        name = _replace_windows(name)
    limited = limit_length(name, length)
    return f"{limited}.{ext}" if ext else limited


def file_path(name: str, ext: str, length: int, output_path: str, escape: bool) -> str:
    """Build the path of an output file, checking that the directory exists."""
    if output_path:
        os.stat(output_path)
    name_part = file_name(name, ext, length) if escape else f"{name}.{ext}"
    return os.path.join(output_path, name_part)


def file_line_counter(reader: IO[Any]) -> int:
    """Count the newline characters read from a text or binary stream."""
    count = 0
    while True:
        chunk = reader.read(_CHUNK_SIZE)
        if not chunk:
            return count
        count += chunk.count("\n" if isinstance(chunk, str) else b"\n")


def parse_input_file(reader: IO[Any], items: str, item_start: int, item_end: int) -> list[str]:
    """Read URLs line by line and keep the wanted items."""
    content = reader.read()
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")
    lines = content.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    urls = [line.strip() for line in lines]

    wanted = set(need_download_list(items, item_start, item_end, len(urls)))
    return [url for index, url in enumerate(urls, start=1) if index in wanted]


def item_in_slice(item: Any, items: Sequence[Any]) -> bool:
    """Whether ``items`` holds a value of the same type equal to ``item``."""
    return any(type(element) is type(item) and element == item for element in items)


def get_name_and_ext(uri: str) -> tuple[str, str]:
    """Return the file name and extension of a URL.

    Without an extension in the path, the extension is taken from the
    Content-Type of the resource.
    """
    parts = urlsplit(uri)
    if not parts.scheme and not uri.startswith("/"):
        raise ValueError(f"invalid URI for request: {uri!r}")
    pieces = unquote(parts.path).split("/")[-1].split(".")
    if len(pieces) > 1:
        return pieces[0], pieces[1]

    media = request.content_type(uri, uri).split("/")
    if len(media) < 2:
        raise ValueError(f"cannot tell the extension of {uri!r}")
    return pieces[0], media[1]


def md5(text: str) -> str:
    """Return the hex MD5 digest of a string."""
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def m3u8_urls(uri: str) -> list[str]:
    """Return the absolute URLs of all segments listed in an m3u8 playlist."""
    if not uri:
        raise ValueError("url is null")
    playlist = request.get(uri, "", None)
    urls = []
    for line in playlist.split("\n"):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        urls.append(line if line.startswith("http") else urljoin(uri, line))
    return urls


def reverse(s: str) -> str:
    """Reverse a string by characters."""
    return s[::-1]


def int_range(min_value: int, max_value: int) -> list[int]:
    """Return the integers from ``min_value`` to ``max_value`` inclusive."""
    if max_value - min_value + 1 < 0:
        raise ValueError(f"invalid range {min_value}..{max_value}")
    return list(range(min_value, max_value + 1))