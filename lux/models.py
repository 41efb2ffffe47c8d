"""Data structures shared by all extractors."""

from __future__ import annotations

import abc
import enum
from dataclasses import dataclass, field
from typing import Callable, Optional, Union

# Extensions of parts that are merged into an mp4 file.
_MP4_MERGED_EXTS = frozenset({"ts", "flv", "f4v"})


class URLParseError(Exception):
    """Raised when the data needed for extraction cannot be found."""

    def __init__(self, message: str = "url parse failed") -> None:
        super().__init__(message)


@dataclass
class Part:
    """A single downloadable piece of a stream."""

    url: str
    size: int = 0
    ext: str = ""


@dataclass
class CaptionPart(Part):
    """A caption file, optionally transformed after download."""

    transform: Optional[Callable[[bytes], bytes]] = field(
        default=None, repr=False, compare=False
    )


@dataclass
class Stream:
    """One quality variant of the extracted media, e.g. 720P or 1080P."""

    id: str = ""
    quality: str = ""
    parts: list[Part] = field(default_factory=list)
    size: int = 0
    ext: str = ""
    need_mux: bool = False


class DataType(str, enum.Enum):
    """Kind of extracted media."""

    VIDEO = "video"
    IMAGE = "image"
    AUDIO = "audio"


@dataclass
class Data:
    """Everything extracted from one URL."""

    url: str = ""
    site: str = ""
    title: str = ""
    type: Union[DataType, str] = ""
    streams: dict[str, Stream] = field(default_factory=dict)
    captions: dict[str, CaptionPart] = field(default_factory=dict)
    err: Optional[BaseException] = None

    def fill_up_streams_data(self) -> None:
        """Fill in stream ids, qualities, merged extensions and total sizes."""
        for stream_id, stream in self.streams.items():
            stream.id = stream_id
            if not stream.quality:
                stream.quality = stream_id

            if self.type == DataType.VIDEO and not stream.ext:
                ext = stream.parts[0].ext
                stream.ext = "mp4" if ext in _MP4_MERGED_EXTS else ext

            if stream.size > 0:
                continue
            stream.size = sum(part.size for part in stream.parts)


def empty_data(url: str, err: Optional[BaseException]) -> Data:
    """Return a Data object that only records the URL and the error."""
    return Data(url=url, err=err)


@dataclass
class Options:
    """Optional settings passed to an extractor."""

    playlist: bool = False
    items: str = ""
    item_start: int = 0
    item_end: int = 0
    thread_number: int = 0
    cookie: str = ""
    episode_title_only: bool = False
    youku_ccode: str = ""
    youku_ckey: str = ""
    youku_password: str = ""


class Extractor(abc.ABC):
    """Interface implemented by every site extractor."""

    @abc.abstractmethod
    def extract(self, url: str, option: Options) -> list[Data]:
        """Extract the media data behind ``url``."""