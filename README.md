# lux

lux is a library that finds the media streams behind a web page: videos,
audio tracks and images. For a page URL, an extractor returns a list of
`lux.models.Data` records. Each record holds the page URL, the site name,
the title, the media type and a dict of streams keyed by an id, usually
one for each quality. A `Stream` lists the `Part`s to fetch, each with its
URL, size in bytes and file extension.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## Usage

```python
from lux.models import Options
from lux.extractors.universal import UniversalExtractor

data = UniversalExtractor().extract("https://example.com/media/clip.mp4", Options())
for item in data:
    print(item.title, item.site, item.type)
    for stream_id, stream in item.streams.items():
        print(stream_id, stream.quality, stream.size)
        for part in stream.parts:
            print("  ", part.url, part.size, part.ext)
```

Every extractor subclasses `lux.models.Extractor` and has one method,
`extract(url, option)`, which returns a list of `Data`. `option` is a
`lux.models.Options`; most extractors ignore it, and the youku extractor
reads its `cookie`, `youku_ccode`, `youku_ckey` and `youku_password`.

Errors are raised as exceptions:

- `lux.models.URLParseError` when the information an extractor looks for
  is missing from a page or an API response;
- `lux.request.RequestError` when an HTTP request fails, returns a status
  of 400 or above, or has no `Content-Length` when a size is needed;
- `ValueError` or `RuntimeError` for unsupported URLs and for error
  messages returned by a site's API.

`TangdouExtractor` is the exception: it does not raise on request or parse
failures but returns a `Data` whose `err` holds the error (see
`lux.models.empty_data`).

`Data.fill_up_streams_data()` fills in each stream's `id`, a missing
`quality`, a missing `ext` for videos (`ts`, `flv` and `f4v` become `mp4`)
and a missing total `size`.

### Extractors

| Module | Class |
| --- | --- |
| `lux.extractors.pixivision` | `PixivisionExtractor` |
| `lux.extractors.qq` | `QQExtractor` |
| `lux.extractors.tangdou` | `TangdouExtractor` |
| `lux.extractors.tiktok` | `TiktokExtractor` |
| `lux.extractors.tumblr` | `TumblrExtractor` |
| `lux.extractors.udn` | `UdnExtractor` |
| `lux.extractors.universal` | `UniversalExtractor` |
| `lux.extractors.vimeo` | `VimeoExtractor` |
| `lux.extractors.ximalaya` | `XimalayaExtractor` |
| `lux.extractors.xinpianchang` | `XinpianchangExtractor` |
| `lux.extractors.xvideos` | `XvideosExtractor` |
| `lux.extractors.yinyuetai` | `YinyuetaiExtractor` |
| `lux.extractors.youku` | `YoukuExtractor` |

`UniversalExtractor` works with any direct file URL. It takes the title
from the file name, the extension from the path (or from the
`Content-Type` when the path has none) and the media type from the
`Content-Type` header.

### Request settings

`lux.request` sends every request. Settings made with
`lux.request.set_options` apply to every request that follows:

```python
from lux.request import RequestOptions, set_options

set_options(RequestOptions(retry_times=3, user_agent="my-agent", debug=True))
```

`RequestOptions` has these fields:

- `retry_times`: how many attempts to make, one second apart; a value of
  0 or 1 means a single attempt;
- `cookie`: a raw `Cookie` header value, or the lines of a Netscape
  cookie file;
- `user_agent`: a fixed `User-Agent`;
- `refer`: a fixed `Referer`, overriding the one each request sets;
- `debug`: print the URL, method, headers and status of each request;
- `silent`: stored, but not used by any request.

TLS certificates are not verified, and each request times out after
15 minutes. The helpers `get`, `get_bytes`, `headers`, `size` and
`content_type` wrap `request` for the common cases.

### Helpers

`lux.utils` holds the helpers that extractors share, among them:

- `match_one_of` and `match_all` for regex matching;
- `need_download_list` and `parse_input_file` for picking playlist items
  by range (`item_start`, `item_end`) or by a list such as `"1-3, 5"`;
- `file_name` and `file_path` for turning titles into file names;
- `get_name_and_ext` for the name and extension of a URL;
- `m3u8_urls` for the absolute segment URLs of an m3u8 playlist.

`lux.pool.WaitGroupPool` counts running tasks and blocks `add()` while a
given number of them are running; `wait()` blocks until all are `done()`.

`lux.ffmpeg` joins downloaded parts into one file. It runs the `ffmpeg`
program, which must be on the `PATH`, deletes the parts once ffmpeg
succeeds, and raises `lux.ffmpeg.MergeError` when it fails:

```python
from lux.ffmpeg import merge_to_mp4

merge_to_mp4(["part1.ts", "part2.ts"], "video.mp4", "video")
```

`merge_to_mp4` writes the list of parts to `<filename>.txt` in the current
directory and removes it afterwards. `merge_files_with_same_extension`
combines separate inputs, such as a video and its audio track.

## What lux does not do

lux is a library only. It has no command-line program, and it does not
download streams itself: it reports the URLs and sizes of the parts, and
fetching them is left to the caller. It also has no registry that picks an
extractor for a URL; choose the extractor class for the site yourself.

## Running the tests

```
pytest
```