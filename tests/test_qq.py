import json

import pytest
import responses

from lux.extractors.qq import QQExtractor
from lux.models import DataType, Options, URLParseError

INFO = (
    "http://vv.video.qq.com/getinfo?otype=json&platform=11&defnpayver=1"
    "&appver=3.2.19.333&defn={defn}&vid={vid}"
)
KEY = (
    "http://vv.video.qq.com/getkey?otype=json&platform=11"
    "&appver=3.2.19.333&filename={filename}&format={format}&vid={vid}"
)
CDN = "http://cdn.example.com/vhot/"


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


def _qz(obj):
    return "QZOutputJson=" + json.dumps(obj, ensure_ascii=False) + ";"


def _add_size(mock, url, size):
    mock.add(responses.GET, url, body=b"", headers={"Content-Length": str(size)})


def _info(formats, fn, title, fc=0, msg=""):
    return {
        "fl": {"fi": formats},
        "vl": {
            "vi": [
                {
                    "fn": fn,
                    "ti": title,
                    "fvkey": "placeholder",
                    "cl": {"fc": fc, "ci": []},
                    "ul": {"ui": [{"url": CDN}]},
                }
            ]
        },
        "msg": msg,
    }


def _largest(data):
    return max(data.streams.values(), key=lambda s: s.size)


def test_normal_video(mocked):
    vid = "n0687peq62x"
    title = "世界杯第一期：100秒速成！“伪球迷”世界杯生存指南"
    info = _info(
        [{"id": 321004, "name": "fhd", "cname": "蓝光;(1080P)", "fs": 1}],
        "n0687peq62x.p709.mp4",
        title,
    )
    mocked.add(responses.GET, INFO.format(defn="shd", vid=vid), body=_qz(info))
    filename = "n0687peq62x.p1004.1.mp4"
    mocked.add(
        responses.GET,
        KEY.format(filename=filename, format=321004, vid=vid),
        body=_qz({"key": ""}),
    )
    _add_size(mocked, f"{CDN}{filename}?vkey=placeholder", 23759683)

    data = QQExtractor().extract("https://v.qq.com/x/page/n0687peq62x.html", Options())[0]

    assert data.title == title
    assert data.type == DataType.VIDEO
    stream = _largest(data)
    assert stream.size == 23759683
    assert stream.quality == "蓝光;(1080P)"
    assert [p.url for p in stream.parts] == [f"{CDN}{filename}?vkey=placeholder"]


def test_fmt_id_with_multiple_clips(mocked):
    vid = "e0765r4mwcr"
    title = "《卡路里》出圈！妖娆男子教学广场舞版，大妈表情亮了！"
    info = _info([{"id": 2, "name": "mp4", "cname": "超清;(720P)"}], "e0765r4mwcr.mp4", title)
    mocked.add(responses.GET, INFO.format(defn="shd", vid=vid), body=_qz(info))
    detail = _info([], "e0765r4mwcr.p702.mp4", title, fc=2)
    mocked.add(responses.GET, INFO.format(defn="mp4", vid=vid), body=_qz(detail))
    sizes = {1: 7000000, 2: 7112979}
    for part, size in sizes.items():
        filename = f"e0765r4mwcr.p702.{part}.mp4"
        mocked.add(
            responses.GET,
            KEY.format(filename=filename, format=2, vid=vid),
            body=_qz({"key": "token"}),
        )
        _add_size(mocked, f"{CDN}{filename}?vkey=token", size)

    data = QQExtractor().extract(
        "https://v.qq.com/x/cover/2aya3ibdmft6vdw/e0765r4mwcr.html", Options()
    )[0]

    assert data.title == title
    stream = data.streams["mp4"]
    assert stream.size == 14112979
    assert stream.quality == "超清;(720P)"
    assert [p.url for p in stream.parts] == [
        f"{CDN}e0765r4mwcr.p702.1.mp4?vkey=token",
        f"{CDN}e0765r4mwcr.p702.2.mp4?vkey=token",
    ]


def test_short_vid_is_looked_up_in_page(mocked):
    page_url = "https://v.qq.com/x/page/abc.html"
    vid = "n0687peq62x"
    mocked.add(responses.GET, page_url, body='var VIDEO_INFO = {vid: "n0687peq62x"};')
    info = _info([], "n0687peq62x.mp4", "title")
    mocked.add(responses.GET, INFO.format(defn="shd", vid=vid), body=_qz(info))

    data = QQExtractor().extract(page_url, Options())[0]

    assert data.title == "title"
    assert data.streams == {}


def test_api_message_is_raised(mocked):
    vid = "n0687peq62x"
    info = _info([], "n0687peq62x.mp4", "", msg="vid is wrong")
    mocked.add(responses.GET, INFO.format(defn="shd", vid=vid), body=_qz(info))

    with pytest.raises(RuntimeError, match="vid is wrong"):
        QQExtractor().extract("https://v.qq.com/x/page/n0687peq62x.html", Options())


def test_url_without_vid():
    with pytest.raises(URLParseError):
        QQExtractor().extract("https://v.qq.com/", Options())


def test_bad_info_response(mocked):
    vid = "n0687peq62x"
    mocked.add(responses.GET, INFO.format(defn="shd", vid=vid), body="nothing here")

    with pytest.raises(URLParseError):
        QQExtractor().extract("https://v.qq.com/x/page/n0687peq62x.html", Options())