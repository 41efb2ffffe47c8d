from unittest import mock

import pytest
import responses

from lux.request import (
    RequestError,
    RequestOptions,
    content_type,
    get,
    get_bytes,
    headers,
    request,
    set_options,
    size,
)

URL = "http://example.com/page"


@pytest.fixture(autouse=True)
def reset_options():
    set_options(RequestOptions())
    yield
    set_options(RequestOptions())


@pytest.fixture
def rsps():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mocked:
        yield mocked


def test_get_returns_body(rsps):
    rsps.add(responses.GET, URL, body="hello world")
    assert get(URL, "", None) == "hello world"


def test_get_default_referer_is_url(rsps):
    rsps.add(responses.GET, URL, body="x")
    get(URL, "", None)
    assert rsps.calls[0].request.headers["Referer"] == URL


def test_get_with_refer_and_headers(rsps):
    rsps.add(responses.GET, URL, body="x")
    get(URL, "http://example.com/ref", {"Referer": "http://example.com/other", "X-A": "1"})
    sent = rsps.calls[0].request.headers
    assert sent["Referer"] == "http://example.com/ref"
    assert sent["X-A"] == "1"


def test_get_does_not_mutate_headers(rsps):
    rsps.add(responses.GET, URL, body="x")
    given = {"X-A": "1"}
    get(URL, "http://example.com/ref", given)
    assert given == {"X-A": "1"}


def test_get_bytes(rsps):
    rsps.add(responses.GET, URL, body=b"\x00\x01abc")
    assert get_bytes(URL, "", None) == b"\x00\x01abc"


def test_get_invalid_url_raises():
    with pytest.raises(RequestError):
        get("test", "", None)


def test_http_error_raises(rsps):
    rsps.add(responses.GET, URL, status=404)
    with pytest.raises(RequestError, match="HTTP 404"):
        get(URL, "", None)


def test_retries_until_success(rsps):
    rsps.add(responses.GET, URL, status=500)
    rsps.add(responses.GET, URL, body="ok")
    set_options(RequestOptions(retry_times=3))
    with mock.patch("time.sleep") as sleep:
        assert get(URL, "", None) == "ok"
    assert len(rsps.calls) == 2
    assert sleep.call_count == 1


def test_retries_exhausted(rsps):
    rsps.add(responses.GET, URL, status=503)
    set_options(RequestOptions(retry_times=2))
    with mock.patch("time.sleep"):
        with pytest.raises(RequestError):
            get(URL, "", None)
    assert len(rsps.calls) == 2


def test_raw_cookie_header(rsps):
    rsps.add(responses.GET, URL, body="x")
    set_options(RequestOptions(cookie="name: value;", debug=True))
    get(URL, "", None)
    assert rsps.calls[0].request.headers["Cookie"] == "name: value;"


def test_cookie_file_lines(rsps):
    rsps.add(responses.GET, URL, body="x")
    set_options(RequestOptions(cookie=".example.com\tTRUE\t/\tFALSE\t0\tsid\ttoken"))
    get(URL, "", None)
    assert rsps.calls[0].request.headers["Cookie"] == "sid=token"


def test_user_agent_and_refer_options(rsps):
    rsps.add(responses.GET, URL, body="x")
    set_options(RequestOptions(user_agent="agent/1.0", refer="http://example.com/r"))
    get(URL, "http://example.com/ignored", None)
    sent = rsps.calls[0].request.headers
    assert sent["User-Agent"] == "agent/1.0"
    assert sent["Referer"] == "http://example.com/r"


def test_debug_output(rsps, capsys):
    rsps.add(responses.GET, URL, body="x")
    set_options(RequestOptions(debug=True))
    get(URL, "", None)
    out = capsys.readouterr().out
    assert URL in out
    assert "200" in out


def test_request_returns_response(rsps):
    rsps.add(responses.POST, URL, body="done", status=201)
    with request("POST", URL, b"data", None) as response:
        assert response.status_code == 201
        assert response.text == "done"


def test_headers(rsps):
    rsps.add(responses.GET, URL, body="x", headers={"X-Custom": "yes"})
    assert headers(URL, "")["x-custom"] == "yes"


def test_size(rsps):
    rsps.add(responses.GET, URL, body=b"x" * 10, headers={"Content-Length": "10"})
    assert size(URL, "") == 10


def test_size_missing_content_length(rsps):
    rsps.add(responses.GET, URL, body=b"")
    with pytest.raises(RequestError, match="Content-Length is not present"):
        size(URL, "")


def test_content_type(rsps):
    rsps.add(responses.GET, URL, body="x", content_type="text/html; charset=utf-8")
    assert content_type(URL, "") == "text/html"