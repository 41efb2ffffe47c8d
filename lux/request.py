"""HTTP helpers with shared options, retries and cookie handling."""

from __future__ import annotations

import pprint
import time
import warnings
from dataclasses import dataclass, fields
from typing import Mapping, Optional

import requests
from requests.structures import CaseInsensitiveDict

_TIMEOUT_SECONDS = 15 * 60
_SESSION = requests.Session()


class RequestError(Exception):
    """Raised when a request fails or returns an unusable response."""


@dataclass
class RequestOptions:
    """Settings applied to every request."""

    retry_times: int = 0
    cookie: str = ""
    user_agent: str = ""
    refer: str = ""
    debug: bool = False
    silent: bool = False


_options = RequestOptions()


def set_options(opt: RequestOptions) -> None:
    """Replace the settings used by all following requests."""
    for field in fields(RequestOptions):
        setattr(_options, field.name, getattr(opt, field.name))


def _parse_cookie_file(raw: str) -> list[tuple[str, str]]:
    """Read name/value pairs from Netscape cookie-file lines."""
    cookies = []
    for line in raw.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        fields_ = line.split("\t")
        if len(fields_) != 7:
            return []
        cookies.append((fields_[5], fields_[6]))
    return cookies


def _apply_cookie(headers: dict[str, str], raw: str) -> None:
    cookies = _parse_cookie_file(raw)
    if not cookies:
        headers["Cookie"] = raw
        return
    pairs = "; ".join(f"{name}={value}" for name, value in cookies)
    existing = headers.get("Cookie")
    headers["Cookie"] = f"{existing}; {pairs}" if existing else pairs


def _print_debug(method: str, url: str, response: requests.Response) -> None:
    print()
    print(f"URL:         {url}")
    print(f"Method:      {method}")
    print(f"Headers:     {pprint.pformat(dict(response.request.headers))}")
    print(f"Status Code: {response.status_code}")


def request(
    method: str,
    url: str,
    body=None,
    headers: Optional[Mapping[str, str]] = None,
) -> requests.Response:
    """Send a request, retrying on failure, and return the streamed response."""
    req_headers = dict(headers or {})
    if "Referer" not in req_headers:
        req_headers["Referer"] = url
    if _options.cookie:
        _apply_cookie(req_headers, _options.cookie)
    if _options.user_agent:
        req_headers["User-Agent"] = _options.user_agent
    if _options.refer:
        req_headers["Referer"] = _options.refer

    attempt = 0
    while True:
        attempt += 1
        response: Optional[requests.Response] = None
        error: Optional[Exception] = None
        try:
            with warnings.catch_warnings():
                warnings.simplefilter("ignore")
                response = _SESSION.request(
                    method,
                    url,
                    data=body,
                    headers=req_headers,
                    timeout=_TIMEOUT_SECONDS,
                    verify=False,
                    stream=True,
                )
        except requests.RequestException as exc:
            error = exc
        if response is not None and response.status_code < 400:
            break
        if attempt >= _options.retry_times:
            if error is not None:
                raise RequestError(f"request error: {error}") from error
            status = response.status_code
            response.close()
            raise RequestError(f"{url} request error: HTTP {status}")
        if response is not None:
            response.close()
        time.sleep(1)

    if _options.debug:
        _print_debug(method, url, response)
    return response


def get_bytes(
    url: str, refer: str = "", headers: Optional[Mapping[str, str]] = None
) -> bytes:
    """GET a URL and return its decoded body bytes."""
    req_headers = dict(headers or {})
    if refer:
        req_headers["Referer"] = refer
    with request("GET", url, None, req_headers) as response:
        return response.content


def get(url: str, refer: str = "", headers: Optional[Mapping[str, str]] = None) -> str:
    """GET a URL and return its body as text."""
    return get_bytes(url, refer, headers).decode("utf-8", errors="replace")


def headers(url: str, refer: str = "") -> CaseInsensitiveDict:
    """Return the response headers of a GET request."""
    with request("GET", url, None, {"Referer": refer}) as response:
        return response.headers


def size(url: str, refer: str = "") -> int:
    """Return the Content-Length of a URL."""
    value = headers(url, refer).get("Content-Length", "")
    if not value:
        raise RequestError("Content-Length is not present")
    return int(value)


def content_type(url: str, refer: str = "") -> str:
    """Return the media type of a URL, without parameters."""
    value = headers(url, refer).get("Content-Type", "")
    return value.split(";")[0]