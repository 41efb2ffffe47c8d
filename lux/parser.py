"""HTML helpers built on BeautifulSoup."""

from __future__ import annotations

from typing import Callable, Optional

from bs4 import BeautifulSoup


def get_doc(html: str) -> BeautifulSoup:
    """Parse an HTML string into a document."""
    # Keep attribute values as written, so class names compare as whole strings.
    return BeautifulSoup(html, "html.parser", multi_valued_attributes=None)


def get_images(
    html: str,
    img_class: str,
    url_handler: Optional[Callable[[str], str]] = None,
) -> tuple[str, list[str]]:
    """Return the page title and the sources of images with exactly ``img_class``."""
    doc = get_doc(html)
    urls = []
    for img in doc.find_all("img"):
        if img.get("class") != img_class:
            continue
        url = img.get("src", "")
        if url_handler is not None:
            url = url_handler(url)
        urls.append(url)
    return title(doc), urls


def title(doc: BeautifulSoup) -> str:
    """Guess the title of a document from h1, og:title or the title tag."""
    h1 = doc.find("h1")
    if h1 is None:
        h1_title = ""
    else:
        attr = h1.get("title")
        h1_title = attr if attr is not None else h1.get_text()
    result = h1_title.strip().replace("\n", "")
    if not result:
        meta = doc.find("meta", attrs={"property": "og:title"})
        result = meta.get("content", "") if meta is not None else ""
    if not result:
        result = "".join(tag.get_text() for tag in doc.find_all("title"))
    return result