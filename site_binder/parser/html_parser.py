"""HTML parsing and article extraction for SiteBinder.

:func:`parse_document` turns a fetched page into a BeautifulSoup tree once;
:func:`extract_page` then walks the article container of that tree and builds
a :class:`~site_binder.crawler.models.PageRecord`:

* title: ``.Header h1``, ``.Header h2``, any ``h1``, any ``h2`` inside the
  container, else :data:`UNTITLED`.
* segments: ``p``, ``pre``, ``h2``, ``h3``, ``ul`` and ``ol`` in document
  order. Code from ``pre`` is stored verbatim in ``code_blocks`` and
  referenced by a 1-based :class:`CodeBlockRef`.

Both functions are pure: no network, no shared state.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import List, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from site_binder.crawler.models import (
    CodeBlockRef,
    FetchedPage,
    Heading,
    ListItems,
    PageRecord,
    Paragraph,
    Segment,
)

__all__: Sequence[str] = ("parse_document", "find_container", "extract_page", "resolve_title", "UNTITLED")

UNTITLED = "Untitled"

CONTAINER_SELECTOR = "div.Article, article"
TITLE_SELECTORS: Sequence[str] = (".Header h1", ".Header h2", "h1", "h2")
CONTENT_SELECTOR = "p, pre, h2, h3, ul, ol"

_HEADING_TAGS = frozenset({"h2", "h3"})
_LIST_TAGS = frozenset({"ul", "ol"})


def _clean(text: str) -> str:
    """Collapse runs of whitespace in prose text."""
    return " ".join(text.split())


def parse_document(page: FetchedPage) -> BeautifulSoup:
    return BeautifulSoup(page.content, "html.parser")


def find_container(document: BeautifulSoup) -> Optional[Tag]:
    """Return the article container of *document*, or None for non-article pages."""
    return document.select_one(CONTAINER_SELECTOR)


def resolve_title(container: Tag) -> str:
    for selector in TITLE_SELECTORS:
        node = container.select_one(selector)
        if node is not None:
            text = _clean(node.get_text())
            if text:
                return text
    return UNTITLED


def extract_page(document: BeautifulSoup, url: str) -> Optional[PageRecord]:
    """
    Build a PageRecord for *url* from *document*.

    Returns None when the document has no article container.
    """
    container = find_container(document)
    if container is None:
        return None

    headings: List[str] = []
    segments: List[Segment] = []
    code_blocks: List[str] = []

    for el in container.select(CONTENT_SELECTOR):
        name = el.name
        if name in _HEADING_TAGS:
            text = _clean(el.get_text())
            if text:
                headings.append(text)
                segments.append(Heading(text))
        elif name == "p":
            text = _clean(el.get_text())
            if text:
                segments.append(Paragraph(text))
        elif name == "pre":
            code = el.get_text()
            if code.strip():
                code_blocks.append(code)
                segments.append(CodeBlockRef(len(code_blocks)))
        elif name in _LIST_TAGS:
            items = tuple(t for t in (_clean(li.get_text()) for li in el.find_all("li")) if t)
            if items:
                segments.append(ListItems(items))

    return PageRecord(
        title=resolve_title(container),
        url=url,
        headings=tuple(headings),
        segments=tuple(segments),
        code_blocks=tuple(code_blocks),
    )
