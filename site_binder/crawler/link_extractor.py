"""
Link resolution and same-host filtering for SiteBinder.

Links are kept exactly as written: no trailing-slash, query, fragment or case
normalisation. Two URLs that differ only in those respects are crawled as two
pages.
"""
from __future__ import annotations

from typing import List, Optional
from urllib.parse import SplitResult, urlsplit

from bs4.element import Tag

_FETCHABLE_SCHEMES = ("http", "https")


def resolve_link(raw: str, origin: str | SplitResult) -> Optional[str]:
    """
    Resolve *raw* against the crawl *origin*.

    Returns the absolute URL, or None when the link is off-host or of a form
    the crawler does not follow (mailto:, javascript:, fragments,
    scheme-relative and bare relative paths).
    """
    base = urlsplit(origin) if isinstance(origin, str) else origin
    link = raw.strip()
    if link.startswith("/") and not link.startswith("//"):
        return f"{base.scheme}://{base.netloc}{link}"
    try:
        parsed = urlsplit(link)
        hostname = parsed.hostname
    except ValueError:
        return None
    if parsed.scheme in _FETCHABLE_SCHEMES and hostname and hostname == base.hostname:
        return link
    return None


def discover_links(container: Tag, origin: str) -> List[str]:
    """
    Return accepted links inside *container* in document order.

    The crawler passes the article container, so navigation, header and
    footer links outside it are never followed.

    Duplicates are kept; the visited set decides what gets crawled.
    """
    base = urlsplit(origin)
    links: List[str] = []
    for tag in container.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        resolved = resolve_link(href_val, base)
        if resolved is not None:
            links.append(resolved)
    return links
