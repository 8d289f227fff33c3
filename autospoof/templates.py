"""Fetch borrowed template pages and sanitize them before binding.

A :class:`PageTemplate` keeps the sanitized markup of one remote page and
hands out a freshly parsed, independently owned ``BeautifulSoup`` document on
every :meth:`PageTemplate.fresh` call, so the front page and each article page
never share mutable state.
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from .errors import FetchError

if typ.TYPE_CHECKING:
    from .articles.extractor import BinaryFetcher
    from .config.models import PageConfig

logger = logging.getLogger(__name__)

HTML_PARSER = "html.parser"

# (tag, attribute) pairs whose relative URLs must keep pointing at the source site.
_ASSET_ATTRIBUTES = (
    ("link", "href"),
    ("script", "src"),
    ("img", "src"),
    ("source", "src"),
    ("video", "poster"),
)
_UNREWRITABLE_PREFIXES = ("#", "mailto:", "tel:", "javascript:", "data:")
_SRCSET_TAGS = ["img", "source"]


def absolutize_srcset(value: str, base_url: str) -> str:
    """Resolve every candidate URL of a ``srcset`` value against ``base_url``.

    >>> absolutize_srcset("a.jpg 1x, /b.jpg 2x", "https://news.example.com/s/")
    'https://news.example.com/s/a.jpg 1x, https://news.example.com/b.jpg 2x'
    """
    if value.strip().startswith("data:"):
        return value
    candidates: list[str] = []
    for candidate in value.split(","):
        url, _, descriptor = candidate.strip().partition(" ")
        if not url:
            continue
        if not url.startswith(_UNREWRITABLE_PREFIXES):
            url = urljoin(base_url, url)
        candidates.append(f"{url} {descriptor.strip()}".rstrip())
    return ", ".join(candidates)


def absolutize_assets(document: BeautifulSoup, base_url: str) -> None:
    """Resolve relative asset URLs in ``document`` against ``base_url``."""
    for tag_name, attr in _ASSET_ATTRIBUTES:
        for node in document.find_all(tag_name, attrs={attr: True}):
            value = node[attr].strip()
            if value and not value.startswith(_UNREWRITABLE_PREFIXES):
                node[attr] = urljoin(base_url, value)
    for node in document.find_all(_SRCSET_TAGS, srcset=True):
        node["srcset"] = absolutize_srcset(node["srcset"], base_url)


def redirect_links(document: BeautifulSoup, fallback_link: str) -> None:
    """Point every anchor at ``fallback_link`` so visitors stay on the parody."""
    for anchor in document.find_all("a", href=True):
        if anchor["href"].startswith("#"):
            continue
        anchor["href"] = fallback_link


def sanitize(
    document: BeautifulSoup, page: PageConfig, fallback_link: str | None = None
) -> BeautifulSoup:
    """Strip, inject, and rewrite ``document`` according to ``page``.

    Parameters
    ----------
    document : BeautifulSoup
        Parsed page as fetched from ``page.url``.
    page : PageConfig
        Selectors to remove and optional script/style snippets to inject.
    fallback_link : str, optional
        Destination for every pre-existing anchor; untouched when ``None``.

    Returns
    -------
    BeautifulSoup
        The same document, modified in place.
    """
    for selector in page.remove:
        for node in document.select(selector):
            node.decompose()
    absolutize_assets(document, page.url)
    if fallback_link:
        redirect_links(document, fallback_link)
    if page.style:
        style = document.new_tag("style")
        style.string = page.style
        (document.head or document).append(style)
    if page.script:
        script = document.new_tag("script")
        script.string = page.script
        (document.body or document).append(script)
    return document


@dc.dataclass(frozen=True, slots=True)
class PageTemplate:
    """Sanitized markup of one template page."""

    url: str
    markup: str

    def fresh(self) -> BeautifulSoup:
        """Return a newly parsed document owned by the caller."""
        return BeautifulSoup(self.markup, HTML_PARSER)


class TemplateLoader:
    """Retrieve template pages through a binary fetch capability."""

    def __init__(self, fetcher: BinaryFetcher, *, fallback_link: str | None = None) -> None:
        self.fetcher = fetcher
        self.fallback_link = fallback_link

    def load(self, page: PageConfig) -> PageTemplate:
        """Fetch and sanitize ``page``.

        Raises
        ------
        FetchError
            If the page cannot be retrieved or answers with a non-success
            status; without a template no output can be produced.
        """
        logger.info("Fetching template %s", page.url)
        response = self.fetcher.fetch_binary(page.url)
        if not response.ok:
            msg = f"Received status {response.status} while trying to access {page.url}"
            raise FetchError(msg, url=page.url, status=response.status)
        document = BeautifulSoup(response.content, HTML_PARSER, from_encoding=response.charset)
        sanitize(document, page, self.fallback_link)
        return PageTemplate(url=page.url, markup=str(document))


__all__ = [
    "PageTemplate",
    "TemplateLoader",
    "absolutize_assets",
    "absolutize_srcset",
    "redirect_links",
    "sanitize",
]
