"""Selector-driven binding of ordered articles onto a borrowed HTML template.

A slot configuration maps CSS selectors to :class:`SlotSpec` records. Binding
walks the selectors in declaration order, fills each matched element with the
next unconsumed article, and, once every article is consumed, removes the
selector's remaining elements so surplus template slots disappear instead of
showing the original site's stories.

Example
-------
>>> from bs4 import BeautifulSoup
>>> from autospoof.binding import AuthorAllocator, LinkPrefixes, bind
>>> soup = BeautifulSoup(html, "html.parser")  # doctest: +SKIP
>>> bind(soup, slots, articles, AuthorAllocator(), LinkPrefixes())  # doctest: +SKIP
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from bs4 import BeautifulSoup, Tag

from autospoof._constants import (
    ARTICLE_FILENAME_TEMPLATE,
    ARTICLES_DIRNAME,
    IMAGES_DIRNAME,
)

if typ.TYPE_CHECKING:
    from autospoof.articles.models import Article
    from autospoof.config.models import SlotConfig, SlotSpec

    from .authors import AuthorAllocator

logger = logging.getLogger(__name__)

_RESPONSIVE_IMAGE_ATTRS = ("srcset", "sizes", "data-src", "data-srcset", "data-lazy-src")


@dc.dataclass(frozen=True, slots=True)
class LinkPrefixes:
    """Folder prefixes used to build article links and image sources.

    The front page lives next to ``articles/`` and ``images/``; article pages
    live inside ``articles/`` and use ``LinkPrefixes(".", "../images")``.
    """

    articles: str = ARTICLES_DIRNAME
    images: str = IMAGES_DIRNAME

    def article_href(self, article: Article) -> str:
        """Return the link to ``article``'s own page."""
        filename = ARTICLE_FILENAME_TEMPLATE.format(slug=article.slug)
        return f"{self.articles}/{filename}"

    def image_src(self, image: str) -> str:
        """Return the source path for an image filename."""
        return f"{self.images}/{image}"


def set_text(node: Tag, text: str) -> None:
    """Replace every child of ``node`` with ``text``."""
    node.string = text


def apply_image(node: Tag, article: Article, prefixes: LinkPrefixes) -> None:
    """Point ``node`` at the article image, or remove it when there is none.

    Sibling ``<source>`` elements of an enclosing ``<picture>`` are removed;
    an imageless article removes the whole ``<picture>``.
    """
    parent = node.parent
    picture = parent if parent is not None and parent.name == "picture" else None
    if not article.image:
        (picture or node).decompose()
        return
    if picture is not None:
        for source in picture.find_all("source"):
            source.decompose()
    for attr in _RESPONSIVE_IMAGE_ATTRS:
        if attr in node.attrs:
            del node[attr]
    node["src"] = prefixes.image_src(article.image)
    node["alt"] = article.title


def apply_authors(
    nodes: typ.Iterable[Tag], article: Article, allocator: AuthorAllocator
) -> None:
    """Write a byline into each node, using its ordinal as the slot index."""
    for index, node in enumerate(nodes):
        set_text(node, allocator.assign(article, index))


def _is_attached(element: Tag, document: BeautifulSoup) -> bool:
    """Return True while ``element`` is still part of ``document``."""
    if element.decomposed:
        return False
    return any(parent is document for parent in element.parents)


def _log_missing(element: Tag, selector: str, field: str) -> None:
    logger.warning(
        "%s subselector %r matched nothing inside <%s>; the field is left unbound",
        field.capitalize(),
        selector,
        element.name,
    )


def _select_field(element: Tag, selector: str, field: str) -> Tag | None:
    """Return the first match of ``selector`` in ``element``, warning when absent."""
    node = element.select_one(selector)
    if node is None:
        _log_missing(element, selector, field)
    return node


class SlotBinder:
    """Apply a slot configuration to a template document."""

    def __init__(self, allocator: AuthorAllocator, prefixes: LinkPrefixes) -> None:
        self.allocator = allocator
        self.prefixes = prefixes

    def bind(
        self,
        document: BeautifulSoup,
        slots: SlotConfig,
        articles: typ.Sequence[Article],
    ) -> BeautifulSoup:
        """Populate or prune every slot of ``document`` in place.

        Parameters
        ----------
        document : BeautifulSoup
            Freshly parsed template; mutated and returned.
        slots : SlotConfig
            Ordered ``selector -> SlotSpec`` mapping. Earlier selectors consume
            articles first.
        articles : Sequence[Article]
            Articles in priority order.

        Returns
        -------
        BeautifulSoup
            The same ``document`` after binding.

        Notes
        -----
        Elements matched after the articles run out are removed as soon as
        their selector is processed, so later selectors never see them.
        Elements already bound earlier in the pass are kept.
        """
        cursor = 0
        bound_ids: set[int] = set()
        for selector, spec in slots.items():
            elements = document.select(selector)
            bound = pruned = 0
            for element in elements:
                # Elements bound by an earlier selector are neither rebound nor pruned.
                if id(element) in bound_ids or not _is_attached(element, document):
                    continue
                if cursor < len(articles):
                    self.bind_element(element, spec, articles[cursor])
                    bound_ids.add(id(element))
                    cursor += 1
                    bound += 1
                else:
                    element.decompose()
                    pruned += 1
            logger.debug(
                "Selector %r matched %d element(s): %d bound, %d removed",
                selector,
                len(elements),
                bound,
                pruned,
            )
        return document

    def bind_element(self, element: Tag, spec: SlotSpec, article: Article) -> None:
        """Write one article's summary fields into ``element``.

        The title is written first. Without a title subselector it replaces
        every child of ``element``, so later subselectors match nothing.
        """
        title_node = _select_field(element, spec.title, "title") if spec.title else element
        if title_node is not None:
            set_text(title_node, article.title)

        href_node = _select_field(element, spec.href, "href") if spec.href else element
        if href_node is not None:
            href_node["href"] = self.prefixes.article_href(article)

        if spec.image:
            image_node = _select_field(element, spec.image, "image")
            if image_node is not None:
                apply_image(image_node, article, self.prefixes)

        if spec.subtitle:
            subtitle_node = _select_field(element, spec.subtitle, "subtitle")
            if subtitle_node is not None:
                set_text(subtitle_node, article.subtitle or "")

        if spec.author:
            author_nodes = element.select(spec.author)
            if not author_nodes:
                _log_missing(element, spec.author, "author")
            apply_authors(author_nodes, article, self.allocator)


def bind(
    document: BeautifulSoup,
    slots: SlotConfig,
    articles: typ.Sequence[Article],
    allocator: AuthorAllocator,
    prefixes: LinkPrefixes,
) -> BeautifulSoup:
    """Bind ``articles`` onto ``document`` with a one-off :class:`SlotBinder`."""
    return SlotBinder(allocator, prefixes).bind(document, slots, articles)


__all__ = [
    "LinkPrefixes",
    "SlotBinder",
    "apply_authors",
    "apply_image",
    "bind",
    "set_text",
]
