"""Bind one article's detail fields onto the article page template."""

from __future__ import annotations

import typing as typ

from .binder import SlotBinder, apply_authors, apply_image, set_text

if typ.TYPE_CHECKING:
    from bs4 import BeautifulSoup, Tag

    from autospoof.articles.models import FullArticle
    from autospoof.config.models import ArticlePageConfig

    from .authors import AuthorAllocator
    from .binder import LinkPrefixes


def fill_body(document: BeautifulSoup, node: Tag, body: str) -> None:
    """Replace ``node``'s children with one ``<p>`` per non-empty body line."""
    node.clear()
    for line in body.splitlines():
        text = line.strip()
        if not text:
            continue
        paragraph = document.new_tag("p")
        paragraph.string = text
        node.append(paragraph)


def set_page_title(document: BeautifulSoup, title: str) -> None:
    """Set the ``<title>`` element, creating it inside ``<head>`` if needed."""
    if document.title is not None:
        document.title.string = title
        return
    head = document.head
    if head is None:
        return
    tag = document.new_tag("title")
    tag.string = title
    head.insert(0, tag)


def bind_article_page(
    document: BeautifulSoup,
    config: ArticlePageConfig,
    article: FullArticle,
    articles: typ.Sequence[FullArticle],
    allocator: AuthorAllocator,
    prefixes: LinkPrefixes,
) -> BeautifulSoup:
    """Populate ``document`` as the page for ``article``.

    Parameters
    ----------
    document : BeautifulSoup
        Freshly parsed article template owned by this page alone.
    config : ArticlePageConfig
        Detail selectors, title suffix, and related-link slots.
    article : FullArticle
        Article this page shows.
    articles : Sequence[FullArticle]
        Full ordered article list, bound into ``config.links``.
    allocator : AuthorAllocator
        Run-wide allocator; keeps bylines identical to the front page.
    prefixes : LinkPrefixes
        Prefixes relative to the articles folder.

    Returns
    -------
    BeautifulSoup
        The same ``document`` after binding.
    """
    set_page_title(document, f"{article.title}{config.title_suffix}")

    if config.title:
        for node in document.select(config.title):
            set_text(node, article.title)
    if config.subtitle:
        for node in document.select(config.subtitle):
            set_text(node, article.subtitle or "")
    if config.body:
        body_node = document.select_one(config.body)
        if body_node is not None:
            fill_body(document, body_node, article.body)
    if config.image:
        for node in document.select(config.image):
            apply_image(node, article, prefixes)
    if config.author:
        apply_authors(document.select(config.author), article, allocator)

    return SlotBinder(allocator, prefixes).bind(document, config.links, articles)


__all__ = ["bind_article_page", "fill_body", "set_page_title"]
