"""Typed dataclasses describing autospoof site configuration structures."""

from __future__ import annotations

import dataclasses as dc

from autospoof.errors import ConfigError


@dc.dataclass(frozen=True, slots=True)
class SlotSpec:
    """Describe how one article is written into a matched template region.

    Attributes
    ----------
    title : str
        Subselector receiving the article title; empty means the matched
        element itself. The title is written before every other field, so
        with an empty title the other subselectors find nothing to bind.
    href : str | None
        Subselector receiving the article link; ``None`` means the matched
        element itself.
    subtitle : str | None
        Subselector receiving the subtitle; ``None`` leaves it untouched.
    image : str | None
        Subselector of the image node; ``None`` leaves it untouched.
    author : str | None
        Subselector of byline nodes; ``None`` leaves them untouched.
    label : str | None
        Literal heading given in shorthand form. Always superseded by the
        bound article title.
    """

    title: str = ""
    href: str | None = None
    subtitle: str | None = None
    image: str | None = None
    author: str | None = None
    label: str | None = None


SlotConfig = dict[str, SlotSpec]


@dc.dataclass(slots=True)
class PageConfig:
    """Where a template page lives and how to sanitize it before binding."""

    url: str
    remove: list[str] = dc.field(default_factory=list)
    script: str | None = None
    style: str | None = None


@dc.dataclass(slots=True)
class FrontPageConfig(PageConfig):
    """Front page template plus the slots that receive article summaries."""

    articles: SlotConfig = dc.field(default_factory=dict)


@dc.dataclass(slots=True)
class ArticlePageConfig(PageConfig):
    """Article template, its detail field selectors, and related-link slots."""

    title: str | None = None
    subtitle: str | None = None
    body: str | None = None
    image: str | None = None
    author: str | None = None
    title_suffix: str = ""
    links: SlotConfig = dc.field(default_factory=dict)


@dc.dataclass(slots=True)
class SiteConfig:
    """Fully resolved configuration for one parody site."""

    frontpage: FrontPageConfig
    article: ArticlePageConfig
    fallback_link: str | None = None
    authors: list[str] = dc.field(default_factory=list)


__all__ = [
    "ArticlePageConfig",
    "ConfigError",
    "FrontPageConfig",
    "PageConfig",
    "SiteConfig",
    "SlotConfig",
    "SlotSpec",
]
