"""Article records produced by document extraction and consumed by binding."""

from __future__ import annotations

import dataclasses as dc
import re

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """Return a lowercase, filesystem-safe slug for ``title``.

    Runs of characters outside ``[a-z0-9]`` collapse to a single hyphen;
    leading and trailing hyphens are kept so the mapping stays a plain
    character substitution.

    Examples
    --------
    >>> slugify("Breaking News!")
    'breaking-news-'
    >>> slugify("Mayor  Eats  Own Hat")
    'mayor-eats-own-hat'
    """
    return _NON_ALNUM.sub("-", title.lower())


@dc.dataclass(frozen=True, slots=True)
class Article:
    """Summary fields shown wherever an article is teased.

    Attributes
    ----------
    title : str
        Document name; also the identity used for slugs and bylines.
    subtitle : str | None
        First line of the body.
    image : str | None
        Image filename relative to the images folder, e.g. ``foo.png``.
    """

    title: str
    subtitle: str | None = None
    image: str | None = None

    @property
    def slug(self) -> str:
        """Return the slug derived from the article title."""
        return slugify(self.title)


@dc.dataclass(frozen=True, slots=True)
class FullArticle(Article):
    """Article plus its body text and the downloaded image bytes."""

    body: str = ""
    document_id: str = ""
    image_data: bytes | None = dc.field(default=None, repr=False, compare=False)


@dc.dataclass(frozen=True, slots=True)
class DocumentEntry:
    """One Google Doc as reported by the Drive folder listing."""

    id: str
    name: str


__all__ = ["Article", "DocumentEntry", "FullArticle", "slugify"]
