"""Round-robin byline allocation shared by every binding pass of a run."""

from __future__ import annotations

import typing as typ

from autospoof._constants import FALLBACK_AUTHOR

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from autospoof.articles.models import Article


class AuthorAllocator:
    """Assign bylines from a pool, memoized per ``(article, slot_index)``.

    The cursor advances once per distinct pair, so binding the same article
    on the front page and on its own page yields the same byline, and repeated
    passes do not skew the distribution.

    Examples
    --------
    >>> from autospoof.articles.models import Article
    >>> allocator = AuthorAllocator(["Ann", "Bob"])
    >>> story = Article(title="Story")
    >>> allocator.assign(story, 0), allocator.assign(story, 1), allocator.assign(story, 0)
    ('Ann', 'Bob', 'Ann')
    """

    def __init__(self, pool: cabc.Iterable[str] | None = None) -> None:
        self.pool: tuple[str, ...] = tuple(pool or ())
        self._cursor = 0
        self._assigned: dict[tuple[str, int], str] = {}

    def assign(self, article: Article, slot_index: int) -> str:
        """Return the byline for ``article`` at ``slot_index``."""
        if not self.pool:
            return FALLBACK_AUTHOR
        key = (article.title, slot_index)
        name = self._assigned.get(key)
        if name is None:
            name = self.pool[self._cursor % len(self.pool)]
            self._assigned[key] = name
            self._cursor += 1
        return name

    def reset(self) -> None:
        """Forget every assignment and rewind the cursor."""
        self._cursor = 0
        self._assigned.clear()


__all__ = ["AuthorAllocator"]
