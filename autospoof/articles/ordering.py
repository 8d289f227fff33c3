"""Resolve extracted articles into one immutable priority order.

Ordering is supplied by an *oracle*: any callable receiving the articles in
their default order and returning article ids, most important first. The
core only consumes the resolved sequence, so interactive prompting stays at
the edge of the program.
"""

from __future__ import annotations

import re
import typing as typ

from autospoof.errors import ConfigError

from .models import FullArticle

if typ.TYPE_CHECKING:
    import collections.abc as cabc

OrderingOracle = typ.Callable[[typ.Sequence[FullArticle]], typ.Sequence[str]]

_SEPARATORS = re.compile(r"[\s,]+")


def default_order(articles: cabc.Iterable[FullArticle]) -> list[FullArticle]:
    """Return articles with images first, otherwise keeping listing order."""
    return sorted(articles, key=lambda article: article.image is None)


def keep_default(articles: typ.Sequence[FullArticle]) -> list[str]:
    """Oracle accepting the default order unchanged."""
    return [article.document_id for article in articles]


class PriorityListOracle:
    """Order articles by an explicit list of ids or titles.

    Titles match case-insensitively. Articles missing from the list follow
    the listed ones in default order.
    """

    def __init__(self, priorities: cabc.Iterable[str]) -> None:
        self.priorities = [item.strip() for item in priorities if item.strip()]

    def __call__(self, articles: typ.Sequence[FullArticle]) -> list[str]:
        by_key: dict[str, str] = {}
        for article in articles:
            by_key[article.title.strip().lower()] = article.document_id
            by_key[article.document_id] = article.document_id

        ordered: list[str] = []
        for priority in self.priorities:
            document_id = by_key.get(priority) or by_key.get(priority.lower())
            if document_id is None:
                msg = f"Priority entry {priority!r} does not match any article."
                raise ConfigError(msg)
            if document_id not in ordered:
                ordered.append(document_id)
        ordered.extend(
            article.document_id
            for article in articles
            if article.document_id not in ordered
        )
        return ordered


class InteractiveOracle:
    """Ask the user to rank articles by number on the terminal."""

    def __init__(
        self,
        input_fn: typ.Callable[[str], str] = input,
        output_fn: typ.Callable[[str], None] = print,
    ) -> None:
        self._input = input_fn
        self._output = output_fn

    def __call__(self, articles: typ.Sequence[FullArticle]) -> list[str]:
        self._output("Order parody articles by priority, most important first:")
        for number, article in enumerate(articles, start=1):
            marker = "" if article.image else " (no image)"
            self._output(f"  {number}. {article.title}{marker}")
        while True:
            answer = self._input("Numbers in priority order (blank keeps this order): ")
            try:
                picks = self._parse(answer, len(articles))
            except ValueError as exc:
                self._output(str(exc))
                continue
            chosen = [articles[index].document_id for index in picks]
            chosen.extend(
                article.document_id
                for article in articles
                if article.document_id not in chosen
            )
            return chosen

    @staticmethod
    def _parse(answer: str, count: int) -> list[int]:
        tokens = [token for token in _SEPARATORS.split(answer.strip()) if token]
        picks: list[int] = []
        for token in tokens:
            if not token.isdigit() or not 1 <= int(token) <= count:
                msg = f"Expected numbers between 1 and {count}, got {token!r}."
                raise ValueError(msg)
            index = int(token) - 1
            if index in picks:
                msg = f"Article {token} was listed twice."
                raise ValueError(msg)
            picks.append(index)
        return picks


def resolve_order(
    articles: typ.Mapping[str, FullArticle], oracle: OrderingOracle = keep_default
) -> tuple[FullArticle, ...]:
    """Return the articles in the order chosen by ``oracle``.

    Parameters
    ----------
    articles : Mapping[str, FullArticle]
        Extracted articles keyed by document id.
    oracle : OrderingOracle, optional
        Callable returning a permutation of the ids; defaults to keeping the
        images-first default order.

    Returns
    -------
    tuple[FullArticle, ...]
        Immutable ordered sequence used by every binding pass.

    Raises
    ------
    ConfigError
        If the oracle returns unknown or repeated ids, or omits an article.
    """
    candidates = default_order(articles.values())
    ids = list(oracle(candidates))
    if len(set(ids)) != len(ids):
        msg = "Article ordering lists the same article more than once."
        raise ConfigError(msg)
    unknown = [document_id for document_id in ids if document_id not in articles]
    if unknown:
        msg = f"Article ordering references unknown ids: {', '.join(unknown)}"
        raise ConfigError(msg)
    if len(ids) != len(articles):
        msg = "Article ordering must include every extracted article."
        raise ConfigError(msg)
    return tuple(articles[document_id] for document_id in ids)


__all__ = [
    "InteractiveOracle",
    "OrderingOracle",
    "PriorityListOracle",
    "default_order",
    "keep_default",
    "resolve_order",
]
