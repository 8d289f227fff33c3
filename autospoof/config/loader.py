"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .helpers import (
    _normalize_names,
    _normalize_selectors,
    _optional_str,
    _require_mapping,
)
from .models import (
    ArticlePageConfig,
    ConfigError,
    FrontPageConfig,
    SiteConfig,
)
from .slots import normalize_slot_config


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing the site to mimic.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration (for example,
        ``siteconfig.yaml``).

    Returns
    -------
    SiteConfig
        Parsed configuration with front page and article page definitions,
        normalized slot configurations, the fallback link, and the author
        pool.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    ConfigError
        If the YAML cannot be parsed, the top level is not a mapping, or a
        required section or ``url`` is missing.

    Examples
    --------
    >>> from pathlib import Path
    >>> from autospoof.config import load_site_config
    >>> config = load_site_config(Path("siteconfig.yaml"))  # doctest: +SKIP
    >>> list(config.frontpage.articles)  # doctest: +SKIP
    ['.top-story', '.card']
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle) or {}
    except YAMLError as exc:
        msg = f"Configuration file '{path}' is not valid YAML: {exc}"
        raise ConfigError(msg) from exc
    return build_site_config(loaded)


def build_site_config(loaded: object) -> SiteConfig:
    """Build a :class:`SiteConfig` from an already parsed mapping."""
    raw = _require_mapping(loaded, "<root>")
    frontpage = _build_frontpage_config(raw.get("frontpage"))
    article = _build_article_config(raw.get("article"))
    fallback_link = _optional_str(raw.get("fallback_link", raw.get("default")))
    authors = _normalize_names(raw.get("authors", raw.get("author_pool")))
    return SiteConfig(
        frontpage=frontpage,
        article=article,
        fallback_link=fallback_link,
        authors=authors,
    )


def _page_fields(payload: typ.Mapping[str, typ.Any], section: str) -> dict[str, typ.Any]:
    """Return the fields common to every template page section."""
    url = _optional_str(payload.get("url"))
    if not url:
        msg = f"Configuration section '{section}' is missing 'url'."
        raise ConfigError(msg)
    return {
        "url": url,
        "remove": _normalize_selectors(payload.get("remove")),
        "script": _optional_str(payload.get("script")),
        "style": _optional_str(payload.get("style")),
    }


def _build_frontpage_config(payload: object) -> FrontPageConfig:
    """Build the front page configuration section."""
    data = _require_mapping(payload, "frontpage")
    return FrontPageConfig(
        **_page_fields(data, "frontpage"),
        articles=normalize_slot_config(data.get("articles")),
    )


def _build_article_config(payload: object) -> ArticlePageConfig:
    """Build the article page configuration section."""
    data = _require_mapping(payload, "article")
    suffix = data.get("title_suffix")
    return ArticlePageConfig(
        **_page_fields(data, "article"),
        title=_optional_str(data.get("title")),
        subtitle=_optional_str(data.get("subtitle")),
        body=_optional_str(data.get("body")),
        image=_optional_str(data.get("image")),
        author=_optional_str(data.get("author")),
        title_suffix=suffix if isinstance(suffix, str) else "",
        links=normalize_slot_config(data.get("links")),
    )


__all__ = ["build_site_config", "load_site_config"]
