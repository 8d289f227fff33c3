"""Load and validate the parody site configuration.

This subpackage parses the ``siteconfig.yaml`` file describing which news page
to mimic: the front page and article page URLs, elements to strip, snippets
to inject, the slot selectors that receive articles, the fallback link, and
the author pool. The primary entry point is :func:`load_site_config`, which
returns a :class:`SiteConfig` whose slot mappings are already normalized into
:class:`SlotSpec` records.

Examples
--------
>>> from pathlib import Path
>>> from autospoof.config import load_site_config
>>> site = load_site_config(Path("siteconfig.yaml"))  # doctest: +SKIP
>>> site.frontpage.url  # doctest: +SKIP
'https://news.example.com/'
"""

from .loader import build_site_config, load_site_config
from .models import (
    ArticlePageConfig,
    ConfigError,
    FrontPageConfig,
    PageConfig,
    SiteConfig,
    SlotConfig,
    SlotSpec,
)
from .slots import normalize, normalize_slot_config

__all__ = [
    "ArticlePageConfig",
    "ConfigError",
    "FrontPageConfig",
    "PageConfig",
    "SiteConfig",
    "SlotConfig",
    "SlotSpec",
    "build_site_config",
    "load_site_config",
    "normalize",
    "normalize_slot_config",
]
