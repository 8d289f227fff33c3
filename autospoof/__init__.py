"""Build static parody news sites from a Google Drive folder of articles.

This package exposes the ``autospoof`` CLI, which turns every Google Doc in a
Drive folder into an article and binds the articles onto a copy of an
existing news site's front page and article template.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from autospoof import main
>>> main()  # doctest: +SKIP
>>> callable(main)
True
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
