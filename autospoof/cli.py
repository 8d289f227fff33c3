"""Cyclopts CLI entrypoint for building parody news sites.

The ``autospoof`` console script defined here reads a site configuration,
authorizes against Google Drive, turns every Google Doc in a folder into an
article, and writes a static copy of the configured news site with those
articles bound into its front page and article template. ``autospoof list``
shows the documents a build would pick up, which helps when writing
``--priority`` lists.

Examples
--------
Build a site, ranking articles interactively:

>>> from autospoof.cli import app
>>> app.run(
...     [
...         "build",
...         "--config", "siteconfig.yaml",
...         "--client-secret", "client_secret.json",
...         "--docs", "https://drive.google.com/drive/folders/1AbC",
...         "--output", "output",
...         "--interactive",
...     ]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .articles.ordering import (
    InteractiveOracle,
    OrderingOracle,
    PriorityListOracle,
    keep_default,
)
from .auth import resolve_access_token
from .config import load_site_config
from .errors import AutospoofError
from .fetcher import HttpFetcher
from .google import GoogleDocsClient
from .log import setup_logging
from .site import SiteBuilder

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = Path("siteconfig.yaml")
DEFAULT_OUTPUT = Path("output")

app = App(name="autospoof", config=cyclopts.config.Env("AUTOSPOOF_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _select_oracle(priority: list[str] | None, *, interactive: bool) -> OrderingOracle:
    """Return the ordering oracle implied by the CLI flags."""
    if priority:
        return PriorityListOracle(priority)
    if interactive:
        return InteractiveOracle()
    return keep_default


@app.command(help="Build the parody site from a Drive folder of Google Docs.")
def build(
    *,
    docs: typ.Annotated[
        str, Parameter(help="Google Drive folder URL or id", env_var="AUTOSPOOF_DOCS")
    ],
    config: typ.Annotated[
        Path, Parameter(help="Path to the site config", env_var="AUTOSPOOF_CONFIG")
    ] = DEFAULT_CONFIG,
    output: typ.Annotated[
        Path, Parameter(help="Directory receiving the static site", env_var="AUTOSPOOF_OUTPUT")
    ] = DEFAULT_OUTPUT,
    client_secret: typ.Annotated[
        Path | None,
        Parameter(
            help="OAuth client secret JSON from Google Cloud Console",
            env_var="AUTOSPOOF_CLIENT_SECRET",
        ),
    ] = None,
    access_token: typ.Annotated[
        str | None,
        Parameter(help="Use this access token instead of OAuth (falls back to GOOGLE_ACCESS_TOKEN)"),
    ] = None,
    priority: typ.Annotated[
        list[str] | None,
        Parameter(help="Article titles or ids, most important first"),
    ] = None,
    interactive: typ.Annotated[
        bool, Parameter(help="Rank articles interactively")
    ] = False,
    workers: typ.Annotated[
        int, Parameter(help="Documents fetched concurrently")
    ] = 4,
    verbose: bool = False,
) -> None:
    """Build the static parody site for the configured news outlet.

    Parameters
    ----------
    docs : str
        Google Drive folder URL (or bare folder id) holding the parody
        articles, one Google Doc each.
    config : Path, optional
        Path to the ``siteconfig.yaml`` describing the outlet to mimic.
    output : Path, optional
        Directory receiving ``index.html``, ``articles/`` and ``images/``.
    client_secret : Path or None, optional
        OAuth installed-app client secret; required unless an access token is
        supplied.
    access_token : str or None, optional
        Ready-made OAuth access token; skips the consent flow.
    priority : list[str] or None, optional
        Explicit priority order by title or document id; unlisted articles
        follow in default order.
    interactive : bool, optional
        Prompt for the priority order when ``priority`` is not given.
    workers : int, optional
        Thread pool size for document extraction.
    verbose : bool, optional
        Log binding details at DEBUG level.

    Returns
    -------
    None
        Writes the site and prints each written path.
    """
    setup_logging(logging.DEBUG if verbose else logging.INFO)
    site_config = load_site_config(config)
    token = resolve_access_token(client_secret=client_secret, access_token=access_token)
    client = GoogleDocsClient(token=token)
    fetcher = HttpFetcher()
    try:
        builder = SiteBuilder(
            site_config,
            documents=client,
            fetcher=fetcher,
            oracle=_select_oracle(priority, interactive=interactive),
            max_workers=workers,
        )
        written = builder.run(docs, output)
    finally:
        client.close()
        fetcher.close()
    for path in written:
        print(f"wrote {_format_path(path)}")


@app.command(name="list", help="List the Google Docs a build would use.")
def list_documents(
    *,
    docs: typ.Annotated[
        str, Parameter(help="Google Drive folder URL or id", env_var="AUTOSPOOF_DOCS")
    ],
    client_secret: typ.Annotated[
        Path | None,
        Parameter(
            help="OAuth client secret JSON from Google Cloud Console",
            env_var="AUTOSPOOF_CLIENT_SECRET",
        ),
    ] = None,
    access_token: str | None = None,
) -> None:
    """Print ``id<TAB>name`` for every Google Doc in the folder."""
    setup_logging()
    token = resolve_access_token(client_secret=client_secret, access_token=access_token)
    client = GoogleDocsClient(token=token)
    try:
        entries = client.list_documents(docs)
    finally:
        client.close()
    for entry in entries:
        print(f"{entry.id}\t{entry.name}")


def main() -> None:
    """Invoke the Cyclopts application that powers the `autospoof` command.

    Fatal pipeline errors are logged and turned into exit status 1.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    try:
        app()
    except AutospoofError as exc:
        setup_logging()
        logger.error("%s", exc)
        raise SystemExit(1) from exc


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
