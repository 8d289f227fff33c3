"""OAuth bootstrap for read-only access to Google Drive and Docs.

This module powers the credential handling of the ``autospoof`` commands by:

* Decoding the installed-app ``client_secret.json`` downloaded from the
  Google Cloud Console.
* Building the consent URL and exchanging the pasted authorization code for
  tokens.
* Persisting the refresh token in ``~/.config/autospoof/credentials.toml`` so
  later runs skip the consent step.
"""

from __future__ import annotations

import collections.abc as cabc
import getpass
import os
import typing as typ
from pathlib import Path
from urllib.parse import urlencode

import msgspec
import msgspec.json as msgspec_json
import requests
import tomlkit

from ._constants import (
    DRIVE_READONLY_SCOPE,
    OAUTH_AUTHORIZE_URL,
    OAUTH_TOKEN_URL,
    REQUEST_TIMEOUT,
)
from .errors import AuthError, ConfigError

DEFAULT_CREDENTIALS_PATH = Path(
    os.getenv(
        "AUTOSPOOF_CREDENTIALS_FILE",
        Path.home() / ".config" / "autospoof" / "credentials.toml",
    )
)

# Stored tokens must only be readable by their owner
_CREDENTIALS_FILE_MODE = 0o600


class InstalledApp(msgspec.Struct):
    """The ``installed`` block of an OAuth client secret file."""

    client_id: str
    client_secret: str
    redirect_uris: list[str] = msgspec.field(default_factory=list)

    @property
    def redirect_uri(self) -> str:
        """Return the first registered redirect URI."""
        return self.redirect_uris[0] if self.redirect_uris else "urn:ietf:wg:oauth:2.0:oob"


class ClientSecrets(msgspec.Struct):
    """Top level of ``client_secret.json``."""

    installed: InstalledApp


class TokenResponse(msgspec.Struct):
    """Fields of the token endpoint response that autospoof uses."""

    access_token: str
    refresh_token: str | None = None
    expires_in: int | None = None
    token_type: str = "Bearer"


def load_client_secrets(path: Path) -> InstalledApp:
    """Decode an installed-app OAuth client secret file.

    Raises
    ------
    ConfigError
        If the file is missing or does not describe an installed app.
    """
    try:
        raw = path.read_bytes()
    except OSError as exc:
        msg = f"Unable to read client secret file '{path}': {exc}"
        raise ConfigError(msg) from exc
    try:
        return msgspec_json.decode(raw, type=ClientSecrets).installed
    except (msgspec.DecodeError, msgspec.ValidationError) as exc:
        msg = f"Client secret file '{path}' is not an installed-app OAuth client: {exc}"
        raise ConfigError(msg) from exc


def authorization_url(app: InstalledApp, scope: str = DRIVE_READONLY_SCOPE) -> str:
    """Return the consent URL the user must open to authorize access."""
    query = urlencode(
        {
            "client_id": app.client_id,
            "redirect_uri": app.redirect_uri,
            "response_type": "code",
            "scope": scope,
            "access_type": "offline",
            "prompt": "consent",
        }
    )
    return f"{OAUTH_AUTHORIZE_URL}?{query}"


def _post_token(
    payload: dict[str, str], session: requests.Session | None
) -> TokenResponse:
    client = session or requests.Session()
    try:
        response = client.post(OAUTH_TOKEN_URL, data=payload, timeout=REQUEST_TIMEOUT)
    except requests.RequestException as exc:
        msg = f"Failed to reach the OAuth token endpoint: {exc}"
        raise AuthError(msg) from exc
    if response.status_code >= 400:  # noqa: PLR2004 - HTTP client errors
        snippet = response.text[:200]
        msg = f"OAuth token request failed with status {response.status_code}: {snippet}"
        raise AuthError(msg)
    try:
        return msgspec_json.decode(response.content, type=TokenResponse)
    except (msgspec.DecodeError, msgspec.ValidationError) as exc:
        msg = "OAuth token response was not understood"
        raise AuthError(msg) from exc


def exchange_code(
    app: InstalledApp, code: str, *, session: requests.Session | None = None
) -> TokenResponse:
    """Exchange an authorization code for access and refresh tokens."""
    return _post_token(
        {
            "code": code.strip(),
            "client_id": app.client_id,
            "client_secret": app.client_secret,
            "redirect_uri": app.redirect_uri,
            "grant_type": "authorization_code",
        },
        session,
    )


def refresh_access_token(
    app: InstalledApp, refresh_token: str, *, session: requests.Session | None = None
) -> TokenResponse:
    """Return a new access token for a stored refresh token."""
    return _post_token(
        {
            "refresh_token": refresh_token,
            "client_id": app.client_id,
            "client_secret": app.client_secret,
            "grant_type": "refresh_token",
        },
        session,
    )


class TokenStore:
    """Persist refresh tokens per OAuth client id in a TOML file."""

    def __init__(self, path: Path = DEFAULT_CREDENTIALS_PATH) -> None:
        self.path = path

    def _document(self) -> tomlkit.TOMLDocument:
        try:
            return tomlkit.parse(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return tomlkit.document()
        except tomlkit.exceptions.ParseError as exc:
            msg = f"Unable to parse credentials TOML at {self.path}"
            raise ConfigError(msg) from exc

    def load(self, client_id: str) -> str | None:
        """Return the stored refresh token for ``client_id``, if any."""
        table = self._document().get(client_id)
        if not isinstance(table, cabc.Mapping):
            return None
        token = table.get("refresh_token")
        return str(token) if token else None

    def save(self, client_id: str, refresh_token: str) -> None:
        """Store ``refresh_token`` for ``client_id`` preserving other entries."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        doc = self._document()
        table = tomlkit.table()
        table["refresh_token"] = refresh_token
        doc[client_id] = table
        self.path.write_text(tomlkit.dumps(doc), encoding="utf-8")
        os.chmod(self.path, _CREDENTIALS_FILE_MODE)


def resolve_access_token(
    *,
    client_secret: Path | None,
    access_token: str | None = None,
    store: TokenStore | None = None,
    session: requests.Session | None = None,
    prompt: typ.Callable[[str], str] = getpass.getpass,
    notify: typ.Callable[[str], None] = print,
) -> str:
    """Return an access token for the Drive and Docs APIs.

    Resolution order: explicit ``access_token`` (or ``GOOGLE_ACCESS_TOKEN``),
    then a stored refresh token, then interactive consent, whose refresh
    token is stored for next time.

    Raises
    ------
    ConfigError
        If no token was given and no client secret file is available.
    AuthError
        If the token endpoint rejects the code or refresh token.
    """
    token = access_token or os.getenv("GOOGLE_ACCESS_TOKEN")
    if token:
        return token
    if client_secret is None:
        msg = "Provide --client-secret or --access-token to reach Google Drive."
        raise ConfigError(msg)

    app = load_client_secrets(client_secret)
    token_store = store or TokenStore()
    refresh_token = token_store.load(app.client_id)
    if refresh_token:
        try:
            return refresh_access_token(app, refresh_token, session=session).access_token
        except AuthError as exc:
            notify(f"Stored credentials were rejected ({exc}); asking again.")

    notify(f"Login to an account with access to the docs: {authorization_url(app)}")
    code = prompt("Enter the code from that page here: ")
    tokens = exchange_code(app, code, session=session)
    if tokens.refresh_token:
        token_store.save(app.client_id, tokens.refresh_token)
    return tokens.access_token


__all__ = [
    "DEFAULT_CREDENTIALS_PATH",
    "ClientSecrets",
    "InstalledApp",
    "TokenResponse",
    "TokenStore",
    "authorization_url",
    "exchange_code",
    "load_client_secrets",
    "refresh_access_token",
    "resolve_access_token",
]
