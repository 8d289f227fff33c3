r"""Narrow client for the Google Drive and Docs REST endpoints.

Only two calls are needed: listing the Google Docs inside a Drive folder and
fetching one document's structured content. Both go through a shared
``requests.Session`` per thread with a bearer token; non-success statuses are turned
into :class:`~autospoof.errors.ListError` or
:class:`~autospoof.errors.FetchError`.

Example
-------
>>> from autospoof.google import GoogleDocsClient
>>> client = GoogleDocsClient(token="ya29.example")  # doctest: +SKIP
>>> files = client.list_documents(
...     "https://drive.google.com/drive/folders/1AbC"
... )  # doctest: +SKIP
>>> files[0].name  # doctest: +SKIP
'MAYOR EATS OWN HAT'
"""

from __future__ import annotations

import json
import logging
import re
import typing as typ
from http import HTTPStatus

import requests

from ._constants import (
    DOCS_DOCUMENT_URL,
    DRIVE_FILES_URL,
    DRIVE_PAGE_SIZE,
    GOOGLE_DOC_MIME_TYPE,
    REQUEST_TIMEOUT,
    USER_AGENT,
)
from .articles.models import DocumentEntry
from .errors import FetchError, ListError
from .fetcher import SessionPool

logger = logging.getLogger(__name__)

FOLDER_URL_PATTERN = re.compile(r"https://drive\.google\.com/drive/(?:u/\d+/)?folders/([\w-]+)")
FOLDER_ID_PATTERN = re.compile(r"[\w-]{10,}")


def parse_folder_reference(reference: str) -> str:
    """Return the folder id from a Drive folder URL or a bare id.

    >>> parse_folder_reference("https://drive.google.com/drive/folders/1AbCdEfGhIj?usp=sharing")
    '1AbCdEfGhIj'

    Raises
    ------
    ListError
        If ``reference`` is neither a Drive folder URL nor a plausible id.
    """
    normalized = reference.strip()
    match = FOLDER_URL_PATTERN.match(normalized)
    if match:
        return match.group(1)
    if FOLDER_ID_PATTERN.fullmatch(normalized):
        return normalized
    msg = f"{reference!r} is not a valid Google Drive folder URL"
    raise ListError(msg)


class GoogleDocsClient:
    """Thin wrapper around the Drive ``files.list`` and Docs ``documents.get`` calls."""

    def __init__(
        self,
        *,
        token: str | None = None,
        session: requests.Session | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self._sessions = SessionPool(session)
        self.timeout = timeout
        self._headers = {"Accept": "application/json", "User-Agent": USER_AGENT}
        if token:
            self._headers["Authorization"] = f"Bearer {token}"

    def list_documents(self, folder_ref: str) -> list[DocumentEntry]:
        """Return the Google Docs directly inside ``folder_ref``.

        Only the first page of at most ``DRIVE_PAGE_SIZE`` files is read.
        Entries without an ``id`` or ``name`` are skipped with a warning.

        Raises
        ------
        ListError
            If the folder reference is invalid or Drive rejects the call.
        """
        folder = parse_folder_reference(folder_ref)
        params = {
            "pageSize": DRIVE_PAGE_SIZE,
            "q": f"'{folder}' in parents and mimeType = '{GOOGLE_DOC_MIME_TYPE}'",
            "fields": "files(id, name)",
        }
        try:
            payload = self._get_json(DRIVE_FILES_URL, params=params)
        except FetchError as exc:
            raise ListError(str(exc), url=exc.url, status=exc.status) from exc

        entries: list[DocumentEntry] = []
        for item in payload.get("files") or []:
            match item:
                case {"id": str(file_id), "name": str(name)} if file_id and name:
                    entries.append(DocumentEntry(id=file_id, name=name))
                case _:
                    logger.warning("Skipping malformed listing entry %r", item)
        return entries

    def get_document(self, document_id: str) -> dict[str, typ.Any]:
        """Return the raw structured content of one Google Doc.

        Raises
        ------
        FetchError
            On transport failure, non-success status, or invalid JSON.
        """
        return self._get_json(DOCS_DOCUMENT_URL.format(document_id=document_id))

    def close(self) -> None:
        """Close the sessions opened by this client."""
        self._sessions.close()

    def _get_json(
        self, url: str, *, params: typ.Mapping[str, typ.Any] | None = None
    ) -> dict[str, typ.Any]:
        try:
            response = self._sessions.get().get(
                url, params=params, headers=self._headers, timeout=self.timeout
            )
        except requests.RequestException as exc:
            msg = f"Failed to reach {url}: {exc}"
            raise FetchError(msg, url=url) from exc

        if response.status_code != HTTPStatus.OK:
            msg = f"Received status {response.status_code} while trying to access {url}"
            raise FetchError(msg, url=url, status=response.status_code)
        try:
            payload = response.json()
        except (json.JSONDecodeError, ValueError) as exc:
            msg = f"Response from {url} was not valid JSON"
            raise FetchError(msg, url=url, status=response.status_code) from exc
        if not isinstance(payload, dict):
            msg = f"Response from {url} was not a JSON object"
            raise FetchError(msg, url=url, status=response.status_code)
        return payload


__all__ = ["FOLDER_URL_PATTERN", "GoogleDocsClient", "parse_folder_reference"]
