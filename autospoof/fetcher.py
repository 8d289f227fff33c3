"""Binary HTTP retrieval used for template pages and embedded images.

The fetcher performs one ``GET`` with a timeout and
reports the status, declared content type, and body. Non-success statuses are
returned, not raised, so callers decide whether a failure is fatal (template
pages) or degrades a single field (article images). Only transport failures
raise :class:`~autospoof.errors.FetchError`.

Example
-------
>>> from autospoof.fetcher import HttpFetcher
>>> fetcher = HttpFetcher()
>>> response = fetcher.fetch_binary("https://example.com/")  # doctest: +SKIP
>>> response.ok  # doctest: +SKIP
True
"""

from __future__ import annotations

import dataclasses as dc
import threading
from http import HTTPStatus

import requests

from ._constants import REQUEST_TIMEOUT, USER_AGENT
from .errors import FetchError


@dc.dataclass(frozen=True, slots=True)
class BinaryResponse:
    """Status, declared media type, and raw body of a fetched resource."""

    url: str
    status: int
    content_type: str | None
    content: bytes = dc.field(repr=False)

    @property
    def ok(self) -> bool:
        """Return True for 2xx statuses."""
        return HTTPStatus.OK <= self.status < HTTPStatus.MULTIPLE_CHOICES

    @property
    def subtype(self) -> str | None:
        """Return the media subtype of ``type/subtype`` or None when malformed.

        >>> BinaryResponse("u", 200, "image/png; charset=binary", b"").subtype
        'png'
        >>> BinaryResponse("u", 200, "png", b"").subtype is None
        True
        """
        if not self.content_type:
            return None
        media_type = self.content_type.split(";", 1)[0].strip().lower()
        major, sep, minor = media_type.partition("/")
        if not (major and sep and minor):
            return None
        return minor

    @property
    def charset(self) -> str | None:
        """Return the ``charset`` parameter of the content type, if declared.

        >>> BinaryResponse("u", 200, "text/html; charset=ISO-8859-1", b"").charset
        'ISO-8859-1'
        """
        if not self.content_type:
            return None
        for parameter in self.content_type.split(";")[1:]:
            name, _, value = parameter.partition("=")
            if name.strip().lower() == "charset" and value.strip():
                return value.strip().strip('"')
        return None


class SessionPool:
    """Hand out one ``requests.Session`` per thread.

    Sessions created here are never shared between threads. An injected
    session is returned as is and stays owned by the caller.
    """

    def __init__(self, session: requests.Session | None = None) -> None:
        self._shared = session
        self._local = threading.local()
        self._lock = threading.Lock()
        self._created: list[requests.Session] = []

    def get(self) -> requests.Session:
        """Return the session for the calling thread."""
        if self._shared is not None:
            return self._shared
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            self._local.session = session
            with self._lock:
                self._created.append(session)
        return session

    def close(self) -> None:
        """Close every session this pool created."""
        with self._lock:
            created, self._created = self._created, []
        for session in created:
            session.close()
        self._local = threading.local()


class HttpFetcher:
    """Fetch remote resources anonymously."""

    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        """Initialise the fetcher.

        Parameters
        ----------
        session : requests.Session, optional
            Session used for every request; one session per thread is created
            when omitted.
        timeout : float, optional
            Per-request timeout in seconds.
        """
        self._sessions = SessionPool(session)
        self.timeout = timeout
        self._headers = {"User-Agent": USER_AGENT}

    def fetch_binary(self, url: str) -> BinaryResponse:
        """Return the response for ``url`` whatever its status.

        Raises
        ------
        FetchError
            If the request cannot be sent or no response arrives.
        """
        try:
            response = self._sessions.get().get(url, headers=self._headers, timeout=self.timeout)
        except requests.RequestException as exc:
            msg = f"Failed to reach {url}: {exc}"
            raise FetchError(msg, url=url) from exc
        return BinaryResponse(
            url=url,
            status=response.status_code,
            content_type=response.headers.get("Content-Type"),
            content=response.content,
        )

    def close(self) -> None:
        """Close the sessions opened by this fetcher."""
        self._sessions.close()


__all__ = ["BinaryResponse", "HttpFetcher", "SessionPool"]
