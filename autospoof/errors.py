"""Exception hierarchy shared by the autospoof pipeline."""

from __future__ import annotations


class AutospoofError(RuntimeError):
    """Base class for every error raised deliberately by autospoof."""


class ConfigError(AutospoofError, ValueError):
    """Raised when configuration or user-supplied input is unusable."""


class FetchError(AutospoofError):
    """Raised when a remote retrieval fails or reports a non-success status."""

    def __init__(self, message: str, *, url: str | None = None, status: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


class ListError(FetchError):
    """Raised when a Drive folder cannot be resolved or listed."""


class EmptyFolderError(AutospoofError):
    """Raised when the folder yields no articles to bind."""


class AuthError(AutospoofError):
    """Raised when OAuth credentials cannot be obtained or refreshed."""


__all__ = [
    "AuthError",
    "AutospoofError",
    "ConfigError",
    "EmptyFolderError",
    "FetchError",
    "ListError",
]
