"""Utility helpers shared by the autospoof configuration loader."""

from __future__ import annotations

import typing as typ

from .models import ConfigError


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty or not a scalar."""
    if value is None or isinstance(value, (dict, list)):
        return None
    text = str(value).strip()
    return text or None


def _normalize_selectors(value: str | list[object] | None) -> list[str]:
    """Normalize a selector or list of selectors into non-empty strings."""
    if isinstance(value, str):
        text = value.strip()
        return [text] if text else []
    if isinstance(value, list):
        normalized: list[str] = []
        for segment in value:
            text = _optional_str(segment)
            if text:
                normalized.append(text)
        return normalized
    return []


def _normalize_names(value: object | None) -> list[str]:
    """Return the author pool as a list of non-empty names."""
    match value:
        case str() as text:
            return [name.strip() for name in text.split(",") if name.strip()]
        case list() as items:
            return [name for name in map(_optional_str, items) if name]
        case _:
            return []


def _require_mapping(value: object, section: str) -> typ.Mapping[str, typ.Any]:
    """Return ``value`` when it is a mapping, otherwise raise ConfigError."""
    if not isinstance(value, dict):
        msg = f"Configuration section '{section}' must be a mapping."
        raise ConfigError(msg)
    return value


__all__ = [
    "_normalize_names",
    "_normalize_selectors",
    "_optional_str",
    "_require_mapping",
]
