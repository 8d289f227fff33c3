"""Normalize loosely typed slot declarations into :class:`SlotSpec` records.

Site configuration lets each selector map to ``null``, a plain string, or a
mapping of subselectors. This module collapses those shapes at the config
boundary so the binder only ever sees :class:`SlotSpec` instances.

Examples
--------
>>> from autospoof.config.slots import normalize_slot_config
>>> slots = normalize_slot_config({".card": None, ".lead": {"title": "h2"}})
>>> slots[".card"].title, slots[".lead"].title
('', 'h2')
"""

from __future__ import annotations

import typing as typ

from .helpers import _optional_str
from .models import SlotConfig, SlotSpec

_SUBSELECTOR_KEYS = ("href", "subtitle", "image", "author")


def _subselector(value: object) -> str | None:
    """Return a stripped selector string, or None for blanks and non-strings."""
    return _optional_str(value) if isinstance(value, str) else None


def normalize_slot(value: object) -> SlotSpec:
    """Return the :class:`SlotSpec` for a single selector's raw value."""
    match value:
        case str() as label:
            return SlotSpec(label=label.strip() or None)
        case dict() as data:
            fields = {key: _subselector(data.get(key)) for key in _SUBSELECTOR_KEYS}
            return SlotSpec(title=_subselector(data.get("title")) or "", **fields)
        case _:
            return SlotSpec()


def normalize_slot_config(raw: typ.Mapping[object, object] | None) -> SlotConfig:
    """Normalize a ``selector -> value`` mapping, preserving declaration order.

    Parameters
    ----------
    raw : Mapping or None
        Mapping parsed from YAML. Values may be ``None``, a display string, or
        a mapping with ``title``/``href``/``subtitle``/``image``/``author``
        subselectors.

    Returns
    -------
    dict[str, SlotSpec]
        Ordered mapping of selector to slot specification. Entries with a
        blank selector are dropped; malformed values fall back to the empty
        default rather than raising.
    """
    if not isinstance(raw, dict):
        return {}
    slots: SlotConfig = {}
    for selector, value in raw.items():
        key = _optional_str(selector)
        if key is None:
            continue
        slots[key] = normalize_slot(value)
    return slots


normalize = normalize_slot_config

__all__ = ["normalize", "normalize_slot", "normalize_slot_config"]
