"""
Locating the native transaction inside a charm record.

The indexer has stored spells in three shapes over time:

    data.native_data            {"data": {"native_data": {"tx": {...}}}}
    data.spell.native_data      {"data": {"spell": {"native_data": {"tx": {...}}}}}
    data                        {"data": {"tx": {...}}}

Each shape has its own accessor; they are tried in that order and the first
one that yields a structure with a truthy `tx` wins. Shapes are never merged.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from charms_explorer.core.models import CharmRecord

NativeData = Mapping[str, Any]


def _record_data(record: CharmRecord | Mapping[str, Any] | None) -> Any:
    if record is None:
        return None
    if isinstance(record, CharmRecord):
        return record.data
    if isinstance(record, Mapping):
        return record.get("data")
    return None


def _get(value: Any, key: str) -> Any:
    return value.get(key) if isinstance(value, Mapping) else None


def _from_native_data(data: Any) -> Any:
    return _get(data, "native_data")


def _from_spell_native_data(data: Any) -> Any:
    return _get(_get(data, "spell"), "native_data")


def _from_data(data: Any) -> Any:
    return data


# Priority order, first match wins
PAYLOAD_ACCESSORS: list[tuple[str, Callable[[Any], Any]]] = [
    ("data.native_data", _from_native_data),
    ("data.spell.native_data", _from_spell_native_data),
    ("data", _from_data),
]


def locate_native_data(record: CharmRecord | Mapping[str, Any] | None) -> tuple[str, NativeData] | None:
    """Return `(shape_name, native_data)` for the first matching shape, or None."""
    data = _record_data(record)
    for shape, accessor in PAYLOAD_ACCESSORS:
        candidate = accessor(data)
        if isinstance(candidate, Mapping) and candidate.get("tx"):
            return shape, candidate
    return None


def extract_native_data(record: CharmRecord | Mapping[str, Any] | None) -> NativeData | None:
    """
    Return the native transaction structure of a charm record.

    Accepts a parsed `CharmRecord` or the raw indexer dict. Returns None when
    none of the known shapes carries a `tx` field.
    """
    located = locate_native_data(record)
    return located[1] if located else None


def native_tx(native: NativeData | None) -> Mapping[str, Any]:
    """The `tx` mapping of a native structure, or an empty mapping."""
    tx = _get(native, "tx")
    return tx if isinstance(tx, Mapping) else {}
