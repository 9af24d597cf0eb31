"""
Asset metadata carried in spells (name, ticker, image, ...).

Three places are checked, in order:
1. `data.native_data.tx.outs[n]["0"]` when that value is a mapping
2. `data.spell_data.outputs[n].metadata` (legacy indexer format)
3. `data` itself, when it has a name or image
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from charms_explorer.core.formatting import format_number, shorten_hash
from charms_explorer.core.models import PLACEHOLDER, CharmRecord, SpellMetadata
from charms_explorer.spells.payload import native_tx

STANDARD_FIELDS = ("name", "description", "image", "ticker", "symbol", "url", "supply_limit", "decimals")


def _split_fields(data: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    standard: dict[str, Any] = {}
    extra: dict[str, Any] = {}
    for key, value in data.items():
        if key in STANDARD_FIELDS:
            standard[key] = value
        else:
            extra[key] = value
    return standard, extra


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _as_str(value: Any) -> str | None:
    return str(value) if value else None


def _from_fields(data: Mapping[str, Any]) -> SpellMetadata:
    standard, extra = _split_fields(data)
    return SpellMetadata(
        name=_as_str(standard.get("name")),
        description=_as_str(standard.get("description")),
        image=_as_str(standard.get("image")),
        ticker=_as_str(standard.get("ticker") or standard.get("symbol")),
        url=_as_str(standard.get("url")),
        supply_limit=_as_int(standard.get("supply_limit")) or None,
        decimals=_as_int(standard.get("decimals")),
        extra_fields=extra,
        raw=dict(data),
    )


def parse_spell_metadata(charm: CharmRecord | None) -> SpellMetadata:
    """Normalised metadata for a charm; all fields None when nothing is found."""
    data = charm.data if charm is not None else None
    if not isinstance(data, Mapping):
        return SpellMetadata()

    native = data.get("native_data")
    outs = native_tx(native).get("outs")
    if isinstance(outs, list):
        for out in outs:
            if not isinstance(out, Mapping):
                continue
            value = out.get("0", out.get(0))
            if isinstance(value, Mapping):
                return _from_fields(value)

    spell_data = data.get("spell_data")
    outputs = spell_data.get("outputs") if isinstance(spell_data, Mapping) else None
    if isinstance(outputs, list):
        for output in outputs:
            if isinstance(output, Mapping) and isinstance(output.get("metadata"), Mapping):
                return _from_fields(output["metadata"])

    if data.get("name") or data.get("image"):
        return _from_fields(data)

    return SpellMetadata()


def get_display_metadata(charm: CharmRecord, reference: Mapping[str, Any] | None = None) -> SpellMetadata:
    """
    Spell metadata with gaps filled from a reference NFT and the record itself.
    """
    spell = parse_spell_metadata(charm)
    ref = reference or {}
    return SpellMetadata(
        name=spell.name or ref.get("name") or charm.name,
        description=spell.description or ref.get("description") or charm.description,
        image=spell.image or ref.get("image_url") or charm.image,
        ticker=spell.ticker or ref.get("symbol") or charm.ticker,
        url=spell.url or ref.get("url"),
        supply_limit=spell.supply_limit,
        decimals=spell.decimals,
        extra_fields=spell.extra_fields,
        raw=spell.raw,
    )


def get_image_source(image: str | None) -> str | None:
    """Usable image source (data URI or http/https URL), else None."""
    if not image:
        return None
    if image.startswith(("data:image/", "http://", "https://")):
        return image
    return None


def format_field_name(field_name: str | None) -> str:
    """snake_case -> Title Case."""
    if not field_name:
        return ""
    return " ".join(word[:1].upper() + word[1:] for word in field_name.split("_"))


def format_field_value(value: Any) -> str:
    if value is None:
        return PLACEHOLDER
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, str):
        # long strings are almost always hashes
        return shorten_hash(value, 10) if len(value) > 66 else value
    return json.dumps(value, default=str)
