"""
Charm classification for list and card views.

Unlike `classifier.py`, which types a transaction, this types the asset a
charm represents: the verified $BRO family, Charms Cast DEX orders, or the
plain nft/token/dapp namespaces.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from enum import Enum
from typing import Any

from charms_explorer.core.models import CharmBadge, CharmRecord


class CharmType(str, Enum):
    BRO_TOKEN = "bro_token"
    CHARMS_CAST_DEX = "charms_cast_dex"
    DEX_ORDER = "dex_order"
    NFT = "nft"
    TOKEN = "token"
    DAPP = "dapp"
    OTHER = "other"


# Reference NFT hash of the official $BRO token; any app id containing it is BRO
VERIFIED_BRO_HASH = "3d7fe7e4cea6121947af73d70e5119bebd8aa5b7edfe74bfaf6e779a1847bd9b"

# type -> (label, icon, bg, text, border, gradient)
_BADGES: dict[CharmType, tuple[str, str, str, str, str, str]] = {
    CharmType.BRO_TOKEN: ("$BRO Token", "🪙", "bg-amber-500/10", "text-amber-400", "border-amber-500/20", "from-amber-400 to-yellow-500"),
    CharmType.CHARMS_CAST_DEX: ("Charms Cast DEX", "🔄", "bg-violet-500/10", "text-violet-400", "border-violet-500/20", "from-violet-400 to-purple-500"),
    CharmType.DEX_ORDER: ("DEX Order", "📊", "bg-violet-500/10", "text-violet-400", "border-violet-500/20", "from-violet-400 to-purple-500"),
    CharmType.NFT: ("NFT", "🎨", "bg-purple-500/10", "text-purple-400", "border-purple-500/20", "from-purple-400 to-violet-500"),
    CharmType.TOKEN: ("Token", "💰", "bg-amber-500/10", "text-amber-300", "border-amber-500/20", "from-amber-300 to-orange-400"),
    CharmType.DAPP: ("dApp", "⚙️", "bg-slate-500/10", "text-slate-300", "border-slate-500/20", "from-slate-400 to-slate-500"),
    CharmType.OTHER: ("Other", "📦", "bg-slate-500/10", "text-slate-400", "border-slate-500/20", "from-slate-400 to-slate-500"),
}

_ASSET_TYPES = {
    "nft": CharmType.NFT,
    "token": CharmType.TOKEN,
    "dapp": CharmType.DAPP,
}


def is_verified_bro(app_id: str | None) -> bool:
    return bool(app_id) and VERIFIED_BRO_HASH in app_id


def _data_marks_dex(data: Any) -> bool:
    if not isinstance(data, Mapping):
        return False

    native = data.get("native_data")
    if native is None and isinstance(data.get("data"), Mapping):
        native = data["data"].get("native_data")
    if isinstance(native, Mapping):
        app_inputs = native.get("app_public_inputs")
        if app_inputs and '"b/' in json.dumps(app_inputs, default=str):
            return True

    data_tags = data.get("tags")
    if data_tags:
        text = data_tags if isinstance(data_tags, str) else json.dumps(data_tags, default=str)
        if "charms-cast" in text.lower():
            return True
    return False


def classify_charm(charm: CharmRecord | None) -> CharmType:
    """
    Classify a charm, most specific signal first:
    tags, verified BRO hash, DEX markers in the spell data, `b/` app id,
    then the (prefix-resolved) asset type.
    """
    if charm is None:
        return CharmType.OTHER

    tags = (charm.tags or "").lower()
    if "charms-cast" in tags or "dex" in tags:
        return CharmType.CHARMS_CAST_DEX

    if is_verified_bro(charm.app_id):
        return CharmType.BRO_TOKEN

    if _data_marks_dex(charm.data):
        return CharmType.CHARMS_CAST_DEX

    if charm.app_id.lower().startswith("b/"):
        return CharmType.CHARMS_CAST_DEX

    return _ASSET_TYPES.get(charm.resolved_asset_type, CharmType.OTHER)


def charm_badge(charm: CharmRecord | None) -> CharmBadge:
    """Badge label, icon and class names for a charm card."""
    charm_type = classify_charm(charm)
    label, icon, bg, text, border, gradient = _BADGES[charm_type]
    return CharmBadge(
        type=charm_type.value,
        label=label,
        icon=icon,
        class_name=f"{bg} {text} {border}",
        gradient_class=f"bg-gradient-to-r {gradient}",
    )


def count_charms_by_type(charms: list[CharmRecord]) -> dict[str, int]:
    """Totals per namespace for the home page counters."""
    counts = {"total": len(charms), "nft": 0, "token": 0, "dapp": 0}
    for charm in charms:
        asset_type = charm.resolved_asset_type
        if asset_type in ("nft", "token", "dapp"):
            counts[asset_type] += 1
    return counts
