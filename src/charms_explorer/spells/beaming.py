"""
Beaming: tokens committed to a destination hash instead of an address.

A beaming spell carries `tx.beamed_outs`, a mapping from output index to the
destination commitment. The output index points into three parallel lists
of the native transaction:

    tx.outs[i]    {"<asset index>": <raw amount>, ...}
    tx.coins[i]   {"amount": <sats>, "dest": ...}
    tx.ins        spent UTXO ids (not index-aligned, listed verbatim)

Missing or out-of-range aligned entries are normal and render as empty.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from charms_explorer.core.models import BeamEntry, BeamingDetails, TokenAmount
from charms_explorer.spells.payload import NativeData, native_tx

# plain ASCII decimal output index
_INDEX = re.compile(r"[0-9]+")


def _list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, Sequence) and not isinstance(value, str) else []


def _at(items: list[Any], index: int | None) -> Any:
    if index is None or not 0 <= index < len(items):
        return None
    return items[index]


def _parse_index(raw: Any) -> int | None:
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw if raw >= 0 else None
    if isinstance(raw, str) and _INDEX.fullmatch(raw):
        return int(raw)
    return None


def beamed_outs(native: NativeData | None) -> Mapping[str, Any]:
    """The `beamed_outs` mapping, or an empty mapping for non-beaming spells."""
    outs = native_tx(native).get("beamed_outs")
    return outs if isinstance(outs, Mapping) else {}


def is_beaming(native: NativeData | None) -> bool:
    return bool(beamed_outs(native))


def iter_beam_entries(native: NativeData | None) -> Iterator[BeamEntry]:
    """
    Yield one `BeamEntry` per `beamed_outs` item, in the mapping's own order.

    Recomputed from `native` on every call.
    """
    tx = native_tx(native)
    outs = _list(tx.get("outs"))
    coins = _list(tx.get("coins"))

    for out_index, dest_hash in beamed_outs(native).items():
        index = _parse_index(out_index)

        out_data = _at(outs, index)
        token_amounts = []
        if isinstance(out_data, Mapping):
            token_amounts = [
                TokenAmount(asset_index=str(asset_index), amount=amount)
                for asset_index, amount in out_data.items()
            ]

        coin = _at(coins, index)
        btc_amount = coin.get("amount") if isinstance(coin, Mapping) else None
        if not isinstance(btc_amount, int) or isinstance(btc_amount, bool):
            btc_amount = None

        yield BeamEntry(
            output_index=index,
            destination_hash=str(dest_hash),
            token_amounts=token_amounts,
            btc_amount=btc_amount,
        )


def extract_beaming(native: NativeData | None) -> BeamingDetails | None:
    """
    Build the beaming view of a native transaction.

    Returns:
        BeamingDetails, or None when `tx.beamed_outs` is absent or empty
    """
    if not is_beaming(native):
        return None
    tx = native_tx(native)
    version = tx.get("version", native.get("version"))
    return BeamingDetails(
        beam_entries=list(iter_beam_entries(native)),
        inputs=_list(tx.get("ins")),
        total_outputs=len(_list(tx.get("outs"))),
        version=version if isinstance(version, int) else None,
    )
