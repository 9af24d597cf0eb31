"""
DEX order spells (Charms Cast ask/bid orders).

An order spell carries its order as one of the values inside `tx.outs`:

    {"side": "ask", "amount": 150000, "quantity": 2500000000,
     "price": [3, 50], "maker": "bc1q...", "asset": {"token": "t/..."}}

`amount` is in sats, `quantity` in token base units (9 decimals for DEX
assets) and `price` is a `[numerator, denominator]` pair in sats per token.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from charms_explorer.core.formatting import format_amount, format_number
from charms_explorer.core.models import DEX_DECIMALS, PLACEHOLDER, DexOrderDetails, DexOrderView
from charms_explorer.spells.payload import NativeData, native_tx

# side -> (title, icon, side label)
_SIDES = {
    "ask": ("Ask Order", "📈", "Sell (Ask)"),
    "bid": ("Bid Order", "📉", "Buy (Bid)"),
}


def _int_or_none(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return isinstance(value, int) or math.isfinite(value)


def _decimal(value: int | float) -> Decimal:
    return Decimal(value) if isinstance(value, int) else Decimal(str(value))


def _asset_id(asset: Any) -> str | None:
    if isinstance(asset, Mapping):
        token = asset.get("token")
        return str(token) if token is not None else None
    return asset if isinstance(asset, str) else None


def order_from_fields(fields: Mapping[str, Any]) -> DexOrderDetails:
    """Lift order fields from a raw mapping, dropping values of the wrong type."""
    side = fields.get("side")
    maker = fields.get("maker")
    return DexOrderDetails(
        side=str(side) if side is not None else None,
        amount=_int_or_none(fields.get("amount")),
        quantity=_int_or_none(fields.get("quantity")),
        price=fields.get("price"),
        maker=str(maker) if maker is not None else None,
        asset=_asset_id(fields.get("asset")),
    )


def find_order_details(native: NativeData | None) -> DexOrderDetails | None:
    """Return the first order found among the values of `tx.outs`, or None."""
    outs = native_tx(native).get("outs")
    if not isinstance(outs, list):
        return None

    for out in outs:
        if not isinstance(out, Mapping):
            continue
        for value in out.values():
            if isinstance(value, Mapping) and value.get("side"):
                return order_from_fields(value)
    return None


def format_quantity(raw_quantity: int | None, decimals: int = DEX_DECIMALS) -> str:
    """Token quantity scaled by `decimals`, at most 2 fractional digits."""
    return format_amount(raw_quantity, decimals, max_fraction_digits=2)


def format_price(price: Any) -> str:
    """
    Per-token price from a `[numerator, denominator]` pair.

    Anything other than a two-number pair with a non-zero denominator
    renders as the placeholder.
    """
    if not isinstance(price, (list, tuple)) or len(price) != 2:
        return PLACEHOLDER
    numerator, denominator = price
    if not all(_is_finite_number(v) for v in price):
        return PLACEHOLDER
    if not denominator:
        return PLACEHOLDER
    per_token = _decimal(numerator) / _decimal(denominator)
    return f"{format_number(per_token)} sats/token"


def format_order(
    order: DexOrderDetails | Mapping[str, Any] | None,
    decimals: int = DEX_DECIMALS,
) -> DexOrderView | None:
    """
    Display view of an order.

    Args:
        order: order fields, parsed or raw
        decimals: base-unit exponent for `quantity`; differs between asset classes

    Returns:
        DexOrderView, or None when there is no order
    """
    if order is None:
        return None
    if not isinstance(order, DexOrderDetails):
        order = order_from_fields(order)

    title, icon, side_label = _SIDES.get(order.side or "", _SIDES["bid"])
    return DexOrderView(
        side=order.side,
        side_label=side_label,
        title=f"{title} Details",
        icon=icon,
        quantity=format_quantity(order.quantity, decimals),
        amount=format_number(order.amount),
        price=format_price(order.price),
        maker=order.maker,
        asset=order.asset,
    )
