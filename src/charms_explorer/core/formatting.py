"""
Display formatting for amounts, hashes and raw spell payloads.

Amounts are scaled from base units with `Decimal` so the rendered string
never picks up float noise. The formatted strings are for display only;
the raw integer stays the source of truth.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, ROUND_HALF_UP, Context, Decimal, localcontext
from typing import Any

from charms_explorer.core.models import BTC_DECIMALS, PLACEHOLDER, TOKEN_DECIMALS

_HEX_MARKER = re.compile(r"\[hex:((?:[0-9a-f]{2})*)\]")

# exponent shifts only; never rounds or overflows
_WIDE = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)


# ------------------------------------------------------------------
# Amounts
# ------------------------------------------------------------------


def format_amount(
    raw_amount: int | None,
    decimals: int = TOKEN_DECIMALS,
    max_fraction_digits: int = 4,
) -> str:
    """
    Scale a base-unit amount and render it with thousands grouping.

    Args:
        raw_amount: integer amount in base units, or None
        decimals: base-unit exponent of the asset (8 for tokens, 9 for DEX quantities)
        max_fraction_digits: fractional digits kept after rounding (trailing zeros dropped)

    Returns:
        str: e.g. "1,234.5", or "-" when the amount is absent or not numeric
    """
    if not _is_number(raw_amount):
        return PLACEHOLDER
    return _group(_to_decimal(raw_amount).scaleb(-decimals, _WIDE), max_fraction_digits)


def format_number(value: int | float | None, max_fraction_digits: int = 3) -> str:
    """Render a plain number with grouping (satoshi counts, prices)."""
    if not _is_number(value):
        return PLACEHOLDER
    return _group(_to_decimal(value), max_fraction_digits)


def format_btc(sats: int | None) -> str:
    """Format a satoshi amount as a fixed 8-decimal BTC string."""
    if not _is_number(sats):
        return "0"
    btc = _to_decimal(sats).scaleb(-BTC_DECIMALS, _WIDE)
    return f"{_round(btc, BTC_DECIMALS):f}"


# ------------------------------------------------------------------
# Hashes and payloads
# ------------------------------------------------------------------


def shorten_hash(value: str | None, prefix_len: int = 8) -> str:
    """
    Shorten a long hex identifier to `first...last` for display.

    Values no longer than `2 * prefix_len + 3` are returned unchanged, so
    shortening an already shortened hash is a no-op.
    """
    if not value:
        return PLACEHOLDER
    if len(value) <= prefix_len * 2 + 3:
        return value
    return f"{value[:prefix_len]}...{value[-prefix_len:]}"


def hexify_byte_arrays(value: Any) -> Any:
    """
    Deep-copy `value`, replacing every byte-shaped list with a `[hex:...]` string.

    A list counts as bytes when it has more than 4 elements and each one is
    an integer in [0, 255]. Everything else passes through unchanged.
    """
    if _is_byte_array(value):
        return f"[hex:{bytes(value).hex()}]"
    if isinstance(value, Mapping):
        return {key: hexify_byte_arrays(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [hexify_byte_arrays(item) for item in value]
    return value


def decode_hex_marker(text: str) -> list[int] | None:
    """Inverse of the byte-array substitution: `[hex:0a0b..]` -> [10, 11, ...]."""
    match = _HEX_MARKER.fullmatch(text) if isinstance(text, str) else None
    if match is None:
        return None
    return list(bytes.fromhex(match.group(1)))


def format_spell_data(data: Any) -> str:
    """Pretty JSON of a spell payload with byte arrays compacted to hex."""
    if not data:
        return ""
    return json.dumps(hexify_byte_arrays(data), indent=2, ensure_ascii=False, default=str)


# ------------------------------------------------------------------
# Internal helpers
# ------------------------------------------------------------------


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return False
    return isinstance(value, int) or Decimal(value).is_finite()


def _is_byte(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 255


def _is_byte_array(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and len(value) > 4 and all(_is_byte(v) for v in value)


def _to_decimal(value: int | float | Decimal) -> Decimal:
    # ints convert exactly; floats go through their shortest repr
    return Decimal(value) if isinstance(value, (int, Decimal)) else Decimal(str(value))


def _round(value: Decimal, places: int) -> Decimal:
    """Round to `places` fractional digits with enough precision for any magnitude."""
    with localcontext() as ctx:
        ctx.prec = max(28, value.adjusted() + places + 2)
        return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def _group(value: Decimal, max_fraction_digits: int) -> str:
    text = f"{_round(value, max_fraction_digits):,f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text
