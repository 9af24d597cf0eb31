"""
Transaction type classification.

Two layers:
1. `TransactionType` is a closed set of tags with one metadata entry each
   (label, icon, badge classes). Unknown tags resolve to UNKNOWN.
2. `classify_transaction` picks a tag for a charm record by running
   priority-ordered rules over the record, its native spell data and,
   optionally, the raw Bitcoin transaction.

To add a type: add the enum member, its TRANSACTION_METADATA entry and,
if it can be detected, a rule.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from charms_explorer.core.models import CharmRecord, DexOrderDetails, TransactionTypeMetadata
from charms_explorer.spells.beaming import is_beaming
from charms_explorer.spells.dex import find_order_details
from charms_explorer.spells.payload import NativeData, extract_native_data, native_tx

logger = logging.getLogger("charms_explorer.classifier")


class TransactionType(str, Enum):
    BITCOIN_TRANSFER = "bitcoin_transfer"
    TOKEN_MINT = "token_mint"
    TOKEN_TRANSFER = "token_transfer"
    TOKEN_BURN = "token_burn"
    NFT_MINT = "nft_mint"
    NFT_TRANSFER = "nft_transfer"
    BEAM = "beam"
    DEX_CREATE_ASK = "dex_create_ask"
    DEX_CREATE_BID = "dex_create_bid"
    DEX_FULFILL_ASK = "dex_fulfill_ask"
    DEX_FULFILL_BID = "dex_fulfill_bid"
    DEX_CANCEL = "dex_cancel"
    DEX_PARTIAL_FILL = "dex_partial_fill"
    BRO_MINING = "bro_mining"
    BRO_MINT = "bro_mint"
    SPELL = "spell"
    UNKNOWN = "unknown"


def _meta(label: str, icon: str, color: str, description: str) -> TransactionTypeMetadata:
    return TransactionTypeMetadata(
        label=label,
        icon=icon,
        color=color,
        bg_class=f"bg-{color}-500/20",
        text_class=f"text-{color}-400",
        border_class=f"border-{color}-500/30",
        description=description,
    )


TRANSACTION_METADATA: dict[TransactionType, TransactionTypeMetadata] = {
    TransactionType.BITCOIN_TRANSFER: _meta("Bitcoin Transfer", "₿", "orange", "Standard Bitcoin transaction"),
    TransactionType.TOKEN_MINT: _meta("Token Mint", "🪙", "purple", "New tokens created"),
    TransactionType.TOKEN_TRANSFER: _meta("Token Transfer", "↔️", "blue", "Tokens transferred between addresses"),
    TransactionType.TOKEN_BURN: _meta("Token Burn", "🔥", "red", "Tokens permanently destroyed"),
    TransactionType.NFT_MINT: _meta("NFT Mint", "🎨", "pink", "New NFT created"),
    TransactionType.NFT_TRANSFER: _meta("NFT Transfer", "🖼️", "indigo", "NFT transferred to new owner"),
    TransactionType.BEAM: _meta("Beam", "📡", "cyan", "Tokens beamed to a destination commitment"),
    TransactionType.DEX_CREATE_ASK: _meta("DEX Ask Order", "📈", "green", "Sell order created on DEX"),
    TransactionType.DEX_CREATE_BID: _meta("DEX Bid Order", "📉", "blue", "Buy order created on DEX"),
    TransactionType.DEX_FULFILL_ASK: _meta("DEX Fulfill Ask", "✅", "emerald", "Sell order executed"),
    TransactionType.DEX_FULFILL_BID: _meta("DEX Fulfill Bid", "✅", "emerald", "Buy order executed"),
    TransactionType.DEX_CANCEL: _meta("DEX Cancel", "❌", "red", "Order cancelled"),
    TransactionType.DEX_PARTIAL_FILL: _meta("DEX Partial Fill", "⚡", "yellow", "Order partially filled"),
    TransactionType.BRO_MINING: _meta("BRO Mining", "⛏️", "orange", "BRO token mining transaction"),
    TransactionType.BRO_MINT: _meta("BRO Mint", "🪙", "orange", "BRO token minted"),
    TransactionType.SPELL: _meta("Spell", "✨", "purple", "Charms spell transaction"),
    TransactionType.UNKNOWN: _meta("Unknown", "❓", "gray", "Unknown transaction type"),
}

DEX_TYPES = frozenset({
    TransactionType.DEX_CREATE_ASK,
    TransactionType.DEX_CREATE_BID,
    TransactionType.DEX_FULFILL_ASK,
    TransactionType.DEX_FULFILL_BID,
    TransactionType.DEX_CANCEL,
    TransactionType.DEX_PARTIAL_FILL,
})

TOKEN_TYPES = frozenset({
    TransactionType.TOKEN_MINT,
    TransactionType.TOKEN_TRANSFER,
    TransactionType.TOKEN_BURN,
    TransactionType.BRO_MINING,
    TransactionType.BRO_MINT,
})

NFT_TYPES = frozenset({TransactionType.NFT_MINT, TransactionType.NFT_TRANSFER})


def _coerce_type(tx_type: TransactionType | str | None) -> TransactionType:
    if isinstance(tx_type, TransactionType):
        return tx_type
    try:
        return TransactionType(tx_type)
    except ValueError:
        return TransactionType.UNKNOWN


def get_transaction_metadata(tx_type: TransactionType | str | None) -> TransactionTypeMetadata:
    """Metadata for a type tag. Unrecognised tags get the UNKNOWN entry."""
    return TRANSACTION_METADATA[_coerce_type(tx_type)]


def get_transaction_colors(tx_type: TransactionType | str | None) -> dict[str, str]:
    meta = get_transaction_metadata(tx_type)
    return {"bg": meta.bg_class, "text": meta.text_class, "border": meta.border_class}


def is_dex_transaction(tx_type: TransactionType | str | None) -> bool:
    return _coerce_type(tx_type) in DEX_TYPES


def is_token_transaction(tx_type: TransactionType | str | None) -> bool:
    return _coerce_type(tx_type) in TOKEN_TYPES


def is_nft_transaction(tx_type: TransactionType | str | None) -> bool:
    return _coerce_type(tx_type) in NFT_TYPES


# ------------------------------------------------------------------
# Classification rules
# ------------------------------------------------------------------


@dataclass(frozen=True)
class ClassificationContext:
    """What the rules look at for one record."""
    record: CharmRecord
    native: NativeData | None
    order: DexOrderDetails | None
    raw_tx: Mapping[str, Any] | None

    @property
    def tags(self) -> str:
        return self.record.tags or ""

    @property
    def app_id(self) -> str:
        return self.record.app_id or self.record.charmid or ""

    @property
    def input_count(self) -> int:
        ins = native_tx(self.native).get("ins")
        return len(ins) if isinstance(ins, list) else 0

    @property
    def raw_outputs(self) -> list[Mapping[str, Any]]:
        vout = (self.raw_tx or {}).get("vout")
        return [o for o in vout if isinstance(o, Mapping)] if isinstance(vout, list) else []


@dataclass(frozen=True)
class ClassificationRule:
    name: str
    priority: int  # lower runs first
    test: Callable[[ClassificationContext], bool]
    type: TransactionType


_DEX_TAGS = ("fulfill", "cancel", "partial-fill")


def _creates_order(ctx: ClassificationContext, side: str) -> bool:
    if f"create-{side}" in ctx.tags:
        return True
    # order data without an explicit lifecycle tag is a new order
    has_lifecycle_tag = any(tag in ctx.tags for tag in _DEX_TAGS)
    return ctx.order is not None and ctx.order.side == side and not has_lifecycle_tag


def _is_bro_mining(ctx: ClassificationContext) -> bool:
    outputs = ctx.raw_outputs
    if not outputs:
        return False
    has_op_return = outputs[0].get("scriptpubkey_type") == "op_return"
    return has_op_return and any(o.get("value") in (333, 777) for o in outputs)


def _is_bro_mint(ctx: ClassificationContext) -> bool:
    return any(o.get("value") in (330, 1000) for o in ctx.raw_outputs)


def _is_spell(ctx: ClassificationContext) -> bool:
    native = ctx.native or {}
    return native.get("detected") is True or native.get("has_native_data") is True


CLASSIFICATION_RULES: list[ClassificationRule] = sorted(
    [
        ClassificationRule("DEX Create Ask", 10, lambda c: _creates_order(c, "ask"), TransactionType.DEX_CREATE_ASK),
        ClassificationRule("DEX Create Bid", 10, lambda c: _creates_order(c, "bid"), TransactionType.DEX_CREATE_BID),
        ClassificationRule("DEX Fulfill Ask", 10, lambda c: "fulfill-ask" in c.tags, TransactionType.DEX_FULFILL_ASK),
        ClassificationRule("DEX Fulfill Bid", 10, lambda c: "fulfill-bid" in c.tags, TransactionType.DEX_FULFILL_BID),
        ClassificationRule("DEX Cancel", 10, lambda c: "cancel" in c.tags, TransactionType.DEX_CANCEL),
        ClassificationRule("DEX Partial Fill", 10, lambda c: "partial-fill" in c.tags, TransactionType.DEX_PARTIAL_FILL),
        ClassificationRule("Beam", 15, lambda c: is_beaming(c.native), TransactionType.BEAM),
        ClassificationRule("BRO Mining", 20, _is_bro_mining, TransactionType.BRO_MINING),
        ClassificationRule("BRO Mint", 20, _is_bro_mint, TransactionType.BRO_MINT),
        ClassificationRule(
            "NFT Mint", 30,
            lambda c: c.app_id.startswith("n/") and c.record.resolved_asset_type == "nft"
            and c.input_count == 0,
            TransactionType.NFT_MINT,
        ),
        ClassificationRule(
            "NFT Transfer", 30,
            lambda c: c.app_id.startswith("n/") and c.input_count > 0,
            TransactionType.NFT_TRANSFER,
        ),
        ClassificationRule(
            "Token Mint", 40,
            lambda c: c.app_id.startswith("t/") and (c.native is None or c.input_count == 0),
            TransactionType.TOKEN_MINT,
        ),
        ClassificationRule(
            "Token Transfer", 40,
            lambda c: c.app_id.startswith("t/") and c.input_count > 0,
            TransactionType.TOKEN_TRANSFER,
        ),
        ClassificationRule("Spell", 50, _is_spell, TransactionType.SPELL),
        ClassificationRule(
            "Bitcoin Transfer", 100,
            lambda c: c.record.is_bitcoin_tx or c.record.asset_type == "bitcoin",
            TransactionType.BITCOIN_TRANSFER,
        ),
    ],
    key=lambda rule: rule.priority,
)


def classify_transaction(
    record: CharmRecord | None,
    raw_tx: Mapping[str, Any] | None = None,
) -> TransactionType:
    """
    Classify a charm record.

    Args:
        record: the indexed charm
        raw_tx: optional raw Bitcoin transaction (`vout` list with `value`
                and `scriptpubkey_type`), needed for the BRO rules

    Returns:
        TransactionType: the first matching rule's type, else UNKNOWN
    """
    if record is None:
        return TransactionType.UNKNOWN

    native = extract_native_data(record)
    ctx = ClassificationContext(
        record=record,
        native=native,
        order=find_order_details(native),
        raw_tx=raw_tx,
    )
    for rule in CLASSIFICATION_RULES:
        try:
            if rule.test(ctx):
                return rule.type
        except Exception as e:
            logger.warning(f"Rule {rule.name!r} failed on {record.txid}: {e}")
    return TransactionType.UNKNOWN


@dataclass(frozen=True)
class TransactionAnalysis:
    type: TransactionType
    metadata: TransactionTypeMetadata
    native: NativeData | None
    order: DexOrderDetails | None
    is_dex: bool
    is_token: bool
    is_nft: bool
    is_bitcoin: bool


def analyze_transaction(
    record: CharmRecord,
    raw_tx: Mapping[str, Any] | None = None,
) -> TransactionAnalysis:
    """Type, metadata, category flags and order details for one record."""
    tx_type = classify_transaction(record, raw_tx)
    native = extract_native_data(record)
    return TransactionAnalysis(
        type=tx_type,
        metadata=get_transaction_metadata(tx_type),
        native=native,
        order=find_order_details(native),
        is_dex=is_dex_transaction(tx_type),
        is_token=is_token_transaction(tx_type),
        is_nft=is_nft_transaction(tx_type),
        is_bitcoin=tx_type is TransactionType.BITCOIN_TRANSFER,
    )
