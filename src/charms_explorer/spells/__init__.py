"""spells module init"""
from charms_explorer.spells.beaming import extract_beaming, is_beaming, iter_beam_entries
from charms_explorer.spells.charms import CharmType, charm_badge, classify_charm
from charms_explorer.spells.classifier import (
    TRANSACTION_METADATA,
    TransactionType,
    analyze_transaction,
    classify_transaction,
    get_transaction_metadata,
    is_dex_transaction,
    is_nft_transaction,
    is_token_transaction,
)
from charms_explorer.spells.dex import find_order_details, format_order, format_price, format_quantity
from charms_explorer.spells.metadata import get_display_metadata, parse_spell_metadata
from charms_explorer.spells.payload import extract_native_data
from charms_explorer.spells.view import build_transaction_view

__all__ = [
    "CharmType",
    "TRANSACTION_METADATA",
    "TransactionType",
    "analyze_transaction",
    "build_transaction_view",
    "charm_badge",
    "classify_charm",
    "classify_transaction",
    "extract_beaming",
    "extract_native_data",
    "find_order_details",
    "format_order",
    "format_price",
    "format_quantity",
    "get_display_metadata",
    "get_transaction_metadata",
    "is_beaming",
    "is_dex_transaction",
    "is_nft_transaction",
    "is_token_transaction",
    "iter_beam_entries",
    "parse_spell_metadata",
]
