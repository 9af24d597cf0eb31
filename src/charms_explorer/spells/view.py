"""
Transaction page view model.

Composes payload extraction, classification, beaming, DEX order formatting
and metadata parsing into one `TransactionView`. Pure: the record is never
modified and nothing is cached.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from charms_explorer.core.config import ExplorerConfig
from charms_explorer.core.formatting import format_amount, format_spell_data, shorten_hash
from charms_explorer.core.models import CharmRecord, TransactionView
from charms_explorer.spells.beaming import extract_beaming
from charms_explorer.spells.classifier import analyze_transaction
from charms_explorer.spells.dex import format_order
from charms_explorer.spells.metadata import get_display_metadata


def build_transaction_view(
    record: CharmRecord,
    raw_tx: Mapping[str, Any] | None = None,
    config: ExplorerConfig | None = None,
    reference: Mapping[str, Any] | None = None,
) -> TransactionView:
    """
    Build the transaction page view for one charm record.

    Args:
        record: the indexed charm
        raw_tx: optional raw Bitcoin transaction, used for BRO detection
        config: decimal exponents and hash prefix length (defaults when omitted)
        reference: optional reference NFT metadata for tokens

    Returns:
        TransactionView
    """
    config = config or ExplorerConfig()
    analysis = analyze_transaction(record, raw_tx)
    metadata = get_display_metadata(record, reference)
    decimals = metadata.decimals if metadata.decimals is not None else config.token_decimals

    return TransactionView(
        txid=record.txid,
        short_txid=shorten_hash(record.txid, config.hash_prefix_len),
        vout=record.vout,
        status="confirmed" if record.is_confirmed else "pending",
        network=record.network,
        blockchain=record.blockchain,
        app_id=record.app_id,
        asset_type=record.resolved_asset_type,
        type=analysis.type.value,
        metadata=analysis.metadata,
        amount=format_amount(record.amount, decimals),
        is_dex=analysis.is_dex,
        is_token=analysis.is_token,
        is_nft=analysis.is_nft,
        is_bitcoin=analysis.is_bitcoin,
        beaming=extract_beaming(analysis.native),
        order=format_order(analysis.order, config.dex_decimals),
        spell_metadata=metadata,
        spell_json=format_spell_data(record.data),
    )
