"""core module init"""
from charms_explorer.core.config import ExplorerConfig
from charms_explorer.core.formatting import (
    decode_hex_marker,
    format_amount,
    format_btc,
    format_number,
    format_spell_data,
    hexify_byte_arrays,
    shorten_hash,
)
from charms_explorer.core.indexer import CharmsIndexer, IndexerError
from charms_explorer.core.models import (
    BeamEntry,
    BeamingDetails,
    CharmRecord,
    DexOrderDetails,
    DexOrderView,
    SearchResult,
    SearchRoute,
    TokenAmount,
    TransactionTypeMetadata,
    TransactionView,
)
from charms_explorer.core.network import NetworkFilter, NetworkKey
from charms_explorer.core.search import SearchType, classify_search_input, resolve_search, route_for

__all__ = [
    "BeamEntry",
    "BeamingDetails",
    "CharmRecord",
    "CharmsIndexer",
    "DexOrderDetails",
    "DexOrderView",
    "ExplorerConfig",
    "IndexerError",
    "NetworkFilter",
    "NetworkKey",
    "SearchResult",
    "SearchRoute",
    "SearchType",
    "TokenAmount",
    "TransactionTypeMetadata",
    "TransactionView",
    "classify_search_input",
    "decode_hex_marker",
    "format_amount",
    "format_btc",
    "format_number",
    "format_spell_data",
    "hexify_byte_arrays",
    "resolve_search",
    "route_for",
    "shorten_hash",
]
