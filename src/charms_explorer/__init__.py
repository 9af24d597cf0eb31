"""
charms-explorer: view-model layer for the Bitcoin Charms explorer.

Usage:
    from charms_explorer import CharmRecord, build_transaction_view
    from charms_explorer.core import NetworkFilter, resolve_search
"""

from charms_explorer.core.indexer import CharmsIndexer
from charms_explorer.core.models import CharmRecord, TransactionView
from charms_explorer.core.network import NetworkFilter
from charms_explorer.core.search import classify_search_input
from charms_explorer.spells.view import build_transaction_view

__version__ = "0.1.0"
__all__ = [
    "CharmRecord",
    "CharmsIndexer",
    "NetworkFilter",
    "TransactionView",
    "build_transaction_view",
    "classify_search_input",
]
