"""
API module for the Charms explorer.

Provides FastAPI routes and models serving the explorer view models over REST.
"""

from charms_explorer.api.models import (
    CharmCard,
    NetworkStatusResponse,
    TransactionViewRequest,
)

__all__ = [
    "CharmCard",
    "NetworkStatusResponse",
    "TransactionViewRequest",
]
