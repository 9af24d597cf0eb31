from typing import Any

from pydantic import BaseModel, Field

from charms_explorer.core.models import CharmBadge, CharmRecord, NetworkPair, ViewModel


class TransactionViewRequest(BaseModel):
    """Request model for rendering a charm record supplied by the caller."""

    record: CharmRecord = Field(..., description="Charm record as returned by the indexer")
    raw_tx: dict[str, Any] | None = Field(
        None,
        description="Raw Bitcoin transaction (vout list), enables BRO mining/mint detection",
    )


class NetworkStatusResponse(ViewModel):
    """Response model for the session network filter."""

    selection: dict[str, bool] = Field(..., description="Toggle state per network key")
    active: list[NetworkPair] = Field(..., description="Enabled (blockchain, network) pairs")
    param: str = Field(..., description="Derived indexer query parameter: all, mainnet or testnet4")


class CharmCard(ViewModel):
    """Response model for one charm in a list view."""

    txid: str
    short_txid: str
    vout: int
    app_id: str
    network: str
    amount: str
    badge: CharmBadge
