"""
Core data models for the Charms explorer.

Raw records arrive from the indexer in snake_case and are parsed into
`CharmRecord`. Everything the extractors return is a freshly built view
model; view models serialize with camelCase aliases (`beamEntries`,
`bgClass`, ...) because that is what the presentation layer consumes.

All token amounts are integers in base units. Scaling for display happens
in `charms_explorer.core.formatting` only.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Base-unit exponents consumed by the formatters
TOKEN_DECIMALS = 8
DEX_DECIMALS = 9
BTC_DECIMALS = 8

PLACEHOLDER = "-"

# App id namespace prefix -> default asset type
APP_ID_ASSET_TYPES = {
    "t/": "token",
    "n/": "nft",
    "b/": "dapp",
}


class ViewModel(BaseModel):
    """Base for presentation-facing models (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CharmRecord(BaseModel):
    """One indexed charm instance, as returned by the indexer API."""

    txid: str
    app_id: str = ""
    charmid: str | None = None
    address: str | None = None
    amount: int | None = Field(default=None, ge=0)  # base units, never pre-scaled
    block_height: int | None = None
    vout: int = Field(default=0, ge=0)
    spent: bool = False
    network: str = "mainnet"
    blockchain: str = "bitcoin"
    asset_type: str | None = None
    tags: str | None = None
    name: str | None = None
    description: str | None = None
    image: str | None = None
    ticker: str | None = None
    verified: bool = False
    is_bitcoin_tx: bool = False
    data: Any = None
    date_created: str | None = None

    @property
    def resolved_asset_type(self) -> str:
        """Explicit asset type, else the default implied by the app id prefix."""
        if self.asset_type:
            return self.asset_type.lower()
        for prefix, asset_type in APP_ID_ASSET_TYPES.items():
            if self.app_id.startswith(prefix):
                return asset_type
        return "unknown"

    @property
    def is_confirmed(self) -> bool:
        return self.block_height is not None


class TokenAmount(ViewModel):
    """One asset amount inside a spell output (`{"0": 500000000}`)."""
    asset_index: str
    amount: Any


class BeamEntry(ViewModel):
    """A single output committed to a destination hash."""
    output_index: int | None
    destination_hash: str
    token_amounts: list[TokenAmount] = Field(default_factory=list)
    btc_amount: int | None = None


class BeamingDetails(ViewModel):
    """Beaming view for a transaction carrying `tx.beamed_outs`."""
    beam_entries: list[BeamEntry]
    inputs: list[Any] = Field(default_factory=list)
    total_outputs: int = 0
    version: int | None = None


class DexOrderDetails(ViewModel):
    """Order fields lifted verbatim from an order-type spell output."""
    side: str | None = None
    amount: int | None = None
    quantity: int | None = None
    price: Any = None  # [numerator, denominator] when well formed
    maker: str | None = None
    asset: str | None = None


class DexOrderView(ViewModel):
    """Display-ready DEX order."""
    side: str | None
    side_label: str
    title: str
    icon: str
    quantity: str
    amount: str
    price: str
    maker: str | None = None
    asset: str | None = None


class TransactionTypeMetadata(ViewModel):
    """Presentation metadata for a transaction type tag."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    label: str
    icon: str
    color: str
    bg_class: str
    text_class: str
    border_class: str
    description: str


class SearchResult(ViewModel):
    """Outcome of classifying a free-text search input."""
    type: str
    value: str


class SearchRoute(ViewModel):
    """Navigation target for a search, or the validation message to show."""
    type: str
    value: str
    path: str | None = None
    error: str | None = None


class NetworkPair(ViewModel):
    blockchain: str
    network: str


class SpellMetadata(ViewModel):
    """Normalised asset metadata read from a spell payload."""
    name: str | None = None
    description: str | None = None
    image: str | None = None
    ticker: str | None = None
    url: str | None = None
    supply_limit: int | None = None
    decimals: int | None = None
    extra_fields: dict[str, Any] = Field(default_factory=dict)
    raw: Any = None


class CharmBadge(ViewModel):
    type: str
    label: str
    icon: str
    class_name: str
    gradient_class: str


class TransactionView(ViewModel):
    """Everything the transaction page renders, computed from one record."""
    txid: str
    short_txid: str
    vout: int
    status: str
    network: str
    blockchain: str
    app_id: str
    asset_type: str
    type: str
    metadata: TransactionTypeMetadata
    amount: str
    is_dex: bool = False
    is_token: bool = False
    is_nft: bool = False
    is_bitcoin: bool = False
    beaming: BeamingDetails | None = None
    order: DexOrderView | None = None
    spell_metadata: SpellMetadata = Field(default_factory=SpellMetadata)
    spell_json: str = ""
