"""
Network selection filter.

Four independent toggles, one per (blockchain, network) pair. List views
ask `is_visible()` per asset; the indexer query only understands Bitcoin
networks, so `derived_param()` looks at the two Bitcoin toggles alone and
only Bitcoin toggles notify the observer.

The filter is a plain object: construct one per UI session and pass it to
whatever needs it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from charms_explorer.core.models import NetworkPair

logger = logging.getLogger("charms_explorer.network")


class NetworkKey(str, Enum):
    BITCOIN_MAINNET = "bitcoinMainnet"
    BITCOIN_TESTNET4 = "bitcoinTestnet4"
    CARDANO_MAINNET = "cardanoMainnet"
    CARDANO_PREPROD = "cardanoPreprod"


# Declaration order is the order of active_networks()
_PAIRS: dict[NetworkKey, tuple[str, str]] = {
    NetworkKey.BITCOIN_MAINNET: ("bitcoin", "mainnet"),
    NetworkKey.BITCOIN_TESTNET4: ("bitcoin", "testnet4"),
    NetworkKey.CARDANO_MAINNET: ("cardano", "mainnet"),
    NetworkKey.CARDANO_PREPROD: ("cardano", "preprod"),
}

_ATTRS: dict[NetworkKey, str] = {
    NetworkKey.BITCOIN_MAINNET: "bitcoin_mainnet",
    NetworkKey.BITCOIN_TESTNET4: "bitcoin_testnet4",
    NetworkKey.CARDANO_MAINNET: "cardano_mainnet",
    NetworkKey.CARDANO_PREPROD: "cardano_preprod",
}

_BITCOIN_KEYS = (NetworkKey.BITCOIN_MAINNET, NetworkKey.BITCOIN_TESTNET4)


@dataclass
class NetworkFilter:
    """
    Per-session network toggles.

    Args:
        bitcoin_mainnet:  show Bitcoin mainnet assets
        bitcoin_testnet4: show Bitcoin testnet4 assets
        cardano_mainnet:  show Cardano mainnet assets (display only)
        cardano_preprod:  show Cardano preprod assets (display only)
        on_change:        called with the new derived query parameter after
                          a Bitcoin toggle
    """
    bitcoin_mainnet: bool = True
    bitcoin_testnet4: bool = True
    cardano_mainnet: bool = False
    cardano_preprod: bool = False
    on_change: Callable[[str], None] | None = field(default=None, repr=False, compare=False)

    def toggle(self, key: NetworkKey | str) -> bool:
        """
        Flip one toggle and return its new value.

        Raises:
            ValueError: if `key` is not one of the four known networks
        """
        network_key = NetworkKey(key)
        attr = _ATTRS[network_key]
        new_value = not getattr(self, attr)
        setattr(self, attr, new_value)
        logger.info(f"Network {network_key.value} {'enabled' if new_value else 'disabled'}")

        if network_key in _BITCOIN_KEYS and self.on_change is not None:
            self.on_change(self.derived_param())
        return new_value

    def selection(self) -> dict[str, bool]:
        """Current toggles keyed by their wire names."""
        return {key.value: getattr(self, attr) for key, attr in _ATTRS.items()}

    def active_networks(self) -> list[NetworkPair]:
        return [
            NetworkPair(blockchain=blockchain, network=network)
            for key, (blockchain, network) in _PAIRS.items()
            if getattr(self, _ATTRS[key])
        ]

    def is_visible(self, blockchain: str, network: str) -> bool:
        """Whether assets of this chain/network should be shown. Unknown pairs are hidden."""
        for key, pair in _PAIRS.items():
            if pair == (blockchain, network):
                return bool(getattr(self, _ATTRS[key]))
        return False

    def derived_param(self) -> str:
        """
        Indexer `network` query parameter from the two Bitcoin toggles.

        Both off maps to "all", the same as both on.
        """
        if self.bitcoin_mainnet and not self.bitcoin_testnet4:
            return "mainnet"
        if self.bitcoin_testnet4 and not self.bitcoin_mainnet:
            return "testnet4"
        return "all"
