"""
CharmsIndexer: REST client for the Charms indexer API.

Supplies raw `CharmRecord`s to the view layer. Nothing is cached; every
call hits the API.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from charms_explorer.core.config import DEFAULT_API_URL
from charms_explorer.core.models import CharmRecord

logger = logging.getLogger("charms_explorer.indexer")

VALID_NETWORK_PARAMS = ("all", "mainnet", "testnet4")


class IndexerError(Exception):
    """Raised when the indexer API returns an error or cannot be reached."""
    pass


class CharmsIndexer:
    """
    Synchronous client for the Charms indexer.

    Usage:
        indexer = CharmsIndexer()  # http://localhost:8000/v1
        charm = indexer.get_charm_by_txid("a1b2...")
        charms = indexer.get_charms(page=2)
    """

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 15.0,
        network: str = "all",
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.network = network
        self._client = httpx.Client(headers={"Accept": "application/json"}, timeout=timeout)

    def set_network(self, network: str) -> None:
        """Change the network filter applied to list queries."""
        if network not in VALID_NETWORK_PARAMS:
            raise ValueError(f"Unknown network parameter: {network}")
        logger.info(f"Indexer network filter set to {network}")
        self.network = network

    # ------------------------------------------------------------------
    # Charms
    # ------------------------------------------------------------------

    def get_charms(
        self, page: int = 1, limit: int = 20, sort: str = "newest"
    ) -> list[CharmRecord]:
        """
        List charms, newest first by default.

        The current `network` filter is sent unless it is "all".
        """
        params: dict[str, Any] = {"page": page, "limit": limit, "sort": sort}
        if self.network != "all":
            params["network"] = self.network
        data = self._get("/charms", params=params)
        return self._parse_charms(data)

    def get_charm_by_txid(self, txid: str) -> CharmRecord:
        data = self._get(f"/charms/{txid}")
        return CharmRecord.model_validate(data)

    def get_charm_by_charmid(self, charmid: str) -> CharmRecord:
        data = self._get(f"/charms/by-charmid/{quote(charmid, safe='')}")
        return CharmRecord.model_validate(data)

    def get_charms_by_address(self, address: str) -> list[CharmRecord]:
        data = self._get(f"/charms/by-address/{address}")
        return self._parse_charms(data)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        url = f"{self.api_url}{path}"
        logger.debug(f"GET {url} params={params}")
        try:
            response = self._client.get(url, params=params)
        except httpx.HTTPError as e:
            raise IndexerError(f"Indexer unreachable at {url}: {e}") from e
        if response.status_code != 200:
            raise IndexerError(f"API error {response.status_code} for {url}: {response.text}")
        return response.json()

    def _parse_charms(self, data: dict[str, Any]) -> list[CharmRecord]:
        charms = (data.get("data") or {}).get("charms")
        if not charms:
            logger.warning("No charms data in indexer response")
            return []
        return [CharmRecord.model_validate(c) for c in charms]

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> CharmsIndexer:
        return self

    def __exit__(self, *_: Any) -> None:
        self.close()
