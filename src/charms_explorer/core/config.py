"""
Explorer configuration.

Values come from the environment when the API starts; library callers can
build an `ExplorerConfig` directly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from charms_explorer.core.models import DEX_DECIMALS, TOKEN_DECIMALS

DEFAULT_API_URL = "http://localhost:8000/v1"


@dataclass(frozen=True)
class ExplorerConfig:
    """
    Args:
        api_url:          base URL of the Charms indexer API (versioned)
        api_timeout:      HTTP timeout in seconds for indexer requests
        log_level:        logging level name for the API process
        token_decimals:   base-unit exponent for token/NFT amounts
        dex_decimals:     base-unit exponent for DEX order quantities
        hash_prefix_len:  characters kept on each side when shortening hashes
    """
    api_url: str = DEFAULT_API_URL
    api_timeout: float = 15.0
    log_level: str = "INFO"
    token_decimals: int = TOKEN_DECIMALS
    dex_decimals: int = DEX_DECIMALS
    hash_prefix_len: int = 8

    @classmethod
    def from_env(cls) -> ExplorerConfig:
        return cls(
            api_url=os.getenv("CHARMS_API_URL", DEFAULT_API_URL),
            api_timeout=float(os.getenv("CHARMS_API_TIMEOUT", "15.0")),
            log_level=os.getenv("CHARMS_LOG_LEVEL", "INFO").upper(),
        )
