"""
Search input classification.

Free text typed into the explorer search box is routed to one of the
lookup pages. Rules are tried in order and the first match wins; each
pattern must match the whole trimmed input, so a charm id (`<txid>:<vout>`)
is never mistaken for a bare txid.
"""

from __future__ import annotations

import re
from enum import Enum
from urllib.parse import quote

from charms_explorer.core.models import SearchResult, SearchRoute

INVALID_SEARCH_MESSAGE = "Please enter a valid TXID, address, or Charm ID"

# punctuation left unescaped in a URI component
_URI_COMPONENT_SAFE = "!~*'()"


class SearchType(str, Enum):
    TXID = "txid"
    ADDRESS = "address"
    CHARM_ID = "charmid"
    APP_ID = "appid"
    QUERY = "query"


# Ordered: first full match wins
_RULES: list[tuple[SearchType, re.Pattern[str]]] = [
    (SearchType.TXID, re.compile(r"[a-fA-F0-9]{64}")),
    # mainnet bc1, testnet tb1, legacy 1/3/m/n
    (SearchType.ADDRESS, re.compile(r"(?:bc1|tb1|1|3|m|n)[a-zA-Z0-9]{25,62}")),
    (SearchType.CHARM_ID, re.compile(r"([a-fA-F0-9]{64}):[0-9]+")),
    (SearchType.APP_ID, re.compile(r"[tnb]/.*", re.DOTALL)),
]


def classify_search_input(text: str | None) -> SearchResult:
    """
    Classify a search string. Total: every input yields exactly one result.

    For charm ids the returned value is the txid portion only, since charms
    are looked up through their transaction page.
    """
    trimmed = (text or "").strip()
    for search_type, pattern in _RULES:
        match = pattern.fullmatch(trimmed)
        if match is None:
            continue
        if search_type is SearchType.CHARM_ID:
            return SearchResult(type=search_type.value, value=match.group(1))
        return SearchResult(type=search_type.value, value=trimmed)
    return SearchResult(type=SearchType.QUERY.value, value=trimmed)


def route_for(result: SearchResult) -> SearchRoute:
    """
    Map a classified search onto its navigation target.

    Free-text queries are not supported; they come back with `error` set to
    the message the search box should display instead of a path.
    """
    search_type = SearchType(result.type)
    if search_type is SearchType.TXID or search_type is SearchType.CHARM_ID:
        path = f"/tx?txid={result.value}"
    elif search_type is SearchType.ADDRESS:
        path = f"/address/{result.value}"
    elif search_type is SearchType.APP_ID:
        path = f"/asset?appid={quote(result.value, safe=_URI_COMPONENT_SAFE)}"
    else:
        return SearchRoute(type=result.type, value=result.value, error=INVALID_SEARCH_MESSAGE)
    return SearchRoute(type=result.type, value=result.value, path=path)


def resolve_search(text: str | None) -> SearchRoute:
    """Classify and route in one step."""
    return route_for(classify_search_input(text))
