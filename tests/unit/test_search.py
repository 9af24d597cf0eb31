"""
Unit tests for search input classification and routing.
"""

import pytest

from charms_explorer.core.search import (
    INVALID_SEARCH_MESSAGE,
    SearchType,
    classify_search_input,
    resolve_search,
    route_for,
)

TXID = "0123456789abcdef" * 4


def test_txid():
    result = classify_search_input(TXID)
    assert result.type == "txid"
    assert result.value == TXID


def test_txid_uppercase_and_whitespace():
    result = classify_search_input(f"  {TXID.upper()}\n")
    assert result.type == "txid"
    assert result.value == TXID.upper()


def test_charm_id_resolves_to_txid_portion():
    result = classify_search_input(f"{TXID}:3")
    assert result.type == "charmid"
    assert result.value == TXID


def test_charm_id_and_txid_route_to_same_page():
    assert resolve_search(f"{TXID}:0").path == resolve_search(TXID).path == f"/tx?txid={TXID}"


@pytest.mark.parametrize(
    "address",
    [
        "bc1qar0srrr7xfkvy5l643lydnw9re59gtzzwf5mdq",
        "tb1qw508d6qejxtdg4y5r3zarvary0c5xw7kxpjzsx",
        "1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa",
        "3J98t1WpEZ73CNmQviecrnyiWrnqRhWNLy",
    ],
)
def test_addresses(address):
    route = resolve_search(address)
    assert route.type == "address"
    assert route.path == f"/address/{address}"


def test_app_id_route_is_percent_encoded():
    route = resolve_search("t/abc123/def456")
    assert route.type == "appid"
    assert route.value == "t/abc123/def456"
    assert route.path == "/asset?appid=t%2Fabc123%2Fdef456"


@pytest.mark.parametrize("prefix", ["t/", "n/", "b/"])
def test_app_id_prefixes(prefix):
    assert classify_search_input(f"{prefix}xyz").type == "appid"


def test_free_text_is_query_with_error():
    route = resolve_search("bitcoin pizza")
    assert route.type == "query"
    assert route.path is None
    assert route.error == INVALID_SEARCH_MESSAGE


@pytest.mark.parametrize(
    "text",
    ["", "   ", None, "nft-thing", f"{TXID}:", f"{TXID}0", "x/abc", "日本語", "a\nb"],
)
def test_classification_is_total(text):
    result = classify_search_input(text)
    assert result.type in {t.value for t in SearchType}


def test_txid_with_trailing_text_is_not_txid():
    assert classify_search_input(f"{TXID} extra").type == "query"


def test_route_for_query():
    route = route_for(classify_search_input("hello"))
    assert route.error == INVALID_SEARCH_MESSAGE
