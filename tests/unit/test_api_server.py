from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from charms_explorer.api.server import app
from charms_explorer.core.indexer import IndexerError
from charms_explorer.core.models import CharmRecord

TXID = "5e" * 32
DEST = "cc" * 32

BEAM_RECORD = {
    "txid": TXID,
    "app_id": "t/abc/def",
    "amount": 250_000_000,
    "data": {"native_data": {"tx": {"ins": ["x:0"], "outs": [{"0": 250_000_000}], "beamed_outs": {"0": DEST}}}},
}


@pytest.fixture
def client(monkeypatch):
    monkeypatch.delenv("CHARMS_API_URL", raising=False)
    # Each client runs the lifespan, so network toggles start from defaults
    with TestClient(app) as c:
        yield c


@pytest.fixture
def mock_indexer(client):
    indexer = MagicMock()
    client.app.state.indexer = indexer
    return indexer


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "indexer": "http://localhost:8000/v1"}


def test_view_transaction(client):
    response = client.post("/transactions/view", json={"record": BEAM_RECORD})
    assert response.status_code == 200

    body = response.json()
    assert body["type"] == "beam"
    assert body["amount"] == "2.5"
    assert body["beaming"]["beamEntries"][0]["destinationHash"] == DEST


def test_view_transaction_missing_record(client):
    # Should fail pydantic validation
    response = client.post("/transactions/view", json={"raw_tx": {"vout": []}})
    assert response.status_code == 422


def test_view_transaction_with_raw_tx(client):
    record = {"txid": TXID, "app_id": "t/bro"}
    raw_tx = {"vout": [{"scriptpubkey_type": "op_return", "value": 0}, {"value": 333}]}
    response = client.post("/transactions/view", json={"record": record, "raw_tx": raw_tx})
    assert response.json()["type"] == "bro_mining"


def test_get_transaction(client, mock_indexer):
    mock_indexer.get_charm_by_txid.return_value = CharmRecord(txid=TXID, app_id="n/art", block_height=1)

    response = client.get(f"/transactions/{TXID}")

    assert response.status_code == 200
    assert response.json()["type"] == "nft_mint"
    mock_indexer.get_charm_by_txid.assert_called_once_with(TXID)


def test_get_transaction_indexer_down(client, mock_indexer):
    mock_indexer.get_charm_by_txid.side_effect = IndexerError("API error 500")
    response = client.get(f"/transactions/{TXID}")
    assert response.status_code == 502
    assert "API error 500" in response.text


def test_list_charms_filters_networks(client, mock_indexer):
    mock_indexer.get_charms.return_value = [
        CharmRecord(txid=TXID, app_id="t/a", network="mainnet", amount=100_000_000),
        CharmRecord(txid="6f" * 32, app_id="n/b", network="preprod", blockchain="cardano"),
    ]

    response = client.get("/charms")

    assert response.status_code == 200
    cards = response.json()
    assert len(cards) == 1
    assert cards[0]["amount"] == "1"
    assert cards[0]["badge"]["type"] == "token"


def test_search(client):
    body = client.get("/search", params={"q": f"{TXID}:1"}).json()
    assert body["type"] == "charmid"
    assert body["path"] == f"/tx?txid={TXID}"


def test_search_free_text(client):
    body = client.get("/search", params={"q": "hello"}).json()
    assert body["type"] == "query"
    assert body["error"] == "Please enter a valid TXID, address, or Charm ID"


def test_network_defaults(client):
    body = client.get("/network").json()
    assert body["param"] == "all"
    assert body["selection"]["cardanoMainnet"] is False


def test_toggle_updates_indexer_network(client):
    response = client.post("/network/bitcoinTestnet4/toggle")
    assert response.status_code == 200
    assert response.json()["param"] == "mainnet"
    assert client.app.state.indexer.network == "mainnet"


def test_toggle_unknown_network(client):
    response = client.post("/network/dogecoin/toggle")
    assert response.status_code == 400


def test_transaction_type_metadata(client):
    assert client.get("/transaction-types/token_mint").json()["label"] == "Token Mint"
    assert client.get("/transaction-types/whatever").json()["label"] == "Unknown"


def test_view_transaction_huge_price(client):
    order = {"side": "ask", "quantity": 1_000_000_000, "price": [1e300, 3]}
    record = {"txid": TXID, "app_id": "t/dex", "data": {"tx": {"ins": [], "outs": [{"0": order}]}}}

    response = client.post("/transactions/view", json={"record": record})

    assert response.status_code == 200
    assert response.json()["order"]["price"].endswith(" sats/token")
