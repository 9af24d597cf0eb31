"""
Unit tests for the Charms indexer client (HTTP mocked).
"""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from charms_explorer.core.config import ExplorerConfig
from charms_explorer.core.indexer import CharmsIndexer, IndexerError

TXID = "77" * 32


def _response(status_code=200, payload=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = text
    return response


@pytest.fixture
def indexer():
    client = CharmsIndexer("http://indexer.test/v1/")
    yield client
    client.close()


def test_get_charms_all_networks(indexer):
    payload = {"data": {"charms": [{"txid": TXID, "app_id": "t/x", "amount": 5}]}}
    with patch.object(indexer._client, "get", return_value=_response(payload=payload)) as mock_get:
        charms = indexer.get_charms(page=2)

    assert [c.txid for c in charms] == [TXID]
    url = mock_get.call_args.args[0]
    params = mock_get.call_args.kwargs["params"]
    assert url == "http://indexer.test/v1/charms"
    assert params == {"page": 2, "limit": 20, "sort": "newest"}


def test_network_param_sent_when_filtered(indexer):
    indexer.set_network("testnet4")
    with patch.object(indexer._client, "get", return_value=_response(payload={"data": {"charms": []}})) as mock_get:
        assert indexer.get_charms() == []

    assert mock_get.call_args.kwargs["params"]["network"] == "testnet4"


def test_set_network_rejects_unknown(indexer):
    with pytest.raises(ValueError):
        indexer.set_network("signet")
    assert indexer.network == "all"


def test_get_charm_by_txid(indexer):
    with patch.object(indexer._client, "get", return_value=_response(payload={"txid": TXID, "vout": 2})):
        record = indexer.get_charm_by_txid(TXID)
    assert record.vout == 2


def test_get_charm_by_charmid_quotes_path(indexer):
    with patch.object(indexer._client, "get", return_value=_response(payload={"txid": TXID})) as mock_get:
        indexer.get_charm_by_charmid(f"{TXID}:0")
    assert mock_get.call_args.args[0].endswith(f"/charms/by-charmid/{TXID}%3A0")


def test_http_error_status(indexer):
    with patch.object(indexer._client, "get", return_value=_response(404, text="not found")):
        with pytest.raises(IndexerError, match="API error 404"):
            indexer.get_charm_by_txid(TXID)


def test_transport_error(indexer):
    with patch.object(indexer._client, "get", side_effect=httpx.ConnectError("refused")):
        with pytest.raises(IndexerError, match="unreachable"):
            indexer.get_charms()


def test_context_manager_closes():
    with CharmsIndexer() as indexer:
        assert not indexer._client.is_closed
    assert indexer._client.is_closed


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("CHARMS_API_URL", "https://api.charms.test/v1")
    monkeypatch.setenv("CHARMS_API_TIMEOUT", "3")
    monkeypatch.setenv("CHARMS_LOG_LEVEL", "debug")

    config = ExplorerConfig.from_env()

    assert config.api_url == "https://api.charms.test/v1"
    assert config.api_timeout == 3.0
    assert config.log_level == "DEBUG"
    assert config.token_decimals == 8
    assert config.dex_decimals == 9
