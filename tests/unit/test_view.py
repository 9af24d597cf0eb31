"""
Unit tests for the transaction page view model.
"""

import copy

import pytest

from charms_explorer.core.config import ExplorerConfig
from charms_explorer.core.models import CharmRecord
from charms_explorer.spells.view import build_transaction_view

TXID = "9f" * 32
DEST = "ab" * 32


@pytest.fixture
def beam_record():
    return CharmRecord(
        txid=TXID,
        app_id="t/token/vk",
        amount=123_450_000,
        block_height=880_000,
        data={
            "native_data": {
                "tx": {
                    "ins": ["aa:0"],
                    "outs": [{"0": 123_450_000}],
                    "coins": [{"amount": 1000}],
                    "beamed_outs": {"0": DEST},
                },
                "app_public_inputs": {"t/token/vk": [1, 2, 3, 4, 5]},
            }
        },
    )


def test_beam_view(beam_record):
    view = build_transaction_view(beam_record)

    assert view.type == "beam"
    assert view.metadata.label == "Beam"
    assert view.status == "confirmed"
    assert view.short_txid == "9f9f9f9f...9f9f9f9f"
    assert view.amount == "1.2345"
    assert view.asset_type == "token"
    assert view.beaming.beam_entries[0].destination_hash == DEST
    assert view.beaming.beam_entries[0].btc_amount == 1000
    assert view.order is None
    assert "[hex:0102030405]" in view.spell_json


def test_record_not_mutated(beam_record):
    before = copy.deepcopy(beam_record.model_dump())
    build_transaction_view(beam_record)
    assert beam_record.model_dump() == before


def test_pending_without_block_height(beam_record):
    beam_record.block_height = None
    assert build_transaction_view(beam_record).status == "pending"


def test_dex_view():
    record = CharmRecord(
        txid=TXID,
        app_id="t/dex/vk",
        tags="charms-cast",
        data={"tx": {"ins": [], "outs": [{"0": {"side": "ask", "quantity": 2_500_000_000, "price": [3, 2]}}]}},
    )
    view = build_transaction_view(record)

    assert view.type == "dex_create_ask"
    assert view.is_dex
    assert view.order.title == "Ask Order Details"
    assert view.order.quantity == "2.5"
    assert view.order.price == "1.5 sats/token"
    assert view.beaming is None


def test_spell_decimals_override_config():
    record = CharmRecord(
        txid=TXID,
        app_id="t/x",
        amount=1500,
        data={"native_data": {"tx": {"ins": [], "outs": [{"0": {"name": "Cents", "decimals": 2}}]}}},
    )
    view = build_transaction_view(record)
    assert view.amount == "15"
    assert view.spell_metadata.name == "Cents"


def test_config_controls_prefix_and_decimals():
    record = CharmRecord(txid=TXID, app_id="t/x", amount=150)
    view = build_transaction_view(record, config=ExplorerConfig(token_decimals=2, hash_prefix_len=4))
    assert view.amount == "1.5"
    assert view.short_txid == "9f9f...9f9f"


def test_serializes_with_camel_case(beam_record):
    dumped = build_transaction_view(beam_record).model_dump(by_alias=True)
    assert dumped["shortTxid"] == "9f9f9f9f...9f9f9f9f"
    assert dumped["isToken"] is False
    assert dumped["metadata"]["bgClass"] == "bg-cyan-500/20"
    assert dumped["beaming"]["beamEntries"][0]["outputIndex"] == 0


def test_view_with_out_of_range_payload_numbers():
    order = {"side": "bid", "quantity": 10**120, "amount": 10**60, "price": [1e300, 3]}
    record = CharmRecord(
        txid=TXID,
        app_id="t/dex/vk",
        amount=10**100,
        data={"tx": {"ins": [], "outs": [{"0": order}]}},
    )
    view = build_transaction_view(record)

    assert view.type == "dex_create_bid"
    assert view.amount == f"{10**92:,}"
    assert view.order.price.startswith("333,333,333")
    assert view.order.quantity == f"{10**111:,}"
