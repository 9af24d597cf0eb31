from fastapi import APIRouter, HTTPException, Request

from charms_explorer.api.models import CharmCard, NetworkStatusResponse, TransactionViewRequest
from charms_explorer.core.config import ExplorerConfig
from charms_explorer.core.formatting import format_amount, shorten_hash
from charms_explorer.core.indexer import IndexerError
from charms_explorer.core.models import SearchRoute, TransactionTypeMetadata, TransactionView
from charms_explorer.core.network import NetworkFilter
from charms_explorer.core.search import resolve_search
from charms_explorer.spells.charms import charm_badge
from charms_explorer.spells.classifier import get_transaction_metadata
from charms_explorer.spells.view import build_transaction_view

router = APIRouter(tags=["Explorer"])


def get_state(request: Request, name: str):
    """Dependency to retrieve an initialized collaborator from app state."""
    value = getattr(request.app.state, name, None)
    if value is None:
        raise HTTPException(status_code=500, detail=f"{name} not initialized")
    return value


def _network_status(network_filter: NetworkFilter) -> NetworkStatusResponse:
    return NetworkStatusResponse(
        selection=network_filter.selection(),
        active=network_filter.active_networks(),
        param=network_filter.derived_param(),
    )


@router.post("/transactions/view", response_model=TransactionView)
async def view_transaction(request: Request, req: TransactionViewRequest):
    """Render a caller-supplied charm record into the transaction view model."""
    config: ExplorerConfig = get_state(request, "config")
    return build_transaction_view(req.record, raw_tx=req.raw_tx, config=config)


@router.get("/transactions/{txid}", response_model=TransactionView)
async def get_transaction(request: Request, txid: str):
    """Fetch a charm from the indexer by txid and render it."""
    config: ExplorerConfig = get_state(request, "config")
    indexer = get_state(request, "indexer")
    try:
        record = indexer.get_charm_by_txid(txid)
    except IndexerError as e:
        raise HTTPException(status_code=502, detail=str(e)) from e
    return build_transaction_view(record, config=config)


@router.get("/charms", response_model=list[CharmCard])
async def list_charms(request: Request, page: int = 1, limit: int = 20):
    """
    List charms for the networks currently enabled in the session filter.
    """
    config: ExplorerConfig = get_state(request, "config")
    indexer = get_state(request, "indexer")
    network_filter: NetworkFilter = get_state(request, "network_filter")
    try:
        charms = indexer.get_charms(page=page, limit=limit)
    except IndexerError as e:
        raise HTTPException(status_code=502, detail=str(e)) from e

    return [
        CharmCard(
            txid=c.txid,
            short_txid=shorten_hash(c.txid, config.hash_prefix_len),
            vout=c.vout,
            app_id=c.app_id,
            network=c.network,
            amount=format_amount(c.amount, config.token_decimals),
            badge=charm_badge(c),
        )
        for c in charms
        if network_filter.is_visible(c.blockchain, c.network)
    ]


@router.get("/search", response_model=SearchRoute)
async def search(q: str = ""):
    """
    Classify a search string and return where it should navigate.
    Free-text queries come back with `error` set instead of `path`.
    """
    return resolve_search(q)


@router.get("/network", response_model=NetworkStatusResponse)
async def get_network(request: Request):
    return _network_status(get_state(request, "network_filter"))


@router.post("/network/{key}/toggle", response_model=NetworkStatusResponse)
async def toggle_network(request: Request, key: str):
    """Flip one network toggle. Unknown keys are rejected with 400."""
    network_filter: NetworkFilter = get_state(request, "network_filter")
    network_filter.toggle(key)
    return _network_status(network_filter)


@router.get("/transaction-types/{tag}", response_model=TransactionTypeMetadata)
async def transaction_type(tag: str):
    return get_transaction_metadata(tag)
