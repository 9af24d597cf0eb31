import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from charms_explorer import __version__
from charms_explorer.api.routes import router
from charms_explorer.core.config import ExplorerConfig
from charms_explorer.core.indexer import CharmsIndexer
from charms_explorer.core.network import NetworkFilter

logger = logging.getLogger("charms_explorer.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = ExplorerConfig.from_env()
    logging.basicConfig(level=config.log_level)

    indexer = CharmsIndexer(config.api_url, timeout=config.api_timeout)

    # Bitcoin toggles re-scope the indexer list queries
    network_filter = NetworkFilter(on_change=indexer.set_network)
    indexer.set_network(network_filter.derived_param())

    app.state.config = config
    app.state.indexer = indexer
    app.state.network_filter = network_filter
    logger.info(f"Explorer API using indexer at {config.api_url}")

    yield

    indexer.close()


app = FastAPI(
    title="charms-explorer",
    summary="Transaction, beaming and DEX order views over the Charms indexer",
    version=__version__,
    lifespan=lifespan,
)

# read-only API consumed by the explorer webapp; no cookies
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(router)


@app.exception_handler(ValueError)
async def bad_input_handler(request: Request, exc: ValueError):
    """Unknown network keys and similar caller mistakes become 400s."""
    logger.info(f"Rejected {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.get("/health")
async def health_check():
    config: ExplorerConfig = app.state.config
    return {"status": "ok", "indexer": config.api_url}
