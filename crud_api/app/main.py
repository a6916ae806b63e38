"""
Main entrypoint for the CRUD API.

This module assembles the FastAPI application: logging, permissive CORS,
the JSON error handlers, the resource and swap routers and the root and
health endpoints.  ``create_app`` builds and configures the app, which is
then instantiated at module import time as ``app``::

    uvicorn crud_api.app.main:app --reload

The store handle is explicit.  Tests build an in-memory
:class:`~crud_api.app.core.db.ResourceStore` and pass it in; otherwise the
app opens one from ``settings.database_url`` and closes it on shutdown.
Creating the schema is part of startup, so a storage failure there stops
the server from starting.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.router import router as api_router
from .core.config import settings
from .core.db import ResourceStore
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging
from .services.swap_service import PriceFeed

ENDPOINTS = {
    "POST /resources": "Create a new resource",
    "GET /resources": "List all resources (supports filters: name, category, status)",
    "GET /resources/:id": "Get a specific resource",
    "PUT /resources/:id": "Update a resource",
    "DELETE /resources/:id": "Delete a resource",
    "GET /swap/prices": "Latest token prices from the price feed",
    "GET /swap/quote": "Quote a token swap (query: from, to, amount, reverse)",
}


def create_app(store: Optional[ResourceStore] = None, price_feed: Optional[PriceFeed] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    store : Optional[ResourceStore]
        Store to serve resources from.  A store passed in is opened and
        schema-checked at startup but left open on shutdown; its owner
        closes it.  When omitted, the app owns a store built from
        ``settings.database_url``.
    price_feed : Optional[PriceFeed]
        Price source for the swap endpoints.  Defaults to the remote feed
        at ``settings.price_feed_url``.
    """
    setup_logging(settings.log_level, settings.log_file or None)

    owns_store = store is None
    if store is None:
        store = ResourceStore(settings.database_url)
    if price_feed is None:
        price_feed = PriceFeed(settings.price_feed_url, timeout=settings.price_feed_timeout)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # The connection is opened once per process and reused by every request.
        store.open()
        store.ensure_schema()
        try:
            yield
        finally:
            if owns_store:
                store.close()

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)
    app.state.store = store
    app.state.price_feed = price_feed

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(api_router)

    @app.get("/health")
    async def health() -> dict:
        return {"status": "OK", "message": "Server is running"}

    @app.get("/")
    async def root() -> dict:
        return {"message": "Welcome to CRUD API", "endpoints": ENDPOINTS}

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
