"""Entry point for the CRUD API server.

Serves ``crud_api.app.main:app`` with Uvicorn.  Host and port are read
from the ``HOST`` and ``PORT`` environment variables (defaults ``0.0.0.0``
and ``3000``).  The database schema is created during startup; if that
fails the process exits with status 1 instead of serving requests.

Usage:
    python run.py
"""
import asyncio
import logging
import sys

from uvicorn import Config, Server

from crud_api.app.core.config import settings
from crud_api.app.main import app

logger = logging.getLogger("crud_api.run")


async def main() -> int:
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level="info", lifespan="on")
    server = Server(config)
    await server.serve()
    # Uvicorn does not raise when lifespan startup fails; it just stops.
    if not server.started:
        logger.error("Failed to initialize database, server not started")
        return 1
    return 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        pass
