"""
Model host: serves one in-memory model document over two loopback planes.

The data plane (default port 3001) answers queries and entity mutations.
The command plane (default port 3002) runs host commands, the login probe
and model services listings. Both share one DocumentStore.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys

import uvicorn
from fastapi import FastAPI, Request

from backend import errors
from backend.config import settings
from backend.routes import commands as command_routes
from backend.routes import data as data_routes
from backend.store import DocumentStore

logger = logging.getLogger(__name__)


def _create_app(title: str, store: DocumentStore) -> FastAPI:
    app = FastAPI(title=title, docs_url=None, redoc_url=None)
    app.state.store = store
    errors.install(app)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.debug("%s %s -> %s", request.method, request.url.path, response.status_code)
        return response

    return app


def create_data_app(store: DocumentStore) -> FastAPI:
    app = _create_app("AppDNA model host (data)", store)
    app.include_router(data_routes.router)
    return app


def create_command_app(store: DocumentStore) -> FastAPI:
    app = _create_app("AppDNA model host (commands)", store)
    app.include_router(command_routes.router)
    return app


def load_store() -> DocumentStore:
    """Store for the configured model file, with optional model services data."""
    store = DocumentStore.load(settings.MODEL_FILE, logged_in=settings.LOGGED_IN)
    if settings.SERVICE_DATA_FILE:
        with open(settings.SERVICE_DATA_FILE, encoding="utf-8") as f:
            store.service_data = json.load(f)
        logger.info("Loaded model services data from %s", settings.SERVICE_DATA_FILE)
    return store


async def serve(store: DocumentStore) -> None:
    servers = [
        uvicorn.Server(uvicorn.Config(app, host=settings.HOST, port=port, log_level=settings.LOG_LEVEL.lower()))
        for app, port in (
            (create_data_app(store), settings.DATA_PORT),
            (create_command_app(store), settings.COMMAND_PORT),
        )
    ]
    logger.info(
        "Model host listening on %s (data %d, commands %d)",
        settings.HOST,
        settings.DATA_PORT,
        settings.COMMAND_PORT,
    )
    await asyncio.gather(*(server.serve() for server in servers))


def run() -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    asyncio.run(serve(load_store()))


if __name__ == "__main__":
    run()
