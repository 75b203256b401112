"""FastAPI application wiring for Monarchy."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from monarchy.api import routes
from monarchy.config import get_settings
from monarchy.database import init_db

logger = logging.getLogger(__name__)


def create_app(*, create_tables: bool = True) -> FastAPI:
    """Instantiate the FastAPI application with routing and lifecycle hooks."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):  # noqa: ARG001
        if create_tables:
            init_db()
            logger.info("database_initialised")
        yield

    app = FastAPI(title="Monarchy Combat API", version="0.1.0", lifespan=lifespan)
    settings = get_settings()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(routes.router)
    return app


app = create_app()
