"""
FastAPI application factory for the frame relay.

Routes:
- /status -> liveness (JSON)
- /ws     -> detection WebSocket
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from runtime.context import RuntimeContext

from .routes import api, ws

APP_VERSION = "0.1.0"

logger = logging.getLogger(__name__)


def create_app(context: RuntimeContext) -> FastAPI:
    """Create the FastAPI app bound to one RuntimeContext."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Relay ready (backend=%s, model=%s/%s)",
            context.config.provider.backend,
            context.config.provider.model_id,
            context.config.provider.model_version,
        )
        try:
            yield
        finally:
            await context.aclose()

    app = FastAPI(
        title="Frame Relay",
        version=APP_VERSION,
        description="WebSocket relay to a hosted object-detection model",
        lifespan=lifespan,
    )
    app.state.context = context

    app.include_router(api.router)
    app.include_router(ws.router)

    return app
