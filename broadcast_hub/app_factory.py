import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from broadcast_hub.hub import Hub
from broadcast_hub.settings import Settings, settings as default_settings
from broadcast_hub.web import router as ws_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Broadcast hub ready (include_sender=%s, idle_timeout=%ss)",
        app.state.hub.include_sender,
        app.state.settings.IDLE_TIMEOUT,
    )
    try:
        yield
    finally:
        # Say goodbye to whoever is still connected
        await app.state.hub.close_all()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    app = FastAPI(lifespan=lifespan)
    app.state.settings = settings
    app.state.hub = Hub(include_sender=settings.INCLUDE_SENDER)
    app.include_router(ws_router)
    return app
