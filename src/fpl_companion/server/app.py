"""
FastAPI application factory for FPL Companion.

Serves the statistics passthroughs, the LLM endpoints and the heuristic
transfer endpoints to the presentation layer.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..api.cache import CachedFPLClient, TTLCache
from ..api.client import FPLClient
from ..assistant.client import AssistantClient
from ..config import Settings, get_settings
from .dependencies import error_response
from .routes import ai_router, fpl_router, transfers_router

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    fpl_client: CachedFPLClient | None = None,
    assistant: AssistantClient | None = None,
) -> FastAPI:
    """
    Build the HTTP app.

    Args:
        settings: Application settings (loaded from the environment if None)
        fpl_client: Shared cached statistics client (built from settings if None)
        assistant: Shared LLM assistant (built from settings if None)
    """
    settings = settings or get_settings()

    if fpl_client is None:
        fpl_client = CachedFPLClient(
            FPLClient.from_settings(settings.fpl),
            TTLCache(ttl=settings.cache.ttl),
        )
    if assistant is None:
        assistant = AssistantClient.from_settings(settings.llm)
        if not settings.validate_llm_config():
            logger.warning("LLM API key not configured; AI endpoints will return errors")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await app.state.fpl_client.close()
        await app.state.assistant.close()
        logger.info("Clients closed")

    app = FastAPI(title="FPL Companion", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.fpl_client = fpl_client
    app.state.assistant = assistant

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.debug(f"Invalid request to {request.url.path}: {exc.errors()}")
        return error_response("Missing or invalid request data", 400)

    @app.get("/api/health")
    async def health():
        return {
            "status": "ok",
            "version": __version__,
            "llmConfigured": app.state.assistant.is_configured,
        }

    app.include_router(fpl_router)
    app.include_router(ai_router)
    app.include_router(transfers_router)

    return app
