"""
FastAPI dependencies.

The app factory stores one shared client of each kind on app.state; routes
reach them through these functions so tests can override them.
"""

from fastapi import Request
from fastapi.responses import JSONResponse

from ..api.cache import CachedFPLClient
from ..assistant.client import AssistantClient
from ..config import Settings


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_fpl_client(request: Request) -> CachedFPLClient:
    return request.app.state.fpl_client


def get_assistant(request: Request) -> AssistantClient:
    return request.app.state.assistant


def error_response(message: str, status_code: int) -> JSONResponse:
    """JSON error body in the shape the front end expects."""
    return JSONResponse({"error": message}, status_code=status_code)
