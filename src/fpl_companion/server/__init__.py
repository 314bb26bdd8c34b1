"""HTTP interface for FPL Companion."""

from .app import create_app
from .dependencies import get_assistant, get_fpl_client

__all__ = ["create_app", "get_assistant", "get_fpl_client"]
