from .ai import router as ai_router
from .fpl import router as fpl_router
from .transfers import router as transfers_router

__all__ = ["ai_router", "fpl_router", "transfers_router"]
