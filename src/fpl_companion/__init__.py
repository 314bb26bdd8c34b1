"""
FPL Companion - Fantasy Premier League squad companion.

Rule-based point predictions, transfer suggestions, a fixture-driven
transfer planner and LLM-backed advice over the public FPL API.
"""

__version__ = "0.1.0"

from .config import Settings, get_settings

__all__ = ["Settings", "get_settings", "__version__"]
