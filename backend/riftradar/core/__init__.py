"""Core infrastructure module.

This module exports core utilities used across features.
Never imports from features - only from external libraries.
"""

from .config import Settings, get_settings, get_global_settings, get_riot_api_key
from .logging import (
    bind_request_context,
    clear_request_context,
    setup_logging,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "get_global_settings",
    "get_riot_api_key",
    # Logging
    "setup_logging",
    "bind_request_context",
    "clear_request_context",
]
