"""Inbound rate limiting for the gateway's own HTTP endpoints."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from .config import get_global_settings

# key_func determines the key for rate limiting (by default, uses client IP)
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[get_global_settings().inbound_rate_limit],
    enabled=get_global_settings().inbound_rate_limiting_enabled,
)
