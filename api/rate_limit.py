"""Shared rate limiter for routes that call the completion backend."""

from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

# Applied per client address to every route that reaches the backend.
BACKEND_RATE_LIMIT = "20/minute"

limiter = Limiter(key_func=get_remote_address)
