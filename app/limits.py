from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from app.config import settings

# Shared limiter instance for the application
limiter = Limiter(key_func=get_remote_address, default_limits=[settings.RATE_LIMIT])

# Re-export types for convenience
__all__ = [
    "limiter",
    "RateLimitExceeded",
    "SlowAPIMiddleware",
]
