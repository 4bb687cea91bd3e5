"""Per-client request rate limiting, applied to every route by SlowAPIMiddleware."""
from slowapi import Limiter
from slowapi.util import get_remote_address

from formsapi.config import config

DEFAULT_LIMITS = [config.RATE_LIMIT] if config.RATE_LIMIT else []

limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=config.RATE_LIMIT_STORAGE_URI,
    default_limits=DEFAULT_LIMITS,
)
