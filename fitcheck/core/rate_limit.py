from __future__ import annotations

from fastapi import Request
from slowapi import Limiter

from fitcheck.core.config import Settings, settings


def client_key(request: Request, app_settings: Settings | None = None) -> str:
    """Budget key for a caller.

    The first X-Forwarded-For hop is used only when TRUST_X_FORWARDED_FOR is
    set; otherwise the socket peer address.
    """
    app_settings = app_settings or settings
    if app_settings.trust_x_forwarded_for:
        forwarded_for = request.headers.get("x-forwarded-for", "").strip()
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


limiter = Limiter(key_func=client_key, enabled=settings.rate_limit_enabled)


def rate_limit(limit: str | None = None):
    """Per-route budget; analysis routes share ``RATE_LIMIT`` unless overridden."""
    if settings.rate_limit_enabled:
        return limiter.limit(limit or settings.rate_limit)

    def decorator(func):
        return func

    return decorator
