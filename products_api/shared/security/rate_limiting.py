"""
Rate limiting configuration and setup.

Uses a slowapi Limiter (and its ``limits`` backend) to enforce a
per-client allowance on every API route. The check runs as the first
stage of the request pipeline; exceeding the allowance raises
RateLimitedError, which the error translator turns into a 429.
"""

import logging

from fastapi import Request
from limits import RateLimitItem, parse_many
from slowapi import Limiter
from slowapi.util import get_remote_address

from products_api.core.config import Settings
from products_api.domain.errors import RateLimitedError

logger = logging.getLogger(__name__)

# Namespace for counters shared by every pipeline route.
API_SCOPE = "api"


def create_limiter(settings: Settings) -> Limiter:
    """Build a limiter with its own in-memory counters.

    Args:
        settings: Application settings (enabled flag and default limit).

    Returns:
        A Limiter keyed by client address.
    """
    return Limiter(
        key_func=get_remote_address,
        default_limits=[settings.rate_limit_default],
        enabled=settings.rate_limit_enabled,
    )


def parse_rate_limits(settings: Settings) -> list[RateLimitItem]:
    """Parse the configured limit string ("100/minute;1000/hour")."""
    return parse_many(settings.rate_limit_default)


def enforce_rate_limit(request: Request) -> None:
    """Count the request against its client's allowance.

    Raises:
        RateLimitedError: If any configured limit is exhausted.
    """
    limiter: Limiter = request.app.state.limiter
    if not limiter.enabled:
        return

    client = get_remote_address(request)
    for item in request.app.state.rate_limits:
        if not limiter.limiter.hit(item, API_SCOPE, client):
            logger.warning(
                "Rate limit exceeded: %s %s (%s)", request.method, request.url.path, item
            )
            raise RateLimitedError(str(item))
