"""
Request logging middleware.

Observes every request/response pair: method, path, client address,
user agent, status, duration and response size. It never alters or
short-circuits the request. Query parameters are logged at DEBUG;
request bodies and headers carrying credentials are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Outermost pipeline stage: logs, times and passes every request through."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        client = request.client.host if request.client else "unknown"
        user_agent = request.headers.get("user-agent", "Unknown")
        logger.info("--> %s %s", request.method, request.url.path)
        logger.debug("    IP: %s | User-Agent: %s", client, user_agent)
        if request.query_params:
            logger.debug("    Query params: %s", dict(request.query_params))

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.error(
                "<-- %s %s | 500 | %.1fms", request.method, request.url.path, elapsed_ms
            )
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "<-- %s %s | %d | %.1fms | %sb",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            response.headers.get("content-length", "0"),
        )
        return response
