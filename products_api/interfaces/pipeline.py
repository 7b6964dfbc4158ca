"""
Request pipeline stages.

The order every API request runs in is declared at composition time:

    RequestLoggingMiddleware   observer, always runs (see main.create_app)
    enforce_rate_limit         RateLimitedError once the client allowance is spent
    decode_json_body           MalformedPayloadError on an unusable body
    authenticate_request       UnauthenticatedError on a missing/unknown key
    require_production_key     ForbiddenError, tier-gated routes only
    use case                   validation, then the store operation

Routers list the stages as dependencies in that order; FastAPI resolves
router and route dependencies first-to-last before the endpoint body.
Stages only raise; the error translator owns every error response.
"""

import json
import logging
from typing import Any, NoReturn

from fastapi import Depends, Request

from products_api.application.access.authenticator import Authenticator
from products_api.core.config import Settings
from products_api.domain.access.entities import AuthContext
from products_api.domain.catalog.ports import ProductRepository
from products_api.domain.errors import MalformedPayloadError
from products_api.shared.security.rate_limiting import enforce_rate_limit

logger = logging.getLogger(__name__)

JSON_MEDIA_SUFFIX = "json"


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_product_repository(request: Request) -> ProductRepository:
    return request.app.state.product_store


def get_authenticator(request: Request) -> Authenticator:
    return request.app.state.authenticator


def _reject_constant(name: str) -> NoReturn:
    raise ValueError(f"Unsupported JSON constant: {name}")


def _is_json_request(request: Request) -> bool:
    media_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    return media_type.endswith(JSON_MEDIA_SUFFIX)


async def decode_json_body(request: Request) -> dict[str, Any]:
    """Decode the request body into a JSON object.

    Bodies that are empty or not declared as JSON decode to ``{}``.

    Raises:
        MalformedPayloadError: If the body is too large, is not valid JSON,
            uses NaN/Infinity, or is not a JSON object.
    """
    settings = get_settings(request)
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > settings.max_request_size_bytes:
        raise MalformedPayloadError(
            f"Request body exceeds {settings.max_request_size_bytes} bytes"
        )

    if not _is_json_request(request):
        return {}

    raw = await request.body()
    if len(raw) > settings.max_request_size_bytes:
        raise MalformedPayloadError(
            f"Request body exceeds {settings.max_request_size_bytes} bytes"
        )
    if not raw.strip():
        return {}

    try:
        payload = json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        logger.error("JSON parse error: %s", exc)
        raise MalformedPayloadError() from exc

    if not isinstance(payload, dict):
        raise MalformedPayloadError("Request body must be a JSON object")
    return payload


def authenticate_request(request: Request) -> AuthContext:
    """Authenticate the request's API key and attach the result to ``request.state``."""
    settings = get_settings(request)
    header_value = request.headers.get(settings.api_key_header) or request.headers.get(
        "authorization"
    )
    context = get_authenticator(request).authenticate(header_value)
    request.state.auth = context
    return context


def require_production_key(
    request: Request,
    context: AuthContext = Depends(authenticate_request),
) -> AuthContext:
    """Tier guard: only production keys may pass."""
    get_authenticator(request).require_tier(context)
    return context


API_PIPELINE = [
    Depends(enforce_rate_limit),
    Depends(decode_json_body),
    Depends(authenticate_request),
]
