"""
FastAPI routers for API key administration.

``router`` holds the production-tier key management routes.
``keys_info_router`` exposes the seeded test keys and is only mounted
outside production.
"""

from typing import Any

from fastapi import APIRouter, Depends

from products_api.application.access.authenticator import Authenticator
from products_api.core.config import Settings
from products_api.domain.access.entities import KeyTier
from products_api.domain.errors import ValidationError
from products_api.interfaces.access.schemas import (
    ApiKeyIssuedResponse,
    ApiKeyListResponse,
    ApiKeySchema,
    KeysInfoResponse,
)
from products_api.interfaces.catalog.schemas import ErrorResponse
from products_api.interfaces.pipeline import (
    API_PIPELINE,
    decode_json_body,
    get_authenticator,
    get_settings,
    require_production_key,
)

TIER_VALUES = [tier.value for tier in KeyTier]

router = APIRouter(
    prefix="/api/keys",
    tags=["keys"],
    dependencies=[*API_PIPELINE, Depends(require_production_key)],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
    },
)

keys_info_router = APIRouter(tags=["keys"])


def _parse_tier(payload: dict[str, Any]) -> KeyTier:
    raw = payload.get("tier", KeyTier.DEVELOPMENT.value)
    if raw not in TIER_VALUES:
        raise ValidationError([f"Tier must be one of {', '.join(TIER_VALUES)}"])
    return KeyTier(raw)


@router.get("", response_model=ApiKeyListResponse, summary="List API keys")
def list_api_keys(
    authenticator: Authenticator = Depends(get_authenticator),
) -> ApiKeyListResponse:
    """List registered keys with their secrets masked."""
    records = authenticator.list_keys()
    return ApiKeyListResponse(
        count=len(records),
        data=[ApiKeySchema.from_record(r) for r in records],
    )


@router.post(
    "", status_code=201, response_model=ApiKeyIssuedResponse, summary="Issue an API key"
)
def issue_api_key(
    payload: dict[str, Any] = Depends(decode_json_body),
    authenticator: Authenticator = Depends(get_authenticator),
) -> ApiKeyIssuedResponse:
    """Issue a new key. The full secret is only returned here."""
    record = authenticator.issue(_parse_tier(payload))
    return ApiKeyIssuedResponse(
        message="API key issued",
        data=ApiKeySchema.from_record(record, reveal=True),
    )


@keys_info_router.get("/api/keys-info", response_model=KeysInfoResponse)
def keys_info(settings: Settings = Depends(get_settings)) -> KeysInfoResponse:
    """Tell developers which seeded keys to use."""
    return KeysInfoResponse(
        message=f"For testing, use one of these API keys in {settings.api_key_header} header:",
        test_keys=list(settings.seed_api_keys),
        header=f"{settings.api_key_header}: YOUR_API_KEY",
    )
