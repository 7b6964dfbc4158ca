"""
Pydantic schemas for API key administration responses.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from products_api.domain.access.entities import ApiKeyRecord


class ApiKeySchema(BaseModel):
    """An API key record. ``key`` is masked except right after issuance."""

    model_config = ConfigDict(populate_by_name=True)

    key: str
    tier: str
    created_at: datetime = Field(alias="createdAt")
    last_used: Optional[datetime] = Field(default=None, alias="lastUsed")

    @classmethod
    def from_record(cls, record: ApiKeyRecord, reveal: bool = False) -> "ApiKeySchema":
        return cls(
            key=record.key if reveal else record.masked_key,
            tier=record.tier.value,
            created_at=record.created_at,
            last_used=record.last_used,
        )


class ApiKeyListResponse(BaseModel):
    success: bool = True
    count: int
    data: list[ApiKeySchema]


class ApiKeyIssuedResponse(BaseModel):
    success: bool = True
    message: str
    data: ApiKeySchema


class KeysInfoResponse(BaseModel):
    """Development-only hint listing the seeded test keys."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    test_keys: list[str] = Field(alias="testKeys")
    header: str
