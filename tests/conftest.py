"""
Shared fixtures for the Products API test suite.

Every test gets a freshly built application, so the product store and
key registry never leak between tests.
"""

from typing import Any, Callable

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from products_api.core.config import Settings
from products_api.main import create_app

PROD_KEY = "prod_key_abc123def456"
DEV_KEY = "dev_key_mno345pqr678"
TEST_KEY = "test_key_stu901vwx234"

PROD_HEADERS = {"x-api-key": PROD_KEY}
DEV_HEADERS = {"x-api-key": DEV_KEY}


def make_settings(**overrides: Any) -> Settings:
    """Settings isolated from the developer's environment and .env file."""
    values: dict[str, Any] = {
        "environment": "test",
        "log_level": "WARNING",
        "rate_limit_enabled": False,
        "database_url": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def product_payload() -> dict[str, Any]:
    """A valid creation payload."""
    return {
        "name": "Mouse",
        "description": "A mouse",
        "price": 19.999,
        "category": "Electronics",
        "inStock": True,
    }


@pytest.fixture
def create_product(client: TestClient, product_payload: dict[str, Any]) -> Callable[..., dict]:
    """Create a product over HTTP and return its JSON representation."""

    def _create(**overrides: Any) -> dict:
        response = client.post(
            "/api/products", json={**product_payload, **overrides}, headers=PROD_HEADERS
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create
