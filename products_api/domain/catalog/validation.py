"""
Domain rules: product payload validation.

Pure functions that check an incoming payload against the product field
rules and return a sanitized result. Every violation is collected, in the
fixed field order name, description, price, category, inStock, so a single
call reports everything wrong with the payload.

No framework imports. No IO. No side effects.
"""

import math
from collections.abc import Mapping
from decimal import ROUND_DOWN, Decimal
from typing import Any, Optional

from products_api.domain.catalog.entities import ProductDraft
from products_api.domain.errors import ValidationError

NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 1000
CATEGORY_MAX_LENGTH = 50
PRICE_MAX = 1_000_000

# Wire field name -> entity attribute, in validation order.
PRODUCT_FIELDS = {
    "name": "name",
    "description": "description",
    "price": "price",
    "category": "category",
    "inStock": "in_stock",
}

_TEXT_RULES = {
    "name": ("Name", NAME_MAX_LENGTH),
    "description": ("Description", DESCRIPTION_MAX_LENGTH),
    "category": ("Category", CATEGORY_MAX_LENGTH),
}

_CENT = Decimal("0.01")


def _is_falsy(value: Any) -> bool:
    """Mirror the falsiness clients expect from the JSON API.

    Missing, null, false, zero, NaN and the empty string all read as
    "not supplied" for the required-field checks.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if _is_number(value):
        return value == 0 or math.isnan(value)
    return False


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_text(field: str, value: Any) -> Optional[str]:
    label, max_length = _TEXT_RULES[field]
    if not isinstance(value, str):
        return f"{label} must be a string"
    if not value.strip():
        return f"{label} cannot be empty"
    if len(value) > max_length:
        return f"{label} cannot exceed {max_length} characters"
    return None


def _check_price(value: Any) -> Optional[str]:
    if not _is_number(value):
        return "Price must be a number"
    # NaN compares false both ways and falls through to the finite check.
    if value < 0:
        return "Price cannot be negative"
    if value > PRICE_MAX:
        return "Price cannot exceed 1,000,000"
    if not math.isfinite(value):
        return "Price must be a finite number"
    return None


def _check_in_stock(value: Any) -> Optional[str]:
    if not isinstance(value, bool):
        return "inStock must be a boolean"
    return None


def normalize_price(price: float) -> float:
    """Truncate a price to two decimal places (19.999 -> 19.99)."""
    return float(Decimal(str(price)).quantize(_CENT, rounding=ROUND_DOWN))


def _check_present_field(field: str, value: Any) -> Optional[str]:
    if field == "price":
        return _check_price(value)
    if field == "inStock":
        return _check_in_stock(value)
    return _check_text(field, value)


def _sanitize(field: str, value: Any) -> Any:
    if field == "price":
        return normalize_price(value)
    if field == "inStock":
        return value
    return value.strip()


def validate_create(payload: Mapping[str, Any]) -> ProductDraft:
    """Validate a product creation payload.

    Args:
        payload: Decoded JSON object using wire field names.

    Returns:
        A ProductDraft with trimmed strings and a two-decimal price.

    Raises:
        ValidationError: With one message per violated field.
    """
    errors: list[str] = []

    for field in PRODUCT_FIELDS:
        value = payload.get(field)
        if field in _TEXT_RULES:
            if _is_falsy(value):
                errors.append(f"{_TEXT_RULES[field][0]} is required")
                continue
        elif value is None:
            errors.append("Price is required" if field == "price" else "inStock is required")
            continue

        message = _check_present_field(field, value)
        if message:
            errors.append(message)

    if errors:
        raise ValidationError(errors)

    return ProductDraft(
        **{attr: _sanitize(field, payload[field]) for field, attr in PRODUCT_FIELDS.items()}
    )


def validate_update(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Validate a partial product update payload.

    Only fields present in the payload are checked. An explicit null counts
    as present and fails its field's type rule. Unknown keys (including
    ``id``) are ignored.

    Args:
        payload: Decoded JSON object using wire field names.

    Returns:
        Sanitized changes keyed by entity attribute name, containing only
        the supplied fields.

    Raises:
        ValidationError: If no recognized field is present, or any present
            field violates its rule.
    """
    errors: list[str] = []
    present = [field for field in PRODUCT_FIELDS if field in payload]

    if not present:
        errors.append("At least one field must be provided for update")

    for field in present:
        message = _check_present_field(field, payload[field])
        if message:
            errors.append(message)

    if errors:
        raise ValidationError(errors)

    return {PRODUCT_FIELDS[field]: _sanitize(field, payload[field]) for field in present}
