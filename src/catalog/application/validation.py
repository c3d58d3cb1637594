"""Input validation shared by the adapters.

The store trusts its callers; anything arriving from outside (HTTP body,
command line) is checked here first.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from catalog.application.dto import NewProduct
from catalog.domain.exceptions import ValidationError

NAME_AND_PRICE_REQUIRED = "Name and price are required"
PRICE_MUST_BE_NON_NEGATIVE = "Price must be a non-negative number"


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def check_price(value: Any) -> float:
    """Return the price as a float, or raise if it is not a number >= 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValidationError(PRICE_MUST_BE_NON_NEGATIVE)
    try:
        price = float(value)
    except ValueError as exc:
        raise ValidationError(PRICE_MUST_BE_NON_NEGATIVE) from exc
    if not math.isfinite(price) or price < 0:
        raise ValidationError(PRICE_MUST_BE_NON_NEGATIVE)
    return price


def validate_new_product(data: Mapping[str, Any]) -> NewProduct:
    """Check a create request and turn it into a NewProduct.

    Raises ValidationError when name or price is missing, or when the
    price is not a non-negative number.
    """
    name = data.get("name")
    price = data.get("price")
    if _is_blank(name) or _is_blank(price):
        raise ValidationError(NAME_AND_PRICE_REQUIRED)
    check_price(price)
    return NewProduct.from_mapping(data)
