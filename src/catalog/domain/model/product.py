"""Product entity.

A product is one entry of the catalog document. Its ``id`` and
``created_at`` never change once assigned; every other attribute can be
overwritten by an update, which also refreshes ``updated_at``.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from catalog.domain.exceptions import ValidationError

DEFAULT_CATEGORY = "General"

# Attributes an update is allowed to overwrite, in document order.
UPDATABLE_FIELDS = ("name", "description", "price", "category", "stock")

_PRODUCT_ID = re.compile(r"[+-]?[0-9]+")


def utc_now() -> datetime:
    """Current UTC time truncated to milliseconds (the stored precision)."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def format_timestamp(value: datetime) -> str:
    """Render as ISO-8601 UTC with millisecond precision, e.g. ``2024-05-01T10:00:00.000Z``."""
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def to_price(value: Any) -> float:
    """Coerce an incoming price to a finite float. Sign is not checked here."""
    if isinstance(value, bool):
        raise ValidationError(f"Invalid price: {value!r}")
    try:
        price = float(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid price: {value!r}") from exc
    if not math.isfinite(price):
        raise ValidationError(f"Invalid price: {value!r}")
    return price


def to_stock(value: Any) -> int:
    """Coerce an incoming stock level to int, truncating fractional input."""
    if isinstance(value, bool):
        raise ValidationError(f"Invalid stock: {value!r}")
    try:
        if isinstance(value, str):
            return int(float(value.strip()))
        return int(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ValidationError(f"Invalid stock: {value!r}") from exc


def parse_product_id(value: Any) -> int | None:
    """Coerce an external identifier (often text) to an int.

    Returns None when the value is not an integer, which callers treat
    the same as an id that matches nothing.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if _PRODUCT_ID.fullmatch(text):
            return int(text)
    return None


def to_text(value: Any) -> str:
    return "" if value is None else str(value)


_COERCIONS = {
    "name": to_text,
    "description": to_text,
    "price": to_price,
    "category": to_text,
    "stock": to_stock,
}


@dataclass
class Product:
    """A single catalog entry.

    ``price`` is None only for records read back from a document that
    stored it as null.
    """

    id: int
    name: str
    price: float | None
    description: str = ""
    category: str = DEFAULT_CATEGORY
    stock: int = 0
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @classmethod
    def create(
        cls,
        product_id: int,
        name: str,
        price: Any,
        description: str | None = None,
        category: str | None = None,
        stock: Any = None,
        now: datetime | None = None,
        default_category: str = DEFAULT_CATEGORY,
    ) -> Product:
        """Build a new product, applying defaults and coercions.

        Both timestamps are set to the same instant.
        """
        now = now or utc_now()
        return cls(
            id=product_id,
            name=to_text(name),
            price=to_price(price),
            description=to_text(description),
            category=to_text(category) or default_category,
            stock=to_stock(stock) if stock is not None else 0,
            created_at=now,
            updated_at=now,
        )

    def apply_changes(self, changes: Mapping[str, Any], now: datetime | None = None) -> None:
        """Overwrite every updatable field present in ``changes``.

        Presence is what counts: an empty name or a zero stock still
        overwrites. Unknown keys (including ``id``) are ignored.
        ``updated_at`` is refreshed even when nothing else changed.
        """
        coerced = {
            name: _COERCIONS[name](changes[name])
            for name in UPDATABLE_FIELDS
            if name in changes
        }
        for name, value in coerced.items():
            setattr(self, name, value)
        self.touch(now)

    def touch(self, now: datetime | None = None) -> None:
        # Never move backwards, even if the wall clock does.
        self.updated_at = max(now or utc_now(), self.updated_at)
