"""Data Transfer Objects: plain containers that cross layer boundaries."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class NewProduct:
    """Input: the fields of a product to create.

    ``name`` and ``price`` are assumed present and valid; optional fields
    left as None receive their defaults in the store.
    """

    name: str
    price: Any
    description: str | None = None
    category: str | None = None
    stock: Any = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> NewProduct:
        return cls(
            name=data["name"],
            price=data["price"],
            description=data.get("description"),
            category=data.get("category"),
            stock=data.get("stock"),
        )
