"""JSON-file-backed implementation of CatalogRepository.

The document is ``{"products": [...]}``, pretty-printed. Every save
rewrites the whole file through a temporary sibling so a reader never
sees a half-written document.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from catalog.domain.exceptions import (
    CatalogCorruptedError,
    PersistenceError,
    ValidationError,
)
from catalog.domain.model.catalog import Catalog
from catalog.domain.model.product import (
    DEFAULT_CATEGORY,
    Product,
    format_timestamp,
    parse_product_id,
    parse_timestamp,
    to_price,
    to_stock,
    to_text,
    utc_now,
)
from catalog.domain.repository.catalog_repository import CatalogRepository
from catalog.infrastructure.logging import get_logger

logger = get_logger(__name__)


class JsonCatalogRepository(CatalogRepository):

    def __init__(self, file_path: Path, strict: bool = False) -> None:
        self._file_path = Path(file_path)
        self._strict = strict

    @property
    def file_path(self) -> Path:
        return self._file_path

    # --- CatalogRepository interface ------------------------------------------

    def load(self) -> Catalog:
        if not self._file_path.exists():
            return Catalog()
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
            return self._to_domain(raw)
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logger.error("Failed to read catalog", path=str(self._file_path), error=str(exc))
            if self._strict:
                raise CatalogCorruptedError(
                    f"Catalog document {self._file_path} is unreadable: {exc}"
                ) from exc
            return Catalog()

    def save(self, catalog: Catalog) -> bool:
        try:
            self._persist_raw(self._to_raw(catalog))
        except OSError as exc:
            logger.error("Failed to write catalog", path=str(self._file_path), error=str(exc))
            if self._strict:
                raise PersistenceError(
                    f"Catalog document {self._file_path} could not be written: {exc}"
                ) from exc
            return False
        return True

    def initialize(self) -> bool:
        if self._file_path.exists():
            return False
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._persist_raw({"products": []})
        logger.info("Catalog initialized", path=str(self._file_path))
        return True

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def product_to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "description": product.description,
            "price": product.price,
            "category": product.category,
            "stock": product.stock,
            "createdAt": format_timestamp(product.created_at),
            "updatedAt": format_timestamp(product.updated_at),
        }

    @staticmethod
    def product_to_domain(raw: dict) -> Product | None:
        """Read one record, defaulting any field that is missing or unusable.

        Returns None for a record without an integer id.
        """
        if not isinstance(raw, dict):
            return None
        product_id = parse_product_id(raw.get("id"))
        if product_id is None:
            return None

        created_at = _read_timestamp(raw.get("createdAt"))
        updated_at = _read_timestamp(raw.get("updatedAt"))
        created_at = created_at or updated_at or utc_now()
        return Product(
            id=product_id,
            name=to_text(raw.get("name")),
            description=to_text(raw.get("description")),
            price=_read_price(raw.get("price")),
            category=to_text(raw.get("category", DEFAULT_CATEGORY)),
            stock=_read_stock(raw.get("stock")),
            created_at=created_at,
            updated_at=updated_at or created_at,
        )

    @classmethod
    def _to_raw(cls, catalog: Catalog) -> dict:
        return {"products": [cls.product_to_raw(p) for p in catalog.products]}

    @classmethod
    def _to_domain(cls, raw: dict) -> Catalog:
        if not isinstance(raw, dict):
            raise TypeError(f"expected a JSON object, got {type(raw).__name__}")
        records = raw.get("products") or []
        if not isinstance(records, list):
            raise TypeError(f"expected \"products\" to be a list, got {type(records).__name__}")

        products = []
        for record in records:
            product = cls.product_to_domain(record)
            if product is None:
                logger.warning("Skipping catalog record without an id", record=record)
                continue
            products.append(product)
        return Catalog(products=products)

    # --- File helpers ---------------------------------------------------------

    def _persist_raw(self, document: dict) -> None:
        tmp_path = self._file_path.with_name(self._file_path.name + ".tmp")
        try:
            tmp_path.write_text(
                json.dumps(document, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
            )
            tmp_path.replace(self._file_path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise


def _read_price(value: Any) -> float | None:
    if value is None:
        return None
    try:
        return to_price(value)
    except ValidationError:
        return None


def _read_stock(value: Any) -> int:
    if value is None:
        return 0
    try:
        return to_stock(value)
    except ValidationError:
        return 0


def _read_timestamp(value: Any) -> datetime | None:
    if not isinstance(value, str):
        return None
    try:
        return parse_timestamp(value)
    except ValueError:
        return None
