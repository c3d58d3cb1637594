"""Application service: the Product Store.

Every operation runs a full load -> compute -> save cycle against the
catalog document. The cycles are serialized by a per-store lock so two
requests handled on different threads cannot interleave and lose a write
or hand out the same id.

Missing products are reported as None, never as an exception.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

import structlog

from catalog.application.dto import NewProduct
from catalog.domain.model.catalog import Catalog
from catalog.domain.model.product import (
    DEFAULT_CATEGORY,
    Product,
    parse_product_id,
    utc_now,
)
from catalog.domain.repository.catalog_repository import CatalogRepository

logger = structlog.get_logger(__name__)


class ProductStore:

    def __init__(
        self,
        catalog_repo: CatalogRepository,
        default_category: str = DEFAULT_CATEGORY,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._catalog_repo = catalog_repo
        self._default_category = default_category
        self._clock = clock
        self._lock = threading.Lock()

    # --- Queries --------------------------------------------------------------

    def list_all(self) -> list[Product]:
        """Return every product in insertion order."""
        with self._lock:
            return self._catalog_repo.load().products

    def get(self, product_id: int | str) -> Product | None:
        pid = parse_product_id(product_id)
        if pid is None:
            return None
        with self._lock:
            return self._catalog_repo.load().find(pid)

    # --- Commands -------------------------------------------------------------

    def create(self, new_product: NewProduct) -> Product:
        """Append a new product with the next id and return it."""
        with self._lock:
            catalog = self._catalog_repo.load()
            product = Product.create(
                product_id=catalog.next_id(),
                name=new_product.name,
                price=new_product.price,
                description=new_product.description,
                category=new_product.category,
                stock=new_product.stock,
                now=self._clock(),
                default_category=self._default_category,
            )
            catalog.add(product)
            self._save(catalog, "create", product.id)

        logger.info("Product created", product_id=product.id, name=product.name)
        return product

    def update(self, product_id: int | str, changes: Mapping[str, Any]) -> Product | None:
        """Apply a partial update. Only keys present in ``changes`` are written."""
        pid = parse_product_id(product_id)
        if pid is None:
            return None

        with self._lock:
            catalog = self._catalog_repo.load()
            product = catalog.find(pid)
            if product is None:
                return None
            product.apply_changes(changes, now=self._clock())
            self._save(catalog, "update", pid)

        logger.info("Product updated", product_id=pid, fields=sorted(changes))
        return product

    def delete(self, product_id: int | str) -> Product | None:
        """Remove a product and return it, or None if there was no such id."""
        pid = parse_product_id(product_id)
        if pid is None:
            return None

        with self._lock:
            catalog = self._catalog_repo.load()
            product = catalog.remove(pid)
            if product is None:
                return None
            self._save(catalog, "delete", pid)

        logger.info("Product deleted", product_id=pid)
        return product

    # --- Internal helpers -----------------------------------------------------

    def _save(self, catalog: Catalog, operation: str, product_id: int) -> None:
        # A failed write in lenient mode still returns the in-memory result.
        if not self._catalog_repo.save(catalog):
            logger.warning(
                "Catalog change not durable",
                operation=operation,
                product_id=product_id,
            )
