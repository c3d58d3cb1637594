"""Composition root: wires concrete implementations to domain interfaces.

This is the only place that knows about *all* layers. Adapters ask it
for a ready ProductStore instead of building one themselves.
"""

from __future__ import annotations

from catalog.application.product_store import ProductStore
from catalog.config import Settings, get_settings
from catalog.infrastructure.persistence.json_catalog_repository import (
    JsonCatalogRepository,
)


def catalog_repository(settings: Settings | None = None) -> JsonCatalogRepository:
    settings = settings or get_settings()
    return JsonCatalogRepository(settings.data_file, strict=settings.strict_storage)


def product_store(settings: Settings | None = None) -> ProductStore:
    """Build a store, creating an empty catalog document on first boot."""
    settings = settings or get_settings()
    repo = catalog_repository(settings)
    repo.initialize()
    return ProductStore(repo, default_category=settings.default_category)
