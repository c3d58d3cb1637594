"""Abstract persistence for the Catalog document.

Defined in the domain layer so the domain never depends on
infrastructure. The whole document is read and written at once.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from catalog.domain.model.catalog import Catalog


class CatalogRepository(ABC):

    @abstractmethod
    def load(self) -> Catalog:
        """Return the stored catalog; an absent document is an empty catalog."""

    @abstractmethod
    def save(self, catalog: Catalog) -> bool:
        """Overwrite the stored document. Return False if it was not written."""

    @abstractmethod
    def initialize(self) -> bool:
        """Create an empty document if none exists. Return True if one was created."""
