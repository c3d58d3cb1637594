"""Catalog document aggregate.

The catalog is the single persisted unit: an ordered list of products.
Insertion order is preserved and is the order in which products are listed.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from catalog.domain.model.product import Product


@dataclass
class Catalog:
    """Aggregate root holding every product.

    Invariants:
    - product ids are unique
    - new ids are ``max(existing ids) + 1``, or ``1`` when empty, so deleting
      the highest id and creating again reissues that id
    """

    products: list[Product] = field(default_factory=list)

    def next_id(self) -> int:
        if not self.products:
            return 1
        return max(p.id for p in self.products) + 1

    def find(self, product_id: int) -> Product | None:
        for product in self.products:
            if product.id == product_id:
                return product
        return None

    def add(self, product: Product) -> None:
        if self.find(product.id) is not None:
            raise ValueError(f"Duplicate product id {product.id}")
        self.products.append(product)

    def remove(self, product_id: int) -> Product | None:
        """Remove and return the product, keeping the order of the rest."""
        for i, product in enumerate(self.products):
            if product.id == product_id:
                return self.products.pop(i)
        return None

    def __len__(self) -> int:
        return len(self.products)
