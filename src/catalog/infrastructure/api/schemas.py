"""Response schemas for the HTTP API.

Products are exposed with the same camelCase keys as the stored document.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from catalog.domain.model.product import Product, format_timestamp


class ProductSchema(BaseModel):
    """A product as returned by the API."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    description: str
    price: float | None
    category: str
    stock: int
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")

    @classmethod
    def from_domain(cls, product: Product) -> ProductSchema:
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            category=product.category,
            stock=product.stock,
            created_at=format_timestamp(product.created_at),
            updated_at=format_timestamp(product.updated_at),
        )


class ProductListResponse(BaseModel):
    success: bool = True
    count: int
    products: list[ProductSchema]


class ProductDetailResponse(BaseModel):
    success: bool = True
    product: ProductSchema


class ProductResponse(BaseModel):
    """Envelope returned by create, update and delete."""

    success: bool = True
    message: str
    product: ProductSchema


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    success: bool = False
    message: str
    error: str | None = Field(default=None, description="Underlying error, if any")


class HealthResponse(BaseModel):
    success: bool = True
    message: str
    timestamp: str
    version: str
    uptime: float = Field(description="Seconds since the app was created")
