"""Product CRUD endpoints.

Thin translation between HTTP and the ProductStore: request validation
for creates happens here, a None result from the store becomes a 404.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from catalog.application.product_store import ProductStore
from catalog.application.validation import validate_new_product
from catalog.infrastructure.api.deps import get_store
from catalog.infrastructure.api.schemas import (
    ErrorResponse,
    ProductDetailResponse,
    ProductListResponse,
    ProductResponse,
    ProductSchema,
)

router = APIRouter()

PRODUCT_NOT_FOUND = "Product not found"

_not_found = {404: {"model": ErrorResponse}}


def _not_found_response() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=ErrorResponse(message=PRODUCT_NOT_FOUND).model_dump(exclude_none=True),
    )


@router.get("", response_model=ProductListResponse)
def list_products(store: Annotated[ProductStore, Depends(get_store)]) -> ProductListResponse:
    products = store.list_all()
    return ProductListResponse(
        count=len(products),
        products=[ProductSchema.from_domain(p) for p in products],
    )


@router.get(
    "/{product_id}",
    response_model=ProductDetailResponse,
    responses=_not_found,
)
def get_product(
    product_id: str,
    store: Annotated[ProductStore, Depends(get_store)],
) -> ProductDetailResponse | JSONResponse:
    product = store.get(product_id)
    if product is None:
        return _not_found_response()
    return ProductDetailResponse(product=ProductSchema.from_domain(product))


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
def create_product(
    payload: Annotated[dict[str, Any], Body()],
    store: Annotated[ProductStore, Depends(get_store)],
) -> ProductResponse:
    product = store.create(validate_new_product(payload))
    return ProductResponse(message="Product created", product=ProductSchema.from_domain(product))


@router.put("/{product_id}", response_model=ProductResponse, responses=_not_found)
def update_product(
    product_id: str,
    store: Annotated[ProductStore, Depends(get_store)],
    changes: Annotated[dict[str, Any] | None, Body()] = None,
) -> ProductResponse | JSONResponse:
    product = store.update(product_id, changes or {})
    if product is None:
        return _not_found_response()
    return ProductResponse(message="Product updated", product=ProductSchema.from_domain(product))


@router.delete("/{product_id}", response_model=ProductResponse, responses=_not_found)
def delete_product(
    product_id: str,
    store: Annotated[ProductStore, Depends(get_store)],
) -> ProductResponse | JSONResponse:
    product = store.delete(product_id)
    if product is None:
        return _not_found_response()
    return ProductResponse(message="Product deleted", product=ProductSchema.from_domain(product))
