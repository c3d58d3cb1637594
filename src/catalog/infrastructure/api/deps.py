"""FastAPI dependencies."""

from fastapi import Request

from catalog.application.product_store import ProductStore


def get_store(request: Request) -> ProductStore:
    return request.app.state.store
