# productapi/routes.py
from typing import Optional

from fastapi import APIRouter, Body, Depends, Request, Response

from .core import validate_product
from .database import ProductStore
from .models import ProductIn

router = APIRouter(prefix="/api/products", tags=["products"])


def get_store(request: Request) -> ProductStore:
    return request.app.state.store


# ---------------------------
# Collection endpoints
# ---------------------------
@router.get("")
async def list_products(category: Optional[str] = None,
                        page: Optional[str] = None,
                        limit: Optional[str] = None,
                        store: ProductStore = Depends(get_store)):
    items = store.list_products(category)
    return store.paginate(items, page, limit).model_dump()


# Literal paths must be registered before /{product_id}.
@router.get("/search")
async def search_products(q: Optional[str] = None, store: ProductStore = Depends(get_store)):
    return store.search_by_name(q)


@router.get("/stats")
async def product_stats(store: ProductStore = Depends(get_store)):
    return store.category_stats()


@router.post("", status_code=201)
async def create_product(payload: Optional[ProductIn] = Body(None),
                         store: ProductStore = Depends(get_store)):
    validate_product(payload)
    return store.create(payload)


# ---------------------------
# Single-product endpoints
# ---------------------------
@router.get("/{product_id}")
async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
    return store.get(product_id)


@router.put("/{product_id}")
async def update_product(product_id: str,
                         payload: Optional[ProductIn] = Body(None),
                         store: ProductStore = Depends(get_store)):
    # an unknown id is a 404 whatever the payload looks like
    store.get(product_id)
    validate_product(payload)
    return store.update(product_id, payload)


@router.delete("/{product_id}", status_code=204)
async def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
    store.delete(product_id)
    return Response(status_code=204)
