from typing import Optional, Dict, Any

from fastapi import HTTPException

from .core import ProductIn, ProductUpdate
from .database import ProductStore

# This file contains the core logic for all product endpoints.

PRODUCT_NOT_FOUND = "Product not found"
PRODUCT_DELETED = "Product deleted successfully"


def _coerce_positive_int(raw: Optional[str], default: int) -> int:
    """
    Query values arrive as text. Anything that is not an integer >= 1
    (missing, "abc", "0", "-2", "1.5") falls back to the default.
    """
    if raw is None:
        return default
    try:
        value = int(raw)
    except (ValueError, TypeError):
        return default
    return value if value >= 1 else default


# Product endpoints
async def list_products_logic(
    store: ProductStore,
    category: Optional[str] = None,
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    default_page: int = 1,
    default_limit: int = 5,
) -> Dict[str, Any]:
    page_n = _coerce_positive_int(page, default_page)
    limit_n = _coerce_positive_int(limit, default_limit)
    total, results = await store.list(category=category, search=search, page=page_n, limit=limit_n)
    return {"total": total, "page": page_n, "limit": limit_n, "results": results}

async def product_stats_logic(store: ProductStore) -> Dict[str, Any]:
    return await store.stats()

async def get_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    p = await store.get(product_id)
    if p is None:
        raise HTTPException(status_code=404, detail=PRODUCT_NOT_FOUND)
    return p

async def create_product_logic(store: ProductStore, payload: ProductIn) -> Dict[str, Any]:
    return await store.create(payload)

async def update_product_logic(store: ProductStore, product_id: str, payload: ProductUpdate) -> Dict[str, Any]:
    p = await store.update(product_id, payload.changes())
    if p is None:
        raise HTTPException(status_code=404, detail=PRODUCT_NOT_FOUND)
    return p

async def delete_product_logic(store: ProductStore, product_id: str) -> Dict[str, str]:
    if not await store.delete(product_id):
        raise HTTPException(status_code=404, detail=PRODUCT_NOT_FOUND)
    return {"message": PRODUCT_DELETED}
