import asyncio
import uuid
from typing import Dict, Any, List, Optional, Tuple

from .core import ProductIn, _make_product_dict

# In-memory product store. One instance per app; every read and write
# happens under the store lock.


def _paginate(items: List[Dict[str, Any]], page: int, limit: int) -> List[Dict[str, Any]]:
    start = (page - 1) * limit
    return items[start:start + limit]


class ProductStore:
    def __init__(self):
        # dicts keep insertion order; updates assign in place and never reorder
        self._products: Dict[str, Dict[str, Any]] = {}
        self._lock = asyncio.Lock()

    async def list(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 5,
    ) -> Tuple[int, List[Dict[str, Any]]]:
        async with self._lock:
            out = [dict(p) for p in self._products.values()]

        if category:
            wanted = category.lower()
            out = [p for p in out if p["category"].lower() == wanted]
        if search:
            term = search.lower()
            out = [p for p in out if term in p["name"].lower()]
        return len(out), _paginate(out, page, limit)

    async def get(self, product_id: str) -> Optional[Dict[str, Any]]:
        async with self._lock:
            p = self._products.get(product_id)
            return dict(p) if p is not None else None

    async def create(self, payload: ProductIn) -> Dict[str, Any]:
        async with self._lock:
            pid = uuid.uuid4().hex
            while pid in self._products:
                pid = uuid.uuid4().hex
            self._products[pid] = _make_product_dict(pid, payload)
            return dict(self._products[pid])

    async def update(self, product_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        async with self._lock:
            existing = self._products.get(product_id)
            if existing is None:
                return None
            merged = {**existing, **changes, "id": existing["id"]}
            self._products[product_id] = merged
            return dict(merged)

    async def delete(self, product_id: str) -> bool:
        async with self._lock:
            if product_id not in self._products:
                return False
            del self._products[product_id]
            return True

    async def stats(self) -> Dict[str, Any]:
        async with self._lock:
            counts: Dict[str, int] = {}
            for p in self._products.values():
                # grouping is case-sensitive, unlike the list filter
                counts[p["category"]] = counts.get(p["category"], 0) + 1
            return {"totalProducts": len(self._products), "countByCategory": counts}

    async def snapshot(self) -> List[Dict[str, Any]]:
        async with self._lock:
            return [dict(p) for p in self._products.values()]

    def __len__(self) -> int:
        return len(self._products)
