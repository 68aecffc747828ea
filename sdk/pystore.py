# sdk/pystore.py
import requests
import httpx
from typing import Any, Dict, Optional

DEFAULT_API_KEY = "12345"


class StoreClient:
    def __init__(self, base_url: str = "http://localhost:3000", api_key: str = DEFAULT_API_KEY,
                 timeout: int = 10, session: Optional[Any] = None):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        # anything with a requests-style get/post/put/delete works here
        self.session = session if session is not None else requests.Session()
        self.session.headers.update({"x-api-key": api_key})

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def hello(self) -> str:
        r = self.session.get(self._url("/"), timeout=self.timeout)
        r.raise_for_status()
        return r.text

    # Products
    def list_products(self, category: Optional[str] = None, search: Optional[str] = None,
                      page: Optional[int] = None, limit: Optional[int] = None) -> Dict[str, Any]:
        params = {}
        if category:
            params["category"] = category
        if search:
            params["search"] = search
        if page is not None:
            params["page"] = str(page)
        if limit is not None:
            params["limit"] = str(limit)
        r = self.session.get(self._url("/api/products"), params=params, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_product(self, product_id: str) -> Dict[str, Any]:
        r = self.session.get(self._url(f"/api/products/{product_id}"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def create_product(self, name: str, description: str, price: float, category: str,
                       in_stock: bool = True) -> Dict[str, Any]:
        r = self.session.post(self._url("/api/products"), json={
            "name": name, "description": description, "price": price,
            "category": category, "inStock": in_stock
        }, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def update_product(self, product_id: str, **changes) -> Dict[str, Any]:
        # in_stock is accepted as a keyword for symmetry with create_product
        if "in_stock" in changes:
            changes["inStock"] = changes.pop("in_stock")
        r = self.session.put(self._url(f"/api/products/{product_id}"), json=changes, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def delete_product(self, product_id: str) -> Dict[str, Any]:
        r = self.session.delete(self._url(f"/api/products/{product_id}"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def stats(self) -> Dict[str, Any]:
        r = self.session.get(self._url("/api/products/stats"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Async create (example)
    async def create_product_async(self, name: str, description: str, price: float, category: str,
                                   in_stock: bool = True) -> httpx.Response:
        payload = {"name": name, "description": description, "price": price,
                   "category": category, "inStock": in_stock}
        async with httpx.AsyncClient(timeout=self.timeout, headers={"x-api-key": self.api_key}) as client:
            return await client.post(self._url("/api/products"), json=payload)


def _parse_bool(raw: str) -> bool:
    return raw.strip().lower() in ("1", "true", "yes", "y")


if __name__ == "__main__":
    import argparse
    from rich import print

    parser = argparse.ArgumentParser(description="PyStore CLI")
    parser.add_argument("--base-url", default="http://127.0.0.1:3000")
    parser.add_argument("--api-key", default=DEFAULT_API_KEY)
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list-products", help="List products")
    lp.add_argument("--category", help="Filter by category (case-insensitive)")
    lp.add_argument("--search", help="Substring match on product name")
    lp.add_argument("--page", type=int, help="Page number, 1-based")
    lp.add_argument("--limit", type=int, help="Page size")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True, help="ID of the product")

    cp = subparsers.add_parser("create-product", help="Create a new product")
    cp.add_argument("--name", required=True)
    cp.add_argument("--description", required=True)
    cp.add_argument("--price", type=float, required=True)
    cp.add_argument("--category", required=True)
    cp.add_argument("--in-stock", default="true", help="true/false")

    up = subparsers.add_parser("update-product", help="Update fields of a product")
    up.add_argument("--product-id", required=True)
    up.add_argument("--name")
    up.add_argument("--description")
    up.add_argument("--price", type=float)
    up.add_argument("--category")
    up.add_argument("--in-stock", help="true/false")

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", required=True)

    subparsers.add_parser("stats", help="Count products per category")

    args = parser.parse_args()
    c = StoreClient(base_url=args.base_url, api_key=args.api_key)

    if args.command == "list-products":
        print(c.list_products(args.category, args.search, args.page, args.limit))

    elif args.command == "get-product":
        print(c.get_product(args.product_id))

    elif args.command == "create-product":
        print(c.create_product(args.name, args.description, args.price, args.category,
                               _parse_bool(args.in_stock)))

    elif args.command == "update-product":
        changes = {k: v for k, v in {
            "name": args.name, "description": args.description,
            "price": args.price, "category": args.category,
        }.items() if v is not None}
        if args.in_stock is not None:
            changes["in_stock"] = _parse_bool(args.in_stock)
        print(c.update_product(args.product_id, **changes))

    elif args.command == "delete-product":
        print(c.delete_product(args.product_id))

    elif args.command == "stats":
        print(c.stats())
