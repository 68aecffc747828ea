#!/usr/bin/env python
import requests
from sdk.pystore import StoreClient

def main():
    c = StoreClient(base_url="http://127.0.0.1:3000")

    print(c.hello())

    # -----------------------------
    # Create products
    # -----------------------------
    print("\nCreating products...")
    widget = c.create_product("Widget", "d", 9.99, "Tools", True)
    c.create_product("Smartphone", "6.1 inch screen", 699, "Electronics", True)
    c.create_product("Phone case", "Silicone", 19.5, "electronics", False)
    print(widget)

    # -----------------------------
    # List / filter / search
    # -----------------------------
    print("\nListing products...")
    print(c.list_products())
    print("\nCategory 'Electronics' (any casing)...")
    print(c.list_products(category="Electronics"))
    print("\nSearching for 'phone'...")
    print(c.list_products(search="phone"))

    # -----------------------------
    # Get, update, stats
    # -----------------------------
    print("\nFetching the widget...")
    print(c.get_product(widget["id"]))
    print("\nRaising its price...")
    print(c.update_product(widget["id"], price=12.5))
    print("\nStats...")
    print(c.stats())

    # -----------------------------
    # Delete, then look it up again
    # -----------------------------
    print("\nDeleting the widget...")
    print(c.delete_product(widget["id"]))
    try:
        c.get_product(widget["id"])
    except requests.exceptions.HTTPError as e:
        print(f"Lookup after delete: {e.response.status_code} {e.response.json()}")

if __name__ == "__main__":
    main()
