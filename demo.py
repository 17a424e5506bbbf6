#!/usr/bin/env python
from sdk.client import ProductClient, ProductClientError


def main():
    c = ProductClient(base_url="http://127.0.0.1:3000")

    # -----------------------------
    # Seed data
    # -----------------------------
    print("Listing seed products...")
    print(c.list_products())

    print("\nCategory stats...")
    print(c.category_stats())

    # -----------------------------
    # Create
    # -----------------------------
    print("\nCreating products...")
    kettle = c.create_product("Kettle", "1.7L electric kettle", 35, "kitchen", True)
    sample = c.create_product("Sample Cable", "Free USB-C cable", 0, "electronics", False)
    print(kettle)
    print(sample)

    # -----------------------------
    # Filter, paginate and search
    # -----------------------------
    print("\nKitchen products (query is case insensitive)...")
    print(c.list_products(category="Kitchen"))

    print("\nSecond page, two per page...")
    print(c.list_products(page=2, limit=2))

    print("\nSearching for 'lap'...")
    print(c.search_products("lap"))

    # -----------------------------
    # Update and delete
    # -----------------------------
    print("\nReplacing the kettle...")
    print(c.update_product(kettle["id"], "Kettle", "1.7L kettle, now in steel", 39, "kitchen", False))

    print("\nDeleting the sample cable...")
    c.delete_product(sample["id"])
    try:
        c.get_product(sample["id"])
    except ProductClientError as e:
        print(f"Lookup after delete: {e}")

    print("\nMissing fields are rejected...")
    try:
        c.create_product("No category", "This one has an empty category", 10, "", True)
    except ProductClientError as e:
        print(f"Create failed: {e}")

    print("\nFinal stats...")
    print(c.category_stats())


if __name__ == "__main__":
    main()
