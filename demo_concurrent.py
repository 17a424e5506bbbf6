import asyncio

from sdk.client import ProductClient


async def main():
    c = ProductClient(base_url="http://127.0.0.1:3000")
    before = c.category_stats()
    print(f"📊 Stats before: {before}")

    payloads = [
        {
            "name": f"Widget {i}",
            "description": f"Bulk-created widget #{i}",
            "price": i * 5,
            "category": "widgets" if i % 2 else "gadgets",
            "inStock": i % 3 != 0,
        }
        for i in range(20)
    ]

    print("\n⚡ Creating 20 products concurrently...")
    created = await c.create_many_async(payloads)
    ids = {p["id"] for p in created}
    print(f"✅ Created {len(created)} products with {len(ids)} distinct ids")

    print(f"\n📊 Stats after: {c.category_stats()}")

    for p in created:
        c.delete_product(p["id"])
    print(f"🧹 Cleaned up, stats back to: {c.category_stats()}")


if __name__ == "__main__":
    asyncio.run(main())
