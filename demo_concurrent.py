import asyncio
from sdk.pystore import StoreClient

BURST = 20

async def create_one(client, i):
    r = await client.create_product_async(f"Item {i}", "burst", float(i), "Burst", i % 2 == 0)
    if r.status_code == 201:
        return r.json()["id"]
    print(f"❌ create {i} failed: {r.status_code} {r.text}")
    return None

async def main():
    c = StoreClient(base_url="http://127.0.0.1:3000")
    before = c.stats()["totalProducts"]

    print(f"\n⚡ Creating {BURST} products concurrently...")
    ids = await asyncio.gather(*(create_one(c, i) for i in range(BURST)))
    created = [pid for pid in ids if pid]

    print(f"✅ {len(created)} created, {len(set(created))} distinct ids")
    print("📊 Stats:", c.stats())

    # clean up what the burst added
    for pid in created:
        c.delete_product(pid)
    after = c.stats()["totalProducts"]
    print(f"🧹 Back to {after} products (started with {before})")

if __name__ == "__main__":
    asyncio.run(main())
