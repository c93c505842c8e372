"""
Fire concurrent price updates at one product and report what the price
history ended up with. Without SERIALIZE_PRODUCT_UPDATES several requests
can read the same baseline, so the history may gain more entries than the
number of distinct final prices suggests.

    python tools/concurrency_price_update.py --product 1 --workers 8
"""
import argparse
import concurrent.futures
import os

import requests

BASE = os.environ.get("SHOP_BASE", "http://127.0.0.1:5000")
ADMIN_KEY = os.environ.get("ADMIN_KEY", "")


def update_task(i, product_id, price):
    headers = {"Content-Type": "application/json", "x-admin-key": ADMIN_KEY}
    try:
        r = requests.patch(
            f"{BASE}/api/admin/products/{product_id}",
            json={"price": price},
            headers=headers,
            timeout=20,
        )
        return (i, price, r.status_code)
    except requests.RequestException as e:
        return (i, price, f"ERR {e}")


def history_length(product_id):
    r = requests.get(f"{BASE}/api/admin/products", headers={"x-admin-key": ADMIN_KEY}, timeout=10)
    r.raise_for_status()
    for item in r.json()["items"]:
        if str(item["id"]) == str(product_id):
            return item["price"], len(item["priceHistory"])
    raise SystemExit(f"product {product_id} not found")


def run(workers, product_id, base_price):
    before_price, before_len = history_length(product_id)
    print(f"before: price={before_price} history={before_len}")
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as ex:
        futures = [ex.submit(update_task, i, product_id, base_price + i) for i in range(workers)]
        results = [f.result() for f in futures]
    for r in results:
        print(r)
    after_price, after_len = history_length(product_id)
    print(f"after: price={after_price} history={after_len} (+{after_len - before_len} for {workers} requests)")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Concurrent product price updates.")
    parser.add_argument("--product", required=True)
    parser.add_argument("--workers", type=int, default=8)
    parser.add_argument("--base-price", type=float, default=1000)
    args = parser.parse_args()
    run(args.workers, args.product, args.base_price)
