"""
Hammer one product with concurrent stock removals against a running server.

With the ledger serializing writes per product, the final quantity equals the
starting quantity minus the successful removals, never goes negative, and the
number of successful removals matches the new movement rows.

    python tools/concurrency_stock.py --sku ELEC-001 --workers 16 --qty 2
"""
import argparse
import concurrent.futures
import os

import requests

BASE = os.environ.get("INVENTORY_BASE", "http://127.0.0.1:8000")


def login(username, password):
    r = requests.post(f"{BASE}/api/auth/login", json={"username": username, "password": password}, timeout=10)
    r.raise_for_status()
    return {"Authorization": f"Bearer {r.json()['token']}"}


def remove_task(i, headers, product_id, qty):
    payload = {"productId": product_id, "quantity": qty, "reason": f"concurrency-{i}"}
    try:
        r = requests.post(f"{BASE}/api/stock-movements/remove", json=payload, headers=headers, timeout=30)
        return (i, r.status_code, r.text)
    except requests.RequestException as e:
        return (i, "ERR", str(e))


def run(workers, sku, qty, username, password):
    headers = login(username, password)
    product = requests.get(f"{BASE}/api/products/sku/{sku}", headers=headers, timeout=10).json()
    before_qty = product["quantity"]
    before_moves = len(
        requests.get(f"{BASE}/api/stock-movements/product/{product['id']}", headers=headers, timeout=10).json()
    )
    print(f"Running remove test: workers={workers}, sku={sku}, qty={qty}, starting quantity={before_qty}")

    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as ex:
        futures = [ex.submit(remove_task, i, headers, product["id"], qty) for i in range(workers)]
        results = [f.result() for f in futures]

    ok = [r for r in results if r[1] == 200]
    rejected = [r for r in results if r[1] == 409]
    errors = [r for r in results if r[1] not in (200, 409)]
    after_qty = requests.get(f"{BASE}/api/products/{product['id']}", headers=headers, timeout=10).json()["quantity"]
    after_moves = len(
        requests.get(f"{BASE}/api/stock-movements/product/{product['id']}", headers=headers, timeout=10).json()
    )

    print(f"ok={len(ok)} rejected={len(rejected)} errors={len(errors)}")
    for r in errors:
        print("  ", r)
    print(f"quantity {before_qty} -> {after_qty} (expected {before_qty - len(ok) * qty})")
    print(f"movements {before_moves} -> {after_moves} (expected {before_moves + len(ok)})")
    consistent = after_qty == before_qty - len(ok) * qty and after_moves == before_moves + len(ok)
    print("CONSISTENT" if consistent else "LOST UPDATE DETECTED")
    return consistent


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Concurrent stock removal check.")
    parser.add_argument("--sku", default="ELEC-001")
    parser.add_argument("--qty", type=int, default=1)
    parser.add_argument("--workers", type=int, default=8)
    parser.add_argument("--username", default="cashier")
    parser.add_argument("--password", default="cashier123")
    args = parser.parse_args()

    raise SystemExit(0 if run(args.workers, args.sku, args.qty, args.username, args.password) else 1)
