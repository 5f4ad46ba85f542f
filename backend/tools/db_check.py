import sqlite3
import sys

DB = sys.argv[1] if len(sys.argv) > 1 else "inventory.db"
SKU = sys.argv[2] if len(sys.argv) > 2 else None

conn = sqlite3.connect(DB)
cur = conn.cursor()

print("=== Low stock ===")
cur.execute(
    "SELECT id, sku, name, quantity, minimum_stock_level FROM products WHERE quantity <= minimum_stock_level ORDER BY name"
)
for r in cur.fetchall():
    print(r)

print("\n=== Recent movements ===")
if SKU:
    cur.execute(
        "SELECT m.id, p.sku, m.movement_type, m.quantity, m.reason, m.created_by, m.created_at "
        "FROM stock_movements m JOIN products p ON p.id = m.product_id WHERE p.sku=? "
        "ORDER BY m.created_at DESC, m.id DESC LIMIT 50",
        (SKU,),
    )
else:
    cur.execute(
        "SELECT m.id, p.sku, m.movement_type, m.quantity, m.reason, m.created_by, m.created_at "
        "FROM stock_movements m JOIN products p ON p.id = m.product_id "
        "ORDER BY m.created_at DESC, m.id DESC LIMIT 20"
    )
for r in cur.fetchall():
    print(r)

print("\n=== Quantity not explained by the ledger (e.g. initial quantity set at creation) ===")
cur.execute(
    "SELECT p.sku, p.quantity, COALESCE(SUM(m.quantity), 0) AS ledger "
    "FROM products p LEFT JOIN stock_movements m ON m.product_id = p.id "
    "GROUP BY p.id HAVING p.quantity != ledger"
)
for r in cur.fetchall():
    print(r)

conn.close()
