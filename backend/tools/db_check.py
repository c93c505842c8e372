import json
import sqlite3
import sys

DB = sys.argv[1] if len(sys.argv) > 1 else "dev.db"
PRODUCT_ID = sys.argv[2] if len(sys.argv) > 2 else None

conn = sqlite3.connect(DB)
cur = conn.cursor()

print("=== Recent Bookings ===")
cur.execute(
    "SELECT id, device_type, contact_phone, status, estimate, final_amount, created_at FROM bookings ORDER BY created_at DESC LIMIT 20"
)
for r in cur.fetchall():
    print(r)

print("\n=== Products ===")
cur.execute("SELECT id, category, title, price, offer_percentage, stock, hide_product FROM products ORDER BY category, title")
for r in cur.fetchall():
    print(r)

if PRODUCT_ID:
    print(f"\n=== Price history for product {PRODUCT_ID} ===")
    cur.execute("SELECT price_history FROM products WHERE id=?", (PRODUCT_ID,))
    row = cur.fetchone()
    if not row:
        print("not found")
    else:
        for entry in json.loads(row[0] or "[]"):
            print(entry)

conn.close()
