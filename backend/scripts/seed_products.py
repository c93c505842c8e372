#!/usr/bin/env python3
"""
Seed the catalogue from a JSON file.

Accepts either a list of product objects or {"items": [...]}. Each entry
goes through CatalogService.create, so the same validation and the initial
price-history entry apply. Entries that fail validation are reported and
skipped.

Usage:
    python scripts/seed_products.py --file products.json
"""
import argparse
import json
import os
import sys

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from serviceshop.db import SessionLocal, init_db
from serviceshop.errors import ValidationError
from serviceshop.services.catalog_service import CatalogService


def _normalize_entry(entry):
    """Map a few common alternative key names onto the admin product fields."""
    images = entry.get("images") or entry.get("image_urls") or entry.get("image") or []
    return {
        "code": entry.get("code") or entry.get("sku"),
        "title": entry.get("title") or entry.get("name"),
        "category": entry.get("category") or "computers",
        "description": entry.get("description") or "",
        "price": entry.get("price", entry.get("amount")),
        "offerPercentage": entry.get("offerPercentage", entry.get("offer", 0)),
        "stock": entry.get("stock", entry.get("quantity", 0)),
        "hideProduct": entry.get("hideProduct", False),
        "images": images,
        "offerExpiry": entry.get("offerExpiry"),
    }


def seed_from_file(path: str) -> int:
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise RuntimeError(f"Failed to parse JSON from {path}: {e}")

    if isinstance(data, dict):
        source_list = data.get("items") if isinstance(data.get("items"), list) else list(data.values())
    elif isinstance(data, list):
        source_list = data
    else:
        source_list = []

    init_db()
    db = SessionLocal()
    svc = CatalogService(db)
    created = 0
    try:
        for entry in source_list:
            fields = _normalize_entry(entry)
            try:
                svc.create(fields)
                created += 1
            except ValidationError as e:
                print(f"skipped {fields.get('title')!r}: {e.message} {e.errors}")
    finally:
        db.close()
    print("Seeded products:", created)
    return created


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", "-f", required=True, help="Path to a product JSON list")
    args = parser.parse_args()
    if not os.path.exists(args.file):
        print("File not found:", args.file)
        sys.exit(1)
    seed_from_file(args.file)
