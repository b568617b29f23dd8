#!/usr/bin/env python3
"""
Import the product catalog from a JSON file.

Usage:
    python scripts/seed/products.py [path/to/products_import.json]

Records are upserted by SKU, so the script can be re-run after editing
the file. Defaults to products_import.json next to this script.
"""

import asyncio
import json
import os
import sys

# Add project root to path
project_root = os.path.dirname(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
)
sys.path.insert(0, project_root)

from libs.common.config import get_settings
from libs.db.config import build_engine, build_sessionmaker
from pydantic import TypeAdapter
from services.store_service.schemas import ProductImport
from services.store_service.services.catalog import upsert_products

DEFAULT_FILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), "products_import.json")


def load_records(path: str) -> list[ProductImport]:
    with open(path, encoding="utf-8") as fh:
        raw = json.load(fh)
    return TypeAdapter(list[ProductImport]).validate_python(raw)


async def seed_products(path: str):
    records = load_records(path)
    print(f"Found {len(records)} products in {path}")

    engine = build_engine(get_settings())
    session_factory = build_sessionmaker(engine)
    try:
        async with session_factory() as session:
            async with session.begin():
                created, updated = await upsert_products(session, records)
        print(f"Catalog synced: {created} created, {updated} updated")
    finally:
        await engine.dispose()


if __name__ == "__main__":
    source = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_FILE
    if not os.path.exists(source):
        print(f"File not found: {source}")
        sys.exit(1)
    asyncio.run(seed_products(source))
