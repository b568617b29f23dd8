#!/usr/bin/env python3
"""
Seed sample discount codes for the store.

Creates:
1. WELCOME10 - 10% off the order subtotal
2. B2B50 - fixed 50 RON off the order subtotal

Existing codes are left untouched.
"""

import asyncio
import os
import sys
from decimal import Decimal

# Add project root to path
project_root = os.path.dirname(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
)
sys.path.insert(0, project_root)

from libs.common.config import get_settings
from libs.db.config import build_engine, build_sessionmaker
from services.store_service.models import Discount, DiscountType
from sqlalchemy.future import select

DISCOUNTS = [
    {
        "code": "WELCOME10",
        "description": "10% off your first order.",
        "type": DiscountType.PERCENT,
        "value": Decimal("10"),
        "is_active": True,
    },
    {
        "code": "B2B50",
        "description": "50 RON off for partner installers.",
        "type": DiscountType.FIXED,
        "value": Decimal("50"),
        "is_active": True,
    },
]


async def seed_discounts():
    """Create the sample discount codes if they do not exist yet."""
    engine = build_engine(get_settings())
    session_factory = build_sessionmaker(engine)

    try:
        async with session_factory() as session:
            async with session.begin():
                for discount_data in DISCOUNTS:
                    stmt = select(Discount).where(Discount.code == discount_data["code"])
                    result = await session.execute(stmt)
                    if result.scalar_one_or_none():
                        print(
                            f"  Discount '{discount_data['code']}' already exists, skipping..."
                        )
                        continue

                    session.add(Discount(**discount_data))
                    print(f"  Created discount: {discount_data['code']}")
                    print(f"    - Type: {discount_data['type'].value}")
                    print(f"    - Value: {discount_data['value']}")

        print("\nDiscount codes seeded successfully!")
    finally:
        await engine.dispose()


if __name__ == "__main__":
    print("Seeding store discount codes...")
    asyncio.run(seed_discounts())
