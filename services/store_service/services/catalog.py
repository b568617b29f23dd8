"""Catalog reads and admin import for the store."""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from libs.common.logging import get_logger
from services.store_service.exceptions import NotFoundError
from services.store_service.models import (
    Discount,
    Product,
    ProductCategory,
    StockStatus,
)
from services.store_service.schemas import ProductImport
from sqlalchemy import Select, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)


@dataclass
class ProductFilters:
    """Optional catalog filters. Unset fields do not constrain the result."""

    category: Optional[ProductCategory] = None
    manufacturer: Optional[str] = None
    protocol: Optional[str] = None
    search: Optional[str] = None
    stock_statuses: list[StockStatus] = field(default_factory=list)
    include_inactive: bool = False


def _contains(term: str) -> str:
    """LIKE pattern matching `term` as a literal substring."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def build_product_query(filters: ProductFilters) -> Select:
    query = select(Product)

    if not filters.include_inactive:
        query = query.where(Product.is_active.is_(True))

    if filters.category:
        query = query.where(Product.category == filters.category)

    if filters.manufacturer:
        query = query.where(Product.manufacturer == filters.manufacturer)

    if filters.protocol:
        query = query.where(Product.protocol.ilike(_contains(filters.protocol), escape="\\"))

    if filters.search:
        pattern = _contains(filters.search)
        query = query.where(
            or_(
                Product.name.ilike(pattern, escape="\\"),
                Product.sku.ilike(pattern, escape="\\"),
            )
        )

    if filters.stock_statuses:
        query = query.where(Product.stock_status.in_(filters.stock_statuses))

    return query.order_by(Product.created_at.desc(), Product.id.desc())


async def list_products(db: AsyncSession, filters: ProductFilters) -> list[Product]:
    """Full filtered product list, newest first."""
    result = await db.execute(build_product_query(filters))
    return list(result.scalars().all())


async def get_product(
    db: AsyncSession, product_id: int, include_inactive: bool = False
) -> Product:
    query = select(Product).where(Product.id == product_id)
    if not include_inactive:
        query = query.where(Product.is_active.is_(True))
    result = await db.execute(query)
    product = result.scalar_one_or_none()
    if not product:
        raise NotFoundError("Product not found")
    return product


async def find_active_discount(db: AsyncSession, code: str) -> Optional[Discount]:
    """Exact, case-sensitive lookup of an active discount code."""
    if not code:
        return None
    result = await db.execute(
        select(Discount).where(Discount.code == code, Discount.is_active.is_(True))
    )
    return result.scalar_one_or_none()


async def validate_discount(db: AsyncSession, code: str) -> Discount:
    discount = await find_active_discount(db, code)
    if not discount:
        raise NotFoundError("Invalid or expired discount code")
    return discount


async def upsert_products(
    db: AsyncSession, records: Iterable[ProductImport]
) -> tuple[int, int]:
    """Insert or update products keyed by SKU. Returns (created, updated).

    Updates never touch `is_active`, so a retired product stays retired.
    The caller owns the transaction; nothing is committed here.
    """
    records = list(records)
    skus = [r.sku for r in records]
    result = await db.execute(select(Product).where(Product.sku.in_(skus)))
    existing = {p.sku: p for p in result.scalars().all()}

    created = updated = 0
    for record in records:
        product = existing.get(record.sku)
        if product is None:
            product = Product(**record.model_dump())
            db.add(product)
            existing[record.sku] = product
            created += 1
        else:
            for key, value in record.model_dump(exclude={"is_active"}).items():
                setattr(product, key, value)
            updated += 1

    await db.flush()
    logger.info(f"Catalog import: {created} created, {updated} updated")
    return created, updated
