"""Store catalog router: products and discount validation."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from libs.auth.dependencies import get_optional_admin
from libs.auth.models import AuthUser
from libs.db.session import get_async_db
from services.store_service.exceptions import ValidationError
from services.store_service.models import ProductCategory, StockStatus
from services.store_service.schemas import DiscountResponse, ProductResponse
from services.store_service.services import catalog as catalog_service
from services.store_service.services.catalog import ProductFilters
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(tags=["store"])

ALL = "ALL"


def _parse_category(value: Optional[str]) -> Optional[ProductCategory]:
    if not value or value == ALL:
        return None
    try:
        return ProductCategory(value)
    except ValueError:
        raise ValidationError(f"Unknown category: {value}")


def _parse_stock_statuses(values: Optional[list[str]]) -> list[StockStatus]:
    """Accept repeated params and/or comma-separated lists."""
    statuses = []
    for raw in values or []:
        for part in raw.split(","):
            part = part.strip()
            if not part or part == ALL:
                continue
            try:
                status_value = StockStatus(part)
            except ValueError:
                raise ValidationError(f"Unknown stock status: {part}")
            if status_value not in statuses:
                statuses.append(status_value)
    return statuses


def _optional_filter(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not value or value == ALL:
        return None
    return value


def _require_admin_for_inactive(include_inactive: bool, admin: Optional[AuthUser]):
    if include_inactive and admin is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required to list inactive products",
        )


# ============================================================================
# CATALOG - PRODUCTS
# ============================================================================


@router.get("/products", response_model=list[ProductResponse])
async def list_products(
    category: Optional[str] = None,
    manufacturer: Optional[str] = None,
    protocol: Optional[str] = None,
    search: Optional[str] = None,
    stock_status: Optional[list[str]] = Query(None),
    include_inactive: bool = False,
    admin: Optional[AuthUser] = Depends(get_optional_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Browse products with filters, newest first. Inactive products are hidden."""
    _require_admin_for_inactive(include_inactive, admin)

    filters = ProductFilters(
        category=_parse_category(category),
        manufacturer=_optional_filter(manufacturer),
        protocol=_optional_filter(protocol),
        search=(search or "").strip() or None,
        stock_statuses=_parse_stock_statuses(stock_status),
        include_inactive=include_inactive,
    )
    return await catalog_service.list_products(db, filters)


@router.get("/products/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int,
    admin: Optional[AuthUser] = Depends(get_optional_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Get one product. Inactive products are only visible to admins."""
    return await catalog_service.get_product(
        db, product_id, include_inactive=admin is not None
    )


# ============================================================================
# DISCOUNTS
# ============================================================================


@router.get("/validate-discount", response_model=DiscountResponse)
async def validate_discount(
    code: str = Query(..., min_length=1, max_length=50),
    db: AsyncSession = Depends(get_async_db),
):
    """Return an active discount code (exact, case-sensitive match) or 404."""
    return await catalog_service.validate_discount(db, code)
