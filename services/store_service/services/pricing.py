"""Authoritative order pricing.

Totals are always recomputed from catalog prices and the discount registry.
Nothing the browser sends besides product ids, quantities and a discount code
is ever read.
"""

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Mapping, Optional, Protocol, Sequence

from libs.common.logging import get_logger
from services.store_service.exceptions import ProductUnavailableError, ValidationError
from services.store_service.models import DiscountType, Product
from services.store_service.services.catalog import find_active_discount
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)

CENT = Decimal("0.01")
ZERO = Decimal("0")

MAX_QUANTITY = 10_000
# Largest value a Numeric(12, 2) money column holds
MAX_AMOUNT = Decimal("9999999999.99")


class PricedProduct(Protocol):
    id: int
    name: str
    sku: str
    price: Decimal


class DiscountRule(Protocol):
    code: str
    type: DiscountType
    value: Decimal


@dataclass(frozen=True)
class LineRequest:
    product_id: int
    quantity: Any = 1


@dataclass(frozen=True)
class QuotedLine:
    product_id: int
    name: str
    sku: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal


@dataclass(frozen=True)
class Quote:
    items: tuple[QuotedLine, ...]
    subtotal: Decimal
    discount_code: Optional[str]
    discount_amount: Decimal
    total: Decimal


def to_money(value) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def clamp_quantity(value: Any) -> int:
    """Integer quantity in [1, MAX_QUANTITY].

    Non-numeric, non-finite or < 1 input becomes 1. Larger input is capped.
    """
    if isinstance(value, bool):
        return 1
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 1
    except OverflowError:
        return MAX_QUANTITY if value > 0 else 1
    if not math.isfinite(number):
        return 1
    if number >= MAX_QUANTITY:
        return MAX_QUANTITY
    quantity = math.floor(number)
    return quantity if quantity >= 1 else 1


def compute_discount(subtotal: Decimal, discount: Optional[DiscountRule]) -> Decimal:
    if discount is None:
        return ZERO
    value = Decimal(discount.value)
    if discount.type == DiscountType.PERCENT:
        return to_money(subtotal * value / 100)
    return to_money(value)


def price_lines(
    products_by_id: Mapping[int, PricedProduct],
    lines: Sequence[LineRequest],
    discount: Optional[DiscountRule] = None,
) -> Quote:
    """Price cart lines against trusted product records.

    Raises ProductUnavailableError, naming every missing id, if any line
    refers to a product absent from `products_by_id`, and ValidationError
    if the subtotal does not fit a money column.
    """
    missing = [line.product_id for line in lines if line.product_id not in products_by_id]
    if missing:
        raise ProductUnavailableError(missing)

    quoted = []
    subtotal = ZERO
    for line in lines:
        product = products_by_id[line.product_id]
        quantity = clamp_quantity(line.quantity)
        unit_price = to_money(product.price)
        line_total = to_money(unit_price * quantity)
        subtotal += line_total
        quoted.append(
            QuotedLine(
                product_id=product.id,
                name=product.name,
                sku=product.sku,
                quantity=quantity,
                unit_price=unit_price,
                line_total=line_total,
            )
        )

    subtotal = to_money(subtotal)
    if subtotal > MAX_AMOUNT:
        raise ValidationError("Order total exceeds the maximum supported amount.")
    discount_amount = compute_discount(subtotal, discount)
    total = max(ZERO, subtotal - discount_amount)

    return Quote(
        items=tuple(quoted),
        subtotal=subtotal,
        discount_code=discount.code if discount is not None else None,
        discount_amount=discount_amount,
        total=to_money(total),
    )


async def compute_quote(
    db: AsyncSession,
    lines: Sequence[LineRequest],
    discount_code: Optional[str] = None,
) -> Quote:
    """Load active products and the discount, then price the lines."""
    product_ids = {line.product_id for line in lines}
    result = await db.execute(
        select(Product).where(Product.id.in_(product_ids), Product.is_active.is_(True))
    )
    products_by_id = {product.id: product for product in result.scalars().all()}

    discount = None
    if discount_code:
        discount = await find_active_discount(db, discount_code)
        if discount is None:
            logger.info(f"Dropping unknown or inactive discount code {discount_code!r}")

    return price_lines(products_by_id, lines, discount)
