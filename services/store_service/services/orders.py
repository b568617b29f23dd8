"""Order placement and anonymous order lookup."""

from dataclasses import dataclass
from typing import Optional

from libs.common.config import Settings
from libs.common.datetime_utils import utc_now
from libs.common.logging import get_logger
from services.store_service.exceptions import (
    NotFoundError,
    OwnershipError,
    PersistenceError,
)
from services.store_service.models import Order, OrderItem, OrderStatus
from services.store_service.schemas import OrderCreate
from services.store_service.services.pricing import LineRequest, Quote, compute_quote
from sqlalchemy import ColumnElement, false, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

logger = get_logger(__name__)


@dataclass(frozen=True)
class PlacedOrder:
    """What the caller and the notifier get back after a committed order."""

    order_id: int
    order_number: str
    customer_email: str
    billing: dict
    shipping: dict
    notes: Optional[str]
    quote: Quote


def _normalize_token(token: Optional[str]) -> Optional[str]:
    token = (token or "").strip()
    return token or None


def ownership_clause(token: Optional[str], client_ip: Optional[str]) -> ColumnElement:
    """Orders visible to a caller.

    A client token, when given, is the only key. Without one the request IP
    is used. With neither, nothing matches.
    """
    token = _normalize_token(token)
    if token:
        return Order.client_token == token
    if client_ip:
        return Order.client_ip == client_ip
    return false()


def owns_order(order: Order, token: Optional[str], client_ip: Optional[str]) -> bool:
    token = _normalize_token(token)
    if token:
        return order.client_token == token
    return bool(client_ip) and order.client_ip == client_ip


async def place_order(
    db: AsyncSession,
    order_in: OrderCreate,
    client_ip: Optional[str],
    settings: Settings,
) -> PlacedOrder:
    """Price the cart server-side and persist header + items atomically.

    Raises ProductUnavailableError before anything is written, or
    PersistenceError after rolling the transaction back.
    """
    quote = await compute_quote(
        db,
        [LineRequest(product_id=line.id, quantity=line.quantity) for line in order_in.items],
        order_in.discount_code,
    )

    billing = order_in.billing.model_dump()
    shipping = (order_in.shipping or order_in.billing).model_dump()
    now = utc_now()

    try:
        # PENDING: header with a placeholder number
        order = Order(
            order_number=Order.placeholder_number(),
            client_token=_normalize_token(order_in.client_token),
            client_ip=client_ip,
            customer_email=str(order_in.email),
            order_notes=order_in.notes or None,
            billing_details=billing,
            shipping_details=shipping,
            subtotal=quote.subtotal,
            discount_code=quote.discount_code,
            discount_amount=quote.discount_amount,
            final_total=quote.total,
            currency=settings.DEFAULT_CURRENCY,
            status=OrderStatus.NEW,
            created_at=now,
            updated_at=now,
        )
        db.add(order)
        await db.flush()

        # NUMBERED: derive the public number from the durable row id
        order_id = order.id
        order_number = Order.format_order_number(
            settings.ORDER_NUMBER_PREFIX, now.year, order_id
        )
        order.order_number = order_number
        await db.flush()

        # ITEMS_PERSISTED
        for line in quote.items:
            db.add(
                OrderItem(
                    order_id=order_id,
                    product_id=line.product_id,
                    product_name=line.name,
                    sku=line.sku,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                    line_total=line.line_total,
                    created_at=now,
                )
            )
        await db.flush()

        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Order transaction failed and was rolled back")
        raise PersistenceError() from exc

    logger.info(
        f"Order {order_number} committed: {len(quote.items)} line(s), total {quote.total}"
    )
    return PlacedOrder(
        order_id=order_id,
        order_number=order_number,
        customer_email=str(order_in.email),
        billing=billing,
        shipping=shipping,
        notes=order_in.notes or None,
        quote=quote,
    )


async def list_order_history(
    db: AsyncSession, token: Optional[str], client_ip: Optional[str]
) -> list[Order]:
    query = (
        select(Order)
        .where(ownership_clause(token, client_ip))
        .order_by(Order.created_at.desc(), Order.id.desc())
    )
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_order_details(
    db: AsyncSession,
    order_number: str,
    token: Optional[str],
    client_ip: Optional[str],
) -> Order:
    query = (
        select(Order)
        .where(Order.order_number == order_number)
        .options(selectinload(Order.items))
        .execution_options(populate_existing=True)
    )
    result = await db.execute(query)
    order = result.scalar_one_or_none()

    if not order:
        raise NotFoundError("Order not found")
    if not owns_order(order, token, client_ip):
        logger.warning(f"Ownership check failed for order {order_number}")
        raise OwnershipError("Order not found")
    return order
