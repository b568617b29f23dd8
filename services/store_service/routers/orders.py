"""Store orders router: pricing preview, checkout and "my orders" lookup."""

from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Request, status
from libs.common.config import Settings
from libs.common.rate_limit import (
    bind_rate_limits,
    limiter,
    orders_limit,
    rate_limit_disabled,
)
from libs.db.session import get_async_db
from services.store_service.routers._helpers import (
    get_app_settings,
    get_dispatcher,
    get_request_ip,
)
from services.store_service.schemas import (
    OrderCreate,
    OrderCreated,
    OrderDetail,
    OrderSummary,
    QuoteRequest,
    QuoteResponse,
)
from services.store_service.services import orders as order_service
from services.store_service.services.notifications import NotificationDispatcher
from services.store_service.services.pricing import LineRequest, compute_quote
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(tags=["store"])


# ============================================================================
# PRICING
# ============================================================================


@router.post("/quote", response_model=QuoteResponse)
async def quote_cart(
    quote_in: QuoteRequest,
    db: AsyncSession = Depends(get_async_db),
):
    """Server-authoritative totals for a cart. Nothing is written."""
    quote = await compute_quote(
        db,
        [LineRequest(product_id=line.id, quantity=line.quantity) for line in quote_in.items],
        quote_in.discount_code,
    )
    return QuoteResponse.model_validate(quote)


# ============================================================================
# CHECKOUT
# ============================================================================


@router.post(
    "/orders",
    response_model=OrderCreated,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(bind_rate_limits)],
)
@limiter.limit(orders_limit, exempt_when=rate_limit_disabled)
async def create_order(
    request: Request,
    order_in: OrderCreate,
    background_tasks: BackgroundTasks,
    settings: Settings = Depends(get_app_settings),
    notifier: NotificationDispatcher = Depends(get_dispatcher),
    client_ip: Optional[str] = Depends(get_request_ip),
    db: AsyncSession = Depends(get_async_db),
):
    """Place an order. Prices and discounts are recomputed server-side."""
    placed = await order_service.place_order(db, order_in, client_ip, settings)

    # Runs after the response is sent; cannot fail the order
    background_tasks.add_task(
        notifier.send_order_confirmation,
        order_number=placed.order_number,
        customer_email=placed.customer_email,
        billing=placed.billing,
        shipping=placed.shipping,
        quote=placed.quote,
        notes=placed.notes,
    )

    return OrderCreated(order_number=placed.order_number, total=placed.quote.total)


# ============================================================================
# MY ORDERS
# ============================================================================


@router.get("/order-history", response_model=list[OrderSummary])
async def order_history(
    token: Optional[str] = None,
    client_ip: Optional[str] = Depends(get_request_ip),
    db: AsyncSession = Depends(get_async_db),
):
    """Orders placed with this client token (or, without a token, from this IP)."""
    orders = await order_service.list_order_history(db, token, client_ip)
    return [OrderSummary.model_validate(order) for order in orders]


@router.get("/order-details/{order_number}", response_model=OrderDetail)
async def order_details(
    order_number: str,
    token: Optional[str] = None,
    client_ip: Optional[str] = Depends(get_request_ip),
    db: AsyncSession = Depends(get_async_db),
):
    """Full order with items, only for its owner. Anyone else gets 404."""
    order = await order_service.get_order_details(db, order_number, token, client_ip)
    return OrderDetail.model_validate(order)
