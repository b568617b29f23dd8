"""Contact form router."""

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from libs.common.logging import get_logger
from libs.common.rate_limit import (
    bind_rate_limits,
    contact_limit,
    limiter,
    rate_limit_disabled,
)
from services.store_service.routers._helpers import get_dispatcher
from services.store_service.schemas import ContactAccepted, ContactMessage
from services.store_service.services.notifications import NotificationDispatcher

router = APIRouter(tags=["store"])
logger = get_logger(__name__)


@router.post(
    "/contact",
    response_model=ContactAccepted,
    dependencies=[Depends(bind_rate_limits)],
)
@limiter.limit(contact_limit, exempt_when=rate_limit_disabled)
async def submit_contact(
    request: Request,
    contact: ContactMessage,
    background_tasks: BackgroundTasks,
    notifier: NotificationDispatcher = Depends(get_dispatcher),
):
    """Accept a contact message; staff are emailed in the background."""
    logger.info(f"Contact message accepted from {contact.email}")
    background_tasks.add_task(
        notifier.send_contact_message,
        name=contact.name,
        email=str(contact.email),
        message=contact.message,
        phone=contact.phone or None,
    )
    return ContactAccepted()
