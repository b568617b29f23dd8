"""Best-effort email notifications for orders and contact messages."""

from typing import Optional

from libs.common.config import Settings
from libs.common.emails.core import EmailDeliveryError, send_email
from libs.common.logging import get_logger
from services.store_service.exceptions import NotificationError
from services.store_service.services.pricing import Quote
from services.store_service.templates.store import (
    render_contact_message,
    render_order_confirmation,
)

logger = get_logger(__name__)


class NotificationDispatcher:
    """
    Sends store emails after the fact.

    Public methods never raise: delivery problems are logged and swallowed
    so that a committed order or an accepted contact message stays successful.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    async def _deliver(
        self,
        to_emails: list[str],
        subject: str,
        body: str,
        html_body: str,
        reply_to: Optional[str] = None,
    ) -> bool:
        try:
            return await send_email(
                self.settings,
                to_emails,
                subject,
                body,
                html_body=html_body,
                reply_to=reply_to,
            )
        except EmailDeliveryError as e:
            raise NotificationError(str(e)) from e

    async def send_order_confirmation(
        self,
        order_number: str,
        customer_email: str,
        billing: dict,
        shipping: dict,
        quote: Quote,
        notes: Optional[str] = None,
    ) -> bool:
        subject, body, html_body = render_order_confirmation(
            order_number=order_number,
            customer_email=customer_email,
            billing=billing,
            shipping=shipping,
            quote=quote,
            currency=self.settings.DEFAULT_CURRENCY,
            notes=notes,
        )

        recipients = list(self.settings.STAFF_NOTIFICATION_EMAILS)
        if self.settings.SEND_CUSTOMER_CONFIRMATION:
            recipients.append(customer_email)

        try:
            return await self._deliver(
                recipients, subject, body, html_body, reply_to=customer_email
            )
        except NotificationError:
            logger.exception(f"Order notification failed for {order_number}")
            return False

    async def send_contact_message(
        self, name: str, email: str, message: str, phone: Optional[str] = None
    ) -> bool:
        subject, body, html_body = render_contact_message(name, email, message, phone)
        try:
            return await self._deliver(
                list(self.settings.CONTACT_RECIPIENTS),
                subject,
                body,
                html_body,
                reply_to=email,
            )
        except NotificationError:
            logger.exception(f"Contact message from {email} could not be delivered")
            return False
