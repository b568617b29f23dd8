"""
Core email sending utilities over SMTP.
"""

import asyncio
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Optional, Sequence

from libs.common.config import Settings
from libs.common.logging import get_logger

logger = get_logger(__name__)


class EmailDeliveryError(Exception):
    """Raised when the SMTP server rejects or cannot accept a message."""


def build_message(
    settings: Settings,
    to_emails: Sequence[str],
    subject: str,
    body: str,
    html_body: Optional[str] = None,
    reply_to: Optional[str] = None,
) -> MIMEText | MIMEMultipart:
    if html_body:
        msg = MIMEMultipart("alternative")
        msg.attach(MIMEText(body, "plain", "utf-8"))
        msg.attach(MIMEText(html_body, "html", "utf-8"))
    else:
        msg = MIMEText(body, "plain", "utf-8")

    # Header values must stay single-line
    msg["Subject"] = " ".join(subject.splitlines())
    msg["From"] = formataddr((settings.DEFAULT_FROM_NAME, settings.DEFAULT_FROM_EMAIL))
    msg["To"] = ", ".join(to_emails)
    if reply_to:
        msg["Reply-To"] = reply_to
    return msg


def _deliver(settings: Settings, to_emails: Sequence[str], msg) -> None:
    if settings.SMTP_USE_SSL:
        server = smtplib.SMTP_SSL(
            settings.SMTP_HOST, settings.SMTP_PORT, timeout=settings.SMTP_TIMEOUT
        )
    else:
        server = smtplib.SMTP(
            settings.SMTP_HOST, settings.SMTP_PORT, timeout=settings.SMTP_TIMEOUT
        )
    with server:
        if not settings.SMTP_USE_SSL:
            server.starttls()
        server.login(settings.SMTP_USERNAME, settings.SMTP_PASSWORD)
        server.sendmail(settings.DEFAULT_FROM_EMAIL, list(to_emails), msg.as_string())


async def send_email(
    settings: Settings,
    to_emails: Sequence[str],
    subject: str,
    body: str,
    html_body: Optional[str] = None,
    reply_to: Optional[str] = None,
) -> bool:
    """
    Send an email over SMTP.

    Args:
        settings: Application settings carrying the SMTP configuration
        to_emails: Recipient addresses
        subject: Email subject line
        body: Plain text body
        html_body: Optional HTML alternative
        reply_to: Optional Reply-To address

    Returns:
        True if the message was handed to the SMTP server, False if SMTP is
        not configured.

    Raises:
        EmailDeliveryError: the SMTP exchange failed.
    """
    if not to_emails:
        logger.warning(f"No recipients for email '{subject}' - email not sent")
        return False

    if not settings.SMTP_USERNAME or not settings.SMTP_PASSWORD:
        logger.warning("SMTP_USERNAME/SMTP_PASSWORD not configured - email not sent")
        logger.info(f"Would have sent email to {', '.join(to_emails)}: {subject}")
        logger.debug(f"Email body: {body[:200]}...")
        return False

    msg = build_message(settings, to_emails, subject, body, html_body, reply_to)

    logger.info(f"Sending email to {', '.join(to_emails)}: {subject}")
    try:
        # smtplib is blocking; keep it off the event loop
        await asyncio.to_thread(_deliver, settings, to_emails, msg)
    except smtplib.SMTPAuthenticationError as e:
        logger.error(f"SMTP authentication failed: {e}")
        raise EmailDeliveryError("SMTP authentication failed") from e
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"SMTP error sending email: {type(e).__name__}: {e}")
        raise EmailDeliveryError("SMTP delivery failed") from e

    logger.info(f"Email sent successfully to {', '.join(to_emails)}")
    return True
