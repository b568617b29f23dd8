"""
Store email templates: staff order notification and contact-form message.

Each renderer returns (subject, text_body, html_body).
"""

from services.store_service.services.pricing import Quote
from services.store_service.templates.base import (
    escape,
    escape_multiline,
    format_money,
    info_box,
    wrap_html,
)

CELL = "padding: 8px; border-bottom: 1px solid #e2e8f0;"


def _address_lines(address: dict) -> list[str]:
    keys = ("name", "company", "address1", "address2", "postcode", "city", "country", "phone")
    return [str(address[key]) for key in keys if address.get(key)]


def render_order_confirmation(
    order_number: str,
    customer_email: str,
    billing: dict,
    shipping: dict,
    quote: Quote,
    currency: str,
    notes: str | None = None,
) -> tuple[str, str, str]:
    """Render the new-order email from server-validated totals."""
    customer_name = billing.get("name", "")
    subject = f"New order #{order_number} - {customer_name}"

    items_text = "\n".join(
        f"  - {line.name} ({line.sku}) x{line.quantity} @ "
        f"{format_money(line.unit_price, currency)} = {format_money(line.line_total, currency)}"
        for line in quote.items
    )
    discount_text = (
        f"Discount ({quote.discount_code}): -{format_money(quote.discount_amount, currency)}\n"
        if quote.discount_amount > 0
        else ""
    )
    body = (
        f"New order #{order_number}\n\n"
        f"Customer: {customer_name} ({customer_email})\n\n"
        f"Items:\n{items_text}\n\n"
        f"Subtotal: {format_money(quote.subtotal, currency)}\n"
        f"{discount_text}"
        f"Total: {format_money(quote.total, currency)}\n\n"
        f"Billing:\n  " + "\n  ".join(_address_lines(billing)) + "\n\n"
        f"Shipping:\n  " + "\n  ".join(_address_lines(shipping)) + "\n"
    )
    if notes:
        body += f"\nNotes:\n{notes}\n"

    rows_html = "".join(
        f"<tr><td style='{CELL}'>{escape(line.name)} <small>({escape(line.sku)})</small></td>"
        f"<td style='{CELL} text-align: center;'>{line.quantity}</td>"
        f"<td style='{CELL} text-align: right;'>{format_money(line.unit_price, currency)}</td>"
        f"<td style='{CELL} text-align: right;'>{format_money(line.line_total, currency)}</td></tr>"
        for line in quote.items
    )
    totals_html = f"<p>Subtotal: {format_money(quote.subtotal, currency)}</p>"
    if quote.discount_amount > 0:
        totals_html += (
            f"<p>Discount ({escape(quote.discount_code)}): "
            f"-{format_money(quote.discount_amount, currency)}</p>"
        )
    totals_html += f"<p><strong>Total: {format_money(quote.total, currency)}</strong></p>"

    billing_html = "<br>".join(escape(line) for line in _address_lines(billing))
    shipping_html = "<br>".join(escape(line) for line in _address_lines(shipping))

    body_html = (
        f"<p>Client: {escape(customer_name)} ({escape(customer_email)})</p>"
        '<table style="width: 100%; border-collapse: collapse;">'
        "<thead><tr><th>Product</th><th>Qty</th><th>Price</th><th>Total</th></tr></thead>"
        f"<tbody>{rows_html}</tbody></table>"
        + totals_html
        + info_box(f"<strong>Billing</strong><br>{billing_html}")
        + info_box(f"<strong>Shipping</strong><br>{shipping_html}")
    )
    if notes:
        body_html += info_box(f"<strong>Notes</strong><br>{escape_multiline(notes)}")

    return subject, body, wrap_html(f"New order #{escape(order_number)}", body_html)


def render_contact_message(
    name: str, email: str, message: str, phone: str | None = None
) -> tuple[str, str, str]:
    """Render a contact-form submission for staff."""
    subject = f"Contact message: {name}"
    body = (
        f"Name: {name}\nEmail: {email}\nPhone: {phone or 'N/A'}\n\n"
        f"Message:\n{message}\n"
    )
    body_html = (
        f"<p><strong>Name:</strong> {escape(name)}</p>"
        f"<p><strong>Email:</strong> {escape(email)}</p>"
        f"<p><strong>Phone:</strong> {escape(phone) if phone else 'N/A'}</p>"
        "<p><strong>Message:</strong></p>"
        + info_box(escape_multiline(message))
    )
    return subject, body, wrap_html("New contact message", body_html)
