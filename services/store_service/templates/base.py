"""
Shared email layout for store notifications.

Every value interpolated into HTML must pass through `escape()` first;
`wrap_html()` trusts the markup it is given.
"""

import html
from decimal import Decimal

HEADER_COLOR = "#0f172a"


def escape(value) -> str:
    """HTML-encode a user-supplied value, quotes included."""
    if value is None:
        return ""
    return html.escape(str(value), quote=True)


def escape_multiline(value) -> str:
    """Escape, then turn newlines into <br> so paragraphs survive."""
    return escape(value).replace("\r\n", "\n").replace("\n", "<br>")


def format_money(amount: Decimal, currency: str) -> str:
    return f"{Decimal(amount):,.2f} {currency}"


def wrap_html(title: str, body_html: str) -> str:
    """Wrap inner content in the store email layout. `title` must be pre-escaped."""
    return f"""\
<!DOCTYPE html>
<html lang="ro">
<head>
    <meta charset="utf-8" />
    <title>{title}</title>
</head>
<body style="margin: 0; padding: 0; font-family: Arial, sans-serif; color: #1e293b;">
    <div style="background: {HEADER_COLOR}; color: #ffffff; padding: 20px;">
        <h1 style="margin: 0; font-size: 20px;">{title}</h1>
    </div>
    <div style="padding: 20px;">
{body_html}
    </div>
</body>
</html>
"""


def info_box(content_html: str, border_color: str = HEADER_COLOR) -> str:
    return (
        f'<blockquote style="background-color: #f5f5f5; padding: 10px; '
        f'border-left: 4px solid {border_color}; margin: 16px 0;">{content_html}</blockquote>'
    )
