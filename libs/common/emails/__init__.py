"""
Email package.

Modules:
- core: SMTP delivery (send_email, EmailDeliveryError)

Store email templates live in services/store_service/templates/.
"""
