"""Shared dependencies for store routers."""

from typing import Optional

from fastapi import Request
from libs.common.config import Settings
from libs.common.rate_limit import get_client_ip
from services.store_service.services.notifications import NotificationDispatcher


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_dispatcher(request: Request) -> NotificationDispatcher:
    return request.app.state.notifier


def get_request_ip(request: Request) -> Optional[str]:
    return get_client_ip(request)
