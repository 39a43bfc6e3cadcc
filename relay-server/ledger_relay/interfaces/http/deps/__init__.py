"""Reusable FastAPI dependencies."""

from .admin import require_admin
from .container import get_app_container, get_app_settings, get_ledger_service, get_relay_service
from .database import get_db_session

__all__ = [
    "get_app_container",
    "get_app_settings",
    "get_db_session",
    "get_ledger_service",
    "get_relay_service",
    "require_admin",
]
