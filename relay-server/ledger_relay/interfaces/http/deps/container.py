"""Access to the process-wide service container."""

from fastapi import Depends, Request

from ledger_relay.core.config import Settings
from ledger_relay.core.container import ApplicationContainer
from ledger_relay.modules.ledger import LedgerService
from ledger_relay.modules.relay import RelayService


def get_app_container(request: Request) -> ApplicationContainer:
    return request.app.state.container


def get_app_settings(container: ApplicationContainer = Depends(get_app_container)) -> Settings:
    return container.settings


def get_relay_service(container: ApplicationContainer = Depends(get_app_container)) -> RelayService:
    return container.relay


def get_ledger_service(container: ApplicationContainer = Depends(get_app_container)) -> LedgerService:
    return container.ledger


__all__ = [
    "get_app_container",
    "get_app_settings",
    "get_ledger_service",
    "get_relay_service",
]
