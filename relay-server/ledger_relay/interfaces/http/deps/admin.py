"""Operator authentication for contract administration endpoints."""

import secrets
from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from ledger_relay.core.config import Settings

from .container import get_app_settings


async def require_admin(
    x_admin_token: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_app_settings),
) -> None:
    expected = settings.admin_token
    if not expected:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="admin endpoints are disabled")
    if x_admin_token is None or not secrets.compare_digest(x_admin_token, expected):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="invalid admin token")


__all__ = ["require_admin"]
