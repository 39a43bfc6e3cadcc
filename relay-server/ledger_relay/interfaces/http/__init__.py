from fastapi import APIRouter

from ledger_relay.interfaces.http.routers import ledger, relay, transactions


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(relay.router, prefix="/blockchain", tags=["relay"])
    router.include_router(ledger.router, prefix="/blockchain", tags=["ledger"])
    router.include_router(transactions.router, prefix="/blockchain", tags=["transactions"])
    return router


__all__ = [
    "create_api_router",
]
