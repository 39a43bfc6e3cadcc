"""Transaction log endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ledger_relay.core.config import Settings
from ledger_relay.interfaces.http.deps import get_app_settings, get_db_session
from ledger_relay.modules.transactions import TransactionLogService
from ledger_relay.schemas import TransactionListResponse, TransactionRecordResponse

router = APIRouter()


@router.get("/transactions", response_model=TransactionListResponse, summary="Most recent relayed writes")
async def list_transactions(
    limit: Optional[int] = Query(default=None, ge=1),
    settings: Settings = Depends(get_app_settings),
    db: AsyncSession = Depends(get_db_session),
):
    page_size = settings.relay.transactions_page_size
    service = TransactionLogService.with_session(db)
    records = await service.list_recent(min(limit or page_size, page_size))
    return TransactionListResponse(
        transactions=[TransactionRecordResponse.from_domain(record) for record in records],
    )
