"""Contract administration writes and read-side queries."""

import logging
from typing import Awaitable

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ledger_relay.interfaces.http.deps import get_ledger_service, require_admin
from ledger_relay.interfaces.http.responses import error_response
from ledger_relay.modules.ledger import (
    ConfirmationTimeoutError,
    InvalidAddressError,
    InvalidIndexError,
    LedgerService,
    SubmissionError,
    WriteResult,
)
from ledger_relay.modules.relay import FailureReason
from ledger_relay.schemas import (
    AddressListResponse,
    AddTransactionRequest,
    ApproveRequest,
    CountResponse,
    LedgerTransactionResponse,
    RelayErrorResponse,
    TransferOwnershipRequest,
    WriteResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": RelayErrorResponse},
    403: {"description": "Admin token missing or invalid"},
    502: {"model": RelayErrorResponse},
    504: {"model": RelayErrorResponse},
}


async def _run_write(pending: Awaitable[WriteResult]):
    try:
        result = await pending
    except InvalidAddressError:
        return error_response(status.HTTP_400_BAD_REQUEST, "invalid_payload")
    except SubmissionError:
        return error_response(status.HTTP_502_BAD_GATEWAY, FailureReason.SUBMISSION_ERROR.value)
    except ConfirmationTimeoutError as exc:
        return error_response(
            status.HTTP_504_GATEWAY_TIMEOUT,
            FailureReason.CONFIRMATION_TIMEOUT.value,
            exc.transaction_id,
        )
    return WriteResponse(transactionId=result.transaction_id, result=result.receipt.to_transport())


def _read_failed(what: str) -> JSONResponse:
    logger.exception("Reading %s from the ledger failed", what)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, FailureReason.INTERNAL_ERROR.value)


@router.post(
    "/approve-sender",
    response_model=WriteResponse,
    responses=ERROR_RESPONSES,
    dependencies=[Depends(require_admin)],
    summary="Approve or revoke a sender address",
)
async def approve_sender(payload: ApproveRequest, ledger: LedgerService = Depends(get_ledger_service)):
    return await _run_write(ledger.approve_sender(payload.address, payload.approved))


@router.post(
    "/approve-recipient",
    response_model=WriteResponse,
    responses=ERROR_RESPONSES,
    dependencies=[Depends(require_admin)],
    summary="Approve or revoke a recipient address",
)
async def approve_recipient(payload: ApproveRequest, ledger: LedgerService = Depends(get_ledger_service)):
    return await _run_write(ledger.approve_recipient(payload.address, payload.approved))


@router.post(
    "/transfer-ownership",
    response_model=WriteResponse,
    responses=ERROR_RESPONSES,
    dependencies=[Depends(require_admin)],
    summary="Transfer contract ownership",
)
async def transfer_ownership(payload: TransferOwnershipRequest, ledger: LedgerService = Depends(get_ledger_service)):
    return await _run_write(ledger.transfer_ownership(payload.new_owner))


@router.post(
    "/add-transaction",
    response_model=WriteResponse,
    responses=ERROR_RESPONSES,
    dependencies=[Depends(require_admin)],
    summary="Record a transaction directly as the relayer account",
)
async def add_transaction(payload: AddTransactionRequest, ledger: LedgerService = Depends(get_ledger_service)):
    return await _run_write(
        ledger.add_transaction(
            sender_name=payload.sender_name,
            to=payload.to,
            recipient_name=payload.recipient_name,
            amount=int(payload.amount),
            currency=payload.currency,
            purpose=payload.purpose,
        )
    )


@router.get("/transaction-count", response_model=CountResponse, summary="Number of transactions on the ledger")
async def transaction_count(ledger: LedgerService = Depends(get_ledger_service)):
    try:
        count = await ledger.transaction_count()
    except Exception:  # pylint: disable=broad-except
        return _read_failed("transaction count")
    return CountResponse(count=str(count))


@router.get(
    "/transaction/{index}",
    response_model=LedgerTransactionResponse,
    responses={400: {"model": RelayErrorResponse}},
    summary="Read one ledger transaction by index",
)
async def get_transaction(index: str, ledger: LedgerService = Depends(get_ledger_service)):
    try:
        tx = await ledger.get_transaction(index)
    except InvalidIndexError:
        return error_response(status.HTTP_400_BAD_REQUEST, "invalid_index")
    except Exception:  # pylint: disable=broad-except
        return _read_failed(f"transaction {index}")
    return LedgerTransactionResponse(tx=tx)


@router.get("/approved-senders", response_model=AddressListResponse, summary="Approved sender addresses")
async def approved_senders(ledger: LedgerService = Depends(get_ledger_service)):
    try:
        addresses = await ledger.approved_senders()
    except Exception:  # pylint: disable=broad-except
        return _read_failed("approved senders")
    return AddressListResponse(addresses=addresses)


@router.get("/approved-recipients", response_model=AddressListResponse, summary="Approved recipient addresses")
async def approved_recipients(ledger: LedgerService = Depends(get_ledger_service)):
    try:
        addresses = await ledger.approved_recipients()
    except Exception:  # pylint: disable=broad-except
        return _read_failed("approved recipients")
    return AddressListResponse(addresses=addresses)
