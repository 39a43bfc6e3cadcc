"""Signed-message relay endpoint."""

import logging

from fastapi import APIRouter, Depends, Request, status
from pydantic import ValidationError

from ledger_relay.interfaces.http.deps import get_relay_service
from ledger_relay.interfaces.http.responses import error_response
from ledger_relay.modules.relay import (
    FailureReason,
    PayloadValidationError,
    RejectionReason,
    RelayFailed,
    RelayRejected,
    RelayService,
    RelaySuccess,
)
from ledger_relay.schemas import RelayErrorResponse, RelayRequestBody, WriteResponse

logger = logging.getLogger(__name__)

router = APIRouter()

FAILURE_STATUS = {
    FailureReason.SUBMISSION_ERROR: status.HTTP_502_BAD_GATEWAY,
    FailureReason.CONFIRMATION_TIMEOUT: status.HTTP_504_GATEWAY_TIMEOUT,
    FailureReason.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@router.post(
    "/relay-add-transaction",
    response_model=WriteResponse,
    responses={
        400: {"model": RelayErrorResponse},
        502: {"model": RelayErrorResponse},
        504: {"model": RelayErrorResponse},
    },
    summary="Relay a wallet-signed addTransaction payload",
)
async def relay_add_transaction(
    request: Request,
    relay: RelayService = Depends(get_relay_service),
):
    try:
        body = RelayRequestBody.model_validate(await request.json())
        relay_request = body.to_domain()
    except (ValueError, ValidationError, PayloadValidationError) as exc:
        logger.info("Rejected relay body: %s", exc)
        return error_response(status.HTTP_400_BAD_REQUEST, RejectionReason.INVALID_PAYLOAD.value)

    try:
        outcome = await relay.relay(relay_request)
    except Exception:  # pylint: disable=broad-except
        logger.exception("Relay failed unexpectedly")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, FailureReason.INTERNAL_ERROR.value)

    match outcome:
        case RelaySuccess(transaction_id=transaction_id, receipt=receipt):
            return WriteResponse(transactionId=transaction_id, result=receipt.to_transport())
        case RelayRejected(reason=reason):
            return error_response(status.HTTP_400_BAD_REQUEST, reason.value)
        case RelayFailed(reason=reason, transaction_id=transaction_id):
            return error_response(FAILURE_STATUS[reason], reason.value, transaction_id)
