"""Error envelopes shared by the routers."""

from typing import Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ledger_relay.schemas import RelayErrorResponse


def error_response(status_code: int, error: str, transaction_id: Optional[str] = None) -> JSONResponse:
    """``{ok: false, error}`` with a stable code; never carries exception text."""
    body = RelayErrorResponse(error=error, transactionId=transaction_id)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """422 listing where validation failed, without echoing the rejected input back."""
    detail = [{"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]} for error in exc.errors()]
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"detail": detail})


__all__ = ["error_response", "request_validation_error"]
