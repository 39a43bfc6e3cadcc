"""Relay use case: turn a signed off-chain payload into one on-chain write."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Callable, Optional

from ledger_relay.core.crypto import InvalidSignatureError, addresses_match, recover_signer
from ledger_relay.modules.ledger import ConfirmationTimeoutError, LedgerService, SubmissionError

from .codec import encode_payload
from .exceptions import AuthenticationError, DuplicateSignatureError, ReplayError, SignerMismatchError
from .models import (
    FailureReason,
    RejectionReason,
    RelayFailed,
    RelayOutcome,
    RelayRejected,
    RelayRequest,
    RelayState,
    RelaySuccess,
    VerifiedIntent,
)
from .replay import DEFAULT_WINDOW_SECONDS, SignatureRegistry, check_window

logger = logging.getLogger(__name__)


class RelayService:
    """Verify -> authorize -> submit -> confirm -> record -> respond.

    Every pre-submission failure comes back as :class:`RelayRejected`; after
    submission only :class:`RelayFailed` or :class:`RelaySuccess` are possible
    and the ledger is written at most once per call.
    """

    def __init__(
        self,
        ledger: LedgerService,
        *,
        window: int = DEFAULT_WINDOW_SECONDS,
        registry: Optional[SignatureRegistry] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._ledger = ledger
        self._window = window
        self._registry = registry
        self._clock = clock

    def verify(self, request: RelayRequest, now: int) -> VerifiedIntent:
        """Check signature and timestamp; raise instead of returning a partial result."""
        message = encode_payload(request.payload)
        recovered = recover_signer(message, request.signature)
        if not addresses_match(recovered, request.claimed_signer):
            raise SignerMismatchError(f"recovered {recovered}, claimed {request.claimed_signer}")

        if not check_window(request.payload.issued_at, now, self._window):
            raise ReplayError(f"issuedAt {request.payload.issued_at} outside {self._window}s of {now}")

        return VerifiedIntent(payload=request.payload, recovered_signer=recovered)

    async def relay(self, request: RelayRequest, now: Optional[int] = None) -> RelayOutcome:
        relay_id = uuid.uuid4().hex[:8]
        current = int(self._clock()) if now is None else now
        logger.debug("relay %s: %s", relay_id, RelayState.RECEIVED.value)

        try:
            intent = self.verify(request, current)
        except InvalidSignatureError as exc:
            return self._reject(relay_id, RejectionReason.INVALID_SIGNATURE, exc)
        except AuthenticationError as exc:
            return self._reject(relay_id, RejectionReason.SIGNER_MISMATCH, exc)
        except ReplayError as exc:
            return self._reject(relay_id, RejectionReason.STALE_TIMESTAMP, exc)
        logger.debug("relay %s: %s signer=%s", relay_id, RelayState.SIGNATURE_CHECKED.value, intent.recovered_signer)
        logger.debug("relay %s: %s", relay_id, RelayState.REPLAY_CHECKED.value)

        if self._registry is not None:
            fresh = await self._registry.claim(encode_payload(intent.payload), intent.recovered_signer, current)
        else:
            fresh = True
        if not fresh:
            return self._reject(
                relay_id,
                RejectionReason.DUPLICATE_SIGNATURE,
                DuplicateSignatureError("payload already relayed for this signer"),
            )

        payload = intent.payload
        try:
            result = await self._ledger.add_transaction(
                sender_name=payload.sender_name,
                to=payload.to,
                recipient_name=payload.recipient_name,
                amount=payload.amount,
                currency=payload.currency,
                purpose=payload.purpose,
                issued_at=payload.issued_at,
                from_address=request.claimed_signer,
            )
        except SubmissionError:
            logger.info("relay %s: %s (%s)", relay_id, RelayState.FAILED.value, FailureReason.SUBMISSION_ERROR.value)
            return RelayFailed(reason=FailureReason.SUBMISSION_ERROR)
        except ConfirmationTimeoutError as exc:
            logger.info(
                "relay %s: %s (%s) tx=%s",
                relay_id,
                RelayState.FAILED.value,
                FailureReason.CONFIRMATION_TIMEOUT.value,
                exc.transaction_id,
            )
            return RelayFailed(reason=FailureReason.CONFIRMATION_TIMEOUT, transaction_id=exc.transaction_id)

        state = RelayState.RECORDED if result.recorded else RelayState.CONFIRMED
        logger.info(
            "relay %s: %s tx=%s signer=%s",
            relay_id,
            state.value,
            result.transaction_id,
            intent.recovered_signer,
        )
        return RelaySuccess(transaction_id=result.transaction_id, receipt=result.receipt)

    @staticmethod
    def _reject(relay_id: str, reason: RejectionReason, exc: Exception) -> RelayRejected:
        logger.info("relay %s: %s (%s): %s", relay_id, RelayState.REJECTED.value, reason.value, exc)
        return RelayRejected(reason=reason)


__all__ = ["RelayService"]
