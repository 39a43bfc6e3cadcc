"""Ledger domain service: serialized writes and pass-through reads."""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union

from eth_utils import is_hex_address, to_checksum_address

from ledger_relay.modules.transactions import TransactionEntry, TransactionKind, TransactionSink

from .exceptions import ConfirmationTimeoutError, InvalidAddressError, InvalidIndexError, SubmissionError
from .gateway import LedgerGateway, Receipt
from .locks import AccountLockRegistry
from .normalize import normalize_outputs

logger = logging.getLogger(__name__)

INDEX_PATTERN = re.compile(r"^[0-9]+$")


@dataclass(frozen=True, slots=True)
class WriteResult:
    transaction_id: str
    receipt: Receipt
    recorded: bool


def parse_index(raw: Union[str, int]) -> int:
    """Accept only non-negative integers (as int or digit-only string)."""
    if isinstance(raw, bool):
        raise InvalidIndexError("invalid index")
    if isinstance(raw, int):
        if raw < 0:
            raise InvalidIndexError("invalid index")
        return raw
    if not isinstance(raw, str) or not INDEX_PATTERN.match(raw):
        raise InvalidIndexError("invalid index")
    return int(raw)


def checksum(address: str) -> str:
    if not isinstance(address, str) or not is_hex_address(address):
        raise InvalidAddressError(f"not an address: {address!r}")
    return to_checksum_address(address)


class LedgerService:
    """Runs every contract write through one pipeline.

    submit (under the signing account's lock) -> confirm -> best-effort log.
    ``submit`` is called exactly once per ``write``; nothing here retries.
    """

    def __init__(
        self,
        gateway: LedgerGateway,
        sink: TransactionSink,
        locks: Optional[AccountLockRegistry] = None,
    ) -> None:
        self._gateway = gateway
        self._sink = sink
        self._locks = locks or AccountLockRegistry()

    @property
    def signer_address(self) -> str:
        return self._gateway.signer_address

    async def write(
        self,
        function_name: str,
        args: Sequence[Any],
        *,
        kind: TransactionKind,
        amount: Optional[int] = None,
        currency: Optional[str] = None,
        from_address: Optional[str] = None,
        to_address: Optional[str] = None,
    ) -> WriteResult:
        async with self._locks.hold(self._gateway.signer_address):
            try:
                transaction_id = await self._gateway.submit(function_name, args)
            except Exception as exc:  # pylint: disable=broad-except
                logger.error("Submitting %s failed: %s", function_name, exc)
                raise SubmissionError(f"{function_name} submission failed") from exc
        logger.info("Submitted %s as %s", function_name, transaction_id)

        try:
            receipt = await self._gateway.confirm(transaction_id)
        except ConfirmationTimeoutError:
            logger.warning("No receipt for %s before timeout", transaction_id)
            raise
        except Exception as exc:  # pylint: disable=broad-except
            logger.error("Waiting for %s failed: %s", transaction_id, exc)
            raise ConfirmationTimeoutError(transaction_id, "confirmation failed") from exc

        if not receipt.succeeded:
            logger.warning("Transaction %s reverted in block %s; not recorded", transaction_id, receipt.block_number)
            return WriteResult(transaction_id=transaction_id, receipt=receipt, recorded=False)

        entry = TransactionEntry(
            kind=kind,
            tx_hash=transaction_id,
            amount=amount,
            currency=currency,
            from_address=from_address,
            to_address=to_address,
        )
        recorded = await self._record(entry)
        return WriteResult(transaction_id=transaction_id, receipt=receipt, recorded=recorded)

    async def _record(self, entry: TransactionEntry) -> bool:
        try:
            await self._sink.record(entry)
        except Exception as exc:  # pylint: disable=broad-except
            # the chain is authoritative; the log is only an index
            logger.warning("PersistenceWarning: could not record %s %s: %s", entry.kind.value, entry.tx_hash, exc)
            return False
        return True

    async def approve_sender(self, address: str, approved: bool) -> WriteResult:
        who = checksum(address)
        return await self.write(
            "setApprovedSender",
            [who, bool(approved)],
            kind=TransactionKind.APPROVE_SENDER,
            from_address=self.signer_address,
            to_address=who,
        )

    async def approve_recipient(self, address: str, approved: bool) -> WriteResult:
        who = checksum(address)
        return await self.write(
            "setApprovedRecipient",
            [who, bool(approved)],
            kind=TransactionKind.APPROVE_RECIPIENT,
            from_address=self.signer_address,
            to_address=who,
        )

    async def transfer_ownership(self, new_owner: str) -> WriteResult:
        owner = checksum(new_owner)
        return await self.write(
            "transferOwnership",
            [owner],
            kind=TransactionKind.TRANSFER_OWNERSHIP,
            from_address=self.signer_address,
            to_address=owner,
        )

    async def add_transaction(
        self,
        *,
        sender_name: str,
        to: str,
        recipient_name: str,
        amount: int,
        currency: str = "",
        purpose: str = "",
        issued_at: Optional[int] = None,
        from_address: Optional[str] = None,
    ) -> WriteResult:
        recipient = checksum(to)
        timestamp = int(time.time()) if issued_at is None else issued_at
        return await self.write(
            "addTransaction",
            [sender_name, recipient, recipient_name, int(amount), currency, purpose, timestamp],
            kind=TransactionKind.ADD_TRANSACTION,
            amount=int(amount),
            currency=currency,
            from_address=from_address or self.signer_address,
            to_address=to,
        )

    async def transaction_count(self) -> int:
        return int(await self._gateway.call("getTransactionCount"))

    async def get_transaction(self, index: Union[str, int]) -> Any:
        position = parse_index(index)
        value = await self._gateway.call("getTransaction", [position])
        return normalize_outputs(self._gateway.output_types("getTransaction"), value)

    async def approved_senders(self) -> list[str]:
        return list(await self._gateway.call("getApprovedSenders"))

    async def approved_recipients(self) -> list[str]:
        return list(await self._gateway.call("getApprovedRecipients"))


__all__ = ["LedgerService", "WriteResult", "checksum", "parse_index"]
