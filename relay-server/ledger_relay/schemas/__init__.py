"""Pydantic schemas used across the project."""
import re
from datetime import datetime
from typing import Any, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr, field_validator

from ledger_relay.modules.relay import RelayPayload, RelayRequest
from ledger_relay.modules.relay.models import is_utf8_encodable
from ledger_relay.modules.transactions import TransactionRecord

ADDRESS_PATTERN = r"^0x[0-9a-fA-F]{40}$"
CANONICAL_AMOUNT = re.compile(r"^(0|[1-9][0-9]*)$")


def _parse_amount(value: Union[int, str]) -> int:
    if isinstance(value, int):
        if value < 0:
            raise ValueError("amount must be non-negative")
        return value
    if not CANONICAL_AMOUNT.match(value):
        raise ValueError("amount must be a decimal integer string without sign or leading zeros")
    return int(value)


def _encodable_text(value: str) -> str:
    if not is_utf8_encodable(value):
        raise ValueError("text must be valid unicode without lone surrogates")
    return value


class RelayPayloadBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    sender_name: StrictStr = Field(..., alias="senderName")
    to: StrictStr = Field(..., pattern=ADDRESS_PATTERN)
    recipient_name: StrictStr = Field(..., alias="recipientName")
    amount: Union[StrictInt, StrictStr]
    currency: StrictStr = ""
    purpose: StrictStr = ""
    issued_at: StrictInt = Field(..., alias="issuedAt")

    @field_validator("amount")
    @classmethod
    def _amount_is_integer(cls, value: Union[int, str]) -> int:
        return _parse_amount(value)

    @field_validator("sender_name", "recipient_name", "currency", "purpose")
    @classmethod
    def _text_is_encodable(cls, value: str) -> str:
        return _encodable_text(value)

    def to_domain(self) -> RelayPayload:
        return RelayPayload(
            sender_name=self.sender_name,
            to=self.to,
            recipient_name=self.recipient_name,
            amount=int(self.amount),
            currency=self.currency,
            purpose=self.purpose,
            issued_at=self.issued_at,
        )


class RelayRequestBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    payload: RelayPayloadBody
    signature: StrictStr = Field(..., min_length=1)
    claimed_signer: StrictStr = Field(
        ...,
        pattern=ADDRESS_PATTERN,
        validation_alias=AliasChoices("claimedSigner", "signer", "claimed_signer"),
    )

    def to_domain(self) -> RelayRequest:
        return RelayRequest(
            payload=self.payload.to_domain(),
            signature=self.signature,
            claimed_signer=self.claimed_signer,
        )


class RelayErrorResponse(BaseModel):
    ok: bool = False
    error: str
    transactionId: Optional[str] = None


class WriteResponse(BaseModel):
    ok: bool = True
    transactionId: str
    result: dict[str, Any]


class ApproveRequest(BaseModel):
    address: StrictStr = Field(..., pattern=ADDRESS_PATTERN)
    approved: StrictBool


class TransferOwnershipRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    new_owner: StrictStr = Field(..., alias="newOwner", pattern=ADDRESS_PATTERN)


class AddTransactionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sender_name: StrictStr = Field(..., alias="senderName", min_length=1)
    to: StrictStr = Field(..., pattern=ADDRESS_PATTERN)
    recipient_name: StrictStr = Field(..., alias="recipientName", min_length=1)
    amount: Union[StrictInt, StrictStr]
    currency: StrictStr = ""
    purpose: StrictStr = ""

    @field_validator("amount")
    @classmethod
    def _amount_is_integer(cls, value: Union[int, str]) -> int:
        return _parse_amount(value)

    @field_validator("sender_name", "recipient_name", "currency", "purpose")
    @classmethod
    def _text_is_encodable(cls, value: str) -> str:
        return _encodable_text(value)


class TransactionRecordResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str
    txHash: str
    amount: Optional[str] = None
    currency: Optional[str] = None
    from_address: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None
    createdAt: Optional[datetime] = None

    @classmethod
    def from_domain(cls, record: TransactionRecord) -> "TransactionRecordResponse":
        return cls(
            type=record.kind.value,
            txHash=record.tx_hash,
            amount=record.amount,
            currency=record.currency,
            from_address=record.from_address,
            to=record.to_address,
            createdAt=record.created_at,
        )


class TransactionListResponse(BaseModel):
    ok: bool = True
    transactions: list[TransactionRecordResponse]


class LedgerTransactionResponse(BaseModel):
    ok: bool = True
    tx: Any


class CountResponse(BaseModel):
    ok: bool = True
    count: str


class AddressListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    addresses: list[str] = Field(default_factory=list, alias="list")
