"""Contract of the external ledger and the receipt it hands back."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol, Sequence, Union

TX_HASH_PATTERN = re.compile(r"^0x[0-9a-f]{64}$")


@dataclass(frozen=True, slots=True)
class Receipt:
    transaction_hash: str
    block_number: int
    status: int
    gas_used: int
    block_hash: Optional[str] = None
    effective_gas_price: Optional[int] = None
    from_address: Optional[str] = None
    to_address: Optional[str] = None
    contract_address: Optional[str] = None
    log_count: int = 0

    @property
    def succeeded(self) -> bool:
        return self.status == 1

    @classmethod
    def from_web3(cls, receipt: Mapping[str, Any]) -> "Receipt":
        block_hash = receipt.get("blockHash")
        return cls(
            transaction_hash=normalize_tx_hash(receipt["transactionHash"]),
            block_number=int(receipt["blockNumber"]),
            status=int(receipt.get("status", 0)),
            gas_used=int(receipt.get("gasUsed", 0)),
            block_hash=normalize_tx_hash(block_hash) if block_hash is not None else None,
            effective_gas_price=(
                int(receipt["effectiveGasPrice"]) if receipt.get("effectiveGasPrice") is not None else None
            ),
            from_address=receipt.get("from"),
            to_address=receipt.get("to"),
            contract_address=receipt.get("contractAddress"),
            log_count=len(receipt.get("logs") or ()),
        )

    def to_transport(self) -> dict[str, Any]:
        """Serialize for clients; every integer field becomes a decimal string."""
        return {
            "transactionHash": self.transaction_hash,
            "blockHash": self.block_hash,
            "blockNumber": str(self.block_number),
            "status": "success" if self.succeeded else "reverted",
            "gasUsed": str(self.gas_used),
            "effectiveGasPrice": (
                str(self.effective_gas_price) if self.effective_gas_price is not None else None
            ),
            "from": self.from_address,
            "to": self.to_address,
            "contractAddress": self.contract_address,
            "logCount": str(self.log_count),
        }


class LedgerGateway(Protocol):
    """Boundary to the smart contract.

    ``submit`` and ``confirm`` are slow, fallible and not idempotent; callers
    never retry them on their own.
    """

    @property
    def signer_address(self) -> str:
        ...

    async def submit(self, function_name: str, args: Sequence[Any]) -> str:
        ...

    async def confirm(self, transaction_id: str) -> Receipt:
        ...

    async def call(self, function_name: str, args: Sequence[Any] = ()) -> Any:
        ...

    def output_types(self, function_name: str) -> list[dict[str, Any]]:
        ...


def normalize_tx_hash(value: Union[str, bytes]) -> str:
    """Return a lower-case 0x-prefixed 32 byte hex transaction id."""
    if isinstance(value, (bytes, bytearray)):
        text = bytes(value).hex()
    else:
        text = str(value).lower()
        if text.startswith("0x"):
            text = text[2:]
    normalized = f"0x{text}"
    if not TX_HASH_PATTERN.match(normalized):
        raise ValueError(f"not a transaction hash: {value!r}")
    return normalized


__all__ = ["LedgerGateway", "Receipt", "normalize_tx_hash"]
