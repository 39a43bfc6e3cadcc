"""The server's funded signing account."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from eth_account import Account
from eth_account.signers.local import LocalAccount

from ledger_relay.modules.ledger.exceptions import LedgerConfigurationError

_PRIVATE_KEY_PATTERN = re.compile(r"^0x[0-9a-fA-F]{64}$")


def normalize_private_key(raw: str) -> str:
    """Trim, add the 0x prefix when missing, and require 32 bytes of hex."""
    key = (raw or "").strip()
    if not key:
        raise LedgerConfigurationError("CHAIN__PRIVATE_KEY is not set")
    with_prefix = key if key.startswith("0x") else f"0x{key}"
    if not _PRIVATE_KEY_PATTERN.match(with_prefix):
        raise LedgerConfigurationError(
            "Invalid CHAIN__PRIVATE_KEY format: expected 32 bytes hex (64 hex chars)"
        )
    return with_prefix


@dataclass(frozen=True, slots=True)
class SigningAccount:
    """Explicitly constructed wrapper around the relayer key; never module-global."""

    account: LocalAccount = field(repr=False)

    @classmethod
    def from_private_key(cls, raw: str) -> "SigningAccount":
        return cls(Account.from_key(normalize_private_key(raw)))

    @property
    def address(self) -> str:
        return self.account.address

    def sign_transaction(self, transaction: dict) -> bytes:
        signed = self.account.sign_transaction(transaction)
        return signed.raw_transaction


__all__ = ["SigningAccount", "normalize_private_key"]
