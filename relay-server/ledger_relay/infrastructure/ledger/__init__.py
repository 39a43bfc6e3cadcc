"""Ledger node adapters."""

from .abi import LEDGER_ABI, load_abi
from .account import SigningAccount, normalize_private_key
from .gateway import Web3LedgerGateway

__all__ = ["LEDGER_ABI", "SigningAccount", "Web3LedgerGateway", "load_abi", "normalize_private_key"]
