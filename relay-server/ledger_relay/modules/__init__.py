"""Feature modules and their public exports."""

from . import ledger, relay, transactions

__all__ = [
    "ledger",
    "relay",
    "transactions",
]
