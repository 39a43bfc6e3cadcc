"""Signed-message relay server for the ledger contract."""

__version__ = "0.1.0"
