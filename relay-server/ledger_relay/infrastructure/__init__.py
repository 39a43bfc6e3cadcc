"""Infrastructure adapters (database, ledger node)."""
