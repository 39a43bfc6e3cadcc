"""Process-wide logging setup."""

from __future__ import annotations

import logging

from ledger_relay.core.config import LoggingSettings


def configure_logging(settings: LoggingSettings) -> None:
    logging.basicConfig(level=settings.level.upper(), format=settings.format)
    # web3 logs raw request bodies at DEBUG
    logging.getLogger("web3").setLevel(max(logging.getLogger().level, logging.INFO))


__all__ = ["configure_logging"]
