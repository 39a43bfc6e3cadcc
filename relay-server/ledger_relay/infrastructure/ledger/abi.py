"""ABI of the ledger contract and loading of deployment artifacts."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from ledger_relay.modules.ledger.exceptions import LedgerConfigurationError


def _fn(name: str, inputs: list[tuple[str, str]], outputs: list[dict[str, Any]], mutability: str) -> dict[str, Any]:
    return {
        "type": "function",
        "name": name,
        "inputs": [{"name": arg, "type": abi_type} for arg, abi_type in inputs],
        "outputs": outputs,
        "stateMutability": mutability,
    }


TRANSACTION_COMPONENTS = [
    {"name": "from", "type": "address"},
    {"name": "senderName", "type": "string"},
    {"name": "to", "type": "address"},
    {"name": "recipientName", "type": "string"},
    {"name": "amount", "type": "uint256"},
    {"name": "currency", "type": "string"},
    {"name": "purpose", "type": "string"},
    {"name": "date", "type": "uint256"},
]

LEDGER_ABI: list[dict[str, Any]] = [
    _fn("setApprovedSender", [("who", "address"), ("approved", "bool")], [], "nonpayable"),
    _fn("setApprovedRecipient", [("who", "address"), ("approved", "bool")], [], "nonpayable"),
    _fn(
        "addTransaction",
        [
            ("senderName", "string"),
            ("to", "address"),
            ("recipientName", "string"),
            ("amount", "uint256"),
            ("currency", "string"),
            ("purpose", "string"),
            ("date", "uint256"),
        ],
        [],
        "nonpayable",
    ),
    _fn("transferOwnership", [("newOwner", "address")], [], "nonpayable"),
    _fn("getTransactionCount", [], [{"name": "", "type": "uint256"}], "view"),
    _fn(
        "getTransaction",
        [("index", "uint256")],
        [{"name": "", "type": "tuple", "components": TRANSACTION_COMPONENTS}],
        "view",
    ),
    _fn("getApprovedSenders", [], [{"name": "", "type": "address[]"}], "view"),
    _fn("getApprovedRecipients", [], [{"name": "", "type": "address[]"}], "view"),
]


def load_abi(path: Optional[Path]) -> list[dict[str, Any]]:
    """Read a Hardhat artifact (``{"abi": [...]}``) or a bare ABI list; default to the bundled ABI."""
    if path is None:
        return LEDGER_ABI
    if not path.exists():
        raise LedgerConfigurationError(f"ABI file not found: {path}")
    with path.open("r", encoding="utf-8") as fh:
        data = json.load(fh)
    abi = data.get("abi") if isinstance(data, dict) else data
    if not isinstance(abi, list):
        raise LedgerConfigurationError(f"No ABI list in {path}")
    return abi


def function_outputs(abi: list[dict[str, Any]], function_name: str) -> list[dict[str, Any]]:
    for entry in abi:
        if entry.get("type") == "function" and entry.get("name") == function_name:
            return list(entry.get("outputs") or [])
    raise LedgerConfigurationError(f"Function {function_name} not in contract ABI")


__all__ = ["LEDGER_ABI", "function_outputs", "load_abi"]
