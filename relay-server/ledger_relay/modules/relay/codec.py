"""Canonical message encoding shared by the signing client and the server.

The browser signs ``JSON.stringify(payload)`` of an object literal whose keys
are written in the order below. Any change here (key order, number
formatting, escaping) invalidates every signature in flight.
"""

from __future__ import annotations

import json
from typing import Any

from .models import RelayPayload

FIELD_ORDER = (
    "senderName",
    "to",
    "recipientName",
    "amount",
    "currency",
    "purpose",
    "issuedAt",
)


def payload_to_message_fields(payload: RelayPayload) -> dict[str, Any]:
    # amount is carried as a decimal string so no client rounds it
    return {
        "senderName": payload.sender_name,
        "to": payload.to,
        "recipientName": payload.recipient_name,
        "amount": str(payload.amount),
        "currency": payload.currency,
        "purpose": payload.purpose,
        "issuedAt": payload.issued_at,
    }


def encode_payload(payload: RelayPayload) -> bytes:
    """Encode ``payload`` as the exact UTF-8 bytes the client signed."""
    fields = payload_to_message_fields(payload)
    ordered = {name: fields[name] for name in FIELD_ORDER}
    return json.dumps(ordered, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


__all__ = ["FIELD_ORDER", "encode_payload", "payload_to_message_fields"]
