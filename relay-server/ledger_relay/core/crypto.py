"""Utilities for recovering and comparing message signers."""

from __future__ import annotations

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_keys.exceptions import BadSignature, ValidationError as KeyValidationError
from eth_utils import is_hex_address

SIGNATURE_LENGTH = 65


class InvalidSignatureError(ValueError):
    """Raised when a signature is malformed or does not recover to an address."""


def signature_to_bytes(signature: bytes | str) -> bytes:
    """Decode a 0x-prefixed hex signature (or pass raw bytes through)."""
    if isinstance(signature, (bytes, bytearray)):
        raw = bytes(signature)
    elif isinstance(signature, str):
        text = signature[2:] if signature[:2] in ("0x", "0X") else signature
        try:
            raw = bytes.fromhex(text)
        except ValueError as exc:
            raise InvalidSignatureError("signature is not valid hex") from exc
    else:
        raise InvalidSignatureError("signature must be bytes or a hex string")

    if len(raw) != SIGNATURE_LENGTH:
        raise InvalidSignatureError(f"signature must be {SIGNATURE_LENGTH} bytes, got {len(raw)}")
    return raw


def recover_signer(message: bytes, signature: bytes | str) -> str:
    """Recover the checksum address that personal_sign'ed ``message``.

    A well-formed signature made over a different message still recovers to
    *some* address; callers detect that by comparing with the claimed signer.
    """
    raw = signature_to_bytes(signature)
    try:
        return Account.recover_message(encode_defunct(primitive=message), signature=raw)
    except (BadSignature, KeyValidationError, ValueError, TypeError) as exc:
        raise InvalidSignatureError("signature does not recover to an address") from exc


def addresses_match(left: str, right: str) -> bool:
    """Compare two hex addresses ignoring checksum case."""
    if not (is_hex_address(left) and is_hex_address(right)):
        return False
    return left.lower() == right.lower()


__all__ = ["InvalidSignatureError", "SIGNATURE_LENGTH", "addresses_match", "recover_signer", "signature_to_bytes"]
