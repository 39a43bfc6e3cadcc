"""Timestamp window checks for signed payloads."""

from __future__ import annotations

import asyncio
import hashlib
import time
from typing import Optional

DEFAULT_WINDOW_SECONDS = 300


def check_window(issued_at: int, now: int, window: int = DEFAULT_WINDOW_SECONDS) -> bool:
    """Return True when ``issued_at`` is within ``window`` seconds of ``now``, either side.

    This bounds how long a signed payload stays usable. It does not stop the
    same payload from being relayed twice inside the window.
    """
    return abs(now - issued_at) <= window


class SignatureRegistry:
    """Opt-in record of signed payloads already relayed inside the window.

    Entries are keyed on the signed message and the recovered signer, not on
    the signature bytes, so re-encoding a signature (``v`` as 0/1, or the
    high-``s`` twin) does not make a repeat look new.

    Disabled unless ``relay.reject_duplicate_signatures`` is set. In-memory
    and per process: a second worker keeps its own registry.
    """

    def __init__(self, window: int = DEFAULT_WINDOW_SECONDS) -> None:
        self.window = window
        self._seen: dict[str, int] = {}
        self._lock = asyncio.Lock()

    async def claim(self, message: bytes, signer: str, now: Optional[int] = None) -> bool:
        """Remember ``message`` as signed by ``signer``; return False if already claimed."""
        current = int(time.time()) if now is None else now
        key = f"{signer.lower()}:{hashlib.sha256(message).hexdigest()}"
        async with self._lock:
            self._evict(current)
            if key in self._seen:
                return False
            self._seen[key] = current
            return True

    def _evict(self, now: int) -> None:
        # an entry older than two windows can no longer pass check_window
        horizon = now - 2 * self.window
        for key in [k for k, seen_at in self._seen.items() if seen_at < horizon]:
            del self._seen[key]

    def __len__(self) -> int:
        return len(self._seen)


__all__ = ["DEFAULT_WINDOW_SECONDS", "SignatureRegistry", "check_window"]
