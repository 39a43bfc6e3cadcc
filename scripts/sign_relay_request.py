#!/usr/bin/env python3
"""
Sign an addTransaction payload with a local key, the way the browser wallet
does with personal_sign, and optionally post it to the relay endpoint.

Example:
    python scripts/sign_relay_request.py \
        --key 0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80 \
        --sender-name Alice --to 0x70997970C51812dc3A010C7d01b50e0d17dc79C8 \
        --recipient-name Bob --amount 1000 --currency USD --purpose rent \
        --server http://127.0.0.1:7569
"""

from __future__ import annotations

import argparse
import json
import sys
import time
import urllib.error
import urllib.request
from typing import Any, Optional

from eth_account import Account
from eth_account.messages import encode_defunct

from ledger_relay.modules.relay import RelayPayload, encode_payload
from ledger_relay.modules.relay.codec import payload_to_message_fields


def build_request(args: argparse.Namespace) -> dict[str, Any]:
    payload = RelayPayload(
        sender_name=args.sender_name,
        to=args.to,
        recipient_name=args.recipient_name,
        amount=int(args.amount),
        currency=args.currency,
        purpose=args.purpose,
        issued_at=args.issued_at if args.issued_at is not None else int(time.time()),
    )
    account = Account.from_key(args.key)
    signed = account.sign_message(encode_defunct(primitive=encode_payload(payload)))
    return {
        "payload": payload_to_message_fields(payload),
        "signature": "0x" + bytes(signed.signature).hex(),
        "claimedSigner": account.address,
    }


def post_request(server: str, body: dict[str, Any], prefix: str) -> tuple[int, Any]:
    url = f"{server.rstrip('/')}{prefix}/blockchain/relay-add-transaction"
    data = json.dumps(body).encode("utf-8")
    req = urllib.request.Request(url, data=data, headers={"Content-Type": "application/json"}, method="POST")
    try:
        with urllib.request.urlopen(req) as resp:
            return resp.status, json.loads(resp.read().decode("utf-8"))
    except urllib.error.HTTPError as exc:
        text = exc.read().decode("utf-8", errors="replace")
        try:
            return exc.code, json.loads(text)
        except ValueError:
            raise SystemExit(f"Unexpected response from relay endpoint: {text[:300]}") from exc


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--key", required=True, help="private key of the signing wallet")
    parser.add_argument("--sender-name", required=True)
    parser.add_argument("--to", required=True, help="recipient address")
    parser.add_argument("--recipient-name", required=True)
    parser.add_argument("--amount", required=True, help="non-negative integer amount")
    parser.add_argument("--currency", default="")
    parser.add_argument("--purpose", default="")
    parser.add_argument("--issued-at", type=int, default=None, help="unix seconds, defaults to now")
    parser.add_argument("--server", default=None, help="post to this server instead of printing")
    parser.add_argument("--api-prefix", default="/api")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    body = build_request(args)
    if args.server is None:
        print(json.dumps(body, indent=2, ensure_ascii=False))
        return 0

    status, response = post_request(args.server, body, args.api_prefix)
    print(f"[relay] HTTP {status}")
    print(json.dumps(response, indent=2, ensure_ascii=False))
    return 0 if status == 200 else 1


if __name__ == "__main__":
    sys.exit(main())
