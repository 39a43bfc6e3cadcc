"""Shared fixtures: well-known dev keys, a fake ledger gateway and a fake sink.

No test here talks to a network.
"""

from __future__ import annotations

from typing import Any, Sequence

import pytest
import pytest_asyncio
from eth_account import Account
from eth_account.messages import encode_defunct
from sqlalchemy.ext.asyncio import create_async_engine

from ledger_relay.infrastructure.database.session import build_session_factory, init_db
from ledger_relay.infrastructure.ledger.abi import LEDGER_ABI, function_outputs
from ledger_relay.modules.ledger import LedgerService, Receipt
from ledger_relay.modules.relay import RelayPayload, RelayRequest, RelayService, encode_payload
from ledger_relay.modules.transactions import TransactionEntry

# Hardhat / Anvil default dev accounts #0, #1 and #2
ALICE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
BOB_KEY = "0x59c6995e998f97a5a0044966f0945389dc9e86dae88c7a8412f4603b6b78690d"
RELAYER_KEY = "0x5de4111afa1a4b94908f83103eb1f1706367c2e68ca870fc3fb9a804cdab365a"

ALICE = Account.from_key(ALICE_KEY).address
BOB = Account.from_key(BOB_KEY).address
RELAYER = Account.from_key(RELAYER_KEY).address

RECIPIENT = "0x" + "abc" + "0" * 34 + "123"
CONTRACT = "0x5FbDB2315678afecb367f032d93F642f64180aa3"

NOW = 1_760_000_000
SAMPLE_TX_HASH = "0x" + "a1" * 32
READ_FUNCTIONS = ("getTransactionCount", "getTransaction", "getApprovedSenders", "getApprovedRecipients")


def make_payload(**overrides: Any) -> RelayPayload:
    fields: dict[str, Any] = {
        "sender_name": "Alice",
        "to": RECIPIENT,
        "recipient_name": "Bob",
        "amount": 1000,
        "currency": "USD",
        "purpose": "rent",
        "issued_at": NOW,
    }
    fields.update(overrides)
    return RelayPayload(**fields)


def sign_payload(payload: RelayPayload, key: str = ALICE_KEY) -> str:
    signed = Account.from_key(key).sign_message(encode_defunct(primitive=encode_payload(payload)))
    return "0x" + bytes(signed.signature).hex()


def make_request(
    payload: RelayPayload | None = None,
    *,
    key: str = ALICE_KEY,
    claimed_signer: str = ALICE,
    signature: str | None = None,
) -> RelayRequest:
    payload = payload or make_payload()
    return RelayRequest(
        payload=payload,
        signature=signature if signature is not None else sign_payload(payload, key),
        claimed_signer=claimed_signer,
    )


def make_receipt(tx_hash: str = SAMPLE_TX_HASH, *, status: int = 1) -> Receipt:
    return Receipt(
        transaction_hash=tx_hash,
        block_number=18_000_001,
        status=status,
        gas_used=84_211,
        block_hash="0x" + "b2" * 32,
        effective_gas_price=2**70,
        from_address=RELAYER,
        to_address=CONTRACT,
        log_count=1,
    )


class FakeGateway:
    """Minimal LedgerGateway implementation for testing."""

    def __init__(
        self,
        *,
        tx_hash: str = SAMPLE_TX_HASH,
        receipt: Receipt | None = None,
        submit_error: Exception | None = None,
        confirm_error: Exception | None = None,
        call_results: dict[str, Any] | None = None,
        outputs: dict[str, list[dict[str, Any]]] | None = None,
    ) -> None:
        self._tx_hash = tx_hash
        self.receipt = receipt or make_receipt(tx_hash)
        self.submit_error = submit_error
        self.confirm_error = confirm_error
        self.call_results = call_results or {}
        self.outputs = outputs or {name: function_outputs(LEDGER_ABI, name) for name in READ_FUNCTIONS}
        self.submit_calls: list[tuple[str, list[Any]]] = []
        self.confirm_calls: list[str] = []
        self.read_calls: list[tuple[str, list[Any]]] = []

    @property
    def signer_address(self) -> str:
        return RELAYER

    async def submit(self, function_name: str, args: Sequence[Any]) -> str:
        self.submit_calls.append((function_name, list(args)))
        if self.submit_error is not None:
            raise self.submit_error
        return self._tx_hash

    async def confirm(self, transaction_id: str) -> Receipt:
        self.confirm_calls.append(transaction_id)
        if self.confirm_error is not None:
            raise self.confirm_error
        return self.receipt

    async def call(self, function_name: str, args: Sequence[Any] = ()) -> Any:
        self.read_calls.append((function_name, list(args)))
        result = self.call_results[function_name]
        if isinstance(result, Exception):
            raise result
        return result

    def output_types(self, function_name: str) -> list[dict[str, Any]]:
        return self.outputs[function_name]


class FakeSink:
    def __init__(self, error: Exception | None = None) -> None:
        self.entries: list[TransactionEntry] = []
        self._error = error

    async def record(self, entry: TransactionEntry) -> None:
        if self._error is not None:
            raise self._error
        self.entries.append(entry)


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def sink() -> FakeSink:
    return FakeSink()


@pytest.fixture
def ledger(gateway: FakeGateway, sink: FakeSink) -> LedgerService:
    return LedgerService(gateway, sink)


@pytest.fixture
def relay(ledger: LedgerService) -> RelayService:
    return RelayService(ledger, clock=lambda: NOW)



@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'relay.db'}")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)
