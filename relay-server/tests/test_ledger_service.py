import asyncio

import pytest
from conftest import BOB, RECIPIENT, RELAYER, SAMPLE_TX_HASH, FakeGateway, FakeSink, make_receipt
from eth_utils import to_checksum_address

from ledger_relay.infrastructure.ledger.abi import LEDGER_ABI, function_outputs
from ledger_relay.modules.ledger import (
    AccountLockRegistry,
    InvalidAddressError,
    InvalidIndexError,
    LedgerService,
    Receipt,
    SubmissionError,
    normalize_tx_hash,
)
from ledger_relay.modules.ledger.normalize import normalize_outputs, normalize_value
from ledger_relay.modules.ledger.service import parse_index
from ledger_relay.modules.transactions import TransactionKind


class TestParseIndex:
    @pytest.mark.parametrize(("raw", "expected"), [("0", 0), ("42", 42), ("007", 7), (3, 3)])
    def test_accepts_non_negative_integers(self, raw, expected):
        assert parse_index(raw) == expected

    @pytest.mark.parametrize("raw", ["-1", "1.5", "abc", "", " 1", "1e3", "0x10", -1, True, 1.0])
    def test_rejects_everything_else(self, raw):
        with pytest.raises(InvalidIndexError):
            parse_index(raw)


class TestNormalizeOutputs:
    def test_transaction_struct_becomes_dict_with_string_integers(self):
        outputs = function_outputs(LEDGER_ABI, "getTransaction")
        # web3 decodes a struct return as a positional tuple
        value = (RELAYER, "Alice", RECIPIENT, "Bob", 10**30, "USD", "rent", 1_760_000_000)

        normalized = normalize_outputs(outputs, value)

        assert normalized == {
            "from": RELAYER,
            "senderName": "Alice",
            "to": RECIPIENT,
            "recipientName": "Bob",
            "amount": str(10**30),
            "currency": "USD",
            "purpose": "rent",
            "date": "1760000000",
        }

    def test_single_unnamed_integer_is_unwrapped(self):
        assert normalize_outputs(function_outputs(LEDGER_ABI, "getTransactionCount"), 5) == "5"

    def test_address_array_passes_through(self):
        outputs = function_outputs(LEDGER_ABI, "getApprovedSenders")
        assert normalize_outputs(outputs, [BOB, RELAYER]) == [BOB, RELAYER]

    def test_named_outputs_from_mapping(self):
        outputs = [{"name": "count", "type": "uint64"}, {"name": "active", "type": "bool"}]
        assert normalize_outputs(outputs, {"count": 3, "active": 1}) == {"count": "3", "active": True}

    def test_unnamed_multiple_outputs_use_positions(self):
        outputs = [{"name": "", "type": "int256"}, {"name": "", "type": "string"}]
        assert normalize_outputs(outputs, (-4, "x")) == {"0": "-4", "1": "x"}

    def test_bytes_become_hex(self):
        assert normalize_value({"type": "bytes32"}, b"\x01" * 32) == "0x" + "01" * 32

    def test_nested_integer_arrays(self):
        assert normalize_value({"type": "uint256[][]"}, [[1, 2], [3]]) == [["1", "2"], ["3"]]


class TestReceipt:
    def test_transport_form_uses_strings_for_integers(self):
        transport = make_receipt().to_transport()

        assert transport["transactionHash"] == SAMPLE_TX_HASH
        assert transport["blockNumber"] == "18000001"
        assert transport["gasUsed"] == "84211"
        assert transport["effectiveGasPrice"] == str(2**70)
        assert transport["status"] == "success"
        assert transport["logCount"] == "1"

    def test_from_web3_mapping(self):
        receipt = Receipt.from_web3(
            {
                "transactionHash": b"\xa1" * 32,
                "blockHash": "0x" + "B2" * 32,
                "blockNumber": 12,
                "status": 1,
                "gasUsed": 21_000,
                "effectiveGasPrice": 7,
                "from": RELAYER,
                "to": BOB,
                "contractAddress": None,
                "logs": [{}, {}],
            }
        )

        assert receipt.transaction_hash == SAMPLE_TX_HASH
        assert receipt.block_hash == "0x" + "b2" * 32
        assert receipt.succeeded
        assert receipt.log_count == 2

    def test_tx_hash_normalization(self):
        assert normalize_tx_hash("0x" + "A1" * 32) == SAMPLE_TX_HASH
        assert normalize_tx_hash("a1" * 32) == SAMPLE_TX_HASH
        with pytest.raises(ValueError):
            normalize_tx_hash("0x1234")


class TestAdminWrites:
    @pytest.mark.asyncio
    async def test_approve_sender(self, ledger, gateway, sink):
        result = await ledger.approve_sender(RECIPIENT, True)

        recipient = to_checksum_address(RECIPIENT)
        assert result.transaction_id == SAMPLE_TX_HASH
        assert result.recorded
        assert gateway.submit_calls == [("setApprovedSender", [recipient, True])]
        [entry] = sink.entries
        assert entry.kind is TransactionKind.APPROVE_SENDER
        assert entry.from_address == RELAYER
        assert entry.to_address == recipient
        assert entry.amount is None

    @pytest.mark.asyncio
    async def test_revoke_recipient(self, ledger, gateway, sink):
        await ledger.approve_recipient(BOB, False)

        assert gateway.submit_calls == [("setApprovedRecipient", [BOB, False])]
        assert sink.entries[0].kind is TransactionKind.APPROVE_RECIPIENT

    @pytest.mark.asyncio
    async def test_transfer_ownership(self, ledger, gateway, sink):
        await ledger.transfer_ownership(BOB.lower())

        assert gateway.submit_calls == [("transferOwnership", [BOB])]
        assert sink.entries[0].kind is TransactionKind.TRANSFER_OWNERSHIP

    @pytest.mark.asyncio
    async def test_direct_add_transaction_is_attributed_to_relayer(self, ledger, gateway, sink):
        await ledger.add_transaction(sender_name="Ops", to=BOB, recipient_name="Bob", amount=5)

        name, args = gateway.submit_calls[0]
        assert name == "addTransaction"
        assert args[:6] == ["Ops", BOB, "Bob", 5, "", ""]
        assert isinstance(args[6], int)
        assert sink.entries[0].from_address == RELAYER

    @pytest.mark.asyncio
    async def test_bad_address_never_reaches_gateway(self, ledger, gateway):
        with pytest.raises(InvalidAddressError):
            await ledger.approve_sender("0x1234", True)
        assert gateway.submit_calls == []

    @pytest.mark.asyncio
    async def test_submit_failure_is_wrapped(self):
        gateway = FakeGateway(submit_error=RuntimeError("nonce too low"))
        service = LedgerService(gateway, FakeSink())

        with pytest.raises(SubmissionError) as excinfo:
            await service.transfer_ownership(BOB)

        assert isinstance(excinfo.value.__cause__, RuntimeError)
        assert len(gateway.submit_calls) == 1


class TestReads:
    @pytest.mark.asyncio
    async def test_transaction_count(self):
        service = LedgerService(FakeGateway(call_results={"getTransactionCount": 12}), FakeSink())
        assert await service.transaction_count() == 12

    @pytest.mark.asyncio
    async def test_get_transaction_passes_parsed_index(self):
        gateway = FakeGateway(
            call_results={"getTransaction": (RELAYER, "Alice", BOB, "Bob", 1, "", "", 9)},
        )
        service = LedgerService(gateway, FakeSink())

        tx = await service.get_transaction("3")

        assert gateway.read_calls == [("getTransaction", [3])]
        assert tx["amount"] == "1"
        assert tx["date"] == "9"

    @pytest.mark.asyncio
    async def test_invalid_index_makes_no_call(self):
        gateway = FakeGateway()
        service = LedgerService(gateway, FakeSink())

        with pytest.raises(InvalidIndexError):
            await service.get_transaction("-1")
        assert gateway.read_calls == []

    @pytest.mark.asyncio
    async def test_approved_lists(self):
        gateway = FakeGateway(call_results={"getApprovedSenders": (BOB,), "getApprovedRecipients": []})
        service = LedgerService(gateway, FakeSink())

        assert await service.approved_senders() == [BOB]
        assert await service.approved_recipients() == []


class SlowGateway(FakeGateway):
    def __init__(self) -> None:
        super().__init__()
        self.active = 0
        self.max_active = 0

    async def submit(self, function_name, args):
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        await asyncio.sleep(0.01)
        self.active -= 1
        return await super().submit(function_name, args)


class TestWriteSerialization:
    @pytest.mark.asyncio
    async def test_concurrent_writes_submit_one_at_a_time(self):
        gateway = SlowGateway()
        service = LedgerService(gateway, FakeSink(), AccountLockRegistry())

        results = await asyncio.gather(
            service.approve_sender(BOB, True),
            service.approve_recipient(BOB, True),
            service.transfer_ownership(BOB),
        )

        assert gateway.max_active == 1
        assert len(gateway.submit_calls) == 3
        assert all(result.recorded for result in results)

    def test_locks_are_keyed_case_insensitively(self):
        locks = AccountLockRegistry()
        assert locks.lock_for(RELAYER) is locks.lock_for(RELAYER.lower())
        assert locks.lock_for(RELAYER) is not locks.lock_for(BOB)
