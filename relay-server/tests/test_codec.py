import json

from conftest import make_payload

from ledger_relay.modules.relay import encode_payload
from ledger_relay.modules.relay.codec import FIELD_ORDER, payload_to_message_fields


class TestEncodePayload:
    def test_matches_json_stringify_output(self):
        payload = make_payload(
            to="0x70997970C51812dc3A010C7d01b50e0d17dc79C8",
            issued_at=1700000000,
        )

        expected = (
            '{"senderName":"Alice",'
            '"to":"0x70997970C51812dc3A010C7d01b50e0d17dc79C8",'
            '"recipientName":"Bob",'
            '"amount":"1000",'
            '"currency":"USD",'
            '"purpose":"rent",'
            '"issuedAt":1700000000}'
        ).encode("utf-8")
        assert encode_payload(payload) == expected

    def test_keys_follow_fixed_order(self):
        decoded = json.loads(encode_payload(make_payload()))
        assert list(decoded) == list(FIELD_ORDER)

    def test_optional_fields_are_always_present(self):
        decoded = json.loads(encode_payload(make_payload(currency="", purpose="")))
        assert decoded["currency"] == ""
        assert decoded["purpose"] == ""

    def test_non_ascii_is_written_as_utf8_not_escaped(self):
        encoded = encode_payload(make_payload(purpose='café "☕"'))
        assert '"purpose":"café \\"☕\\""'.encode("utf-8") in encoded
        assert b"\\u" not in encoded

    def test_large_amount_is_a_decimal_string(self):
        amount = 2**200
        encoded = encode_payload(make_payload(amount=amount))
        assert f'"amount":"{amount}"'.encode("ascii") in encoded

    def test_equal_payloads_encode_identically(self):
        assert encode_payload(make_payload()) == encode_payload(make_payload())

    def test_any_field_change_changes_the_bytes(self):
        base = encode_payload(make_payload())
        assert encode_payload(make_payload(amount=1001)) != base
        assert encode_payload(make_payload(issued_at=make_payload().issued_at + 1)) != base
        assert encode_payload(make_payload(purpose="rent ")) != base


def test_message_fields_carry_amount_as_string():
    fields = payload_to_message_fields(make_payload(amount=7))
    assert fields["amount"] == "7"
    assert isinstance(fields["issuedAt"], int)
