import pytest
from conftest import ALICE, ALICE_KEY, BOB, BOB_KEY, make_payload, sign_payload

from ledger_relay.core.crypto import (
    InvalidSignatureError,
    addresses_match,
    recover_signer,
    signature_to_bytes,
)
from ledger_relay.modules.relay import encode_payload


class TestRecoverSigner:
    def test_recovers_the_signing_wallet(self):
        payload = make_payload()
        assert recover_signer(encode_payload(payload), sign_payload(payload, ALICE_KEY)) == ALICE
        assert recover_signer(encode_payload(payload), sign_payload(payload, BOB_KEY)) == BOB

    def test_signature_over_other_payload_recovers_someone_else(self):
        signed = make_payload(amount=1000)
        tampered = make_payload(amount=1001)

        recovered = recover_signer(encode_payload(tampered), sign_payload(signed))

        assert recovered != ALICE

    def test_accepts_unprefixed_hex_and_raw_bytes(self):
        payload = make_payload()
        signature = sign_payload(payload)
        message = encode_payload(payload)

        assert recover_signer(message, signature[2:]) == ALICE
        assert recover_signer(message, bytes.fromhex(signature[2:])) == ALICE

    @pytest.mark.parametrize("signature", ["0x1234", "0x" + "zz" * 65, "", "0x" + "11" * 64])
    def test_malformed_signature_is_rejected(self, signature):
        with pytest.raises(InvalidSignatureError):
            recover_signer(encode_payload(make_payload()), signature)


class TestSignatureToBytes:
    def test_decodes_65_bytes(self):
        assert len(signature_to_bytes("0x" + "ab" * 65)) == 65

    def test_rejects_other_types(self):
        with pytest.raises(InvalidSignatureError):
            signature_to_bytes(12345)  # type: ignore[arg-type]

    def test_invalid_signature_is_a_value_error(self):
        with pytest.raises(ValueError):
            signature_to_bytes("0x00")


class TestAddressesMatch:
    def test_ignores_checksum_case(self):
        assert addresses_match(ALICE.lower(), ALICE)
        assert addresses_match(ALICE.upper().replace("0X", "0x"), ALICE)

    def test_different_addresses(self):
        assert not addresses_match(ALICE, BOB)

    def test_non_addresses_never_match(self):
        assert not addresses_match("alice", "alice")
