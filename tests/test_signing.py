"""
Test suite for signing capabilities and the signing message check.
"""

import hashlib

import pytest

from movewallet.config import WalletConfig
from movewallet.core.orchestrator import TransactionOrchestrator
from movewallet.core.transaction import HashResponse, SignRequest
from movewallet.errors import SigningError
from movewallet.signing.callback import CallbackSigner
from movewallet.signing.ed25519 import Ed25519Signer, derive_address
from movewallet.signing.interface import SignatureRejectedError
from movewallet.signing.message import (
    hex_to_bytes,
    matches_raw_transaction,
    signing_message,
)

from conftest import RECIPIENT, TRANSFER_FUNCTION

# RFC 8032 test vector 1
RFC8032_PRIVATE_KEY = "9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60"
RFC8032_PUBLIC_KEY = "d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a"


# ============================================================================
# Signing Message
# ============================================================================

class TestSigningMessage:
    """Tests for the Aptos signing message helpers."""

    def test_prefix_is_salt_digest(self):
        """Test the message starts with sha3_256 of the domain separator."""
        message = signing_message("0x0102")

        assert message[:32] == hashlib.sha3_256(b"APTOS::RawTransaction").digest()
        assert message[32:] == b"\x01\x02"

    def test_hex_prefix_optional(self):
        assert hex_to_bytes("0xABcd") == hex_to_bytes("abcd") == b"\xab\xcd"

    def test_matching_hash(self):
        raw = "0x" + "02" * 40
        assert matches_raw_transaction("0x" + signing_message(raw).hex(), raw) is True

    def test_mismatching_hash(self):
        raw = "0x" + "02" * 40
        other = "0x" + "03" * 40
        assert matches_raw_transaction("0x" + signing_message(other).hex(), raw) is False

    def test_malformed_hex(self):
        assert matches_raw_transaction("0xzz", "0x02") is False


# ============================================================================
# Ed25519 Signer
# ============================================================================

class TestEd25519Signer:
    """Tests for the local Ed25519 signer."""

    def test_public_key_from_private_key(self):
        signer = Ed25519Signer(RFC8032_PRIVATE_KEY)

        assert signer.public_key_hex == "0x" + RFC8032_PUBLIC_KEY

    def test_address_derivation(self):
        """Test the address is sha3_256(public key || 0x00)."""
        signer = Ed25519Signer("0x" + RFC8032_PRIVATE_KEY)
        expected = hashlib.sha3_256(bytes.fromhex(RFC8032_PUBLIC_KEY) + b"\x00").hexdigest()

        assert signer.address == "0x" + expected
        assert derive_address(bytes.fromhex(RFC8032_PUBLIC_KEY)) == signer.address

    def test_invalid_key_length(self):
        with pytest.raises(ValueError, match="expected 64 hex chars"):
            Ed25519Signer("abcd")

    @pytest.mark.asyncio
    async def test_sign_and_verify(self):
        """Test signatures verify against the hash that was signed."""
        signer = Ed25519Signer.generate()
        hash_hex = "0x" + signing_message("0x0102").hex()

        result = await signer.sign(SignRequest(address=signer.address, chain_type="aptos", hash=hash_hex))

        assert len(hex_to_bytes(result.signature)) == 64
        assert signer.verify(result.signature, hash_hex) is True
        assert signer.verify(result.signature, "0x00") is False

    @pytest.mark.asyncio
    async def test_signing_is_deterministic(self):
        signer = Ed25519Signer(RFC8032_PRIVATE_KEY)
        request = SignRequest(address=signer.address, chain_type="aptos", hash="0xdeadbeef")

        first = await signer.sign(request)
        second = await signer.sign(request)

        assert first == second

    @pytest.mark.asyncio
    async def test_rejects_foreign_address(self):
        signer = Ed25519Signer.generate()

        with pytest.raises(SignatureRejectedError, match="does not control"):
            await signer.sign(SignRequest(address="0x1", chain_type="aptos", hash="0x01"))

    @pytest.mark.asyncio
    async def test_rejects_other_chain(self):
        signer = Ed25519Signer.generate()

        with pytest.raises(SignatureRejectedError, match="Unsupported chain type"):
            await signer.sign(SignRequest(address=signer.address, chain_type="ethereum", hash="0x01"))

    def test_owns_accepts_short_form(self):
        """Test addresses compare after zero-padding and case folding."""
        signer = Ed25519Signer(RFC8032_PRIVATE_KEY)
        short_form = "0x" + signer.address[2:].lstrip("0").upper()

        assert signer.owns(short_form) is True

    @pytest.mark.asyncio
    async def test_end_to_end_with_verified_hash(self, mock_backend):
        """Test the orchestrator with hash verification and a real key."""
        signer = Ed25519Signer.generate()
        raw = "0x" + "ab" * 50
        mock_backend.hash_response = HashResponse(hash="0x" + signing_message(raw).hex(), raw_txn_hex=raw)
        orchestrator = TransactionOrchestrator(
            mock_backend, signer, WalletConfig(verify_hash_binding=True)
        )

        result = await orchestrator.submit_transaction(
            signer.public_key_hex, signer.address, TRANSFER_FUNCTION, [], [RECIPIENT, 1]
        )

        assert result.success is True
        ((sent_raw, sent_key, sent_signature),) = mock_backend.calls_to("submit_transaction")
        assert sent_raw == raw
        assert sent_key == signer.public_key_hex
        assert signer.verify(sent_signature, mock_backend.hash_response.hash) is True

    @pytest.mark.asyncio
    async def test_foreign_sender_is_signing_error(self, mock_backend):
        """Test a signer refusal surfaces as SigningError and nothing is submitted."""
        signer = Ed25519Signer.generate()
        orchestrator = TransactionOrchestrator(mock_backend, signer)

        with pytest.raises(SigningError, match="does not control"):
            await orchestrator.submit_transaction(signer.public_key_hex, "0x1", TRANSFER_FUNCTION)

        assert mock_backend.calls_to("submit_transaction") == []


# ============================================================================
# Callback Signer
# ============================================================================

class TestCallbackSigner:
    """Tests for the provider callback adapter."""

    @pytest.mark.asyncio
    async def test_mapping_result(self):
        seen = []

        async def sign_raw_hash(address, chain_type, hash):
            seen.append((address, chain_type, hash))
            return {"signature": "0x03"}

        signer = CallbackSigner(sign_raw_hash)
        result = await signer.sign(SignRequest(address="0xABC", chain_type="aptos", hash="0x01"))

        assert result.signature == "0x03"
        assert seen == [("0xABC", "aptos", "0x01")]

    @pytest.mark.asyncio
    async def test_string_result(self):
        async def sign_raw_hash(address, chain_type, hash):
            return "0x04"

        result = await CallbackSigner(sign_raw_hash).sign(SignRequest("0xABC", "aptos", "0x01"))

        assert result.signature == "0x04"

    @pytest.mark.asyncio
    async def test_missing_signature(self):
        async def sign_raw_hash(address, chain_type, hash):
            return {}

        with pytest.raises(ValueError, match="no signature"):
            await CallbackSigner(sign_raw_hash).sign(SignRequest("0xABC", "aptos", "0x01"))
