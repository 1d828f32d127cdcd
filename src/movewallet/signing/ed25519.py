"""
Local Ed25519 signer.

Signs hashes with an in-memory Ed25519 key. Meant for development and
tests against a local backend; production signing goes through a custody
provider.
"""

import hashlib

import structlog
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import ed25519
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
)

from movewallet.core.transaction import SignatureResult, SignRequest
from movewallet.logs import short
from movewallet.signing.interface import SignatureRejectedError, SigningCapability
from movewallet.signing.message import hex_to_bytes, strip_hex_prefix

logger = structlog.get_logger(__name__)

# Ed25519: private 32 bytes, public 32 bytes, signature 64 bytes
PRIVATE_KEY_HEX_LEN = 64
ED25519_SCHEME = b"\x00"


def derive_address(public_key: bytes) -> str:
    """Derive the account address (authentication key) of a single-key account."""
    return "0x" + hashlib.sha3_256(public_key + ED25519_SCHEME).hexdigest()


def _normalize_address(address: str) -> str:
    return "0x" + strip_hex_prefix(address).lower().rjust(64, "0")


class Ed25519Signer(SigningCapability):
    """
    Signs hashes with a local Ed25519 key.

    Refuses requests for other chain types or other accounts, the same way a
    custody provider would.
    """

    def __init__(self, private_key_hex: str, chain_type: str = "aptos"):
        """
        Initialize the signer.

        Args:
            private_key_hex: 32-byte Ed25519 private key in hex
            chain_type: Chain type this signer serves
        """
        raw = strip_hex_prefix(private_key_hex)
        if len(raw) != PRIVATE_KEY_HEX_LEN:
            raise ValueError(
                f"invalid Ed25519 private key length, expected {PRIVATE_KEY_HEX_LEN} hex chars"
            )
        self._private_key = ed25519.Ed25519PrivateKey.from_private_bytes(bytes.fromhex(raw))
        self.chain_type = chain_type
        self.public_key_bytes = self._private_key.public_key().public_bytes(
            encoding=Encoding.Raw,
            format=PublicFormat.Raw,
        )

    @classmethod
    def generate(cls, chain_type: str = "aptos") -> "Ed25519Signer":
        """
        Create a signer with a new random key.

        WARNING: The key is not persisted.
        """
        key_bytes = ed25519.Ed25519PrivateKey.generate().private_bytes(
            encoding=Encoding.Raw,
            format=PrivateFormat.Raw,
            encryption_algorithm=NoEncryption(),
        )
        signer = cls(key_bytes.hex(), chain_type=chain_type)
        logger.warning("test_key_generated", address=short(signer.address))
        return signer

    @property
    def public_key_hex(self) -> str:
        return "0x" + self.public_key_bytes.hex()

    @property
    def address(self) -> str:
        return derive_address(self.public_key_bytes)

    def owns(self, address: str) -> bool:
        """Check whether an address belongs to this key."""
        try:
            return _normalize_address(address) == self.address
        except (AttributeError, TypeError):
            return False

    def verify(self, signature_hex: str, hash_hex: str) -> bool:
        """Check a signature produced by this key."""
        try:
            self._private_key.public_key().verify(hex_to_bytes(signature_hex), hex_to_bytes(hash_hex))
        except (InvalidSignature, ValueError):
            return False
        return True

    async def sign(self, request: SignRequest) -> SignatureResult:
        if request.chain_type != self.chain_type:
            raise SignatureRejectedError(f"Unsupported chain type: {request.chain_type}")
        if not self.owns(request.address):
            raise SignatureRejectedError(f"Key does not control {request.address}")

        signature = self._private_key.sign(hex_to_bytes(request.hash))
        logger.debug("hash_signed", address=short(request.address), hash=short(request.hash))
        return SignatureResult(signature="0x" + signature.hex())
