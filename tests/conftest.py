"""
Pytest configuration and shared fixtures for the test suite.
"""

import asyncio
from typing import Any, Dict, List, Optional, Tuple

import pytest

from movewallet.backend.interface import BackendInterface
from movewallet.config import WalletConfig
from movewallet.core.transaction import (
    HashResponse,
    SignatureResult,
    SigningRequest,
    SignRequest,
    SubmissionResult,
)
from movewallet.errors import BackendRequestError
from movewallet.signing.interface import SignatureRejectedError, SigningCapability


SENDER = "0xABC"
RECIPIENT = "0xDEF"
PUBLIC_KEY = "0x" + "11" * 32
TRANSFER_FUNCTION = "0x1::coin::transfer"
HASH_HEX = "0x01" + "aa" * 31
RAW_TXN_HEX = "0x02" + "bb" * 63
SIGNATURE_HEX = "0x03" + "cc" * 63


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def test_config() -> WalletConfig:
    """Create a test configuration."""
    return WalletConfig(
        base_url="http://backend.test",
        hash_timeout_seconds=1.0,
        submit_timeout_seconds=1.0,
        read_timeout_seconds=1.0,
        log_level="DEBUG",
    )


# ============================================================================
# Mock Backend
# ============================================================================

class MockBackend(BackendInterface):
    """In-memory backend that records every call."""

    def __init__(self):
        self.calls: List[Tuple[str, Any]] = []
        self.hash_response = HashResponse(hash=HASH_HEX, raw_txn_hex=RAW_TXN_HEX)
        self.submit_response: Dict[str, Any] = {"success": True, "hash": "0x" + "dd" * 32}
        self.balances: Dict[str, int] = {}
        self.generate_error: Optional[Exception] = None
        self.submit_error: Optional[Exception] = None
        self.read_error: Optional[Exception] = None
        self.connected = False

    async def connect(self) -> None:
        self.connected = True

    async def disconnect(self) -> None:
        self.connected = False

    def calls_to(self, name: str) -> List[Any]:
        return [args for call, args in self.calls if call == name]

    async def generate_hash(self, request: SigningRequest) -> HashResponse:
        self.calls.append(("generate_hash", request))
        if self.generate_error:
            raise self.generate_error
        return self.hash_response

    async def submit_transaction(
        self,
        raw_txn_hex: str,
        public_key: str,
        signature: str,
    ) -> SubmissionResult:
        self.calls.append(("submit_transaction", (raw_txn_hex, public_key, signature)))
        if self.submit_error:
            raise self.submit_error
        return SubmissionResult.from_payload(self.submit_response)

    async def get_balance(self, address: str) -> Any:
        self.calls.append(("get_balance", address))
        if self.read_error:
            raise self.read_error
        return self.balances.get(address, 0)

    async def get_account_info(self, address: str) -> Any:
        self.calls.append(("get_account_info", address))
        if self.read_error:
            raise self.read_error
        return {"address": address, "sequence_number": "0"}

    async def request_faucet(self, address: str, amount: int) -> Any:
        self.calls.append(("request_faucet", (address, amount)))
        if self.read_error:
            raise self.read_error
        self.balances[address] = self.balances.get(address, 0) + amount
        return {"success": True, "address": address, "amount": amount}


@pytest.fixture
def mock_backend() -> MockBackend:
    """Create a mock backend."""
    return MockBackend()


@pytest.fixture
def failing_backend() -> MockBackend:
    """Create a mock backend whose generate-hash call answers HTTP 500."""
    backend = MockBackend()
    backend.generate_error = BackendRequestError(
        "Internal Server Error", path="/generate-hash", status_code=500
    )
    return backend


# ============================================================================
# Stub Signer
# ============================================================================

class StubSigner(SigningCapability):
    """Deterministic signer that records what it was asked to sign."""

    def __init__(
        self,
        signature: str = SIGNATURE_HEX,
        reject: bool = False,
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ):
        self.signature = signature
        self.reject = reject
        self.error = error
        self.delay = delay
        self.requests: List[SignRequest] = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    async def sign(self, request: SignRequest) -> SignatureResult:
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        if self.reject:
            raise SignatureRejectedError("User rejected the request")
        return SignatureResult(signature=self.signature)


@pytest.fixture
def stub_signer() -> StubSigner:
    """Create a stub signer that always signs."""
    return StubSigner()


@pytest.fixture
def rejecting_signer() -> StubSigner:
    """Create a stub signer that always rejects."""
    return StubSigner(reject=True)
