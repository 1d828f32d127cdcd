"""
Abstract interface for the transaction backend.

Defines the contract that all backend adapters must implement.
"""

from abc import ABC, abstractmethod
from typing import Any

from movewallet.core.transaction import HashResponse, SigningRequest, SubmissionResult


class BackendInterface(ABC):
    """
    Abstract interface for the transaction backend.

    The backend builds transactions, hashes them for signing and broadcasts
    them once signed. It also serves simple account reads:
    - Hash generation
    - Signed transaction submission
    - Balance and account info
    - Faucet funding

    Every method performs exactly one request. Failures are raised as
    BackendRequestError.
    """

    async def __aenter__(self) -> "BackendInterface":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.disconnect()

    @abstractmethod
    async def connect(self) -> None:
        """Prepare the connection to the backend."""
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Release the connection to the backend."""
        pass

    @abstractmethod
    async def generate_hash(self, request: SigningRequest) -> HashResponse:
        """
        Build the transaction server-side and return the hash to sign.

        Args:
            request: Transaction to build

        Returns:
            Hash and raw transaction encoding

        Raises:
            BackendRequestError: If the backend cannot produce the hash
        """
        pass

    @abstractmethod
    async def submit_transaction(
        self,
        raw_txn_hex: str,
        public_key: str,
        signature: str,
    ) -> SubmissionResult:
        """
        Broadcast a signed transaction.

        Args:
            raw_txn_hex: Raw transaction returned by generate_hash
            public_key: Sender's public key
            signature: Signature over the hash

        Returns:
            Submission result as reported by the backend; success may be
            False when the ledger rejected the transaction

        Raises:
            BackendRequestError: If the request fails or is answered with non-2xx
        """
        pass

    @abstractmethod
    async def get_balance(self, address: str) -> Any:
        """
        Get the balance of an account.

        Args:
            address: Account address

        Returns:
            Balance as reported by the backend
        """
        pass

    @abstractmethod
    async def get_account_info(self, address: str) -> Any:
        """
        Get account details.

        Args:
            address: Account address

        Returns:
            Account info as reported by the backend
        """
        pass

    @abstractmethod
    async def request_faucet(self, address: str, amount: int) -> Any:
        """
        Ask the faucet to fund an account.

        Args:
            address: Account to fund
            amount: Amount in octas

        Returns:
            Faucet result as reported by the backend
        """
        pass
