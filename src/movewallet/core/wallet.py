"""
Wallet facade.

Bundles transaction submission with the backend's account reads.
"""

from typing import Any, Optional, Sequence

import structlog

from movewallet.backend.http import HttpBackend
from movewallet.backend.interface import BackendInterface
from movewallet.config import WalletConfig
from movewallet.core.orchestrator import TransactionOrchestrator
from movewallet.core.transaction import SubmissionResult
from movewallet.errors import ReadOperationError, lower_message
from movewallet.logs import short
from movewallet.signing.interface import SigningCapability

logger = structlog.get_logger(__name__)


class MovementWallet:
    """
    Client-side wallet for a keyless Movement account.

    Usage:
        ```python
        async with MovementWallet(signer=signer, config=config) as wallet:
            balance = await wallet.get_wallet_balance(address)
            result = await wallet.sign_and_submit_transaction(
                public_key, address, "0x1::aptos_account::transfer",
                function_arguments=[recipient, 100],
            )
        ```
    """

    def __init__(
        self,
        signer: SigningCapability,
        backend: Optional[BackendInterface] = None,
        config: Optional[WalletConfig] = None,
    ):
        """
        Initialize the wallet.

        Args:
            signer: Signing capability for the account
            backend: Custom backend (an HttpBackend is created from config if not provided)
            config: Wallet configuration
        """
        self.config = config or WalletConfig()
        self.backend = backend or HttpBackend(self.config)
        self.orchestrator = TransactionOrchestrator(self.backend, signer, self.config)

    async def __aenter__(self) -> "MovementWallet":
        await self.backend.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.backend.disconnect()

    async def sign_and_submit_transaction(
        self,
        public_key: str,
        sender_address: str,
        function_id: str,
        type_arguments: Optional[Sequence[str]] = None,
        function_arguments: Optional[Sequence[Any]] = None,
    ) -> SubmissionResult:
        """Sign and submit a transaction. See TransactionOrchestrator.submit_transaction."""
        return await self.orchestrator.submit_transaction(
            public_key,
            sender_address,
            function_id,
            type_arguments=type_arguments,
            function_arguments=function_arguments,
        )

    async def get_wallet_balance(self, address: str) -> Any:
        """
        Get the balance of an account.

        Raises:
            ReadOperationError: If the backend call fails
        """
        try:
            return await self.backend.get_balance(address)
        except Exception as e:
            logger.error("balance_fetch_failed", address=short(address), error=str(e))
            raise ReadOperationError("get_wallet_balance", lower_message(e) or "Failed to fetch balance") from e

    async def get_account_info(self, address: str) -> Any:
        """
        Get account details.

        Raises:
            ReadOperationError: If the backend call fails
        """
        try:
            return await self.backend.get_account_info(address)
        except Exception as e:
            logger.error("account_info_fetch_failed", address=short(address), error=str(e))
            raise ReadOperationError("get_account_info", lower_message(e) or "Failed to fetch account info") from e

    async def request_faucet(self, address: str, amount: Optional[int] = None) -> Any:
        """
        Fund an account from the faucet.

        Args:
            address: Account to fund
            amount: Amount in octas (defaults to config.default_faucet_amount)

        Raises:
            ReadOperationError: If the backend call fails
        """
        if amount is None:
            amount = self.config.default_faucet_amount

        try:
            data = await self.backend.request_faucet(address, amount)
        except Exception as e:
            logger.error("faucet_request_failed", address=short(address), amount=amount, error=str(e))
            raise ReadOperationError("request_faucet", lower_message(e) or "Faucet request failed") from e

        logger.info("faucet_funded", address=short(address), amount=amount)
        return data
