"""
Transaction submission orchestrator.

Runs the three-stage protocol that lets a client submit a transaction
without holding its private key:

1. the backend builds the transaction and returns the hash to sign,
2. the signing capability signs the hash,
3. the backend broadcasts the raw transaction with the signature.
"""

import asyncio
from typing import Any, Mapping, Optional, Sequence

import structlog

from movewallet.backend.interface import BackendInterface
from movewallet.config import WalletConfig
from movewallet.core.transaction import (
    HashResponse,
    SignatureResult,
    SigningRequest,
    SignRequest,
    SubmissionAttempt,
    SubmissionResult,
)
from movewallet.errors import (
    HashBindingError,
    HashGenerationError,
    SigningError,
    SubmissionTransportError,
    TransactionError,
    VmExecutionError,
    describe_error,
    lower_message,
)
from movewallet.logs import short
from movewallet.signing.interface import SigningCapability
from movewallet.signing.message import matches_raw_transaction

logger = structlog.get_logger(__name__)


def _as_signature(value: Any) -> Optional[SignatureResult]:
    """Accept a SignatureResult or a {'signature': ...} mapping; None if neither carries one."""
    if isinstance(value, SignatureResult):
        signature = value.signature
    elif isinstance(value, Mapping):
        signature = value.get("signature")
    else:
        return None
    if not signature or not isinstance(signature, str):
        return None
    return SignatureResult(signature=signature)


class TransactionOrchestrator:
    """
    Sequences hash generation, signing and submission.

    Each call either returns a successful SubmissionResult or raises a
    TransactionError naming the failed stage. A stage only runs when the
    previous one succeeded, each stage makes exactly one call, and nothing
    is retried here; retry policy belongs to the caller.

    Usage:
        ```python
        orchestrator = TransactionOrchestrator(backend, signer, config)
        result = await orchestrator.submit_transaction(
            public_key, sender, "0x1::coin::transfer",
            function_arguments=["0xDEF", 100],
        )
        ```
    """

    def __init__(
        self,
        backend: BackendInterface,
        signer: SigningCapability,
        config: Optional[WalletConfig] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            backend: Backend that hashes and broadcasts transactions
            signer: Signing capability for the sender's account
            config: Wallet configuration
        """
        self.backend = backend
        self.signer = signer
        self.config = config or WalletConfig()

    async def submit_transaction(
        self,
        public_key: str,
        sender_address: str,
        function_id: str,
        type_arguments: Optional[Sequence[str]] = None,
        function_arguments: Optional[Sequence[Any]] = None,
    ) -> SubmissionResult:
        """
        Build, sign and submit a transaction.

        Args:
            public_key: Sender's public key
            sender_address: Sender's account address
            function_id: Entry function to call
            type_arguments: Move type arguments
            function_arguments: Entry function arguments

        Returns:
            Successful submission result with the backend's full response

        Raises:
            ValueError: If a required identifier is empty
            HashGenerationError: Stage 1 failed; nothing was signed
            SigningError: Stage 2 failed; nothing was submitted
            SubmissionTransportError: Stage 3 did not get a 2xx answer
            VmExecutionError: The ledger rejected the transaction
        """
        for name, value in (
            ("public_key", public_key),
            ("sender_address", sender_address),
            ("function_id", function_id),
        ):
            if not value:
                raise ValueError(f"{name} must not be empty")

        request = SigningRequest(
            sender_address=sender_address,
            function_id=function_id,
            type_arguments=tuple(type_arguments or ()),
            function_arguments=tuple(function_arguments or ()),
        )
        attempt = SubmissionAttempt(request=request)
        log = logger.bind(attempt_id=attempt.attempt_id[:8], sender=short(sender_address))
        log.info("transaction_started", function=function_id)

        try:
            hash_response = await self._generate_hash(attempt)
            signature = await self._sign(attempt, hash_response)
            result = await self._submit(attempt, hash_response, public_key, signature)
        except TransactionError as e:
            attempt.mark_failed(e.stage, e)
            log.error("transaction_failed", **describe_error(e))
            raise

        attempt.mark_done(result)
        log.info(
            "transaction_submitted",
            tx_hash=result.transaction_hash,
            duration_seconds=attempt.duration_seconds,
        )
        return result

    async def _generate_hash(self, attempt: SubmissionAttempt) -> HashResponse:
        """Stage 1: ask the backend for the hash to sign."""
        attempt.mark_hash_pending()
        try:
            hash_response = await self.backend.generate_hash(attempt.request)
        except Exception as e:
            raise HashGenerationError(lower_message(e)) from e

        if not isinstance(hash_response, HashResponse):
            raise HashGenerationError("Backend returned an invalid hash response")

        if self.config.verify_hash_binding and not matches_raw_transaction(
            hash_response.hash, hash_response.raw_txn_hex
        ):
            raise HashBindingError()

        attempt.mark_hash_obtained(hash_response)
        return hash_response

    async def _sign(self, attempt: SubmissionAttempt, hash_response: HashResponse) -> SignatureResult:
        """Stage 2: have the signer sign the hash. May wait on the user."""
        attempt.mark_sign_pending()
        sign_request = SignRequest(
            address=attempt.request.sender_address,
            chain_type=self.config.chain_type,
            hash=hash_response.hash,
        )

        try:
            signature = await asyncio.wait_for(
                self.signer.sign(sign_request),
                timeout=self.config.signing_timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise SigningError(lower_message(e) or "Signing timed out") from e
        except Exception as e:
            raise SigningError(lower_message(e)) from e

        signature = _as_signature(signature)
        if signature is None:
            raise SigningError("Signer returned no signature")

        attempt.mark_signed(signature)
        return signature

    async def _submit(
        self,
        attempt: SubmissionAttempt,
        hash_response: HashResponse,
        public_key: str,
        signature: SignatureResult,
    ) -> SubmissionResult:
        """Stage 3: broadcast the signed transaction."""
        attempt.mark_submit_pending()
        try:
            result = await self.backend.submit_transaction(
                raw_txn_hex=hash_response.raw_txn_hex,
                public_key=public_key,
                signature=signature.signature,
            )
        except Exception as e:
            raise SubmissionTransportError(lower_message(e)) from e

        if not isinstance(result, SubmissionResult):
            raise SubmissionTransportError("Backend returned an invalid submission response")

        if not result.success:
            raise VmExecutionError(result.vm_status, result.data)

        return result
