"""
Exception hierarchy for the wallet client.

Every failure of a transaction submission is attributed to the stage
where it happened, so callers can decide whether a retry is safe.
"""

from enum import Enum
from typing import Any, Dict, Optional


class TransactionStage(str, Enum):
    """Stages of the sign-and-submit pipeline."""
    GENERATE_HASH = "generate_hash"
    SIGN = "sign"
    SUBMIT = "submit"


class WalletError(Exception):
    """Base exception for the wallet client."""
    
    default_message = "Wallet operation failed"
    
    def __init__(self, message: Optional[str] = None, code: Optional[str] = None):
        self.message = message or self.default_message
        self.code = code or "WALLET_ERROR"
        super().__init__(self.message)


class BackendRequestError(WalletError):
    """Raised by backend adapters when a request fails or is answered with non-2xx."""
    
    def __init__(
        self,
        message: str,
        path: str,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, code="BACKEND_ERROR")
        self.path = path
        self.status_code = status_code


class TransactionError(WalletError):
    """A sign-and-submit failure attributed to one stage."""
    
    stage: TransactionStage
    
    @property
    def retryable(self) -> bool:
        """Whether resubmitting from scratch cannot double-spend or fail identically."""
        return True


class HashGenerationError(TransactionError):
    """The backend could not produce a hash for the transaction."""
    
    stage = TransactionStage.GENERATE_HASH
    default_message = "Failed to generate transaction hash"
    
    def __init__(self, message: Optional[str] = None):
        super().__init__(message, code="HASH_GENERATION_FAILED")


class HashBindingError(HashGenerationError):
    """The hash returned by the backend is not the signing message of the raw transaction."""
    
    default_message = "Transaction hash does not match the raw transaction"


class SigningError(TransactionError):
    """The signer rejected or failed to sign the hash."""
    
    stage = TransactionStage.SIGN
    default_message = "Failed to sign transaction hash"
    
    def __init__(self, message: Optional[str] = None):
        super().__init__(message, code="SIGNING_FAILED")


class SubmissionTransportError(TransactionError):
    """The signed transaction did not reach the backend or was not answered."""
    
    stage = TransactionStage.SUBMIT
    default_message = "Failed to submit signed transaction"
    
    def __init__(self, message: Optional[str] = None):
        super().__init__(message, code="SUBMISSION_FAILED")


class VmExecutionError(TransactionError):
    """The ledger executed and rejected the transaction."""
    
    stage = TransactionStage.SUBMIT
    
    def __init__(self, vm_status: Optional[str], result: Optional[dict] = None):
        super().__init__(f"VM Error: {vm_status or 'Unknown failure'}", code="VM_EXECUTION_FAILED")
        self.vm_status = vm_status
        self.result = result or {}
    
    @property
    def retryable(self) -> bool:
        # The signature is bound to this raw transaction, so it fails the same way again
        return False


class ReadOperationError(WalletError):
    """A balance, account-info or faucet call failed."""
    
    def __init__(self, operation: str, message: Optional[str] = None):
        super().__init__(message or f"{operation} failed", code="READ_FAILED")
        self.operation = operation


def describe_error(error: BaseException) -> Dict[str, Any]:
    """Flatten an error into log-friendly fields."""
    fields: Dict[str, Any] = {"error": str(error), "error_type": type(error).__name__}
    if isinstance(error, TransactionError):
        fields["stage"] = error.stage.value
    if isinstance(error, VmExecutionError):
        fields["vm_status"] = error.vm_status
    if isinstance(error, BackendRequestError):
        fields["status"] = error.status_code
    return fields


def lower_message(error: BaseException) -> Optional[str]:
    """Message of a lower-layer error, or None when it carries no text."""
    if isinstance(error, WalletError):
        return error.message
    text = str(error).strip()
    return text or None
