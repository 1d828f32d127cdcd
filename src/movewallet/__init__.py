"""
Movement Wallet

Client for submitting Movement (Aptos-family) transactions without holding
private keys locally. The backend builds and hashes the transaction, an
external signer signs the hash, and the backend broadcasts the result.
"""

__version__ = "0.1.0"

from movewallet.config import WalletConfig
from movewallet.core.orchestrator import TransactionOrchestrator
from movewallet.core.transaction import SubmissionResult, SubmissionState
from movewallet.core.wallet import MovementWallet
from movewallet.errors import (
    HashBindingError,
    HashGenerationError,
    ReadOperationError,
    SigningError,
    SubmissionTransportError,
    TransactionError,
    VmExecutionError,
    WalletError,
)

__all__ = [
    "WalletConfig",
    "TransactionOrchestrator",
    "MovementWallet",
    "SubmissionResult",
    "SubmissionState",
    "WalletError",
    "TransactionError",
    "HashGenerationError",
    "HashBindingError",
    "SigningError",
    "SubmissionTransportError",
    "VmExecutionError",
    "ReadOperationError",
]
