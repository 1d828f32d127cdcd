"""
Core components: transaction models, the submission orchestrator and the wallet facade.
"""

from movewallet.core.orchestrator import TransactionOrchestrator
from movewallet.core.transaction import (
    HashResponse,
    SignatureResult,
    SigningRequest,
    SignRequest,
    SubmissionAttempt,
    SubmissionResult,
    SubmissionState,
)
from movewallet.core.wallet import MovementWallet

__all__ = [
    "TransactionOrchestrator",
    "MovementWallet",
    "SigningRequest",
    "HashResponse",
    "SignRequest",
    "SignatureResult",
    "SubmissionResult",
    "SubmissionState",
    "SubmissionAttempt",
]
