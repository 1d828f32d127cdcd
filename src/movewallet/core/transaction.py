"""
Transaction models.

Transient values exchanged between the orchestrator, the backend and the
signer. None of them outlive the call that created them.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from movewallet.errors import TransactionStage


@dataclass(frozen=True)
class SigningRequest:
    """
    Identifies the transaction the backend should build and hash.

    Attributes:
        sender_address: Account that sends (and signs) the transaction
        function_id: Entry function, e.g. ``0x1::coin::transfer``
        type_arguments: Move type arguments, in order
        function_arguments: Entry function arguments, in order
    """

    sender_address: str
    function_id: str
    type_arguments: Tuple[str, ...] = ()
    function_arguments: Tuple[Any, ...] = ()

    def to_payload(self) -> dict:
        """Convert to the /generate-hash request body."""
        return {
            "sender": self.sender_address,
            "function": self.function_id,
            "typeArguments": list(self.type_arguments),
            "functionArguments": list(self.function_arguments),
        }


@dataclass(frozen=True)
class HashResponse:
    """Hash to sign and the raw transaction it was computed from."""

    hash: str
    raw_txn_hex: str

    @classmethod
    def from_payload(cls, data: Any) -> "HashResponse":
        """
        Parse a /generate-hash response body.

        Raises:
            ValueError: If either field is missing or empty
        """
        if not isinstance(data, dict):
            raise ValueError("generate-hash response is not a JSON object")
        hash_hex = data.get("hash")
        raw_txn_hex = data.get("rawTxnHex")
        if not hash_hex or not raw_txn_hex:
            raise ValueError("generate-hash response is missing hash or rawTxnHex")
        return cls(hash=str(hash_hex), raw_txn_hex=str(raw_txn_hex))


@dataclass(frozen=True)
class SignRequest:
    """What the signing capability is asked to sign."""

    address: str
    chain_type: str
    hash: str

    def to_payload(self) -> dict:
        return {"address": self.address, "chainType": self.chain_type, "hash": self.hash}


@dataclass(frozen=True)
class SignatureResult:
    """Signature produced by the signing capability."""

    signature: str


@dataclass(frozen=True)
class SubmissionResult:
    """
    Outcome reported by /submit-transaction.

    ``data`` is the full response body, including broadcast metadata
    such as the transaction hash.
    """

    success: bool
    vm_status: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, data: Any) -> "SubmissionResult":
        """
        Parse a /submit-transaction response body.

        Raises:
            ValueError: If the body is not a JSON object
        """
        if not isinstance(data, dict):
            raise ValueError("submit-transaction response is not a JSON object")
        return cls(
            success=data.get("success") is True,
            vm_status=data.get("vmStatus"),
            data=dict(data),
        )

    @property
    def transaction_hash(self) -> Optional[str]:
        """Hash of the broadcast transaction, when the backend reports it."""
        return self.data.get("hash") or self.data.get("transactionHash")

    def to_dict(self) -> dict:
        return dict(self.data)


class SubmissionState(str, Enum):
    """Progress of one sign-and-submit call."""
    INIT = "init"
    HASH_PENDING = "hash_pending"         # Waiting for /generate-hash
    HASH_OBTAINED = "hash_obtained"
    SIGN_PENDING = "sign_pending"         # Waiting for the signer (may involve the user)
    SIGNED = "signed"
    SUBMIT_PENDING = "submit_pending"     # Waiting for /submit-transaction
    DONE = "done"
    FAILED = "failed"


_NEXT_STATE = {
    SubmissionState.INIT: SubmissionState.HASH_PENDING,
    SubmissionState.HASH_PENDING: SubmissionState.HASH_OBTAINED,
    SubmissionState.HASH_OBTAINED: SubmissionState.SIGN_PENDING,
    SubmissionState.SIGN_PENDING: SubmissionState.SIGNED,
    SubmissionState.SIGNED: SubmissionState.SUBMIT_PENDING,
    SubmissionState.SUBMIT_PENDING: SubmissionState.DONE,
}

TERMINAL_STATES = frozenset({SubmissionState.DONE, SubmissionState.FAILED})


class InvalidTransitionError(RuntimeError):
    """Raised when an attempt is moved out of order."""
    pass


@dataclass
class SubmissionAttempt:
    """
    Tracks a single sign-and-submit call through its states.

    States only move forward, one step at a time; FAILED can be entered
    from any non-terminal state and records which stage failed.
    """

    request: SigningRequest
    attempt_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    state: SubmissionState = SubmissionState.INIT
    history: List[SubmissionState] = field(default_factory=lambda: [SubmissionState.INIT])

    hash_response: Optional[HashResponse] = None
    signature: Optional[SignatureResult] = None
    result: Optional[SubmissionResult] = None

    failed_stage: Optional[TransactionStage] = None
    error: Optional[BaseException] = None

    started_at: datetime = field(default_factory=datetime.utcnow)
    finished_at: Optional[datetime] = None

    def _advance(self, expected: SubmissionState) -> None:
        if _NEXT_STATE.get(self.state) != expected:
            raise InvalidTransitionError(
                f"Cannot move from {self.state.value} to {expected.value}"
            )
        self.state = expected
        self.history.append(expected)

    def mark_hash_pending(self) -> None:
        self._advance(SubmissionState.HASH_PENDING)

    def mark_hash_obtained(self, hash_response: HashResponse) -> None:
        self._advance(SubmissionState.HASH_OBTAINED)
        self.hash_response = hash_response

    def mark_sign_pending(self) -> None:
        self._advance(SubmissionState.SIGN_PENDING)

    def mark_signed(self, signature: SignatureResult) -> None:
        self._advance(SubmissionState.SIGNED)
        self.signature = signature

    def mark_submit_pending(self) -> None:
        self._advance(SubmissionState.SUBMIT_PENDING)

    def mark_done(self, result: SubmissionResult) -> None:
        self._advance(SubmissionState.DONE)
        self.result = result
        self.finished_at = datetime.utcnow()

    def mark_failed(self, stage: TransactionStage, error: BaseException) -> None:
        """Mark the attempt as failed at the given stage."""
        if self.is_finished:
            raise InvalidTransitionError(f"Attempt already {self.state.value}")
        self.state = SubmissionState.FAILED
        self.history.append(SubmissionState.FAILED)
        self.failed_stage = stage
        self.error = error
        self.finished_at = datetime.utcnow()

    @property
    def is_finished(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.finished_at is None:
            return None
        return (self.finished_at - self.started_at).total_seconds()

    def to_dict(self) -> dict:
        """Convert to dictionary for logging."""
        return {
            "attempt_id": self.attempt_id,
            "sender": self.request.sender_address,
            "function": self.request.function_id,
            "state": self.state.value,
            "history": [s.value for s in self.history],
            "failed_stage": self.failed_stage.value if self.failed_stage else None,
            "error": str(self.error) if self.error else None,
            "duration_seconds": self.duration_seconds,
        }

    def __repr__(self) -> str:
        return f"SubmissionAttempt(id={self.attempt_id[:8]}..., state={self.state.value})"
