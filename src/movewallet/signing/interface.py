"""
Abstract interface for signing capabilities.

A signing capability signs an opaque hash on behalf of an account. It may
be a custody provider that asks the user for approval, a hardware device,
or a local key used in development.
"""

from abc import ABC, abstractmethod

from movewallet.core.transaction import SignatureResult, SignRequest


class SigningCapability(ABC):
    """
    Signs transaction hashes for an account.

    Implementations may take arbitrarily long (user confirmation) and may
    reject. Rejections are raised as exceptions; the orchestrator maps any
    exception raised here to SigningError.
    """

    @abstractmethod
    async def sign(self, request: SignRequest) -> SignatureResult:
        """
        Sign a hash.

        Args:
            request: Address, chain type and hash to sign

        Returns:
            Signature over the hash
        """
        pass


class SignatureRejectedError(Exception):
    """Raised by a signer when the user or provider declines to sign."""
    pass
