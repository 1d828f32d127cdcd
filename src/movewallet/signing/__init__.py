"""
Signing module.

Signing capabilities that turn a transaction hash into a signature.
"""

from movewallet.signing.callback import CallbackSigner
from movewallet.signing.ed25519 import Ed25519Signer
from movewallet.signing.interface import SignatureRejectedError, SigningCapability

__all__ = [
    "SigningCapability",
    "SignatureRejectedError",
    "CallbackSigner",
    "Ed25519Signer",
]
