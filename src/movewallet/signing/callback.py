"""
Signer backed by a provider coroutine.
"""

from typing import Any, Awaitable, Callable, Mapping, Union

from movewallet.core.transaction import SignatureResult, SignRequest
from movewallet.signing.interface import SigningCapability

SignCallback = Callable[[str, str, str], Awaitable[Union[str, Mapping[str, Any]]]]


class CallbackSigner(SigningCapability):
    """
    Adapts a provider's raw-hash signing coroutine to SigningCapability.

    The callback receives ``(address, chain_type, hash)`` and returns either
    the signature string or a mapping with a ``signature`` key.
    """

    def __init__(self, callback: SignCallback):
        self._callback = callback

    async def sign(self, request: SignRequest) -> SignatureResult:
        result = await self._callback(request.address, request.chain_type, request.hash)

        if isinstance(result, Mapping):
            signature = result.get("signature")
        else:
            signature = result

        if not signature:
            raise ValueError("Signer returned no signature")
        return SignatureResult(signature=str(signature))
