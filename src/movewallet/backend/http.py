"""
HTTP adapter for the transaction backend.

Talks to the backend's JSON endpoints with httpx.
"""

from typing import Any, Optional

import httpx
import structlog

from movewallet.backend.interface import BackendInterface
from movewallet.config import WalletConfig
from movewallet.core.transaction import HashResponse, SigningRequest, SubmissionResult
from movewallet.errors import BackendRequestError
from movewallet.logs import short

logger = structlog.get_logger(__name__)


def _error_message(response: httpx.Response, fallback: str) -> str:
    """Pull the backend's own error text out of a failed response."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ("error", "message", "detail"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
            if isinstance(value, dict) and value.get("message"):
                return str(value["message"])

    text = response.text.strip()
    return text or fallback


class HttpBackend(BackendInterface):
    """
    HTTP backend adapter.

    Implements the BackendInterface against the backend's REST API.
    """

    def __init__(
        self,
        config: Optional[WalletConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the HTTP adapter.

        Args:
            config: Wallet configuration. A default configuration is built if not provided.
            transport: Custom httpx transport (used by tests)
        """
        self.config = config or WalletConfig()
        self.base_url = self.config.base_url
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def headers(self) -> dict:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def connect(self) -> None:
        """Create the HTTP client."""
        if self._client is not None:
            return

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers,
            timeout=self.config.read_timeout_seconds,
            transport=self._transport,
        )
        logger.debug("backend_client_created", base_url=self.base_url)

    async def disconnect(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.debug("backend_client_closed")

    async def _request(
        self,
        method: str,
        path: str,
        fallback_error: str,
        timeout: Optional[float] = None,
        **kwargs,
    ) -> Any:
        """Make one API request and return the decoded JSON body."""
        if not self._client:
            await self.connect()

        if timeout is not None:
            kwargs["timeout"] = timeout

        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            logger.error("backend_request_timeout", path=path, error=str(e))
            raise BackendRequestError(f"{fallback_error}: request timed out", path=path) from e
        except httpx.RequestError as e:
            logger.error("backend_request_error", path=path, error=str(e))
            raise BackendRequestError(f"{fallback_error}: {e}", path=path) from e

        if not response.is_success:
            error_msg = _error_message(response, fallback_error)
            logger.error(
                "backend_request_failed",
                path=path,
                status=response.status_code,
                error=error_msg,
            )
            raise BackendRequestError(error_msg, path=path, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            logger.error("backend_invalid_json", path=path, status=response.status_code)
            raise BackendRequestError(
                f"{fallback_error}: response is not valid JSON",
                path=path,
                status_code=response.status_code,
            ) from e

    async def generate_hash(self, request: SigningRequest) -> HashResponse:
        """Ask the backend to build and hash a transaction."""
        data = await self._request(
            "POST",
            "/generate-hash",
            "Failed to generate transaction hash",
            timeout=self.config.hash_timeout_seconds,
            json=request.to_payload(),
        )

        try:
            hash_response = HashResponse.from_payload(data)
        except ValueError as e:
            raise BackendRequestError(str(e), path="/generate-hash") from e

        logger.debug(
            "hash_received",
            sender=short(request.sender_address),
            hash=short(hash_response.hash),
        )
        return hash_response

    async def submit_transaction(
        self,
        raw_txn_hex: str,
        public_key: str,
        signature: str,
    ) -> SubmissionResult:
        """Send the signed transaction for broadcast."""
        data = await self._request(
            "POST",
            "/submit-transaction",
            "Failed to submit signed transaction",
            timeout=self.config.submit_timeout_seconds,
            json={
                "rawTxnHex": raw_txn_hex,
                "publicKey": public_key,
                "signature": signature,
            },
        )

        try:
            return SubmissionResult.from_payload(data)
        except ValueError as e:
            raise BackendRequestError(str(e), path="/submit-transaction") from e

    async def get_balance(self, address: str) -> Any:
        """Get account balance."""
        data = await self._request(
            "GET",
            f"/balance/{address}",
            "Failed to fetch balance",
            timeout=self.config.read_timeout_seconds,
        )
        if not isinstance(data, dict) or "balance" not in data:
            raise BackendRequestError("balance response is missing balance", path=f"/balance/{address}")
        return data["balance"]

    async def get_account_info(self, address: str) -> Any:
        """Get account info."""
        return await self._request(
            "GET",
            f"/account-info/{address}",
            "Failed to fetch account info",
            timeout=self.config.read_timeout_seconds,
        )

    async def request_faucet(self, address: str, amount: int) -> Any:
        """Request faucet funds."""
        return await self._request(
            "POST",
            "/faucet",
            "Faucet request failed",
            timeout=self.config.read_timeout_seconds,
            json={"address": address, "amount": amount},
        )
