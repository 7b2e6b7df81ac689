"""Gitpod public API client using Connect-protocol JSON over HTTP."""

import asyncio
from typing import Any

import httpx
import structlog

from gitpod_cli import __version__
from gitpod_cli.api.models import Workspace
from gitpod_cli.exceptions import (
    ExternalServiceError,
    NetworkError,
    RequestTimeoutError,
    VerificationError,
)

log = structlog.get_logger(__name__)

TOKENS_SERVICE = "gitpod.experimental.v1.TokensService"
WORKSPACES_SERVICE = "gitpod.experimental.v1.WorkspacesService"

# Connect maps "unauthenticated" to 401 and "permission_denied" to 403
REJECTED_STATUS_CODES = frozenset({401, 403})


def api_base_url(host: str) -> str:
    """Public API endpoint for a Gitpod host (``gitpod.io`` -> ``https://api.gitpod.io``)."""
    return f"https://api.{host}"


class GitpodClient:
    """Authenticated client for the Gitpod public API.

    Every call is a unary Connect request: ``POST /<service>/<method>`` with
    a JSON body. No retries are performed; each call is bounded by the
    client timeout.

    Example:
        >>> async with create_client("gitpod.io", token, timeout=5.0) as client:
        ...     workspaces = await client.list_workspaces()
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize client.

        Args:
            base_url: API base URL (e.g., https://api.gitpod.io)
            token: Personal access token
            timeout: Seconds allowed per call
            transport: Optional transport override (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._token = token.strip()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def connect(self) -> None:
        """Open the underlying HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
                headers={
                    "Authorization": f"Bearer {self._token}",
                    "Content-Type": "application/json",
                    "Connect-Protocol-Version": "1",
                    "User-Agent": f"gitpod-cli/{__version__}",
                },
            )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "GitpodClient":
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def list_personal_access_tokens(self) -> list[dict[str, Any]]:
        """List the caller's personal access tokens."""
        data = await self._call(TOKENS_SERVICE, "ListPersonalAccessTokens")
        return list(data.get("tokens") or [])

    async def list_workspaces(self) -> list[Workspace]:
        """List the caller's workspaces."""
        data = await self._call(WORKSPACES_SERVICE, "ListWorkspaces")
        workspaces = [Workspace.from_api(item) for item in data.get("result") or []]
        log.info("workspaces_listed", count=len(workspaces))
        return workspaces

    async def verify(self) -> None:
        """Check that the server accepts the token.

        Raises:
            VerificationError: If the server rejects the token
            NetworkError: If the server cannot be reached
        """
        try:
            await self.list_personal_access_tokens()
        except ExternalServiceError as e:
            if e.status_code in REJECTED_STATUS_CODES:
                raise VerificationError(
                    "Credentials were rejected by the server",
                    status_code=e.status_code,
                    response_text=e.response_text,
                    suggestion="Check your token and try again",
                ) from e
            raise

        log.info("credentials_verified", base_url=self.base_url)

    async def _call(self, service: str, method: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
        """Invoke a unary Connect method and return the decoded response.

        Raises:
            RequestTimeoutError: If the call exceeds the timeout
            NetworkError: If the request cannot be sent
            ExternalServiceError: If the server answers with an error
        """
        await self.connect()
        assert self._client is not None

        path = f"/{service}/{method}"
        log.debug("api_call", method=method)

        # httpx bounds each phase separately; wait_for bounds the whole call
        try:
            response = await asyncio.wait_for(self._client.post(path, json=payload or {}), timeout=self.timeout)
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            raise RequestTimeoutError(f"{method} timed out", timeout_seconds=self.timeout) from e
        except httpx.HTTPError as e:
            raise NetworkError(
                f"Cannot reach {self.base_url}: {e}",
                suggestion="Check your network connection and the configured host",
            ) from e

        if response.status_code != 200:
            raise ExternalServiceError(
                f"{method} failed: {_error_message(response)}",
                status_code=response.status_code,
                response_text=response.text,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ExternalServiceError(
                f"{method} returned invalid JSON", status_code=response.status_code, response_text=response.text
            ) from e

        if not isinstance(data, dict):
            raise ExternalServiceError(f"{method} returned an unexpected response", status_code=response.status_code)

        return data


def _error_message(response: httpx.Response) -> str:
    """Extract the message from a Connect error body, falling back to the reason phrase."""
    try:
        body = response.json()
    except ValueError:
        return response.reason_phrase or "unknown error"

    if isinstance(body, dict):
        return str(body.get("message") or body.get("code") or response.reason_phrase)
    return response.reason_phrase or "unknown error"


def create_client(
    host: str,
    token: str,
    timeout: float,
    transport: httpx.AsyncBaseTransport | None = None,
) -> GitpodClient:
    """Construct an authenticated client for ``host``."""
    return GitpodClient(api_base_url(host), token, timeout=timeout, transport=transport)
