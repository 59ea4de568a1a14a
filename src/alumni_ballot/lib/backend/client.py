"""Async HTTP client for the election backend.

Wraps an ``httpx.AsyncClient`` configured from :class:`Settings`. Every
request is mapped to either a decoded JSON body or a :class:`BackendError`
subclass; authenticated requests carry the stored bearer token.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
from loguru import logger

from alumni_ballot.lib.backend.envelopes import normalize_candidates
from alumni_ballot.lib.backend.errors import (
    AuthenticationError,
    MalformedResponseError,
    NetworkError,
    error_for_status,
)

if TYPE_CHECKING:
    from alumni_ballot.core.config import Settings
    from alumni_ballot.core.storage import TokenStorage
    from alumni_ballot.schemas.auth import LoginRequest, SignupRequest
    from alumni_ballot.schemas.candidate import CandidateGroup, CandidateRegistrationRequest
    from alumni_ballot.schemas.vote import BulkVoteRequest, SingleVoteRequest

_CONNECT_FAILED = "Cannot connect to server. Please make sure the backend is running."


class BackendClient:
    """Client for the backend endpoints consumed by the election UI.

    Args:
        settings: Backend origin, prefix, endpoint paths and timeout.
        storage: Source of the bearer token for authenticated requests.
        transport: Optional httpx transport, for tests.
    """

    def __init__(
        self,
        settings: Settings,
        storage: TokenStorage,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._storage = storage
        self._client = httpx.AsyncClient(
            base_url=settings.backend_url,
            timeout=settings.request_timeout,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    async def __aenter__(self) -> BackendClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    async def fetch_candidates(self) -> CandidateGroup:
        """Fetch the public candidate list, grouped by position."""
        body = await self._request("GET", self._settings.candidates_path)
        return normalize_candidates(body)

    async def fetch_committee_candidates(self) -> CandidateGroup:
        """Fetch candidates with vote counts (committee session required)."""
        body = await self._request("GET", self._settings.committee_candidates_path, authenticated=True)
        return normalize_candidates(body)

    async def login(self, credentials: LoginRequest) -> dict[str, Any]:
        """Exchange committee credentials for a session; returns the raw response body."""
        body = await self._request("POST", self._settings.login_path, json=credentials.model_dump())
        if not isinstance(body, dict):
            msg = f"Unexpected response format: {body!r}"
            raise MalformedResponseError(msg, status_code=200)
        return body

    async def signup(self, request: SignupRequest) -> Any:
        """Create a committee account."""
        return await self._request("POST", self._settings.signup_path, json=request.model_dump())

    async def register_candidate(self, request: CandidateRegistrationRequest) -> Any:
        """Register a candidate for a position."""
        return await self._request("POST", self._settings.register_path, json=request.model_dump())

    async def submit_vote(self, vote: SingleVoteRequest) -> Any:
        """Submit one vote for one position."""
        return await self._request("POST", self._settings.vote_path, json=vote.model_dump(by_alias=True))

    async def submit_ballot(self, ballot: BulkVoteRequest) -> Any:
        """Submit a complete ballot in a single request."""
        return await self._request("POST", self._settings.bulk_vote_path, json=ballot.model_dump(by_alias=True))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _auth_headers(self) -> dict[str, str]:
        token = self._storage.get()
        if not token:
            msg = "Not logged in"
            raise AuthenticationError(msg)
        return {"Authorization": f"Bearer {token}"}

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        authenticated: bool = False,
    ) -> Any:
        """Issue one request and return its decoded JSON body (None when empty)."""
        url = self._settings.endpoint(path)
        headers = self._auth_headers() if authenticated else {}
        logger.debug("{} {} (authenticated={})", method, url, authenticated)

        try:
            response = await self._client.request(method, url, json=json, headers=headers)
        except httpx.TimeoutException as exc:
            logger.error("Request to {} timed out", url)
            msg = "Request timed out. Please try again."
            raise NetworkError(msg) from exc
        except httpx.HTTPError as exc:
            logger.error("Request to {} failed: {}", url, exc)
            raise NetworkError(_CONNECT_FAILED) from exc

        body = self._decode(response, url)
        if response.is_success:
            return body

        error = error_for_status(response.status_code, body)
        logger.warning("{} {} returned HTTP {}: {}", method, url, response.status_code, error.message)
        raise error

    @staticmethod
    def _decode(response: httpx.Response, url: str) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            if not response.is_success:
                return None
            msg = f"Invalid JSON response from {url}"
            raise MalformedResponseError(msg, status_code=response.status_code) from exc


