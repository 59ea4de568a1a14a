"""Shared test fixtures for settings, token storage, tokens and backend responses."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import jwt
import pytest

from alumni_ballot.core.config import Settings
from alumni_ballot.core.storage import MemoryTokenStorage

_SIGNING_KEY = "test-signing-key-not-for-production-use"
BACKEND = "http://backend.test"


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Test client settings pointing at a fake backend."""
    return Settings(
        _env_file=None,
        backend_url=BACKEND,
        api_prefix="/api",
        token_file=str(tmp_path / "session.json"),
        registration_open=False,
    )


@pytest.fixture
def storage() -> MemoryTokenStorage:
    """Empty in-memory token storage."""
    return MemoryTokenStorage()


@pytest.fixture
def make_token() -> Callable[..., str]:
    """Build a signed token carrying a display identity."""

    def _make(email: str = "chair@example.com", surname: str | None = "Okafor", **extra: Any) -> str:
        payload: dict[str, Any] = {"email": email, **extra}
        if surname is not None:
            payload["surname"] = surname
        return jwt.encode(payload, _SIGNING_KEY, algorithm="HS256")

    return _make


@pytest.fixture
def make_response() -> Callable[..., httpx.Response]:
    """Build a fake httpx.Response."""

    def _make(status_code: int = 200, json_data: Any = None, *, text: str | None = None) -> httpx.Response:
        request = httpx.Request("GET", BACKEND)
        if text is not None:
            return httpx.Response(status_code, text=text, request=request)
        if json_data is None:
            return httpx.Response(status_code, request=request)
        return httpx.Response(status_code, json=json_data, request=request)

    return _make


@pytest.fixture
def candidate_items() -> list[dict[str, Any]]:
    """Flat candidate list as the backend returns it, with vote counts."""
    return [
        {"_id": "c1", "name": "Ada Obi", "email": "ada@example.com", "position": "Chairman", "voteCount": 4},
        {"_id": "c2", "name": "Bayo Ade", "email": "bayo@example.com", "position": "Chairman", "voteCount": 7},
        {"_id": "c3", "name": "Chidi Eze", "email": "chidi@example.com", "position": "Secretary 1", "voteCount": 0},
        {"_id": "c4", "name": "Dupe Ola", "email": "dupe@example.com", "position": "PRO 1", "voteCount": 2},
    ]
