"""Client-local storage for the committee session token.

The token is the only durable piece of client state. It is kept behind a
small get/set/clear interface so the session holder never touches the
filesystem directly and tests can substitute an in-memory store.
"""

import json
import os
from abc import ABC, abstractmethod
from pathlib import Path

from loguru import logger

TOKEN_KEY = "token"  # noqa: S105


class TokenStorage(ABC):
    """Abstract persisted-token store."""

    @abstractmethod
    def get(self) -> str | None:
        """Return the stored token, or None when no session is persisted."""

    @abstractmethod
    def set(self, token: str) -> None:
        """Persist a token, replacing any previous one."""

    @abstractmethod
    def clear(self) -> None:
        """Remove the persisted token. Clearing an empty store is a no-op."""


class MemoryTokenStorage(TokenStorage):
    """Process-local token store, used by tests and one-shot commands."""

    def __init__(self, token: str | None = None) -> None:
        self._token = token

    def get(self) -> str | None:
        return self._token

    def set(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class FileTokenStorage(TokenStorage):
    """Token store backed by a small JSON document on disk.

    The document holds a single object; the token lives under
    :data:`TOKEN_KEY`. Unreadable or malformed files are treated as an
    empty store.

    Args:
        path: Location of the JSON document. ``~`` is expanded.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def get(self) -> str | None:
        if not self._path.is_file():
            return None
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable session file {}: {}", self._path, exc)
            return None
        if not isinstance(data, dict):
            return None
        token = data.get(TOKEN_KEY)
        return token if isinstance(token, str) and token else None

    def set(self, token: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self._path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        # O_CREAT only applies the mode to new files.
        os.fchmod(fd, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump({TOKEN_KEY: token}, fh)
        logger.debug("Session token stored at {}", self._path)

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)
        logger.debug("Session token cleared from {}", self._path)
