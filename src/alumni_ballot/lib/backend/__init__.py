"""Backend library: HTTP access to the election backend service.

Public API:
    - BackendClient: Async client for every consumed endpoint
    - normalize_candidates: Envelope-tolerant candidate list parsing
    - BackendError and subclasses: Error taxonomy for failed requests
"""

from alumni_ballot.lib.backend.client import BackendClient
from alumni_ballot.lib.backend.envelopes import ENVELOPE_SHAPES, EnvelopeShape, normalize_candidates
from alumni_ballot.lib.backend.errors import (
    AuthenticationError,
    AuthorizationError,
    BackendError,
    MalformedResponseError,
    NetworkError,
    RejectedError,
    error_for_status,
    extract_message,
)

__all__ = [
    "ENVELOPE_SHAPES",
    "AuthenticationError",
    "AuthorizationError",
    "BackendClient",
    "BackendError",
    "EnvelopeShape",
    "MalformedResponseError",
    "NetworkError",
    "RejectedError",
    "error_for_status",
    "extract_message",
    "normalize_candidates",
]
