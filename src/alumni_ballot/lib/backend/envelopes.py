"""Normalization of the candidate-list response envelopes.

The backend has wrapped the same candidate list in several ways over its
lifetime. Each shape is recognized by one matcher; matchers are tried in
order and the first that recognizes the body produces the canonical
:data:`CandidateGroup`. Bodies no matcher recognizes are malformed.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from loguru import logger
from pydantic import ValidationError

from alumni_ballot.lib.backend.errors import MalformedResponseError, RejectedError, extract_message
from alumni_ballot.lib.tally.grouping import group_by_position
from alumni_ballot.schemas.candidate import Candidate, CandidateGroup


@dataclass(frozen=True)
class EnvelopeShape:
    """A recognized response shape.

    ``extract`` returns the raw candidate payload when the body has this
    shape (a flat list of candidate objects, or a mapping of position to
    such lists), and None otherwise.
    """

    name: str
    extract: Callable[[Any], list | dict | None]


def _bare_list(body: Any) -> list | None:
    return body if isinstance(body, list) else None


def _candidates_key(body: Any) -> list | None:
    if isinstance(body, dict) and isinstance(body.get("candidates"), list):
        return body["candidates"]
    return None


def _data_list(body: Any) -> list | None:
    if isinstance(body, dict) and isinstance(body.get("data"), list):
        return body["data"]
    return None


def _data_grouped(body: Any) -> dict | None:
    if not isinstance(body, dict) or "success" not in body:
        return None
    data = body.get("data")
    if isinstance(data, dict) and all(isinstance(v, list) for v in data.values()):
        return data
    return None


ENVELOPE_SHAPES: tuple[EnvelopeShape, ...] = (
    EnvelopeShape("bare_list", _bare_list),
    EnvelopeShape("candidates_list", _candidates_key),
    EnvelopeShape("data_list", _data_list),
    EnvelopeShape("success_data_grouped", _data_grouped),
)


def _parse_flat(items: list) -> CandidateGroup:
    return group_by_position(Candidate.model_validate(item) for item in items)


def _parse_grouped(groups: dict) -> CandidateGroup:
    result: CandidateGroup = {}
    for position, items in groups.items():
        candidates = []
        for item in items:
            # Grouped payloads may omit the position on each entry.
            if isinstance(item, dict) and "position" not in item:
                item = {**item, "position": position}
            candidates.append(Candidate.model_validate(item))
        result[position] = candidates
    return result


def normalize_candidates(body: Any) -> CandidateGroup:
    """Normalize any recognized candidate-list envelope to a CandidateGroup.

    Args:
        body: Decoded JSON body of a successful response.

    Returns:
        Candidates grouped by position.

    Raises:
        RejectedError: If the body is an explicit ``success: false`` envelope.
        MalformedResponseError: If no shape matches or a candidate entry is invalid.
    """
    if isinstance(body, dict) and body.get("success") is False:
        raise RejectedError(extract_message(body) or "Backend reported failure")

    for shape in ENVELOPE_SHAPES:
        payload = shape.extract(body)
        if payload is None:
            continue
        logger.debug("Candidate response matched envelope {}", shape.name)
        try:
            if isinstance(payload, list):
                return _parse_flat(payload)
            return _parse_grouped(payload)
        except ValidationError as exc:
            msg = f"Invalid candidate entry in {shape.name} response: {exc.error_count()} error(s)"
            raise MalformedResponseError(msg) from exc

    keys = sorted(body) if isinstance(body, dict) else type(body).__name__
    msg = f"Unexpected candidate response format: {keys}"
    raise MalformedResponseError(msg)
