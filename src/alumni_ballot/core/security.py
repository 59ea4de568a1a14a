"""Unverified JWT payload decoding for display purposes.

The committee token is issued and verified by the backend. This client only
peeks at its payload to greet the operator by name. The decoded values are a
cosmetic projection and must never feed an authorization decision.
"""

import jwt
from loguru import logger

from alumni_ballot.schemas.auth import DisplayIdentity


def decode_display_identity(token: str) -> DisplayIdentity | None:
    """Decode the display identity carried in a token payload.

    The signature is not verified.

    Args:
        token: The bearer token as issued by the backend.

    Returns:
        The identity found in the payload, or None when the token cannot be
        decoded or carries no email.
    """
    try:
        payload = jwt.decode(token, options={"verify_signature": False})
    except jwt.InvalidTokenError as exc:
        logger.debug("Could not decode token payload: {}", exc)
        return None

    email = payload.get("email")
    if not isinstance(email, str) or not email:
        return None
    surname = payload.get("surname")
    return DisplayIdentity(email=email, surname=surname if isinstance(surname, str) else None)
