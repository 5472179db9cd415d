"""Prefixed random identifiers.

``sess_a8Kx3nQ9mP2r`` names a conversation session and
``fb_L7wBd4Fj9Ks2`` a stored feedback record, so either can be told
apart at a glance in logs and in the ``feedback`` table.
"""

import secrets
import string

_ALPHABET = string.ascii_letters + string.digits
SUFFIX_LENGTH = 12

PREFIX_SESSION = "sess"
PREFIX_FEEDBACK = "fb"


def generate_id(prefix: str, length: int = SUFFIX_LENGTH) -> str:
    """Return ``"{prefix}_{random}"`` with *length* alphanumeric characters."""
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(length))
    return f"{prefix}_{suffix}"


def new_session_id() -> str:
    return generate_id(PREFIX_SESSION)


def new_feedback_id() -> str:
    return generate_id(PREFIX_FEEDBACK)
