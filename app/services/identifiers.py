"""
Opaque identifiers for sessions and users.

Identifiers double as bearer credentials in the reboot flow, so they come
from the OS CSPRNG and are never derived from earlier outputs.
"""

import re
import secrets

ID_LENGTH = 16

_ID_PATTERN = re.compile(rf"[0-9a-f]{{{ID_LENGTH}}}")


def generate_id() -> str:
    """Draw 128 random bits and keep the first 16 hex characters."""
    return secrets.token_hex(16)[:ID_LENGTH]


def is_valid_id(value: object) -> bool:
    """Check that a value is a well-formed identifier."""
    return isinstance(value, str) and _ID_PATTERN.fullmatch(value) is not None
