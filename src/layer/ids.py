"""Layer id generation.

Ids are short alphanumeric strings drawn with ``secrets``. Callers pass the
ids already in use so a collision is retried instead of accepted.
"""

import secrets
import string
from typing import Collection

from src.config import get_id_length
from src.core.errors import UIBuilderError

ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase

MAX_ATTEMPTS = 1000


def create_id(existing: Collection[str] = (), length: int | None = None) -> str:
    """Create a random id not present in ``existing``.

    Args:
        existing: Ids already in use.
        length: Id length. Defaults to UI_BUILDER_ID_LENGTH.

    Returns:
        New alphanumeric id.

    Raises:
        UIBuilderError: If no free id was found (id space exhausted).
    """
    size = get_id_length(length)
    for _ in range(MAX_ATTEMPTS):
        candidate = "".join(secrets.choice(ALPHABET) for _ in range(size))
        if candidate not in existing:
            return candidate
    raise UIBuilderError(
        f"Could not generate a free id of length {size} after {MAX_ATTEMPTS} attempts"
    )


__all__ = ["ALPHABET", "MAX_ATTEMPTS", "create_id"]
