"""
Unique business code generation for auto-created master data.

Codes have the shape PREFIX_yyyyMMddHHmmss_TOKEN where TOKEN is a short
random uppercase hex string. If a candidate collides with a known code the
attempt number is appended (PREFIX_..._TOKEN_1, _2, ...) until a free code
is found or the attempt limit is reached.

The set of known codes is seeded from the store once per import call and
grows as codes are issued, so codes handed out within the same call never
collide with each other either.
"""

import uuid
from datetime import datetime
from typing import Callable, Set

from src.utils.constants import CODE_TIMESTAMP_FORMAT, CODE_TOKEN_LENGTH, MAX_CODE_ATTEMPTS
from src.utils.datetime_utils import utc_now

from .exceptions import CodeGenerationError
from .logging_utils import get_service_logger

logger = get_service_logger(__name__)


def random_token(length: int = CODE_TOKEN_LENGTH) -> str:
    """Return `length` uppercase hex characters from a fresh UUID4."""
    return uuid.uuid4().hex[:length].upper()


def generate_unique_code(
    prefix: str,
    known_codes: Set[str],
    clock: Callable[[], datetime] = utc_now,
    token_factory: Callable[[], str] = random_token,
    max_attempts: int = MAX_CODE_ATTEMPTS,
) -> str:
    """
    Generate a code not present in known_codes.

    The issued code is added to known_codes before returning.

    Args:
        prefix: Code prefix (e.g., "PROJ")
        known_codes: Codes already in use; mutated
        clock: Source of the timestamp component
        token_factory: Source of the random component
        max_attempts: Candidates to try before giving up

    Returns:
        The new unique code

    Raises:
        CodeGenerationError: If every candidate collided

    Example:
        >>> generate_unique_code("PROJ", set())
        'PROJ_20240301120000_3F9A0C1B'
    """
    for attempt in range(max_attempts):
        candidate = f"{prefix}_{clock().strftime(CODE_TIMESTAMP_FORMAT)}_{token_factory()}"
        if attempt > 0:
            candidate = f"{candidate}_{attempt}"

        if candidate not in known_codes:
            known_codes.add(candidate)
            return candidate

    logger.error(f"Exhausted {max_attempts} attempts generating a {prefix} code")
    raise CodeGenerationError(prefix, max_attempts)
