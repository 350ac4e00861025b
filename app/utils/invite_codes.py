import secrets
import string
from typing import Awaitable, Callable

import structlog

from app.exceptions import InviteCodeGenerationError

logger = structlog.get_logger()

INVITE_CODE_ALPHABET = string.ascii_lowercase + string.digits
INVITE_CODE_LENGTH = 7
MAX_ATTEMPTS = 5


def generate_invite_code(length: int = INVITE_CODE_LENGTH) -> str:
    """Draw a random lowercase alphanumeric invite code."""
    return "".join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(length))


async def allocate_invite_code(
    is_taken: Callable[[str], Awaitable[bool]],
    generator: Callable[[], str] = generate_invite_code,
    max_attempts: int = MAX_ATTEMPTS,
) -> str:
    """Return the first generated code that no class is using.

    Args:
        is_taken: Async predicate telling whether a code is already in use
        generator: Produces candidate codes
        max_attempts: Number of draws before giving up

    Raises:
        InviteCodeGenerationError: If every draw collided
    """
    for attempt in range(1, max_attempts + 1):
        candidate = generator()
        if not await is_taken(candidate):
            return candidate
        logger.warning("Invite code collision", attempt=attempt)

    logger.error("Invite code generation exhausted", attempts=max_attempts)
    raise InviteCodeGenerationError(attempts=max_attempts)
