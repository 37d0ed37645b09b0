"""Bearer-token identity boundary.

Token verification (JWT signature, issuer, audience) is delegated to a
verifier callable stored on ``app.state.token_verifier``; this module only
defines the claims it must return.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IdentityClaims:
    """Verified claims for the caller: subject and email."""

    sub: str
    email: str


TokenVerifier = Callable[[str], Awaitable[IdentityClaims | None]]


async def reject_all_tokens(token: str) -> IdentityClaims | None:
    """Default verifier used until a real one is installed on the app."""
    logger.warning("No token verifier configured; rejecting bearer token")
    return None
