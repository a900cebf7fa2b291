"""Bearer Token Extraction — pure half of the authentication gate.

Invariants:
    - Missing or empty Authorization header -> UnauthorizedError("missing token")
    - The "Bearer " prefix is stripped; the remainder is looked up as-is
"""

from marketplace.core.errors import UnauthorizedError

BEARER_PREFIX = "Bearer "
MISSING_TOKEN = "missing token"
INVALID_TOKEN = "invalid token"


def extract_bearer_token(authorization: str | None) -> str:
    if not authorization:
        raise UnauthorizedError(MISSING_TOKEN)
    return authorization.removeprefix(BEARER_PREFIX).strip()
