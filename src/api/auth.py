"""
Optional X-API-KEY check for the extraction endpoint.

Accepted keys come from API_KEYS (comma separated). With none configured
the endpoint is open, which is how local development runs.
"""

import secrets

from fastapi import HTTPException, Security, status
from fastapi.security import APIKeyHeader

from src.config.settings import get_settings
from src.observability.logging import get_logger

logger = get_logger(__name__)

OPEN_ACCESS = "open-access"

api_key_header = APIKeyHeader(
    name="X-API-KEY",
    auto_error=False,
    description="One of the keys listed in API_KEYS; omit when none are set.",
)


def key_matches(candidate: str, accepted: set[str]) -> bool:
    """Compare a presented key against each accepted key in constant time."""
    return any(secrets.compare_digest(candidate, key) for key in accepted)


def _reject(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "ApiKey"},
    )


async def verify_api_key(api_key: str | None = Security(api_key_header)) -> str:
    """
    Admit an upload when its key is accepted or no keys are configured.

    Returns:
        The presented key, or OPEN_ACCESS when auth is disabled.

    Raises:
        HTTPException: 401 when the key is missing or not accepted.
    """
    accepted = get_settings().api_key_set
    if not accepted:
        return OPEN_ACCESS

    if not api_key:
        raise _reject("Missing API key. Provide X-API-KEY header.")

    if not key_matches(api_key, accepted):
        logger.warning("Rejected upload with unknown API key")
        raise _reject("Invalid API key")

    return api_key
