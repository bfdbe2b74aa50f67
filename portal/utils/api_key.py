"""
Back-office API key authentication.

Only the SHA-256 hash of the key is configured (API_KEY_HASH); the raw key is
sent by operators in the X-API-Key header.
"""

import hashlib
import secrets
from typing import Optional

from fastapi import Security, HTTPException, status
from fastapi.security import APIKeyHeader

from portal.config import get_config
from portal.utils.logger import get_logger

logger = get_logger(__name__)

api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


def hash_api_key(api_key: str) -> str:
    return hashlib.sha256(api_key.encode()).hexdigest()


def generate_api_key() -> str:
    """Generate a random 32-byte hex key."""
    return secrets.token_hex(32)


async def require_api_key(
    api_key: Optional[str] = Security(api_key_header),
) -> str:
    """
    Validate the X-API-Key header against the configured hash.

    Raises:
        HTTPException: 401 when missing, 403 when wrong, 503 when no hash is configured
    """
    if not api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing API Key",
            headers={"WWW-Authenticate": "ApiKey"},
        )

    stored_hash = get_config().api_key.key_hash
    if not stored_hash:
        logger.error("[APIKey] API_KEY_HASH is not configured, back-office disabled")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Back-office access is not configured"
        )

    if not secrets.compare_digest(hash_api_key(api_key), stored_hash):
        logger.warning("[APIKey] Rejected request with invalid API key")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid API Key",
        )

    return api_key
