"""
Authentication Dependencies

FastAPI dependencies for route protection and authentication.
"""

from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from portal.services.auth_service import AuthService, PROFESSIONAL_ROLE
from portal.services.professional_service import ProfessionalService
from portal.services.container import auth_service, professional_service
from portal.utils.exceptions import PortalError
from portal.utils.logger import get_logger

logger = get_logger(__name__)

security = HTTPBearer(auto_error=False)


def get_auth_service() -> AuthService:
    return auth_service


def get_professional_service() -> ProfessionalService:
    return professional_service


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_token_payload(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """
    Decoded JWT of the request.

    Raises:
        HTTPException: If the token is missing, invalid, expired or revoked
    """
    if not credentials:
        raise _unauthorized("Not authenticated")

    try:
        payload = auth.verify_token(credentials.credentials)
    except PortalError as e:
        logger.error(f"[Auth] Token check unavailable: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication temporarily unavailable"
        )
    if not payload:
        raise _unauthorized("Invalid or expired token")

    if not payload.get("user_id") or payload.get("role") != PROFESSIONAL_ROLE:
        raise _unauthorized("Invalid token payload")

    return payload


async def get_current_professional(
    payload: Dict[str, Any] = Depends(get_token_payload),
    professionals: ProfessionalService = Depends(get_professional_service),
) -> Dict[str, Any]:
    """
    Professional owning the bearer token.

    Raises:
        HTTPException: If the token is invalid or the professional no longer exists
    """
    professional = professionals.get_by_id(payload["user_id"])
    if not professional:
        raise _unauthorized("Professional not found")

    logger.debug(f"[Auth] Authenticated professional {professional['id']}")
    return professional


def get_optional_professional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth: AuthService = Depends(get_auth_service),
    professionals: ProfessionalService = Depends(get_professional_service),
) -> Optional[Dict[str, Any]]:
    """
    Current professional if a valid token is provided, otherwise None.
    Used for endpoints that work both with and without authentication.
    """
    if not credentials:
        return None

    try:
        payload = auth.verify_token(credentials.credentials)
    except PortalError as e:
        # Treated as anonymous rather than trusting an unchecked token
        logger.warning(f"[Auth] Token check unavailable, continuing anonymously: {e}")
        return None
    if not payload or payload.get("role") != PROFESSIONAL_ROLE or not payload.get("user_id"):
        return None

    return professionals.get_by_id(payload["user_id"])
