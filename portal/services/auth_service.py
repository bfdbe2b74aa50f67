"""
Authentication Service

Password hashing, JWT issue/verification and token revocation for
healthcare professionals.
"""

from typing import Optional, Dict, Any
from datetime import datetime, timedelta, timezone
import uuid

import jwt
import bcrypt

from portal.config import Config
from portal.db.supabase import get_supabase
from portal.utils.logger import get_logger
from portal.utils.exceptions import PortalError
from portal.utils.datetime_utils import get_now_utc

logger = get_logger(__name__)

JWT_ALGORITHM = "HS256"
PROFESSIONAL_ROLE = "professional"


class AuthService:
    """Service for managing authentication and JWT tokens"""

    def __init__(self, config: Config):
        self.config = config
        self.client = get_supabase()
        self.jwt_secret = config.auth.jwt_secret
        self.token_ttl = timedelta(days=config.auth.token_ttl_days)

    def hash_password(self, password: str) -> str:
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=12)).decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except Exception as e:
            logger.error(f"[AuthService] Password verification error: {str(e)}")
            return False

    def generate_token(self, professional_id: str, phone: Optional[str] = None) -> str:
        now = get_now_utc()
        payload = {
            "user_id": professional_id,
            "role": PROFESSIONAL_ROLE,
            "jti": uuid.uuid4().hex,
            "exp": now + self.token_ttl,
            "iat": now,
        }
        if phone:
            payload["phone"] = phone
        return jwt.encode(payload, self.jwt_secret, algorithm=JWT_ALGORITHM)

    @property
    def token_ttl_seconds(self) -> int:
        return int(self.token_ttl.total_seconds())

    def verify_token(self, token: str) -> Optional[Dict[str, Any]]:
        try:
            payload = jwt.decode(token, self.jwt_secret, algorithms=[JWT_ALGORITHM])
        except jwt.ExpiredSignatureError:
            logger.warning("[AuthService] Token has expired")
            return None
        except jwt.InvalidTokenError:
            return None

        if self.is_revoked(payload.get("jti")):
            logger.info("[AuthService] Rejected revoked token")
            return None
        return payload

    def is_revoked(self, jti: Optional[str]) -> bool:
        """
        Raises:
            PortalError: If the revocation list cannot be read
        """
        if not jti:
            return False
        try:
            response = self.client.table("revoked_tokens").select("jti").eq("jti", jti).execute()
            return bool(response.data)
        except Exception as e:
            logger.error(f"[AuthService] Revocation lookup failed: {str(e)}")
            raise PortalError(f"Failed to check token revocation: {str(e)}", "AuthService")

    def revoke_token(self, payload: Dict[str, Any]) -> None:
        """Record the token's jti so it is rejected until it expires."""
        jti = payload.get("jti")
        if not jti:
            return
        exp = payload.get("exp")
        expires_at = datetime.fromtimestamp(int(exp), tz=timezone.utc) if exp else get_now_utc() + self.token_ttl
        try:
            self.client.table("revoked_tokens").insert({
                "jti": jti,
                "professional_id": payload.get("user_id"),
                "expires_at": expires_at.isoformat(),
                "created_at": get_now_utc().isoformat(),
            }).execute()
            logger.info(f"[AuthService] Token revoked for {payload.get('user_id')}")
        except Exception as e:
            logger.error(f"[AuthService] Failed to revoke token: {str(e)}", exc_info=True)
            raise PortalError(f"Failed to revoke token: {str(e)}", "AuthService")

    def authenticate(self, email: str, password: str) -> Optional[Dict[str, Any]]:
        """Email + password login. Returns the professional record or None."""
        try:
            response = self.client.table("professionals").select("*").eq("email", email).execute()
            if not response.data:
                logger.warning(f"[AuthService] Professional not found: {email}")
                return None

            professional = response.data[0]
            password_hash = professional.get("password_hash")
            if not password_hash:
                return None

            if self.verify_password(password, password_hash):
                logger.info(f"[AuthService] ✅ Professional authenticated: {email}")
                return professional
            return None
        except Exception as e:
            logger.error(f"[AuthService] Authentication error: {str(e)}", exc_info=True)
            return None

    def change_password(self, professional: Dict[str, Any], old_password: str, new_password: str) -> bool:
        """Verify the current password and store the new one. False when the current one is wrong."""
        if not self.verify_password(old_password, professional.get("password_hash") or ""):
            return False
        try:
            self.client.table("professionals").update({
                "password_hash": self.hash_password(new_password),
                "updated_at": get_now_utc().isoformat(),
            }).eq("id", professional["id"]).execute()
            logger.info(f"[AuthService] Password changed for {professional['id']}")
            return True
        except Exception as e:
            logger.error(f"[AuthService] Failed to change password: {str(e)}", exc_info=True)
            raise PortalError(f"Failed to change password: {str(e)}", "AuthService")
