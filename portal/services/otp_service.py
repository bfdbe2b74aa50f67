"""
OTP Service

Issues and verifies single-use numeric codes for phone login.
"""

from typing import Any, Dict, Optional
from datetime import timedelta
import secrets

from portal.config import Config
from portal.db.supabase import get_supabase
from portal.utils.logger import get_logger
from portal.utils.exceptions import PortalError
from portal.utils.datetime_utils import get_now_utc, parse_datetime_safe

logger = get_logger(__name__)


class OTPService:
    """Service for one-time phone verification codes"""

    def __init__(self, config: Config):
        self.config = config
        self.client = get_supabase()

    def generate_code(self) -> str:
        length = self.config.otp.length
        # First digit is never zero so the code always has `length` digits
        return str(secrets.randbelow(9 * 10 ** (length - 1)) + 10 ** (length - 1))

    def issue(self, professional_id: str) -> str:
        """
        Replace any unused code of the professional with a fresh one.

        Returns:
            The new code
        """
        code = self.generate_code()
        now = get_now_utc()
        try:
            (
                self.client.table("otp_codes")
                .delete()
                .eq("professional_id", professional_id)
                .eq("is_used", False)
                .execute()
            )
            self.client.table("otp_codes").insert({
                "professional_id": professional_id,
                "code": code,
                "expires_at": (now + timedelta(minutes=self.config.otp.ttl_minutes)).isoformat(),
                "is_used": False,
                "created_at": now.isoformat(),
            }).execute()
        except Exception as e:
            logger.error(f"[OTPService] Failed to store OTP for {professional_id}: {str(e)}", exc_info=True)
            raise PortalError(f"Failed to issue OTP: {str(e)}", "OTPService")

        logger.info(f"[OTPService] Issued OTP for {professional_id}")
        return code

    def _find_valid(self, professional_id: str, code: str) -> Optional[Dict[str, Any]]:
        response = (
            self.client.table("otp_codes")
            .select("*")
            .eq("professional_id", professional_id)
            .eq("code", code)
            .eq("is_used", False)
            .execute()
        )
        now = get_now_utc()
        for record in response.data or []:
            if parse_datetime_safe(record["expires_at"]) > now:
                return record
        return None

    def verify(self, professional_id: str, code: str) -> bool:
        """
        Consume a code. Returns False when no unused, unexpired code matches.
        """
        try:
            record = self._find_valid(professional_id, code)
            if not record:
                logger.warning(f"[OTPService] Invalid or expired OTP for {professional_id}")
                return False

            self.client.table("otp_codes").update({"is_used": True}).eq("id", record["id"]).execute()
            self.client.table("professionals").update({
                "phone_verified": True,
                "updated_at": get_now_utc().isoformat(),
            }).eq("id", professional_id).execute()
        except Exception as e:
            logger.error(f"[OTPService] OTP verification failed: {str(e)}", exc_info=True)
            raise PortalError(f"Failed to verify OTP: {str(e)}", "OTPService")

        logger.info(f"[OTPService] ✅ OTP verified for {professional_id}")
        return True
