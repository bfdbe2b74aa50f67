"""
SMS Service

Delivers one-time codes through an HTTP SMS gateway.
"""

from typing import Optional, Tuple

import httpx

from portal.config import Config
from portal.utils.logger import get_logger

logger = get_logger(__name__)


class SMSService:
    """Service for sending text messages"""

    def __init__(self, config: Config):
        self.config = config
        self.enabled = bool(config.sms.gateway_url and config.sms.api_token)

    async def send_otp(self, phone: str, code: str) -> Tuple[bool, Optional[str]]:
        """
        Send a verification code by SMS.

        Returns:
            Tuple of (success, error_message)
        """
        if not self.enabled:
            if self.config.is_development:
                logger.info(f"[SMSService] SMS gateway not configured - OTP for {phone}: {code}")
            else:
                logger.warning("[SMSService] SMS gateway not configured - skipping SMS send")
            return False, "SMS service not configured"

        minutes = self.config.otp.ttl_minutes
        payload = {
            "to": phone,
            "from": self.config.sms.sender,
            "message": f"Your verification code is {code}. It expires in {minutes} minutes.",
        }
        headers = {"Authorization": f"Bearer {self.config.sms.api_token}"}

        try:
            async with httpx.AsyncClient(timeout=self.config.sms.timeout) as client:
                response = await client.post(self.config.sms.gateway_url, json=payload, headers=headers)
            if response.status_code >= 400:
                error_msg = f"SMS gateway returned {response.status_code}"
                logger.error(f"[SMSService] {error_msg}: {response.text[:200]}")
                return False, error_msg
            logger.info(f"[SMSService] ✅ OTP sent to {phone}")
            return True, None
        except httpx.TimeoutException:
            logger.error(f"[SMSService] SMS gateway timed out after {self.config.sms.timeout}s")
            return False, "SMS gateway timeout"
        except httpx.RequestError as e:
            logger.error(f"[SMSService] SMS gateway request failed: {str(e)}")
            return False, f"SMS gateway unreachable: {str(e)}"
