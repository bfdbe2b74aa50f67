"""
Email Service

Handles sending registration and approval emails via SMTP.
"""

import html
from typing import Optional, Tuple
import aiosmtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart

from portal.config import Config
from portal.utils.logger import get_logger

logger = get_logger(__name__)


class EmailService:
    """Service for sending emails"""

    def __init__(self, config: Config):
        self.config = config
        self.enabled = bool(
            config.smtp.host and
            config.smtp.user and
            config.smtp.password
        )

    async def send_registration_received(self, to_email: str, name: str) -> Tuple[bool, Optional[str]]:
        """Tell a new professional their application is under review."""
        body = f"""
            <p>Hi <strong>{html.escape(name)}</strong>,</p>
            <p>Thank you for registering with Alfa Relief. Our team is reviewing your
            licence and business information.</p>
            <p>This usually takes 1-2 business days. You will receive another email once
            your account has been approved.</p>
        """
        return await self._send(to_email, "We received your registration", "Registration Received", body)

    async def send_account_approved(self, to_email: str, name: str) -> Tuple[bool, Optional[str]]:
        """Tell a professional their account is active."""
        base = (self.config.server.frontend_url or "").strip().rstrip("/")
        shifts_url = f"{base}/shifts" if base else "/shifts"
        body = f"""
            <p>Hi <strong>{html.escape(name)}</strong>,</p>
            <p>Your account has been verified. You can now browse and apply for pharmacy
            shifts in your area.</p>
            <div style="text-align: center;">
                <a href="{shifts_url}" class="button">Browse Shifts</a>
            </div>
        """
        return await self._send(to_email, "Your account has been approved", "Account Approved", body)

    async def _send(self, to_email: str, subject: str, heading: str, body_html: str) -> Tuple[bool, Optional[str]]:
        """
        Build and send one HTML message.

        Returns:
            Tuple of (success, error_message)
        """
        if not self.enabled:
            logger.warning("[EmailService] SMTP not configured - skipping email send")
            return False, "Email service not configured"

        try:
            message = MIMEMultipart("alternative")
            message["Subject"] = subject
            message["From"] = f'"{self.config.smtp.from_name}" <{self.config.smtp.from_email}>'
            message["To"] = to_email
            message.attach(MIMEText(self._wrap_html(heading, body_html), "html"))

            # SMTP_SECURE=true means direct TLS (port 465), false means STARTTLS (port 587)
            use_tls = self.config.smtp.secure
            start_tls = not self.config.smtp.secure

            await aiosmtplib.send(
                message,
                hostname=self.config.smtp.host,
                port=self.config.smtp.port,
                use_tls=use_tls,
                start_tls=start_tls,
                username=self.config.smtp.user,
                password=self.config.smtp.password,
                timeout=30.0,
            )

            logger.info(f"[EmailService] ✅ '{subject}' sent to {to_email}")
            return True, None

        except Exception as e:
            error_msg = f"Failed to send email: {str(e)}"
            logger.error(f"[EmailService] {error_msg}", exc_info=True)
            return False, error_msg

    def _wrap_html(self, heading: str, body_html: str) -> str:
        return f"""
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <style>
        body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; }}
        .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
        .header {{ background: #2563eb; color: white; padding: 30px; text-align: center; border-radius: 8px 8px 0 0; }}
        .content {{ background: #f9fafb; padding: 30px; border-radius: 0 0 8px 8px; }}
        .button {{ display: inline-block; background: #2563eb; color: #ffffff; padding: 14px 28px; text-decoration: none; border-radius: 6px; font-weight: bold; margin: 20px 0; }}
        .footer {{ text-align: center; color: #666; font-size: 12px; margin-top: 30px; }}
    </style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>{heading}</h1>
        </div>
        <div class="content">
            {body_html}
            <div class="footer">
                <p>Best regards,<br><strong>{self.config.smtp.from_name}</strong></p>
            </div>
        </div>
    </div>
</body>
</html>
"""
