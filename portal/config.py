"""
Configuration Management

Centralized configuration management using environment variables
with proper validation and type safety.
"""

import os
from typing import List, Optional
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv


# Load environment variables from .env in the project root, then the working directory
_project_root = Path(__file__).resolve().parent.parent
_env_path = _project_root / ".env"
if _env_path.exists():
    load_dotenv(dotenv_path=str(_env_path))
load_dotenv()


@dataclass
class SupabaseConfig:
    """Supabase connection configuration"""
    url: str
    service_key: str
    storage_bucket: str = "profile-pictures"


@dataclass
class AuthConfig:
    """JWT configuration"""
    jwt_secret: str
    token_ttl_days: int = 7


@dataclass
class OTPConfig:
    """One-time code configuration"""
    length: int = 6
    ttl_minutes: int = 10


@dataclass
class SMSConfig:
    """SMS gateway configuration (optional)"""
    gateway_url: Optional[str] = None
    api_token: Optional[str] = None
    sender: str = "AlfaRelief"
    timeout: float = 10.0


@dataclass
class SMTPConfig:
    """SMTP email configuration"""
    host: Optional[str] = None
    port: int = 587
    secure: bool = False
    user: Optional[str] = None
    password: Optional[str] = None
    from_name: str = "Alfa Relief Team"
    from_email: Optional[str] = None


@dataclass
class APIKeyConfig:
    """Back-office API key configuration"""
    key_hash: Optional[str] = None


@dataclass
class ServerConfig:
    """HTTP server configuration"""
    host: str
    port: int
    frontend_url: str = ""
    cors_origins: List[str] = field(default_factory=list)


@dataclass
class Config:
    """Main application configuration"""

    supabase: SupabaseConfig
    auth: AuthConfig
    otp: OTPConfig
    sms: SMSConfig
    smtp: SMTPConfig
    api_key: APIKeyConfig
    server: ServerConfig

    # development | production
    APP_ENV: str = "production"

    # Commission added on top of the professional's earning, in percent
    PLATFORM_FEE_PERCENT: float = 25.0

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    @property
    def is_development(self) -> bool:
        return self.APP_ENV == "development"

    @classmethod
    def from_env(cls) -> "Config":
        """
        Create configuration from environment variables.

        Returns:
            Configured Config instance

        Raises:
            ValueError: If required environment variables are missing
        """
        supabase_url = os.getenv("SUPABASE_URL")
        supabase_key = os.getenv("SUPABASE_SERVICE_KEY")
        if not supabase_url:
            raise ValueError("SUPABASE_URL environment variable is required")
        if not supabase_key:
            raise ValueError("SUPABASE_SERVICE_KEY environment variable is required")

        jwt_secret = os.getenv("JWT_SECRET_KEY")
        if not jwt_secret or not jwt_secret.strip():
            raise ValueError(
                "JWT_SECRET_KEY environment variable is required. "
                "Generate a secret (e.g. openssl rand -hex 32) and set it in .env"
            )

        # SMTP configuration (optional)
        smtp_port = os.getenv("SMTP_PORT", "587")
        smtp_secure = os.getenv("SMTP_SECURE", "false").lower() == "true" or smtp_port == "465"

        frontend_url = os.getenv("FRONTEND_URL", "").strip()
        cors_origins = [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]
        if frontend_url:
            cors_origins.append(frontend_url.rstrip("/"))
        # Extra origins from env (comma-separated)
        for origin in os.getenv("CORS_ORIGINS", "").split(","):
            origin = origin.strip().rstrip("/")
            if origin and origin not in cors_origins:
                cors_origins.append(origin)

        return cls(
            supabase=SupabaseConfig(
                url=supabase_url,
                service_key=supabase_key,
                storage_bucket=os.getenv("SUPABASE_STORAGE_BUCKET", "profile-pictures"),
            ),
            auth=AuthConfig(
                jwt_secret=jwt_secret,
                token_ttl_days=int(os.getenv("JWT_TTL_DAYS", "7")),
            ),
            otp=OTPConfig(
                length=int(os.getenv("OTP_LENGTH", "6")),
                ttl_minutes=int(os.getenv("OTP_TTL_MINUTES", "10")),
            ),
            sms=SMSConfig(
                gateway_url=os.getenv("SMS_GATEWAY_URL") or None,
                api_token=os.getenv("SMS_API_TOKEN") or None,
                sender=os.getenv("SMS_SENDER", "AlfaRelief"),
                timeout=float(os.getenv("SMS_TIMEOUT", "10")),
            ),
            smtp=SMTPConfig(
                host=os.getenv("SMTP_HOST"),
                port=int(smtp_port),
                secure=smtp_secure,
                user=os.getenv("SMTP_USER"),
                password=os.getenv("SMTP_PASSWORD"),
                from_name=os.getenv("SMTP_FROM_NAME", "Alfa Relief Team"),
                from_email=os.getenv("SMTP_FROM_EMAIL") or os.getenv("SMTP_USER"),
            ),
            api_key=APIKeyConfig(
                key_hash=os.getenv("API_KEY_HASH") or None,
            ),
            server=ServerConfig(
                host=os.getenv("SERVER_HOST", "0.0.0.0"),
                port=int(os.getenv("SERVER_PORT", "8000")),
                frontend_url=frontend_url,
                cors_origins=cors_origins,
            ),
            APP_ENV=os.getenv("APP_ENV", "production").lower(),
            PLATFORM_FEE_PERCENT=float(os.getenv("PLATFORM_FEE_PERCENT", "25")),
        )


def get_config() -> Config:
    """
    Get configuration from environment variables.

    Returns:
        Configuration instance
    """
    return Config.from_env()
