"""
Auth-related Pydantic schemas.
"""

from typing import Optional, Dict, Any

from pydantic import BaseModel, EmailStr, Field


class SendOTPRequest(BaseModel):
    phone: Optional[str] = Field(None, examples=["+17805550123"])


class VerifyOTPRequest(BaseModel):
    phone: Optional[str] = Field(None, examples=["+17805550123"])
    otp: Optional[str] = Field(None, examples=["482913"])


class LoginRequest(BaseModel):
    email: EmailStr = Field(..., examples=["john.doe@example.com"])
    password: str = Field(..., examples=["Password123"])


class TokenResponse(BaseModel):
    success: bool = True
    message: str
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    phone_verified: bool
    completed: bool
    status: str
    professional: Dict[str, Any]


__all__ = [
    "SendOTPRequest",
    "VerifyOTPRequest",
    "LoginRequest",
    "TokenResponse",
]
