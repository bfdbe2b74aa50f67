"""
Profile, password and bank account schemas.
"""

from typing import Any, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from portal.schemas.registration import clean_contact


class ProfileUpdateRequest(BaseModel):
    first_name: Optional[str] = Field(None, examples=["John"])
    last_name: Optional[str] = Field(None, examples=["Doe"])
    email: Optional[EmailStr] = Field(None, examples=["john.doe@example.com"])
    phone: Optional[str] = Field(None, examples=["+17805550123"])
    address: Optional[str] = None
    postcode: Optional[str] = None
    position: Optional[str] = None
    licence: Optional[str] = None
    province: Optional[str] = None
    gst: Optional[str] = None
    business_name: Optional[str] = None
    business_type: Optional[str] = None
    experience: Optional[int] = Field(None, ge=0, examples=[5])

    @field_validator("email", "phone", mode="before")
    @classmethod
    def strip_contact(cls, value: Any) -> Any:
        return clean_contact(value)


class PasswordChangeRequest(BaseModel):
    old_password: Optional[str] = Field(None, examples=["Password123"])
    password: Optional[str] = Field(None, examples=["NewPassword456"])
    password_confirmation: Optional[str] = Field(None, examples=["NewPassword456"])


class BankAccountRequest(BaseModel):
    transit_number: Optional[str] = Field(None, examples=["12345"])
    institution_number: Optional[str] = Field(None, examples=["001"])
    account_number: Optional[str] = Field(None, examples=["1234567"])
    business_name: Optional[str] = Field(None, examples=["Doe Pharmacy Services"])
    business_number: Optional[str] = Field(None, examples=["123456789"])


__all__ = [
    "ProfileUpdateRequest",
    "PasswordChangeRequest",
    "BankAccountRequest",
]
