"""
Registration, questions and selection schemas.

Fields are optional at the schema level: the routes report missing groups
of fields with their own messages.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


def clean_contact(value: Any) -> Any:
    """Strip an email / phone value; blank counts as not provided."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class RegisterRequest(BaseModel):
    # Personal
    first_name: Optional[str] = Field(None, examples=["John"])
    last_name: Optional[str] = Field(None, examples=["Doe"])
    email: Optional[EmailStr] = Field(None, examples=["john.doe@example.com"])
    phone: Optional[str] = Field(None, examples=["+17805550123"])
    password: Optional[str] = Field(None, examples=["Password123"])
    # Business
    address: Optional[str] = Field(None, examples=["123 Main Street"])
    city: Optional[str] = Field(None, examples=["Edmonton"])
    district_id: Optional[int] = Field(None, examples=[4])
    postcode: Optional[str] = Field(None, examples=["T5J 0N3"])
    position: Optional[str] = Field(None, examples=["Pharmacist"])
    licence: Optional[str] = Field(None, examples=["PH123456"])
    province: Optional[str] = Field(None, examples=["Alberta"])
    business_name: Optional[str] = Field(None, examples=["Doe Pharmacy Services"])
    gst: Optional[str] = Field(None, examples=["123456789RT0001"])
    # Optional extras
    licence_image: Optional[str] = None
    profile_image: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    business_type: Optional[str] = Field(None, examples=["Independent Pharmacy"])
    experience: Optional[int] = Field(None, examples=[5])

    @field_validator("email", "phone", mode="before")
    @classmethod
    def strip_contact(cls, value: Any) -> Any:
        return clean_contact(value)


class AnswersRequest(BaseModel):
    # Items are checked one by one so a malformed answer yields a 400
    answers: Optional[List[Any]] = Field(None, examples=[[{"id": 3, "answer": True}]])


class SelectionRequest(BaseModel):
    """Body of the selection endpoints; only the key matching the route is read."""
    languages: Optional[List[str]] = Field(None, examples=[["English", "French"]])
    skills: Optional[List[str]] = Field(None, examples=[["Blister pack"]])
    softwares: Optional[List[str]] = Field(None, examples=[["Kroll"]])


__all__ = [
    "RegisterRequest",
    "AnswersRequest",
    "SelectionRequest",
]
