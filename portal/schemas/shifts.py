"""
Shift schemas.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class AcceptOfferRequest(BaseModel):
    order_id: Optional[int] = Field(None, examples=[32])


class PharmacistOfferRequest(BaseModel):
    order_id: Optional[int] = Field(None, examples=[32])
    mileage: Optional[float] = Field(None, ge=0, examples=[25])
    house: Optional[float] = Field(None, ge=0, examples=[0])
    hour_rate: Optional[float] = Field(None, gt=0, examples=[60])
    comment: Optional[str] = Field(None, examples=["Available for the full shift"])


class ShiftCreateRequest(BaseModel):
    date: str = Field(..., pattern=r"^\d{2}-\d{2}-\d{4}$", examples=["29-07-2026"])
    from_: str = Field(..., alias="from", examples=["19:12"])
    to: str = Field(..., examples=["23:12"])
    hours: float = Field(..., gt=0, examples=[4])
    address: str = Field(..., examples=["10903 103 Avenue Northwest"])
    city: str = Field(..., examples=["Edmonton"])
    district_id: int = Field(..., examples=[4])
    pharmacy_id: Optional[int] = Field(None, examples=[7])
    pharmacy_name: str = Field(..., examples=["ABC Pharmacy"])
    pharmacy_phone: Optional[str] = Field(None, examples=["780-555-0123"])
    postcode: Optional[str] = Field(None, examples=["T6X 2C6"])
    lat: Optional[float] = None
    lng: Optional[float] = None
    hour_rate: float = Field(..., gt=0, examples=[55])
    mileage: float = Field(0, ge=0)
    house: float = Field(0, ge=0)
    comments: Optional[str] = None
    languages: List[str] = Field(default_factory=list, examples=[["English"]])
    skills: List[str] = Field(default_factory=list, examples=[["Blister pack"]])
    softwares: List[str] = Field(default_factory=list, examples=[["Kroll"]])


class AssignShiftRequest(BaseModel):
    professional_id: str = Field(..., examples=["3f6c0a9e-6a3b-4d8e-9a57-1c2b3d4e5f60"])


__all__ = [
    "AcceptOfferRequest",
    "PharmacistOfferRequest",
    "ShiftCreateRequest",
    "AssignShiftRequest",
]
