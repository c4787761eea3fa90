# backend/schemas/bookings.py
from datetime import datetime
from typing import Annotated, List, Optional, Literal, Union
from pydantic import BaseModel, Field, constr, field_validator

from .users import UserMini

BookingStatus = Literal["PENDING", "CONFIRMED", "IN_PROGRESS", "COMPLETED", "CANCELLED"]
Required = constr(strip_whitespace=True, min_length=1)


class MechanicBookingCreate(BaseModel):
    mechanic_id: int = Field(gt=0)
    vehicle_make: Required
    vehicle_model: Required
    vehicle_year: str
    plate_number: Optional[str] = None
    service_type: Required
    custom_service: Optional[str] = None
    estimated_price: float = Field(ge=0)
    date: Required
    time: Required
    location: Optional[str] = None
    address: Required
    city: Required
    state: Optional[str] = None
    phone: Required
    additional_notes: Optional[str] = None

    @field_validator("vehicle_year", mode="before")
    @classmethod
    def _four_digit_year(cls, v):
        year = str(v).strip()
        if len(year) != 4 or not year.isdigit():
            raise ValueError("Vehicle year must be a 4-digit number")
        return year


class LogisticsBookingCreate(BaseModel):
    provider_id: int = Field(gt=0)
    package_type: Required
    delivery_speed: str = "STANDARD"
    package_description: Optional[str] = None
    weight: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    pickup_address: Required
    pickup_city: Optional[str] = None
    pickup_state: Optional[str] = None
    delivery_address: Required
    delivery_city: Optional[str] = None
    delivery_state: Optional[str] = None
    recipient_name: Required
    recipient_phone: Required
    phone: Optional[str] = None
    special_instructions: Optional[str] = None
    # accepted for compatibility, recomputed by the server
    estimated_price: Optional[float] = None


class BookingStatusUpdate(BaseModel):
    # either may be omitted; a location-only update keeps the status
    status: Optional[str] = None
    current_location: Optional[str] = None


class MechanicMini(BaseModel):
    id: int
    business_name: str
    phone: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    specialization: Optional[str] = None
    rating: float = 0.0
    class Config: from_attributes = True

class DriverMini(BaseModel):
    id: int
    company_name: str
    phone: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    vehicle_type: Optional[str] = None
    rating: float = 0.0
    class Config: from_attributes = True


class MechanicBookingOut(BaseModel):
    type: Literal["MECHANIC"] = "MECHANIC"
    id: int
    user_id: int
    mechanic_id: Optional[int] = None
    vehicle_make: str
    vehicle_model: str
    vehicle_year: str
    plate_number: Optional[str] = None
    service_type: str
    custom_service: Optional[str] = None
    estimated_price: float
    date: str
    time: str
    location: str
    address: str
    city: str
    state: Optional[str] = None
    phone: str
    additional_notes: Optional[str] = None
    status: BookingStatus
    created_at: datetime
    updated_at: Optional[datetime] = None
    user: Optional[UserMini] = None
    mechanic: Optional[MechanicMini] = None
    class Config: from_attributes = True


class LogisticsBookingOut(BaseModel):
    type: Literal["LOGISTICS"] = "LOGISTICS"
    id: int
    user_id: int
    driver_id: Optional[int] = None
    package_type: str
    package_description: Optional[str] = None
    weight: float
    delivery_speed: str
    pickup_address: str
    pickup_city: Optional[str] = None
    pickup_state: Optional[str] = None
    delivery_address: str
    delivery_city: Optional[str] = None
    delivery_state: Optional[str] = None
    recipient_name: str
    recipient_phone: str
    phone: Optional[str] = None
    special_instructions: Optional[str] = None
    tracking_number: str
    current_location: Optional[str] = None
    estimated_price: float
    status: BookingStatus
    created_at: datetime
    updated_at: Optional[datetime] = None
    user: Optional[UserMini] = None
    driver: Optional[DriverMini] = None
    class Config: from_attributes = True


AnyBooking = Annotated[Union[MechanicBookingOut, LogisticsBookingOut], Field(discriminator="type")]


class PriceQuote(BaseModel):
    speed: str
    package_type: Optional[str] = None
    weight: float
    multiplier: float
    base_price: float
    estimated_price: float
