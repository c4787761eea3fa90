# backend/schemas/profiles.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, constr

BusinessName = constr(strip_whitespace=True, min_length=2, max_length=255)


class SupplierProfileCreate(BaseModel):
    business_name: BusinessName
    description: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None

class SupplierProfileUpdate(BaseModel):
    business_name: Optional[BusinessName] = None
    description: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None

class SupplierProfileOut(BaseModel):
    id: int
    user_id: int
    business_name: str
    description: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    verified: bool
    approved: bool
    rejected: bool = False
    rating: float
    created_at: Optional[datetime] = None
    class Config: from_attributes = True


class MechanicProfileCreate(BaseModel):
    business_name: BusinessName
    specialization: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None

class MechanicProfileUpdate(BaseModel):
    business_name: Optional[BusinessName] = None
    specialization: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None

class MechanicProfileOut(BaseModel):
    id: int
    user_id: int
    business_name: str
    specialization: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    verified: bool
    approved: bool
    rejected: bool = False
    rating: float
    created_at: Optional[datetime] = None
    class Config: from_attributes = True


class LogisticsProfileCreate(BaseModel):
    company_name: BusinessName
    vehicle_type: Optional[str] = None
    vehicle_number: Optional[str] = None
    phone: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    coverage_areas: Optional[str] = None

class LogisticsProfileUpdate(BaseModel):
    company_name: Optional[BusinessName] = None
    vehicle_type: Optional[str] = None
    vehicle_number: Optional[str] = None
    phone: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    coverage_areas: Optional[str] = None

class LogisticsProfileOut(BaseModel):
    id: int
    user_id: int
    company_name: str
    vehicle_type: Optional[str] = None
    vehicle_number: Optional[str] = None
    phone: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    coverage_areas: Optional[str] = None
    verified: bool
    approved: bool
    rejected: bool = False
    rating: float
    created_at: Optional[datetime] = None
    class Config: from_attributes = True


class RatingUpdate(BaseModel):
    rating: float = Field(ge=0, le=5)

class ApprovalResult(BaseModel):
    ok: bool
    id: int
    verified: bool
    approved: bool
    rejected: bool = False
