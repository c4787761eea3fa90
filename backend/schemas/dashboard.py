# backend/schemas/dashboard.py
from typing import Any, Dict, List, Union
from pydantic import BaseModel

from .bookings import AnyBooking
from .profiles import MechanicProfileOut, LogisticsProfileOut


class DashboardStats(BaseModel):
    role: str
    stats: Dict[str, Any]

class StatusDisplay(BaseModel):
    color: str
    message: str
    icon: str

class BookingAction(BaseModel):
    label: str
    status: str

class DashboardBooking(BaseModel):
    booking: AnyBooking
    display: StatusDisplay
    actions: List[BookingAction] = []

class ProviderDashboard(BaseModel):
    kind: str
    profile: Union[MechanicProfileOut, LogisticsProfileOut]
    stats: Dict[str, Any]
    bookings: List[DashboardBooking]
    poll_interval_seconds: int
