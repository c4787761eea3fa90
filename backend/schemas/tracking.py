# backend/schemas/tracking.py
from datetime import datetime
from typing import List, Optional, Literal
from pydantic import BaseModel

from .orders import ShippingAddress


class TimelineStep(BaseModel):
    status: str
    timestamp: datetime
    location: Optional[str] = None
    completed: bool

class TrackingEventOut(BaseModel):
    status: str
    location: Optional[str] = None
    note: Optional[str] = None
    timestamp: datetime

class Recipient(BaseModel):
    name: Optional[str] = None
    city: Optional[str] = None

class TrackedItem(BaseModel):
    product_id: int
    name: str
    price: float
    quantity: int

class TrackingView(BaseModel):
    type: Literal["ORDER", "LOGISTICS"]
    id: int
    tracking_id: str
    status: str
    status_message: str
    status_icon: str
    status_color: str
    created_at: datetime
    estimated_delivery: datetime
    current_location: Optional[str] = None
    recipient: Recipient
    shipping_address: Optional[ShippingAddress] = None
    items: List[TrackedItem] = []
    total: float
    timeline: List[TimelineStep]
    history: List[TrackingEventOut] = []
