# backend/schemas/orders.py
from typing import List, Optional, Literal
from datetime import datetime
from pydantic import BaseModel, Field

OrderStatus = Literal["PENDING", "PROCESSING", "SHIPPED", "DELIVERED", "CANCELLED"]

class OrderItemIn(BaseModel):
    product_id: int = Field(gt=0)
    quantity: int = Field(gt=0)

class ShippingAddress(BaseModel):
    full_name: str
    phone: Optional[str] = None
    address: str
    city: str
    state: Optional[str] = None

class OrderCreate(BaseModel):
    items: List[OrderItemIn] = Field(min_length=1)
    shipping_address: Optional[ShippingAddress] = None
    payment_method: Optional[str] = None  # placeholder only
    delivery_notes: Optional[str] = None

class OrderStatusUpdate(BaseModel):
    status: str

class OrderItemResponse(BaseModel):
    id: int
    product_id: int
    name: str
    quantity: int
    price: float
    total_price: float

class OrderResponse(BaseModel):
    id: int
    tracking_id: str
    user_id: int
    buyer_name: Optional[str] = None
    status: OrderStatus
    payment_method: Optional[str] = None
    delivery_notes: Optional[str] = None
    shipping_address: Optional[ShippingAddress] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    items: List[OrderItemResponse] = []
    total: float = 0.0

class StatusChangeResult(BaseModel):
    message: str
    id: int
    previous_status: str
    new_status: str
