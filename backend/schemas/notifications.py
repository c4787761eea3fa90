# backend/schemas/notifications.py
from datetime import datetime
from typing import Dict, Optional
from pydantic import BaseModel


class NotificationOut(BaseModel):
    id: int
    type: str
    title: str
    message: str
    link: Optional[str] = None
    read: bool
    created_at: Optional[datetime] = None
    class Config: from_attributes = True

class NotificationCounts(BaseModel):
    total: int
    by_type: Dict[str, int] = {}
