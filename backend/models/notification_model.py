# backend/models/notification_model.py
from datetime import datetime

from sqlalchemy import Column, Integer, Boolean, DateTime, ForeignKey, Text
from sqlalchemy.types import Unicode

from database.session import Base


class Notification(Base):
    __tablename__ = "notifications"
    id         = Column(Integer, primary_key=True, index=True)
    user_id    = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    type       = Column(Unicode(20), nullable=False, default="SYSTEM")
    title      = Column(Unicode(255), nullable=False)
    message    = Column(Text, nullable=False)
    link       = Column(Unicode(255))
    read       = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
