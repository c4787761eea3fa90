# backend/models/tracking_event_model.py
from datetime import datetime

from sqlalchemy import Column, Integer, DateTime, Index
from sqlalchemy.types import Unicode

from database.session import Base


class TrackingEvent(Base):
    """One row per status or location change of an order or logistics booking."""
    __tablename__ = "tracking_events"
    id          = Column(Integer, primary_key=True, index=True)
    record_type = Column(Unicode(20), nullable=False)  # ORDER | LOGISTICS
    record_id   = Column(Integer, nullable=False)
    status      = Column(Unicode(20), nullable=False)
    location    = Column(Unicode(255))
    note        = Column(Unicode(255))
    created_at  = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (Index("ix_tracking_events_record", "record_type", "record_id"),)
