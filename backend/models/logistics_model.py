# backend/models/logistics_model.py
from datetime import datetime

from sqlalchemy import Column, Integer, Float, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.types import Unicode

from database.session import Base


class LogisticsProfile(Base):
    __tablename__ = "logistics_profiles"

    id             = Column(Integer, primary_key=True, index=True)
    user_id        = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    company_name   = Column(Unicode(255), nullable=False)
    vehicle_type   = Column(Unicode(50))
    vehicle_number = Column(Unicode(50))
    phone          = Column(Unicode(32))
    city           = Column(Unicode(100), index=True)
    state          = Column(Unicode(100))
    coverage_areas = Column(Unicode(500))  # comma separated city names
    verified       = Column(Boolean, nullable=False, default=False)
    approved       = Column(Boolean, nullable=False, default=False)
    rejected       = Column(Boolean, nullable=False, default=False)
    rating         = Column(Float, nullable=False, default=0.0)
    created_at     = Column(DateTime, default=datetime.utcnow)

    user     = relationship("User", back_populates="logistics_profile")
    bookings = relationship("LogisticsBooking", back_populates="driver")
