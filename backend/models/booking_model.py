# backend/models/booking_model.py
from datetime import datetime

from sqlalchemy import Column, Integer, Float, Numeric, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from sqlalchemy.types import Unicode

from database.session import Base


class MechanicBooking(Base):
    __tablename__ = "mechanic_bookings"

    id               = Column(Integer, primary_key=True, index=True)
    user_id          = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    mechanic_id      = Column(Integer, ForeignKey("mechanic_profiles.id"), nullable=True, index=True)
    vehicle_make     = Column(Unicode(100), nullable=False)
    vehicle_model    = Column(Unicode(100), nullable=False)
    vehicle_year     = Column(Unicode(4), nullable=False)
    plate_number     = Column(Unicode(32))
    service_type     = Column(Unicode(100), nullable=False)
    custom_service   = Column(Unicode(255))
    estimated_price  = Column(Numeric(12, 2), nullable=False, default=0)
    date             = Column(Unicode(20), nullable=False)
    time             = Column(Unicode(10), nullable=False)
    location         = Column(Unicode(20), nullable=False, default="WORKSHOP")
    address          = Column(Unicode(255), nullable=False)
    city             = Column(Unicode(100), nullable=False)
    state            = Column(Unicode(100))
    phone            = Column(Unicode(32), nullable=False)
    additional_notes = Column(Text)
    status           = Column(Unicode(20), nullable=False, default="PENDING")
    created_at       = Column(DateTime, default=datetime.utcnow)
    updated_at       = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user     = relationship("User")
    mechanic = relationship("MechanicProfile", back_populates="bookings")


class LogisticsBooking(Base):
    __tablename__ = "logistics_bookings"

    id                   = Column(Integer, primary_key=True, index=True)
    user_id              = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    driver_id            = Column(Integer, ForeignKey("logistics_profiles.id"), nullable=True, index=True)
    package_type         = Column(Unicode(50), nullable=False)
    package_description  = Column(Text)
    weight               = Column(Float, nullable=False, default=0.0)
    delivery_speed       = Column(Unicode(20), nullable=False, default="STANDARD")
    pickup_address       = Column(Unicode(255), nullable=False)
    pickup_city          = Column(Unicode(100))
    pickup_state         = Column(Unicode(100))
    delivery_address     = Column(Unicode(255), nullable=False)
    delivery_city        = Column(Unicode(100))
    delivery_state       = Column(Unicode(100))
    recipient_name       = Column(Unicode(255), nullable=False)
    recipient_phone      = Column(Unicode(32), nullable=False)
    phone                = Column(Unicode(255))
    special_instructions = Column(Text)
    tracking_number      = Column(Unicode(32), unique=True, nullable=False, index=True)
    current_location     = Column(Unicode(255))  # free text, set by the provider
    estimated_price      = Column(Numeric(12, 2), nullable=False)
    status               = Column(Unicode(20), nullable=False, default="PENDING")
    created_at           = Column(DateTime, default=datetime.utcnow)
    updated_at           = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user   = relationship("User")
    driver = relationship("LogisticsProfile", back_populates="bookings")
