# backend/models/order_model.py
from datetime import datetime

from sqlalchemy import Column, Integer, Numeric, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from sqlalchemy.types import Unicode

from database.session import Base


class Order(Base):
    __tablename__ = "orders"
    id             = Column(Integer, primary_key=True, index=True)
    tracking_id    = Column(Unicode(32), unique=True, nullable=False, index=True)
    user_id        = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    total          = Column(Numeric(12, 2), nullable=False)
    status         = Column(Unicode(20), nullable=False, default="PENDING")
    payment_method = Column(Unicode(50))  # placeholder, no payment processing
    delivery_notes = Column(Text)

    # denormalized copy of the shipping address at checkout time
    ship_full_name = Column(Unicode(255))
    ship_phone     = Column(Unicode(32))
    ship_address   = Column(Unicode(255))
    ship_city      = Column(Unicode(100))
    ship_state     = Column(Unicode(100))

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user  = relationship("User")
    items = relationship("OrderItem", cascade="all, delete-orphan", back_populates="order")
