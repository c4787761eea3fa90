# backend/models/supplier_model.py
from datetime import datetime

from sqlalchemy import Column, Integer, Float, Boolean, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from sqlalchemy.types import Unicode

from database.session import Base


class SupplierProfile(Base):
    __tablename__ = "supplier_profiles"

    id            = Column(Integer, primary_key=True, index=True)
    user_id       = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    business_name = Column(Unicode(255), nullable=False, index=True)
    description   = Column(Text)
    phone         = Column(Unicode(32))
    address       = Column(Unicode(255))
    city          = Column(Unicode(100), index=True)
    state         = Column(Unicode(100))
    verified      = Column(Boolean, nullable=False, default=False)
    approved      = Column(Boolean, nullable=False, default=False)
    rejected      = Column(Boolean, nullable=False, default=False)
    rating        = Column(Float, nullable=False, default=0.0)
    created_at    = Column(DateTime, default=datetime.utcnow)

    user     = relationship("User", back_populates="supplier_profile")
    products = relationship("Product", back_populates="supplier")
