# backend/models/product_model.py
from datetime import datetime

from sqlalchemy import Column, Integer, Numeric, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from sqlalchemy.types import Unicode

from database.session import Base


class Product(Base):
    __tablename__ = "products"

    id          = Column(Integer, primary_key=True, index=True)
    supplier_id = Column(Integer, ForeignKey("supplier_profiles.id"), nullable=False, index=True)
    name        = Column(Unicode(255), nullable=False)
    description = Column(Text)
    price       = Column(Numeric(12, 2), nullable=False)
    stock       = Column(Integer, nullable=False, default=0)
    category    = Column(Unicode(100), index=True)
    image       = Column(Unicode(500), nullable=True)  # hosted media URL
    status      = Column(Unicode(20), nullable=False, default="ACTIVE")
    created_at  = Column(DateTime, default=datetime.utcnow)
    updated_at  = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    supplier = relationship("SupplierProfile", back_populates="products")
