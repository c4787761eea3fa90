# backend/models/user_model.py
from datetime import datetime

from sqlalchemy import Column, Integer, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.types import Unicode

from database.session import Base


class User(Base):
    __tablename__ = "users"
    id            = Column(Integer, primary_key=True, index=True)
    name          = Column(Unicode(255))
    email         = Column(Unicode(255), unique=True, nullable=False, index=True)
    password_hash = Column(Unicode(255), nullable=False)
    phone         = Column(Unicode(32))
    role          = Column(Unicode(20), nullable=False, default="BUYER")  # models.enums.UserRole
    created_at    = Column(DateTime, default=datetime.utcnow)

    supplier_profile  = relationship("SupplierProfile", back_populates="user", uselist=False)
    mechanic_profile  = relationship("MechanicProfile", back_populates="user", uselist=False)
    logistics_profile = relationship("LogisticsProfile", back_populates="user", uselist=False)
