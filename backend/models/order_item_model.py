# backend/models/order_item_model.py
from sqlalchemy import Column, Integer, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.types import Unicode

from database.session import Base


class OrderItem(Base):
    __tablename__ = "order_items"
    id         = Column(Integer, primary_key=True, index=True)
    order_id   = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    name       = Column(Unicode(255), nullable=False)     # snapshot
    price      = Column(Numeric(12, 2), nullable=False)   # snapshot
    quantity   = Column(Integer, nullable=False)

    order   = relationship("Order", back_populates="items")
    product = relationship("Product")
