# backend/schemas/products.py
from datetime import datetime
from typing import Optional, Literal
from pydantic import BaseModel, Field, constr

NameStr = constr(strip_whitespace=True, min_length=1, max_length=200)
ProductStatus = Literal["ACTIVE", "INACTIVE", "OUT_OF_STOCK"]

class ProductCreate(BaseModel):
    name: NameStr
    description: Optional[str] = None
    price: float = Field(ge=0)
    stock: int = Field(default=0, ge=0)
    category: Optional[str] = None
    image: Optional[str] = None  # already hosted URL

class ProductUpdate(BaseModel):
    name: Optional[NameStr] = None
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    stock: Optional[int] = Field(default=None, ge=0)
    category: Optional[str] = None
    image: Optional[str] = None
    status: Optional[ProductStatus] = None

class StockUpdate(BaseModel):
    stock: int = Field(ge=0)

class ProductOut(BaseModel):
    id: int
    supplier_id: int
    name: str
    description: Optional[str] = None
    price: float
    stock: int
    category: Optional[str] = None
    image: Optional[str] = None
    status: ProductStatus
    created_at: Optional[datetime] = None
    class Config: from_attributes = True
