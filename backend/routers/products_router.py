# backend/routers/products_router.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from database.session import get_db
from schemas.products import ProductOut, ProductCreate, ProductUpdate, StockUpdate
from models.product_model import Product
from models.user_model import User
from routers.dependencies import get_current_user, require_role

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["products"])


def _supplier_profile(user: User):
    if user.supplier_profile is None:
        raise HTTPException(status_code=404, detail="Supplier profile not found")
    return user.supplier_profile


def _owned_product(db: Session, product_id: int, user: User) -> Product:
    p = db.get(Product, product_id)
    if not p or p.status == "INACTIVE":
        raise HTTPException(status_code=404, detail="Product not found")
    if user.role != "ADMIN" and (user.supplier_profile is None or p.supplier_id != user.supplier_profile.id):
        raise HTTPException(status_code=403, detail="Product does not belong to you")
    return p


def _sync_stock_status(p: Product) -> None:
    if p.stock == 0 and p.status == "ACTIVE":
        p.status = "OUT_OF_STOCK"
    elif p.stock > 0 and p.status == "OUT_OF_STOCK":
        p.status = "ACTIVE"


def _commit(db: Session, p: Product, action: str) -> ProductOut:
    try:
        db.commit()
        db.refresh(p)
        return ProductOut.model_validate(p)
    except Exception as e:
        db.rollback()
        logger.error(f"Product {action} failed: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to {action} product")


@router.get("", response_model=List[ProductOut])
def list_products(
    supplier_id: Optional[int] = Query(default=None),
    category: Optional[str] = Query(default=None),
    q: Optional[str] = Query(default=None),
    include_out_of_stock: bool = Query(default=False),
    db: Session = Depends(get_db),
):
    statuses = ["ACTIVE", "OUT_OF_STOCK"] if include_out_of_stock else ["ACTIVE"]
    query = db.query(Product).filter(Product.status.in_(statuses))
    if supplier_id is not None:
        query = query.filter(Product.supplier_id == supplier_id)
    if category:
        query = query.filter(Product.category == category)
    if q:
        query = query.filter(Product.name.ilike(f"%{q.strip()}%"))
    return [ProductOut.model_validate(p) for p in query.order_by(Product.id.desc()).all()]


@router.get("/mine", response_model=List[ProductOut])
def my_products(user: User = Depends(require_role("SUPPLIER")), db: Session = Depends(get_db)):
    profile = _supplier_profile(user)
    rows = db.query(Product).filter(Product.supplier_id == profile.id).order_by(Product.id.desc()).all()
    return [ProductOut.model_validate(p) for p in rows]


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    p = db.get(Product, product_id)
    if not p or p.status == "INACTIVE":
        raise HTTPException(status_code=404, detail="Product not found")
    return ProductOut.model_validate(p)


@router.post("", response_model=ProductOut, status_code=201)
def create_product(body: ProductCreate, user: User = Depends(require_role("SUPPLIER")), db: Session = Depends(get_db)):
    profile = _supplier_profile(user)
    p = Product(
        supplier_id=profile.id,
        name=body.name,
        description=body.description,
        price=body.price,
        stock=body.stock,
        category=body.category,
        image=body.image,
        status="ACTIVE" if body.stock > 0 else "OUT_OF_STOCK",
    )
    db.add(p)
    return _commit(db, p, "create")


@router.patch("/{product_id}", response_model=ProductOut)
def update_product(product_id: int, body: ProductUpdate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    p = _owned_product(db, product_id, user)

    # only fields present in the request are written
    for field, value in body.model_dump(exclude_unset=True).items():
        setattr(p, field, value)
    if "status" not in body.model_fields_set:
        _sync_stock_status(p)
    return _commit(db, p, "update")


@router.put("/{product_id}/stock", response_model=ProductOut)
def update_stock(product_id: int, body: StockUpdate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    p = _owned_product(db, product_id, user)
    p.stock = body.stock
    _sync_stock_status(p)
    return _commit(db, p, "update stock of")


@router.delete("/{product_id}", status_code=204)
def delete_product(product_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    p = db.get(Product, product_id)
    if not p or p.status == "INACTIVE":
        # already gone: No Content
        return
    _owned_product(db, product_id, user)
    p.status = "INACTIVE"
    try:
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Product delete failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete product")
