# backend/routers/orders_router.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from database.session import get_db
from schemas.orders import (
    OrderResponse, OrderItemResponse, OrderCreate, OrderStatusUpdate, ShippingAddress, StatusChangeResult,
)
from models.order_model import Order
from models.user_model import User
from routers.dependencies import get_current_user, require_role
from services import order_service

router = APIRouter(tags=["orders"])

def order_to_response(o: Order) -> OrderResponse:
    items: List[OrderItemResponse] = []
    for it in o.items:
        price = float(it.price)
        items.append(OrderItemResponse(
            id=it.id,
            product_id=it.product_id,
            name=it.name,
            quantity=it.quantity,
            price=price,
            total_price=price * it.quantity,
        ))
    address = None
    if o.ship_address:
        address = ShippingAddress(
            full_name=o.ship_full_name or "",
            phone=o.ship_phone,
            address=o.ship_address,
            city=o.ship_city or "",
            state=o.ship_state,
        )
    return OrderResponse(
        id=o.id,
        tracking_id=o.tracking_id,
        user_id=o.user_id,
        buyer_name=o.user.name if o.user else None,
        status=o.status,
        payment_method=o.payment_method,
        delivery_notes=o.delivery_notes,
        shipping_address=address,
        created_at=o.created_at,
        updated_at=o.updated_at,
        items=items,
        total=float(o.total),
    )

@router.post("/orders", response_model=OrderResponse, status_code=201)
def create_order(body: OrderCreate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    if user.role == "ADMIN":
        raise HTTPException(status_code=403, detail="Admin accounts cannot place orders")
    return order_to_response(order_service.create_order(db, user, body))

@router.get("/orders", response_model=List[OrderResponse])
def get_my_orders(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return [order_to_response(o) for o in order_service.list_user_orders(db, user)]

@router.get("/orders/{order_id}", response_model=OrderResponse)
def get_order(order_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    o = order_service.get_order(db, order_id)
    order_service.actor_for(user, o)
    return order_to_response(o)

@router.patch("/orders/{order_id}/status", response_model=StatusChangeResult)
def update_order_status(
    order_id: int,
    body: OrderStatusUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    previous = order_service.get_order(db, order_id).status
    o = order_service.update_status(db, user, order_id, body.status)
    return StatusChangeResult(
        message="Order status updated",
        id=o.id,
        previous_status=previous,
        new_status=o.status,
    )

@router.get("/supplier/orders", response_model=List[OrderResponse])
def get_supplier_orders(
    status: Optional[str] = Query(default=None),
    user: User = Depends(require_role("SUPPLIER")),
    db: Session = Depends(get_db),
):
    if user.supplier_profile is None:
        raise HTTPException(status_code=404, detail="Supplier profile not found")
    return [order_to_response(o) for o in order_service.list_supplier_orders(db, user.supplier_profile, status)]
