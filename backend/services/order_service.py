# backend/services/order_service.py
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional, Set

from sqlalchemy.orm import Session, joinedload

from models.enums import UserRole, ProductStatus
from models.order_item_model import OrderItem
from models.order_model import Order
from models.product_model import Product
from models.supplier_model import SupplierProfile
from models.user_model import User
from services.errors import NotFoundError, PermissionDeniedError, ValidationError
from services.notification_service import notify, humanize_status
from services.status_lifecycle import Actor, RecordKind, check_transition
from services.tracking_service import ORDER_EVENTS, record_event, unique_code

logger = logging.getLogger(__name__)

SHIPPING_FEE = Decimal("2500")
VAT_RATE = Decimal("0.075")


def order_total(subtotal: Decimal) -> Decimal:
    vat = (subtotal * VAT_RATE).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return (subtotal + SHIPPING_FEE + vat).quantize(Decimal("0.01"))


def order_query(db: Session):
    return db.query(Order).options(
        joinedload(Order.user),
        joinedload(Order.items).joinedload(OrderItem.product).joinedload(Product.supplier),
    )


def get_order(db: Session, order_id: int) -> Order:
    o = order_query(db).filter(Order.id == order_id).first()
    if not o:
        raise NotFoundError("Order not found")
    return o


def supplier_user_ids(order: Order) -> Set[int]:
    return {
        it.product.supplier.user_id
        for it in order.items
        if it.product is not None and it.product.supplier is not None
    }


def actor_for(user: User, order: Order) -> Actor:
    if user.role == UserRole.ADMIN.value:
        return Actor.ADMIN
    if user.id in supplier_user_ids(order):
        return Actor.PROVIDER
    if order.user_id == user.id:
        return Actor.CUSTOMER
    raise PermissionDeniedError("Not authorized to access this order")


def list_user_orders(db: Session, user: User) -> List[Order]:
    return (
        order_query(db)
        .filter(Order.user_id == user.id)
        .order_by(Order.created_at.desc(), Order.id.desc())
        .all()
    )


def list_supplier_orders(db: Session, supplier: SupplierProfile, status: Optional[str] = None) -> List[Order]:
    q = (
        order_query(db)
        .join(OrderItem, OrderItem.order_id == Order.id)
        .join(Product, Product.id == OrderItem.product_id)
        .filter(Product.supplier_id == supplier.id)
    )
    if status:
        q = q.filter(Order.status == status.upper())
    # joined eager loads + join filter can repeat parent rows
    seen, out = set(), []
    for o in q.order_by(Order.created_at.desc(), Order.id.desc()).all():
        if o.id not in seen:
            seen.add(o.id)
            out.append(o)
    return out


def create_order(db: Session, user: User, body) -> Order:
    if not body.items:
        raise ValidationError("No items in order")

    # repeated lines for one product are merged so stock is checked once per product
    wanted: Dict[int, int] = {}
    for item in body.items:
        wanted[item.product_id] = wanted.get(item.product_id, 0) + item.quantity

    lines = []
    subtotal = Decimal("0")
    for product_id, quantity in wanted.items():
        p = db.get(Product, product_id)
        if not p or p.status == ProductStatus.INACTIVE.value:
            raise ValidationError(f"Product {product_id} not found")
        if p.status != ProductStatus.ACTIVE.value:
            raise ValidationError(f"{p.name} is out of stock")
        if p.stock < quantity:
            raise ValidationError(f"Insufficient stock for {p.name}")
        lines.append((p, quantity))
        subtotal += Decimal(str(p.price)) * quantity

    addr = body.shipping_address
    o = Order(
        tracking_id=unique_code(db, Order.tracking_id, "EDM"),
        user_id=user.id,
        total=order_total(subtotal),
        status="PENDING",
        payment_method=body.payment_method,
        delivery_notes=body.delivery_notes,
        ship_full_name=addr.full_name if addr else user.name,
        ship_phone=addr.phone if addr else user.phone,
        ship_address=addr.address if addr else None,
        ship_city=addr.city if addr else None,
        ship_state=addr.state if addr else None,
    )
    db.add(o)
    db.flush()

    suppliers = set()
    try:
        for p, qty in lines:
            db.add(OrderItem(order_id=o.id, product_id=p.id, name=p.name, price=p.price, quantity=qty))
            p.stock -= qty
            if p.stock <= 0:
                p.status = ProductStatus.OUT_OF_STOCK.value
            if p.supplier is not None:
                suppliers.add(p.supplier.user_id)
        record_event(db, ORDER_EVENTS, o.id, o.status, o.ship_city)

        notify(db, user.id, "Order Placed",
               f"Your order {o.tracking_id} has been placed.", "ORDER", f"/dashboard/buyer/orders/{o.id}")
        for supplier_user_id in suppliers:
            notify(db, supplier_user_id, "New Order",
                   f"New order {o.tracking_id} received.", "ORDER", "/dashboard/supplier/orders")
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Order {o.id} ({o.tracking_id}) created by user {user.id}, total {o.total}")
    return get_order(db, o.id)


def update_status(db: Session, user: User, order_id: int, status: str) -> Order:
    o = get_order(db, order_id)
    actor = actor_for(user, o)
    previous = o.status
    o.status = check_transition(RecordKind.ORDER, previous, status, actor)
    record_event(db, ORDER_EVENTS, o.id, o.status, note=f"by {actor.value.lower()}")

    message = f"Order {o.tracking_id} is now {humanize_status(o.status)}"
    if actor == Actor.CUSTOMER:
        for supplier_user_id in supplier_user_ids(o):
            notify(db, supplier_user_id, "Order Status Updated", message, "ORDER", "/dashboard/supplier/orders")
    else:
        notify(db, o.user_id, "Order Status Updated", message, "ORDER", f"/dashboard/buyer/orders/{o.id}")

    db.commit()
    db.refresh(o)
    if actor == Actor.ADMIN:
        logger.warning(f"Admin {user.id} overrode order {o.id} status {previous} -> {o.status}")
    else:
        logger.info(f"Order {o.id} status {previous} -> {o.status} by {actor.value.lower()} {user.id}")
    return o
