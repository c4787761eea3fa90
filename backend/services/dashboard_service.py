# backend/services/dashboard_service.py
# Role dashboards. Mechanic and logistics providers share one implementation.

from typing import Any, Dict

from sqlalchemy import func
from sqlalchemy.orm import Session

from config.settings import settings
from models.booking_model import MechanicBooking, LogisticsBooking
from models.enums import UserRole
from models.logistics_model import LogisticsProfile
from models.mechanic_model import MechanicProfile
from models.order_item_model import OrderItem
from models.order_model import Order
from models.product_model import Product
from models.supplier_model import SupplierProfile
from models.user_model import User
from services.booking_service import BookingKindConfig, MECHANIC, LOGISTICS, list_bookings
from services.errors import NotFoundError, ValidationError
from services.status_lifecycle import provider_actions, status_display

PROVIDER_CONFIGS = {
    UserRole.MECHANIC.value: MECHANIC,
    UserRole.LOGISTICS.value: LOGISTICS,
}


def _float(v) -> float:
    return float(v or 0)


def supplier_stats(db: Session, profile) -> Dict[str, Any]:
    if profile is None:
        return {"total_products": 0, "total_orders": 0, "pending_orders": 0,
                "total_revenue": 0.0, "out_of_stock": 0}

    products = db.query(Product).filter(Product.supplier_id == profile.id, Product.status != "INACTIVE")
    orders = (
        db.query(func.count(func.distinct(Order.id)))
        .join(OrderItem, OrderItem.order_id == Order.id)
        .join(Product, Product.id == OrderItem.product_id)
        .filter(Product.supplier_id == profile.id)
    )
    revenue = (
        db.query(func.coalesce(func.sum(OrderItem.price * OrderItem.quantity), 0))
        .join(Order, Order.id == OrderItem.order_id)
        .join(Product, Product.id == OrderItem.product_id)
        .filter(Product.supplier_id == profile.id, Order.status == "DELIVERED")
        .scalar()
    )
    return {
        "total_products": products.count(),
        "total_orders": orders.scalar() or 0,
        "pending_orders": orders.filter(Order.status == "PENDING").scalar() or 0,
        "total_revenue": _float(revenue),
        "out_of_stock": products.filter(Product.stock == 0).count(),
    }


def provider_stats(db: Session, profile, cfg: BookingKindConfig) -> Dict[str, Any]:
    if profile is None:
        return {"total_bookings": 0, "pending": 0, "active": 0, "completed": 0,
                "cancelled": 0, "total_revenue": 0.0, "rating": 0.0}

    model = cfg.model
    rows = (
        db.query(model.status, func.count(model.id), func.coalesce(func.sum(model.estimated_price), 0))
        .filter(getattr(model, cfg.provider_field) == profile.id)
        .group_by(model.status)
        .all()
    )
    counts = {status: n for status, n, _ in rows}
    revenue = sum(_float(total) for status, _, total in rows if status == "COMPLETED")
    return {
        "total_bookings": sum(counts.values()),
        "pending": counts.get("PENDING", 0),
        "active": counts.get("CONFIRMED", 0) + counts.get("IN_PROGRESS", 0),
        "completed": counts.get("COMPLETED", 0),
        "cancelled": counts.get("CANCELLED", 0),
        "total_revenue": revenue,
        "rating": _float(profile.rating),
    }


def buyer_stats(db: Session, user: User) -> Dict[str, Any]:
    orders = db.query(Order).filter(Order.user_id == user.id)
    mech = db.query(MechanicBooking).filter(MechanicBooking.user_id == user.id)
    logi = db.query(LogisticsBooking).filter(LogisticsBooking.user_id == user.id)
    open_booking = ("PENDING", "CONFIRMED", "IN_PROGRESS")
    return {
        "total_orders": orders.count(),
        "active_orders": orders.filter(Order.status.in_(("PENDING", "PROCESSING", "SHIPPED"))).count(),
        "total_bookings": mech.count() + logi.count(),
        "active_bookings": (
            mech.filter(MechanicBooking.status.in_(open_booking)).count()
            + logi.filter(LogisticsBooking.status.in_(open_booking)).count()
        ),
    }


def admin_stats(db: Session) -> Dict[str, Any]:
    pending = sum(
        db.query(model).filter(model.approved.is_(False), model.rejected.is_(False)).count()
        for model in (SupplierProfile, MechanicProfile, LogisticsProfile)
    )
    revenue = db.query(func.coalesce(func.sum(Order.total), 0)).filter(Order.status == "DELIVERED").scalar()
    return {
        "total_users": db.query(User).count(),
        "pending_approvals": pending,
        "total_orders": db.query(Order).count(),
        "pending_orders": db.query(Order).filter(Order.status == "PENDING").count(),
        "total_bookings": db.query(MechanicBooking).count() + db.query(LogisticsBooking).count(),
        "total_revenue": _float(revenue),
    }


def stats_for(db: Session, user: User) -> Dict[str, Any]:
    role = user.role
    if role == UserRole.SUPPLIER.value:
        stats = supplier_stats(db, user.supplier_profile)
    elif role in PROVIDER_CONFIGS:
        cfg = PROVIDER_CONFIGS[role]
        stats = provider_stats(db, getattr(user, cfg.user_profile_attr), cfg)
    elif role == UserRole.ADMIN.value:
        stats = admin_stats(db)
    else:
        stats = buyer_stats(db, user)
    return {"role": role, "stats": stats}


def provider_dashboard(db: Session, user: User) -> Dict[str, Any]:
    """Profile, stat tiles and bookings (with color and allowed actions) for a provider."""
    cfg = PROVIDER_CONFIGS.get(user.role)
    if cfg is None:
        raise ValidationError("Provider dashboards are for mechanic and logistics accounts")
    profile = getattr(user, cfg.user_profile_attr)
    if profile is None:
        raise NotFoundError(f"{cfg.kind.value.title()} profile not found")

    bookings = []
    for b in list_bookings(db, user, cfg, view="provider"):
        bookings.append({
            "booking": b,
            "display": status_display(b.status),
            "actions": provider_actions(cfg.kind, b.status),
        })
    return {
        "kind": cfg.kind.value,
        "profile": profile,
        "stats": provider_stats(db, profile, cfg),
        "bookings": bookings,
        "poll_interval_seconds": settings.dashboard_poll_seconds,
    }
