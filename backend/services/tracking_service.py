# backend/services/tracking_service.py
"""
Public tracking lookup.

A code resolves to an order (by tracking id or numeric primary id) or to a
logistics booking (by tracking number); the first match wins. Every status or
location change appends a TrackingEvent, and the timeline is read from them.
"""

import logging
import secrets
import string
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session, joinedload

from config.settings import settings
from models.booking_model import LogisticsBooking
from models.order_model import Order
from models.tracking_event_model import TrackingEvent
from services.errors import NotFoundError, ValidationError
from services.status_lifecycle import status_display

logger = logging.getLogger(__name__)

_ALPHABET = string.ascii_uppercase + string.digits
TOKEN_LENGTH = 8

# largest value a 64-bit INTEGER primary key can hold
MAX_ORDER_ID = 2 ** 63 - 1


def _token(length: int = TOKEN_LENGTH) -> str:
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def generate_tracking_id(prefix: str = "EDM") -> str:
    """Human friendly order tracking id, e.g. EDM-MHZ0QV5W."""
    return f"{prefix}-{_token()}"


def generate_tracking_number() -> str:
    return generate_tracking_id("TRK")


def unique_code(db: Session, column, prefix: str, attempts: int = 5) -> str:
    for _ in range(attempts):
        code = generate_tracking_id(prefix)
        if not db.query(column).filter(column == code).first():
            return code
    raise RuntimeError(f"Could not allocate a unique {prefix} code")


# ----------------- lookup -----------------

def find_order(db: Session, code: str) -> Optional[Order]:
    cond = Order.tracking_id == code
    if code.isascii() and code.isdecimal() and len(code) <= 19 and 0 < int(code) <= MAX_ORDER_ID:
        cond = cond | (Order.id == int(code))
    return (
        db.query(Order)
        .options(joinedload(Order.items), joinedload(Order.user))
        .filter(cond)
        .order_by(Order.id)
        .first()
    )


def find_logistics_booking(db: Session, code: str) -> Optional[LogisticsBooking]:
    return (
        db.query(LogisticsBooking)
        .options(joinedload(LogisticsBooking.user))
        .filter(LogisticsBooking.tracking_number == code)
        .first()
    )


def track(db: Session, code: Optional[str]) -> Dict[str, Any]:
    code = (code or "").strip()
    if not code:
        raise ValidationError("Tracking ID is required")

    order = find_order(db, code)
    if order:
        return order_view(order, events_for(db, ORDER_EVENTS, order.id))

    booking = find_logistics_booking(db, code)
    if booking:
        return logistics_view(booking, events_for(db, LOGISTICS_EVENTS, booking.id))

    logger.info(f"Tracking lookup miss for {code!r}")
    raise NotFoundError("No order or delivery matches this tracking code")


# ----------------- events -----------------

ORDER_EVENTS = "ORDER"
LOGISTICS_EVENTS = "LOGISTICS"


def record_event(
    db: Session, record_type: str, record_id: int, status: str,
    location: Optional[str] = None, note: Optional[str] = None,
) -> TrackingEvent:
    """Append a tracking event; it is committed with the caller's transaction."""
    ev = TrackingEvent(record_type=record_type, record_id=record_id, status=status,
                       location=location, note=note, created_at=datetime.utcnow())
    db.add(ev)
    return ev


def events_for(db: Session, record_type: str, record_id: int) -> List[TrackingEvent]:
    return (
        db.query(TrackingEvent)
        .filter(TrackingEvent.record_type == record_type, TrackingEvent.record_id == record_id)
        .order_by(TrackingEvent.created_at, TrackingEvent.id)
        .all()
    )


# ----------------- views -----------------

def _step(status: str, at: datetime, location: Optional[str], completed: bool) -> Dict[str, Any]:
    return {"status": status, "timestamp": at, "location": location, "completed": completed}


def _first_event(events: List[TrackingEvent], statuses) -> Optional[TrackingEvent]:
    return next((ev for ev in events if ev.status in statuses), None)


def _timeline(created: datetime, updated: Optional[datetime], status: str, steps,
              events: List[TrackingEvent]) -> List[Dict]:
    """steps: (label, statuses that complete it, day offset, location).

    A completed step takes the time of the first event that reached one of its
    statuses, and that event's location when the step has none of its own.
    Steps still ahead carry a projected time."""
    out = [_step(steps[0][0], created, steps[0][3], True)]
    if status == "CANCELLED":
        ev = _first_event(events, {"CANCELLED"})
        at = ev.created_at if ev else (updated or created)
        out.append(_step("Cancelled", at, (ev.location if ev else None) or "System", True))
        return out
    for label, done_in, offset, location in steps[1:]:
        if status not in done_in:
            out.append(_step(label, created + timedelta(days=offset), location, False))
            continue
        ev = _first_event(events, done_in)
        if ev is None:
            # records that predate event tracking
            out.append(_step(label, updated or created, location, True))
        else:
            out.append(_step(label, ev.created_at, location or ev.location, True))
    return out


def _history(events: List[TrackingEvent]) -> List[Dict[str, Any]]:
    return [
        {"status": ev.status, "location": ev.location, "note": ev.note, "timestamp": ev.created_at}
        for ev in events
    ]


def order_view(order: Order, events: Optional[List[TrackingEvent]] = None) -> Dict[str, Any]:
    events = events or []
    city = order.ship_city or "N/A"
    steps = [
        ("Order Placed", None, 0, city),
        ("Processing", {"PROCESSING", "SHIPPED", "DELIVERED"}, 0.5, "Warehouse"),
        ("Shipped", {"SHIPPED", "DELIVERED"}, 1, "In Transit"),
        ("Out for Delivery", {"DELIVERED"}, 4, city),
        ("Delivered", {"DELIVERED"}, settings.order_delivery_days, order.ship_address or "Destination"),
    ]
    display = status_display(order.status)
    return {
        "type": "ORDER",
        "id": order.id,
        "tracking_id": order.tracking_id,
        "status": order.status,
        "status_message": display["message"],
        "status_icon": display["icon"],
        "status_color": display["color"],
        "created_at": order.created_at,
        "estimated_delivery": order.created_at + timedelta(days=settings.order_delivery_days),
        "current_location": None,
        "recipient": {
            "name": order.ship_full_name or (order.user.name if order.user else None),
            "city": city,
        },
        "shipping_address": {
            "full_name": order.ship_full_name or "",
            "phone": order.ship_phone,
            "address": order.ship_address,
            "city": order.ship_city or "",
            "state": order.ship_state,
        } if order.ship_address else None,
        "items": [
            {"product_id": it.product_id, "name": it.name, "price": float(it.price), "quantity": it.quantity}
            for it in order.items
        ],
        "total": float(order.total),
        "timeline": _timeline(order.created_at, order.updated_at, order.status, steps, events),
        "history": _history(events),
    }


def logistics_view(booking: LogisticsBooking, events: Optional[List[TrackingEvent]] = None) -> Dict[str, Any]:
    events = events or []
    steps = [
        ("Booking Created", None, 0, booking.pickup_city),
        ("Confirmed", {"CONFIRMED", "IN_PROGRESS", "COMPLETED"}, 0.25, booking.pickup_city),
        ("Picked Up", {"IN_PROGRESS", "COMPLETED"}, 0.5, booking.pickup_address),
        ("In Transit", {"IN_PROGRESS", "COMPLETED"}, 1, None),
        ("Out for Delivery", {"COMPLETED"}, 2, booking.delivery_city),
        ("Delivered", {"COMPLETED"}, settings.logistics_delivery_days, booking.delivery_address),
    ]
    display = status_display(booking.status)
    return {
        "type": "LOGISTICS",
        "id": booking.id,
        "tracking_id": booking.tracking_number,
        "status": booking.status,
        "status_message": display["message"],
        "status_icon": display["icon"],
        "status_color": display["color"],
        "created_at": booking.created_at,
        "estimated_delivery": booking.created_at + timedelta(days=settings.logistics_delivery_days),
        "current_location": booking.current_location or booking.pickup_city,
        "recipient": {"name": booking.recipient_name, "city": booking.delivery_city},
        "shipping_address": None,
        "items": [],
        "total": float(booking.estimated_price),
        "timeline": _timeline(booking.created_at, booking.updated_at, booking.status, steps, events),
        "history": _history(events),
    }
