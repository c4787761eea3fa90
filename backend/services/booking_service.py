# backend/services/booking_service.py
"""
Service-provider bookings (mechanic and logistics) behind one implementation,
parameterized by a BookingKindConfig.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional, Type

from sqlalchemy.orm import Session, joinedload

from models.booking_model import MechanicBooking, LogisticsBooking
from models.enums import UserRole
from models.logistics_model import LogisticsProfile
from models.mechanic_model import MechanicProfile
from models.user_model import User
from services import pricing
from services.errors import NotFoundError, PermissionDeniedError, ValidationError
from services.notification_service import notify, humanize_status
from services.status_lifecycle import Actor, RecordKind, check_transition, normalize_status
from services.tracking_service import LOGISTICS_EVENTS, record_event, unique_code

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BookingKindConfig:
    kind: RecordKind
    model: Type
    profile_model: Type
    provider_field: str        # FK column on the booking pointing at the profile
    provider_relation: str     # relationship name on the booking
    user_profile_attr: str     # relationship name on User
    provider_role: UserRole
    notification_type: str
    provider_link: str
    customer_link: str = "/dashboard/buyer/bookings"


MECHANIC = BookingKindConfig(
    kind=RecordKind.MECHANIC,
    model=MechanicBooking,
    profile_model=MechanicProfile,
    provider_field="mechanic_id",
    provider_relation="mechanic",
    user_profile_attr="mechanic_profile",
    provider_role=UserRole.MECHANIC,
    notification_type="BOOKING",
    provider_link="/dashboard/mechanic/bookings",
)

LOGISTICS = BookingKindConfig(
    kind=RecordKind.LOGISTICS,
    model=LogisticsBooking,
    profile_model=LogisticsProfile,
    provider_field="driver_id",
    provider_relation="driver",
    user_profile_attr="logistics_profile",
    provider_role=UserRole.LOGISTICS,
    notification_type="DELIVERY",
    provider_link="/dashboard/logistics/bookings",
)

KINDS = {"mechanic": MECHANIC, "logistics": LOGISTICS}

# view names accepted for "bookings I receive as a provider"
PROVIDER_VIEWS = {"provider", "mechanic", "driver"}


def get_config(kind: str) -> BookingKindConfig:
    try:
        return KINDS[kind.lower()]
    except KeyError:
        raise NotFoundError(f"Unknown booking kind: {kind}")


def provider_profile_for(user: User, cfg: BookingKindConfig):
    return getattr(user, cfg.user_profile_attr, None)


def booking_query(db: Session, cfg: BookingKindConfig):
    provider = getattr(cfg.model, cfg.provider_relation)
    return db.query(cfg.model).options(joinedload(cfg.model.user), joinedload(provider))


def list_bookings(
    db: Session, user: User, cfg: BookingKindConfig, view: Optional[str] = None, status: Optional[str] = None
) -> List:
    q = booking_query(db, cfg)
    if view and view.lower() in PROVIDER_VIEWS:
        profile = provider_profile_for(user, cfg)
        if not profile:
            raise NotFoundError(f"{cfg.kind.value.title()} profile not found")
        q = q.filter(getattr(cfg.model, cfg.provider_field) == profile.id)
    else:
        q = q.filter(cfg.model.user_id == user.id)
    if status:
        q = q.filter(cfg.model.status == status.upper())
    return q.order_by(cfg.model.created_at.desc(), cfg.model.id.desc()).all()


def get_booking(db: Session, cfg: BookingKindConfig, booking_id: int):
    b = booking_query(db, cfg).filter(cfg.model.id == booking_id).first()
    if not b:
        raise NotFoundError("Booking not found")
    return b


def actor_for(user: User, booking, cfg: BookingKindConfig) -> Actor:
    if user.role == UserRole.ADMIN.value:
        return Actor.ADMIN
    profile = provider_profile_for(user, cfg)
    if profile is not None and getattr(booking, cfg.provider_field) == profile.id:
        return Actor.PROVIDER
    if booking.user_id == user.id:
        return Actor.CUSTOMER
    raise PermissionDeniedError("Not authorized to access this booking")


def _provider_user_id(booking, cfg: BookingKindConfig) -> Optional[int]:
    provider = getattr(booking, cfg.provider_relation)
    return provider.user_id if provider else None


def _load_provider(db: Session, cfg: BookingKindConfig, provider_id: int):
    profile = db.get(cfg.profile_model, provider_id)
    if not profile:
        label = "Mechanic" if cfg.kind == RecordKind.MECHANIC else "Logistics provider"
        raise NotFoundError(f"{label} not found")
    return profile


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


# ----------------- create -----------------

def create_mechanic_booking(db: Session, user: User, body) -> MechanicBooking:
    mechanic = _load_provider(db, MECHANIC, body.mechanic_id)

    b = MechanicBooking(
        user_id=user.id,
        mechanic_id=mechanic.id,
        vehicle_make=body.vehicle_make.strip(),
        vehicle_model=body.vehicle_model.strip(),
        vehicle_year=body.vehicle_year,
        plate_number=_clean(body.plate_number),
        service_type=body.service_type.strip(),
        custom_service=_clean(body.custom_service),
        estimated_price=Decimal(str(body.estimated_price)),
        date=body.date.strip(),
        time=body.time.strip(),
        location=_clean(body.location) or "WORKSHOP",
        address=body.address.strip(),
        city=body.city.strip(),
        state=_clean(body.state),
        phone=body.phone.strip(),
        additional_notes=_clean(body.additional_notes),
        status="PENDING",
    )
    db.add(b)
    db.flush()

    notify(
        db, user.id, "Booking Confirmed",
        f"Your {b.service_type} service with {mechanic.business_name} on {b.date} at {b.time} has been booked.",
        "BOOKING", f"/bookings/mechanic/{b.id}",
    )
    notify(
        db, mechanic.user_id, "New Service Booking",
        f"{user.name or 'A customer'} booked {b.service_type} for {b.vehicle_make} {b.vehicle_model} "
        f"({b.vehicle_year}) on {b.date} at {b.time}",
        "BOOKING", MECHANIC.provider_link,
    )
    db.commit()
    logger.info(f"Mechanic booking {b.id} created by user {user.id} for mechanic {mechanic.id}")
    return get_booking(db, MECHANIC, b.id)


def create_logistics_booking(db: Session, user: User, body) -> LogisticsBooking:
    provider = _load_provider(db, LOGISTICS, body.provider_id)

    speed = pricing.parse_speed(body.delivery_speed)
    price = pricing.estimate_delivery_price(speed, body.package_type, body.weight)
    if body.estimated_price is not None and Decimal(str(body.estimated_price)) != price:
        logger.warning(
            f"Client price {body.estimated_price} for user {user.id} differs from computed {price}; using computed"
        )

    b = LogisticsBooking(
        user_id=user.id,
        driver_id=provider.id,
        package_type=body.package_type.strip(),
        package_description=_clean(body.package_description) or "",
        weight=body.weight or 0.0,
        delivery_speed=speed.value,
        pickup_address=body.pickup_address.strip(),
        pickup_city=_clean(body.pickup_city),
        pickup_state=_clean(body.pickup_state),
        delivery_address=body.delivery_address.strip(),
        delivery_city=_clean(body.delivery_city),
        delivery_state=_clean(body.delivery_state),
        recipient_name=body.recipient_name.strip(),
        recipient_phone=body.recipient_phone.strip(),
        phone=_clean(body.phone) or user.phone or user.email or body.recipient_phone,
        special_instructions=_clean(body.special_instructions),
        tracking_number=unique_code(db, LogisticsBooking.tracking_number, "TRK"),
        estimated_price=price,
        status="PENDING",
    )
    db.add(b)
    db.flush()
    record_event(db, LOGISTICS_EVENTS, b.id, b.status, b.pickup_city)

    route =f"{b.pickup_city or b.pickup_address} → {b.delivery_city or b.delivery_address}"
    notify(
        db, user.id, "Delivery Booking Confirmed",
        f"Your {b.package_type} delivery ({route}) has been booked. Tracking: {b.tracking_number}",
        "BOOKING", "/dashboard/buyer/bookings?type=logistics",
    )
    notify(
        db, provider.user_id, "New Delivery Request",
        f"New {b.package_type} delivery request from {user.name or 'Customer'}. Route: {route}",
        "BOOKING", LOGISTICS.provider_link,
    )
    db.commit()
    logger.info(f"Logistics booking {b.id} ({b.tracking_number}) created by user {user.id}, price {price}")
    return get_booking(db, LOGISTICS, b.id)


# ----------------- status / delete -----------------

def update_status(
    db: Session,
    user: User,
    cfg: BookingKindConfig,
    booking_id: int,
    status: Optional[str] = None,
    current_location: Optional[str] = None,
):
    """Change status and/or the logistics current location.

    Omitting status (or repeating the current one) updates the location only
    and skips the lifecycle check."""
    b = get_booking(db, cfg, booking_id)
    actor = actor_for(user, b, cfg)
    previous = b.status
    location = _clean(current_location)

    status_changed = bool(status and status.strip()) and normalize_status(cfg.kind, status) != previous
    if not status_changed and not location:
        raise ValidationError("Nothing to update: send a new status or a current_location")
    if status_changed:
        b.status = check_transition(cfg.kind, previous, status, actor)

    if location:
        if cfg.kind != RecordKind.LOGISTICS:
            raise ValidationError("current_location applies to logistics bookings only")
        if actor == Actor.CUSTOMER:
            raise PermissionDeniedError("Only the provider can update the current location")
        b.current_location = location

    if cfg.kind == RecordKind.LOGISTICS:
        record_event(db, LOGISTICS_EVENTS, b.id, b.status, location, note=f"by {actor.value.lower()}")

    if actor == Actor.CUSTOMER:
        notify_user, link = _provider_user_id(b, cfg), cfg.provider_link
    else:
        notify_user, link = b.user_id, cfg.customer_link
    title = "Booking Status Updated" if cfg.kind == RecordKind.MECHANIC else "Delivery Status Updated"
    what = "mechanic booking" if cfg.kind == RecordKind.MECHANIC else "delivery"
    if status_changed:
        message = f"Your {what} has been {humanize_status(b.status)}"
    else:
        message = f"Your {what} is now at {location}"
    notify(db, notify_user, title, message, cfg.notification_type, link)

    db.commit()
    db.refresh(b)
    if not status_changed:
        logger.info(f"{cfg.kind.value} booking {b.id} location -> {location!r} by {actor.value.lower()} {user.id}")
    elif actor == Actor.ADMIN:
        logger.warning(f"Admin {user.id} overrode {cfg.kind.value} booking {b.id} status {previous} -> {b.status}")
    else:
        logger.info(f"{cfg.kind.value} booking {b.id} status {previous} -> {b.status} by {actor.value.lower()} {user.id}")
    return b


def delete_booking(db: Session, user: User, cfg: BookingKindConfig, booking_id: int) -> None:
    b = get_booking(db, cfg, booking_id)
    actor_for(user, b, cfg)
    db.delete(b)
    db.commit()
    logger.info(f"{cfg.kind.value} booking {booking_id} deleted by user {user.id}")
