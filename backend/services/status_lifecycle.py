# backend/services/status_lifecycle.py
"""
Shared status lifecycle for orders and bookings.

One transition table per record kind is validated before any status write.
Customers and providers are limited to their own edges; admins may overwrite
to any status of the enum.
"""

import enum
from typing import Dict, FrozenSet, List, Set

from models.enums import OrderStatus, BookingStatus
from services.errors import InvalidTransitionError, ValidationError


class RecordKind(str, enum.Enum):
    ORDER = "ORDER"
    MECHANIC = "MECHANIC"
    LOGISTICS = "LOGISTICS"


class Actor(str, enum.Enum):
    CUSTOMER = "CUSTOMER"
    PROVIDER = "PROVIDER"
    ADMIN = "ADMIN"


ORDER_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    OrderStatus.PENDING.value: frozenset({OrderStatus.PROCESSING.value, OrderStatus.CANCELLED.value}),
    OrderStatus.PROCESSING.value: frozenset({OrderStatus.SHIPPED.value, OrderStatus.CANCELLED.value}),
    OrderStatus.SHIPPED.value: frozenset({OrderStatus.DELIVERED.value}),
    OrderStatus.DELIVERED.value: frozenset(),
    OrderStatus.CANCELLED.value: frozenset(),
}

BOOKING_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    BookingStatus.PENDING.value: frozenset({BookingStatus.CONFIRMED.value, BookingStatus.CANCELLED.value}),
    BookingStatus.CONFIRMED.value: frozenset({BookingStatus.IN_PROGRESS.value, BookingStatus.CANCELLED.value}),
    BookingStatus.IN_PROGRESS.value: frozenset({BookingStatus.COMPLETED.value}),
    BookingStatus.COMPLETED.value: frozenset(),
    BookingStatus.CANCELLED.value: frozenset(),
}

# edges each non-admin actor may take; a subset of the table above
ORDER_ACTOR_EDGES: Dict[Actor, Dict[str, FrozenSet[str]]] = {
    Actor.PROVIDER: {
        "PENDING": frozenset({"PROCESSING", "CANCELLED"}),
        "PROCESSING": frozenset({"SHIPPED", "CANCELLED"}),
    },
    Actor.CUSTOMER: {
        "PENDING": frozenset({"CANCELLED"}),
        "SHIPPED": frozenset({"DELIVERED"}),
    },
}

BOOKING_ACTOR_EDGES: Dict[Actor, Dict[str, FrozenSet[str]]] = {
    Actor.PROVIDER: BOOKING_TRANSITIONS,
    Actor.CUSTOMER: {
        "PENDING": frozenset({"CANCELLED"}),
        "CONFIRMED": frozenset({"CANCELLED"}),
    },
}

STATUS_COLORS: Dict[str, str] = {
    "PENDING": "yellow",
    "PROCESSING": "blue",
    "CONFIRMED": "blue",
    "IN_PROGRESS": "purple",
    "SHIPPED": "purple",
    "COMPLETED": "green",
    "DELIVERED": "green",
    "CANCELLED": "red",
}

STATUS_MESSAGES: Dict[str, Dict[str, str]] = {
    "PENDING": {"message": "Awaiting confirmation", "icon": "clock"},
    "PROCESSING": {"message": "Your order is being prepared", "icon": "package"},
    "CONFIRMED": {"message": "Confirmed by the provider", "icon": "check"},
    "IN_PROGRESS": {"message": "In progress", "icon": "truck"},
    "SHIPPED": {"message": "On the way", "icon": "truck"},
    "COMPLETED": {"message": "Completed", "icon": "check-circle"},
    "DELIVERED": {"message": "Delivered", "icon": "check-circle"},
    "CANCELLED": {"message": "Cancelled", "icon": "x-circle"},
}

_ACTION_LABELS: Dict[str, str] = {
    "PROCESSING": "Start processing",
    "CONFIRMED": "Accept",
    "IN_PROGRESS": "Start",
    "SHIPPED": "Mark shipped",
    "COMPLETED": "Mark completed",
    "DELIVERED": "Confirm delivery",
    "CANCELLED": "Cancel",
}


def _statuses(kind: RecordKind) -> List[str]:
    if kind == RecordKind.ORDER:
        return [s.value for s in OrderStatus]
    return [s.value for s in BookingStatus]


def _table(kind: RecordKind) -> Dict[str, FrozenSet[str]]:
    return ORDER_TRANSITIONS if kind == RecordKind.ORDER else BOOKING_TRANSITIONS


def normalize_status(kind: RecordKind, status: str) -> str:
    value = (status or "").strip().upper()
    if value not in _statuses(kind):
        raise ValidationError(f"Invalid status: {status}", {"valid": _statuses(kind)})
    return value


def is_terminal(kind: RecordKind, status: str) -> bool:
    return not _table(kind).get(status)


def allowed_next(kind: RecordKind, current: str, actor: Actor) -> Set[str]:
    if actor == Actor.ADMIN:
        return {s for s in _statuses(kind) if s != current}
    edges = ORDER_ACTOR_EDGES if kind == RecordKind.ORDER else BOOKING_ACTOR_EDGES
    return set(edges[actor].get(current, frozenset()))


def check_transition(kind: RecordKind, current: str, requested: str, actor: Actor) -> str:
    """Return the normalized target status or raise InvalidTransitionError."""
    target = normalize_status(kind, requested)
    if actor == Actor.ADMIN:
        return target
    allowed = allowed_next(kind, current, actor)
    if target not in allowed:
        raise InvalidTransitionError(current, target, allowed)
    return target


def provider_actions(kind: RecordKind, current: str) -> List[Dict[str, str]]:
    """Buttons a provider dashboard shows for a record in `current`."""
    return [
        {"label": _ACTION_LABELS.get(s, s.title()), "status": s}
        for s in sorted(allowed_next(kind, current, Actor.PROVIDER))
    ]


def status_display(status: str) -> Dict[str, str]:
    info = STATUS_MESSAGES.get(status, {"message": status, "icon": "info"})
    return {"color": STATUS_COLORS.get(status, "gray"), **info}
