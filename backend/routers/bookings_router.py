# backend/routers/bookings_router.py
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database.session import get_db
from models.user_model import User
from routers.dependencies import get_current_user
from schemas.bookings import (
    AnyBooking, BookingStatusUpdate, LogisticsBookingCreate, LogisticsBookingOut,
    MechanicBookingCreate, MechanicBookingOut,
)
from services import booking_service
from services.booking_service import BookingKindConfig, MECHANIC, LOGISTICS

router = APIRouter(prefix="/bookings", tags=["bookings"])


def booking_out(cfg: BookingKindConfig, b) -> Union[MechanicBookingOut, LogisticsBookingOut]:
    if cfg is MECHANIC:
        return MechanicBookingOut.model_validate(b)
    return LogisticsBookingOut.model_validate(b)


@router.get("", response_model=List[AnyBooking])
def list_all_bookings(
    view: Optional[str] = Query(default=None),
    status: Optional[str] = Query(default=None),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    out = []
    for cfg in (MECHANIC, LOGISTICS):
        # a provider view only applies to the kind the caller actually provides
        if view and view.lower() in booking_service.PROVIDER_VIEWS and not booking_service.provider_profile_for(user, cfg):
            continue
        out.extend(booking_out(cfg, b) for b in booking_service.list_bookings(db, user, cfg, view, status))
    out.sort(key=lambda b: (b.created_at, b.id), reverse=True)
    return out


@router.post("/mechanic", response_model=MechanicBookingOut, status_code=201)
def create_mechanic_booking(
    body: MechanicBookingCreate, user: User = Depends(get_current_user), db: Session = Depends(get_db)
):
    return booking_out(MECHANIC, booking_service.create_mechanic_booking(db, user, body))


@router.post("/logistics", response_model=LogisticsBookingOut, status_code=201)
def create_logistics_booking(
    body: LogisticsBookingCreate, user: User = Depends(get_current_user), db: Session = Depends(get_db)
):
    return booking_out(LOGISTICS, booking_service.create_logistics_booking(db, user, body))


@router.get("/{kind}", response_model=List[AnyBooking])
def list_bookings(
    kind: str,
    view: Optional[str] = Query(default=None, description="provider|mechanic|driver for received bookings"),
    status: Optional[str] = Query(default=None),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    cfg = booking_service.get_config(kind)
    return [booking_out(cfg, b) for b in booking_service.list_bookings(db, user, cfg, view, status)]


@router.get("/{kind}/{booking_id}", response_model=AnyBooking)
def get_booking(kind: str, booking_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    cfg = booking_service.get_config(kind)
    b = booking_service.get_booking(db, cfg, booking_id)
    booking_service.actor_for(user, b, cfg)
    return booking_out(cfg, b)


@router.patch("/{kind}/{booking_id}", response_model=AnyBooking)
def update_booking_status(
    kind: str,
    booking_id: int,
    body: BookingStatusUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    cfg = booking_service.get_config(kind)
    b = booking_service.update_status(db, user, cfg, booking_id, body.status, body.current_location)
    return booking_out(cfg, b)


@router.delete("/{kind}/{booking_id}")
def delete_booking(kind: str, booking_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    cfg = booking_service.get_config(kind)
    booking_service.delete_booking(db, user, cfg, booking_id)
    return {"message": "Booking deleted successfully"}
