# backend/routers/admin_router.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from database.session import get_db
from models.order_model import Order
from models.user_model import User
from routers.bookings_router import booking_out
from routers.dependencies import require_admin
from routers.orders_router import order_to_response
from routers.profiles_router import PROFILE_KINDS, ProfileKind
from schemas.bookings import AnyBooking, BookingStatusUpdate
from schemas.orders import OrderResponse, OrderStatusUpdate
from schemas.profiles import ApprovalResult, RatingUpdate
from schemas.users import UserOut
from services import booking_service, order_service
from services.booking_service import MECHANIC, LOGISTICS
from services.notification_service import notify

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])

# url segment -> profile kind
ADMIN_KINDS = {
    "suppliers": "supplier",
    "mechanics": "mechanic",
    "logistics": "logistics",
}


def _profile_kind(kind: str) -> ProfileKind:
    key = ADMIN_KINDS.get(kind.lower())
    if key is None:
        raise HTTPException(status_code=404, detail=f"Unknown provider kind: {kind}")
    return PROFILE_KINDS[key]


def _load_profile(db: Session, pk: ProfileKind, profile_id: int):
    profile = db.get(pk.model, profile_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


# ---------- orders ----------

@router.get("/orders", response_model=List[OrderResponse])
def list_orders(
    status: Optional[str] = Query(default=None),
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    q = order_service.order_query(db)
    if status:
        q = q.filter(Order.status == status.upper())
    return [order_to_response(o) for o in q.order_by(Order.created_at.desc(), Order.id.desc()).all()]


@router.patch("/orders/{order_id}", response_model=OrderResponse)
def override_order_status(
    order_id: int, body: OrderStatusUpdate, admin: User = Depends(require_admin), db: Session = Depends(get_db)
):
    return order_to_response(order_service.update_status(db, admin, order_id, body.status))


# ---------- bookings ----------

@router.get("/bookings", response_model=List[AnyBooking])
def list_bookings(
    status: Optional[str] = Query(default=None),
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    out = []
    for cfg in (MECHANIC, LOGISTICS):
        q = booking_service.booking_query(db, cfg)
        if status:
            q = q.filter(cfg.model.status == status.upper())
        out.extend(booking_out(cfg, b) for b in q.all())
    out.sort(key=lambda b: (b.created_at, b.id), reverse=True)
    return out


@router.patch("/bookings/{booking_id}", response_model=AnyBooking)
def override_booking_status(
    booking_id: int,
    body: BookingStatusUpdate,
    kind: str = Query(..., description="mechanic|logistics"),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    cfg = booking_service.get_config(kind)
    b = booking_service.update_status(db, admin, cfg, booking_id, body.status, body.current_location)
    return booking_out(cfg, b)


# ---------- providers ----------

def _set_approval(db: Session, kind: str, profile_id: int, approved: bool, admin: User) -> ApprovalResult:
    pk = _profile_kind(kind)
    profile = _load_profile(db, pk, profile_id)
    profile.verified = approved
    profile.approved = approved
    profile.rejected = not approved

    name = getattr(profile, pk.name_field)
    if approved:
        notify(db, profile.user_id, "Profile Approved",
               f"{name} has been approved and is now visible to customers.", "SYSTEM", "/dashboard")
    else:
        notify(db, profile.user_id, "Profile Rejected",
               f"{name} was not approved. Please review your details.", "SYSTEM", "/dashboard")
    try:
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Approval update failed for {kind} {profile_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update profile")

    logger.info(f"Admin {admin.id} {'approved' if approved else 'rejected'} {kind} profile {profile_id}")
    return ApprovalResult(ok=True, id=profile.id, verified=profile.verified, approved=profile.approved,
                          rejected=profile.rejected)


@router.post("/{kind}/{profile_id}/approve", response_model=ApprovalResult)
def approve_provider(kind: str, profile_id: int, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    return _set_approval(db, kind, profile_id, True, admin)


@router.post("/{kind}/{profile_id}/reject", response_model=ApprovalResult)
def reject_provider(kind: str, profile_id: int, admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    return _set_approval(db, kind, profile_id, False, admin)


@router.patch("/{kind}/{profile_id}/rating")
def set_rating(
    kind: str, profile_id: int, body: RatingUpdate, admin: User = Depends(require_admin), db: Session = Depends(get_db)
):
    pk = _profile_kind(kind)
    profile = _load_profile(db, pk, profile_id)
    profile.rating = body.rating
    db.commit()
    db.refresh(profile)
    logger.info(f"Admin {admin.id} set rating of {kind} profile {profile_id} to {body.rating}")
    return pk.out.model_validate(profile)


# ---------- users ----------

@router.get("/users", response_model=List[UserOut])
def list_users(
    role: Optional[str] = Query(default=None),
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    q = db.query(User)
    if role:
        q = q.filter(User.role == role.upper())
    return [UserOut.model_validate(u) for u in q.order_by(User.id).all()]
