# backend/routers/users_router.py
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from werkzeug.security import generate_password_hash, check_password_hash

from database.session import get_db
from schemas.users import RegisterPayload, RegisterResponse, LoginPayload, LoginResponse, UserOut, UserProfileOut
from models.user_model import User
from services.booking_service import MECHANIC, LOGISTICS
from services.notification_service import unread_counts

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])

_PROFILE_ATTRS = {
    "SUPPLIER": "supplier_profile",
    "MECHANIC": MECHANIC.user_profile_attr,
    "LOGISTICS": LOGISTICS.user_profile_attr,
}


def _norm_email(email: str) -> str:
    return email.strip().lower()


@router.post("/register", response_model=RegisterResponse, status_code=201)
def register_user(body: RegisterPayload, db: Session = Depends(get_db)):
    email = _norm_email(body.email)
    if db.query(User).filter(User.email == email).count() > 0:
        raise HTTPException(status_code=400, detail="Email already in use")

    u = User(
        name=body.name,
        email=email,
        password_hash=generate_password_hash(body.password),
        phone=body.phone,
        role=body.role,
    )
    db.add(u)
    db.commit()
    db.refresh(u)
    logger.info(f"Registered user {u.id} as {u.role}")
    return RegisterResponse(user_id=u.id)


@router.post("/login", response_model=LoginResponse)
def login(body: LoginPayload, db: Session = Depends(get_db)):
    u = db.query(User).filter(User.email == _norm_email(body.email)).first()
    if not u or not check_password_hash(u.password_hash, body.password):
        raise HTTPException(status_code=401, detail="Invalid email or password")
    return LoginResponse(user=UserOut.model_validate(u))


@router.get("/{user_id}", response_model=UserProfileOut)
def get_user_profile(user_id: int, db: Session = Depends(get_db)):
    u = db.get(User, user_id)
    if not u:
        raise HTTPException(status_code=404, detail="User not found")

    profile = getattr(u, _PROFILE_ATTRS[u.role]) if u.role in _PROFILE_ATTRS else None
    out = UserProfileOut.model_validate(u)
    out.has_profile = profile is not None
    out.profile_approved = profile.approved if profile is not None else None
    out.unread_notifications = unread_counts(db, u.id)["total"]
    return out
