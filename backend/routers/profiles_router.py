# backend/routers/profiles_router.py
import logging
from dataclasses import dataclass
from typing import List, Optional, Type

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from database.session import get_db
from models.logistics_model import LogisticsProfile
from models.mechanic_model import MechanicProfile
from models.supplier_model import SupplierProfile
from models.user_model import User
from routers.dependencies import get_current_user
from schemas.profiles import (
    SupplierProfileCreate, SupplierProfileUpdate, SupplierProfileOut,
    MechanicProfileCreate, MechanicProfileUpdate, MechanicProfileOut,
    LogisticsProfileCreate, LogisticsProfileUpdate, LogisticsProfileOut,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["profiles"])


@dataclass(frozen=True)
class ProfileKind:
    model: Type
    role: str
    user_attr: str
    name_field: str
    create: Type[BaseModel]
    update: Type[BaseModel]
    out: Type[BaseModel]


PROFILE_KINDS = {
    "supplier": ProfileKind(SupplierProfile, "SUPPLIER", "supplier_profile", "business_name",
                            SupplierProfileCreate, SupplierProfileUpdate, SupplierProfileOut),
    "mechanic": ProfileKind(MechanicProfile, "MECHANIC", "mechanic_profile", "business_name",
                            MechanicProfileCreate, MechanicProfileUpdate, MechanicProfileOut),
    "logistics": ProfileKind(LogisticsProfile, "LOGISTICS", "logistics_profile", "company_name",
                             LogisticsProfileCreate, LogisticsProfileUpdate, LogisticsProfileOut),
}


def _kind(kind: str) -> ProfileKind:
    pk = PROFILE_KINDS.get(kind.lower())
    if not pk:
        raise HTTPException(status_code=404, detail=f"Unknown profile kind: {kind}")
    return pk


def _validate(schema: Type[BaseModel], body: dict) -> BaseModel:
    try:
        return schema.model_validate(body)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))


def _own_profile(user: User, pk: ProfileKind):
    profile = getattr(user, pk.user_attr)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


# ---------- onboarding ----------
@router.post("/onboarding/{kind}", status_code=201)
def onboard(kind: str, body: dict, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    pk = _kind(kind)
    payload = _validate(pk.create, body)
    if user.role != pk.role:
        raise HTTPException(status_code=403, detail=f"Only {pk.role.lower()} accounts can create this profile")
    if getattr(user, pk.user_attr) is not None:
        raise HTTPException(status_code=409, detail="Profile already exists")

    profile = pk.model(user_id=user.id, **payload.model_dump())
    if profile.phone is None:
        profile.phone = user.phone
    db.add(profile)
    try:
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Onboarding {kind} for user {user.id} failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to create profile")
    db.refresh(profile)
    logger.info(f"Created {kind} profile {profile.id} for user {user.id}")
    return pk.out.model_validate(profile)


# ---------- own profile ----------
@router.get("/profile/{kind}")
def get_my_profile(kind: str, user: User = Depends(get_current_user)):
    pk = _kind(kind)
    return pk.out.model_validate(_own_profile(user, pk))


@router.patch("/profile/{kind}")
def update_my_profile(kind: str, body: dict, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    pk = _kind(kind)
    profile = _own_profile(user, pk)
    changes = _validate(pk.update, body).model_dump(exclude_unset=True)
    for field, value in changes.items():
        setattr(profile, field, value)
    if changes and profile.rejected:
        # an edited profile goes back into the approval queue
        profile.rejected = False
    db.commit()
    db.refresh(profile)
    return pk.out.model_validate(profile)


# ---------- public listings ----------
def _public_list(db: Session, pk: ProfileKind, city: Optional[str], q: Optional[str]):
    query = db.query(pk.model).filter(pk.model.approved.is_(True))
    if city:
        query = query.filter(pk.model.city.ilike(city.strip()))
    if q:
        query = query.filter(getattr(pk.model, pk.name_field).ilike(f"%{q.strip()}%"))
    rows = query.order_by(pk.model.rating.desc(), pk.model.id).all()
    return [pk.out.model_validate(p) for p in rows]


@router.get("/suppliers", response_model=List[SupplierProfileOut])
def list_suppliers(city: Optional[str] = Query(None), q: Optional[str] = Query(None), db: Session = Depends(get_db)):
    return _public_list(db, PROFILE_KINDS["supplier"], city, q)


@router.get("/mechanics", response_model=List[MechanicProfileOut])
def list_mechanics(city: Optional[str] = Query(None), q: Optional[str] = Query(None), db: Session = Depends(get_db)):
    return _public_list(db, PROFILE_KINDS["mechanic"], city, q)


@router.get("/logistics", response_model=List[LogisticsProfileOut])
def list_logistics(city: Optional[str] = Query(None), q: Optional[str] = Query(None), db: Session = Depends(get_db)):
    return _public_list(db, PROFILE_KINDS["logistics"], city, q)
