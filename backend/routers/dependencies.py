# backend/routers/dependencies.py
# Caller identity is passed explicitly (?user_id=); session wiring lives outside this API.
from fastapi import Depends, HTTPException, Query
from sqlalchemy.orm import Session

from database.session import get_db
from models.user_model import User


def get_current_user(
    user_id: int = Query(..., gt=0, description="id of the calling user"),
    db: Session = Depends(get_db),
) -> User:
    u = db.get(User, user_id)
    if not u:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return u


def require_admin(user: User = Depends(get_current_user)) -> User:
    if user.role != "ADMIN":
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user


def require_role(*roles: str):
    def _check(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            raise HTTPException(status_code=403, detail=f"Only {'/'.join(roles).lower()} accounts can do this")
        return user
    return _check
