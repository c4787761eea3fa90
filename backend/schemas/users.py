# backend/schemas/users.py
from datetime import datetime
from typing import Optional, Literal, NewType
from pydantic import BaseModel, EmailStr, constr

# helper types
Password = NewType("Password", constr(min_length=6, max_length=128))
Phone = NewType("Phone", constr(strip_whitespace=True, min_length=6, max_length=32))
RegisterRole = Literal["BUYER", "SUPPLIER", "MECHANIC", "LOGISTICS"]

# ---------- Schemas ----------

class RegisterPayload(BaseModel):
    name: constr(strip_whitespace=True, min_length=1, max_length=255)
    email: EmailStr
    password: Password
    phone: Optional[Phone] = None
    role: RegisterRole = "BUYER"

class RegisterResponse(BaseModel):
    ok: bool = True
    user_id: int

class LoginPayload(BaseModel):
    email: EmailStr
    password: Password

class UserOut(BaseModel):
    id: int
    name: Optional[str] = None
    email: str
    phone: Optional[str] = None
    role: str
    created_at: Optional[datetime] = None
    class Config: from_attributes = True

class LoginResponse(BaseModel):
    ok: bool = True
    user: UserOut

class UserMini(BaseModel):
    id: int
    name: Optional[str] = None
    email: str
    phone: Optional[str] = None
    class Config: from_attributes = True

class UserProfileOut(UserOut):
    has_profile: bool = False
    profile_approved: Optional[bool] = None
    unread_notifications: int = 0
