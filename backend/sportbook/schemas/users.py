# backend/sportbook/schemas/users.py

from typing import Literal, Optional
from pydantic import BaseModel


class UserCreate(BaseModel):
    full_name: str
    email: str
    phone: Optional[str] = None
    role: Literal["customer", "owner", "admin"] = "customer"

    model_config = {"from_attributes": True}


class UserUpdate(BaseModel):
    is_active: Optional[bool] = None
    full_name: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[Literal["customer", "owner", "admin"]] = None

    model_config = {"from_attributes": True}


class UserRead(BaseModel):
    id: int
    full_name: str
    email: str
    phone: Optional[str] = None
    role: str
    is_active: bool
    is_banned: bool
    ban_reason: Optional[str] = None
    reward_points: int
    total_spent: float
    created_at: Optional[str] = None

    model_config = {"from_attributes": True}
