"""Pydantic schemas for Users."""
from __future__ import annotations
from typing import Optional
from pydantic import EmailStr, Field

from upfor.schemas.base import CamelModel, UtcDatetime
from upfor.schemas.status import StatusOut


class UserCreate(CamelModel):
    name: str = Field(min_length=2, max_length=100)
    email: EmailStr


class UserUpdate(CamelModel):
    bio: Optional[str] = Field(None, max_length=280)
    avatar_url: Optional[str] = Field(None, max_length=512)
    home_location: Optional[str] = Field(None, max_length=80)
    custom_location: Optional[str] = Field(None, max_length=80)
    use_custom_location: Optional[bool] = None


class UserSummary(CamelModel):
    id: str = Field(validation_alias="user_id")
    name: str
    avatar_url: Optional[str] = None


class UserOut(CamelModel):
    id: str = Field(validation_alias="user_id")
    name: str
    email: str
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    home_location: Optional[str] = None
    custom_location: Optional[str] = None
    use_custom_location: bool = False
    status: Optional[StatusOut] = None
    created_at: Optional[UtcDatetime] = None



class RegisterOut(CamelModel):
    token: str
    user: UserOut
