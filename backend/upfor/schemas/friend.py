"""Pydantic schemas for the friendship workflow."""
from __future__ import annotations
from typing import Optional
from pydantic import Field

from upfor.models.friendship import FriendshipStatus
from upfor.schemas.base import CamelModel, UtcDatetime
from upfor.schemas.user import UserSummary


class FriendRequestCreate(CamelModel):
    user_id: str = Field(min_length=1)


class FriendRequestAction(CamelModel):
    request_id: str = Field(min_length=1)


class FriendshipOut(CamelModel):
    id: str = Field(validation_alias="friendship_id")
    user_a_id: str
    user_b_id: str
    status: FriendshipStatus
    created_at: Optional[UtcDatetime] = None



class ReceivedRequestOut(CamelModel):
    id: str
    sender: UserSummary = Field(serialization_alias="from")
