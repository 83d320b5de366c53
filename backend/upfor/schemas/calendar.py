"""Pydantic schemas for friend calendars."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import Field

from upfor.schemas.base import CamelModel
from upfor.schemas.status import DayEntryOut


class FriendCalendarOut(CamelModel):
    id: str
    name: str
    avatar_url: Optional[str] = None
    days: list[DayEntryOut] = Field(default_factory=list)


class FriendsCalendarOut(CamelModel):
    start: datetime
    friends: list[FriendCalendarOut]
