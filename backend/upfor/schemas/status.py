"""Pydantic schemas for summary status and availability."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import Field

from upfor.models.user_status import StatusMode
from upfor.schemas.base import CamelModel, UtcDatetime


class SummaryUpdate(CamelModel):
    mode: StatusMode
    text: Optional[str] = None
    version: Optional[int] = None  # set to make the write conditional


class StatusOut(CamelModel):
    mode: StatusMode
    text: Optional[str] = None
    version: int = 0
    updated_at: Optional[UtcDatetime] = None



class SummaryOut(CamelModel):
    status: StatusOut


class DayEntryOut(CamelModel):
    date: UtcDatetime
    is_up: bool
    up_text: Optional[str] = None


class DayEntryIn(CamelModel):
    date: UtcDatetime
    is_up: bool
    up_text: Optional[str] = Field(None, max_length=64)



class AvailabilityUpdate(CamelModel):
    days: list[DayEntryIn] = Field(min_length=1, max_length=28)


class AvailabilityOut(CamelModel):
    start: datetime
    days: list[DayEntryOut]


class OkOut(CamelModel):
    ok: bool = True
