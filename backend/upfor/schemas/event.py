"""Pydantic schemas for Events."""
from __future__ import annotations
from typing import Optional
from pydantic import ConfigDict, Field, field_validator

from upfor.models.participant import ParticipantRole, ParticipantStatus
from upfor.schemas.base import CamelModel, UtcDatetime
from upfor.schemas.user import UserSummary


class EventCreate(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    activity: str = Field(min_length=2, max_length=64)
    is_instant: bool = False
    start_time: Optional[UtcDatetime] = None
    is_potential: bool = False
    location: Optional[str] = Field(None, max_length=80)
    notes: Optional[str] = Field(None, max_length=500)
    image_url: Optional[str] = Field(None, max_length=512)
    invitee_ids: list[str] = Field(default_factory=list)
    cohost_ids: list[str] = Field(default_factory=list)



class RespondRequest(CamelModel):
    status: ParticipantStatus

    @field_validator("status")
    @classmethod
    def _respondable(cls, value: ParticipantStatus) -> ParticipantStatus:
        if value == ParticipantStatus.invited:
            raise ValueError("status must be INTERESTED, JOINED or DECLINED")
        return value


class ShoutCreate(CamelModel):
    message: str = Field(min_length=1, max_length=500)


class ParticipantOut(CamelModel):
    event_id: str
    user_id: str
    role: ParticipantRole
    status: ParticipantStatus
    responded_at: Optional[UtcDatetime] = None



class ParticipantDetailOut(ParticipantOut):
    user: UserSummary


class ShoutOut(CamelModel):
    id: str = Field(validation_alias="shout_id")
    event_id: str
    user: UserSummary
    message: str
    created_at: UtcDatetime



class EventOut(CamelModel):
    id: str = Field(validation_alias="event_id")
    host_id: str
    host: UserSummary
    activity: str
    start_time: UtcDatetime = Field(validation_alias="start_time_utc")
    location: Optional[str] = None
    notes: Optional[str] = None
    image_url: Optional[str] = None
    is_instant: bool
    is_potential: bool
    cohost_ids: list[str] = Field(default_factory=list)
    participants: list[ParticipantDetailOut] = Field(default_factory=list)
    created_at: Optional[UtcDatetime] = None



class EventDetailOut(EventOut):
    shouts: list[ShoutOut] = Field(default_factory=list)


class EventEnvelope(CamelModel):
    event: Optional[EventDetailOut] = None


class EventListOut(CamelModel):
    events: list[EventOut]


class ParticipantEnvelope(CamelModel):
    participant: ParticipantOut


class ShoutEnvelope(CamelModel):
    shout: ShoutOut
