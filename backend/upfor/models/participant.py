"""EventParticipant ORM model."""
import enum
from sqlalchemy import Column, String, DateTime, ForeignKey, Enum as SAEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from upfor.database import Base


class ParticipantRole(str, enum.Enum):
    host = "HOST"
    cohost = "COHOST"
    guest = "GUEST"


class ParticipantStatus(str, enum.Enum):
    invited = "INVITED"
    interested = "INTERESTED"
    joined = "JOINED"
    declined = "DECLINED"


class EventParticipant(Base):
    __tablename__ = "event_participants"

    event_id = Column(String(36), ForeignKey("events.event_id"), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.user_id"), primary_key=True, index=True)
    role = Column(SAEnum(ParticipantRole), nullable=False)
    status = Column(SAEnum(ParticipantStatus), nullable=False, default=ParticipantStatus.invited)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    responded_at = Column(DateTime(timezone=True), nullable=True)

    event = relationship("Event", back_populates="participants")
    user = relationship("User")
