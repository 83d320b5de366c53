"""Event ORM model."""
import uuid
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from upfor.database import Base
from upfor.models.participant import ParticipantRole


class Event(Base):
    __tablename__ = "events"

    event_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    host_id = Column(String(36), ForeignKey("users.user_id"), nullable=False, index=True)
    activity = Column(String(64), nullable=False)
    start_time_utc = Column(DateTime(timezone=True), nullable=False, index=True)
    location = Column(String(80), nullable=True)
    notes = Column(String(500), nullable=True)
    image_url = Column(String(512), nullable=True)
    is_instant = Column(Boolean, nullable=False, default=False)
    is_potential = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    host = relationship("User", foreign_keys=[host_id])
    participants = relationship(
        "EventParticipant",
        back_populates="event",
        cascade="all, delete-orphan",
        order_by="EventParticipant.created_at",
    )
    shouts = relationship(
        "ShoutMessage",
        back_populates="event",
        cascade="all, delete-orphan",
        order_by="ShoutMessage.created_at",
    )

    @property
    def cohost_ids(self) -> list[str]:
        return [p.user_id for p in self.participants if p.role == ParticipantRole.cohost]
