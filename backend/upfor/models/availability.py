"""AvailabilityDay ORM model: sparse per-day willingness rows."""
from sqlalchemy import Column, String, Boolean, Date, Integer, DateTime, ForeignKey
from sqlalchemy.sql import func
from upfor.database import Base


class AvailabilityDay(Base):
    __tablename__ = "availability_days"

    user_id = Column(String(36), ForeignKey("users.user_id"), primary_key=True)
    date = Column(Date, primary_key=True)  # UTC day bucket
    is_up = Column(Boolean, nullable=False, default=False)
    up_text = Column(String(64), nullable=True)
    version = Column(Integer, nullable=False, default=1)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
