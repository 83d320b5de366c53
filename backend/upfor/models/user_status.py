"""UserStatus ORM model: one summary status per user, replaced wholesale."""
import enum
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Enum as SAEnum
from sqlalchemy.sql import func
from upfor.database import Base


class StatusMode(str, enum.Enum):
    off = "OFF"
    general = "GENERAL"
    specific = "SPECIFIC"


class UserStatus(Base):
    __tablename__ = "user_statuses"

    user_id = Column(String(36), ForeignKey("users.user_id"), primary_key=True)
    mode = Column(SAEnum(StatusMode), nullable=False, default=StatusMode.off)
    text = Column(String(64), nullable=True)
    version = Column(Integer, nullable=False, default=1)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # UPDATEs carry "WHERE version = <loaded>"; a stale row raises StaleDataError
    __mapper_args__ = {"version_id_col": version}
