"""Friendship ORM model: one row per unordered user pair."""
import uuid
import enum
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint, Enum as SAEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from upfor.database import Base


class FriendshipStatus(str, enum.Enum):
    pending = "PENDING"
    accepted = "ACCEPTED"


def make_pair_key(a: str, b: str) -> str:
    """Order-independent key for a user pair."""
    low, high = sorted((a, b))
    return f"{low}:{high}"


def _pair_key_default(context) -> str:
    params = context.get_current_parameters()
    return make_pair_key(params["user_a_id"], params["user_b_id"])


class Friendship(Base):
    __tablename__ = "friendships"
    __table_args__ = (UniqueConstraint("pair_key", name="uq_friendship_pair"),)

    friendship_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # user_a is the requester, user_b the recipient
    user_a_id = Column(String(36), ForeignKey("users.user_id"), nullable=False, index=True)
    user_b_id = Column(String(36), ForeignKey("users.user_id"), nullable=False, index=True)
    pair_key = Column(String(73), nullable=False, default=_pair_key_default)
    status = Column(SAEnum(FriendshipStatus), nullable=False, default=FriendshipStatus.pending)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user_a = relationship("User", foreign_keys=[user_a_id])
