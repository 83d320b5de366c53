"""User ORM model."""
import uuid
from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from upfor.database import Base


class User(Base):
    __tablename__ = "users"

    user_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    bio = Column(String(280), nullable=True)
    avatar_url = Column(String(512), nullable=True)
    home_location = Column(String(80), nullable=True)
    custom_location = Column(String(80), nullable=True)
    use_custom_location = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    status = relationship("UserStatus", uselist=False, lazy="joined")
