# profile.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship
from catch_chronicles.database import Base


class Profile(Base):
    __tablename__ = "profiles"

    # One-to-one with the account: the profile id is the user id.
    id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    display_name = Column(String(255), nullable=False, default="")
    username = Column(String(50), unique=True, index=True, nullable=True)
    short_bio = Column(Text, nullable=True)
    avatar_url = Column(String(500), nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="profile")
