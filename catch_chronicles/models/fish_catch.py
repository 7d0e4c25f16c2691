from __future__ import annotations

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from catch_chronicles.database import Base


class FishCatch(Base):
    __tablename__ = "fish_catches"

    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(Integer, ForeignKey("fishing_trips.id", ondelete="CASCADE"), nullable=False, index=True)

    fish_type = Column(String(255), nullable=False)
    # Method or fly pattern the fish was taken on.
    caught_on = Column(String(255), nullable=False, default="")
    length = Column(Float, nullable=True)  # cm
    weight = Column(Float, nullable=True)  # g

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    trip = relationship("FishingTrip", back_populates="fish_catches")
