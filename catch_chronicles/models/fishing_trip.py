from __future__ import annotations

from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from catch_chronicles.database import Base


class FishingTrip(Base):
    __tablename__ = "fishing_trips"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    date = Column(Date, nullable=False, index=True)
    time_of_day = Column(String(20), nullable=False)
    location = Column(String(255), nullable=False, index=True)
    weather = Column(String(100), nullable=False)
    notes = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=True)

    # Kept equal to len(fish_catches) by the trip/catch services on every write.
    catch_count = Column(Integer, nullable=False, default=0)

    water_temperature = Column(Float, nullable=True)
    air_temperature = Column(Float, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    user = relationship("User", back_populates="trips")
    fish_catches = relationship(
        "FishCatch",
        back_populates="trip",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="FishCatch.id",
    )
