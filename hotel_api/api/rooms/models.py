from sqlalchemy import Column, Integer, String, Text, Float, ForeignKey, Boolean, JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from hotel_api.database import BaseModel

JSONVariant = JSON().with_variant(JSONB(), "postgresql")  # portable JSON

ROOM_TYPES = ("Single", "Double", "Triple", "KingSize")


class Room(BaseModel):
    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    hotel_id = Column(Integer, ForeignKey("hotels.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    available = Column(Boolean, nullable=False, default=True)
    cost = Column(Float, nullable=False)
    room_type = Column(JSONVariant, nullable=False, default=list)  # e.g. ["Single", "Double"]
    minimum_occupancy = Column(Integer, nullable=False)
    photo = Column(String(255), nullable=True)

    hotel = relationship("Hotel", back_populates="rooms")
