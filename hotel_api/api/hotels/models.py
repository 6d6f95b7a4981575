from sqlalchemy import Column, Integer, String, Text, Float, ForeignKey
from sqlalchemy.orm import relationship
from hotel_api.database import BaseModel

DEFAULT_PHOTO = "no-photo.jpg"


class Hotel(BaseModel):
    __tablename__ = "hotels"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # core identity/location
    name = Column(String(50), unique=True, nullable=False, index=True)
    description = Column(String(500), nullable=False)
    address = Column(Text, nullable=True)
    formatted_address = Column(Text, nullable=True)
    zipcode = Column(String(20), nullable=True, index=True)
    lat = Column(Float, nullable=False, index=True)
    lng = Column(Float, nullable=False, index=True)

    # derived, maintained by the room/review services
    average_cost = Column(Float, nullable=True)
    average_rating = Column(Float, nullable=True)

    photo = Column(String(255), nullable=False, default=DEFAULT_PHOTO)

    user = relationship("User")
    rooms = relationship("Room", back_populates="hotel", cascade="all, delete-orphan")
    reviews = relationship("Review", back_populates="hotel", cascade="all, delete-orphan")
