from sqlalchemy import Column, Integer, String, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from hotel_api.database import BaseModel


class Review(BaseModel):
    __tablename__ = "reviews"
    # one review per user per hotel
    __table_args__ = (UniqueConstraint("hotel_id", "user_id", name="uq_reviews_hotel_user"),)

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    hotel_id = Column(Integer, ForeignKey("hotels.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    title = Column(String(100), nullable=False)
    text = Column(Text, nullable=False)
    rating = Column(Integer, nullable=False)  # 1-10

    hotel = relationship("Hotel", back_populates="reviews")
