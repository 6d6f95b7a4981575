from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from pydantic.config import ConfigDict

from hotel_api.utils.validators import validate_not_blank


class HotelSummary(BaseModel):
    id: int
    name: str
    description: str
    model_config = ConfigDict(from_attributes=True)


class ReviewBase(BaseModel):
    title: str = Field(..., max_length=100)
    text: str
    rating: int = Field(..., ge=1, le=10)

    @field_validator("title", "text")
    @classmethod
    def not_blank(cls, v):
        return validate_not_blank(v)


class ReviewCreate(ReviewBase):
    pass


class ReviewUpdate(BaseModel):
    title: Optional[str] = None
    text: Optional[str] = None
    rating: Optional[int] = None


class ReviewRead(BaseModel):
    id: int
    hotel_id: int
    user_id: int
    title: str
    text: str
    rating: int
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class ReviewWithHotel(ReviewRead):
    hotel: HotelSummary
