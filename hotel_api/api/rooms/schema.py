from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime
from pydantic.config import ConfigDict

from hotel_api.utils.validators import validate_room_types, validate_not_blank


class HotelSummary(BaseModel):
    id: int
    name: str
    description: str
    model_config = ConfigDict(from_attributes=True)


class RoomBase(BaseModel):
    title: str = Field(..., max_length=255)
    description: str
    available: bool = True
    cost: float = Field(..., ge=0)
    room_type: List[str]
    minimum_occupancy: int = Field(..., ge=1, le=5)

    @field_validator("title", "description")
    @classmethod
    def not_blank(cls, v):
        return validate_not_blank(v)

    @field_validator("room_type")
    @classmethod
    def check_room_type(cls, v):
        return validate_room_types(v)


class RoomCreate(RoomBase):
    pass


class RoomUpdate(BaseModel):
    """Partial update; the merged record is re-validated against RoomCreate."""
    title: Optional[str] = None
    description: Optional[str] = None
    available: Optional[bool] = None
    cost: Optional[float] = None
    room_type: Optional[List[str]] = None
    minimum_occupancy: Optional[int] = None


class RoomRead(BaseModel):
    id: int
    hotel_id: int
    user_id: int
    title: str
    description: str
    available: bool
    cost: float
    room_type: List[str] = Field(default_factory=list)
    minimum_occupancy: int
    photo: Optional[str] = None
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class RoomWithHotel(RoomRead):
    hotel: HotelSummary
