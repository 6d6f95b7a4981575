from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List
from datetime import datetime
from pydantic.config import ConfigDict

from hotel_api.api.rooms.schema import RoomRead
from hotel_api.utils.validators import validate_latitude, validate_longitude, validate_not_blank


class HotelBase(BaseModel):
    name: str = Field(..., max_length=50)
    description: str = Field(..., max_length=500)
    address: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None

    @field_validator("name", "description")
    @classmethod
    def not_blank(cls, v):
        return validate_not_blank(v)

    @field_validator("lat")
    @classmethod
    def check_lat(cls, v):
        return v if v is None else validate_latitude(v)

    @field_validator("lng")
    @classmethod
    def check_lng(cls, v):
        return v if v is None else validate_longitude(v)

    @model_validator(mode="after")
    def location_given(self):
        if (self.lat is None) != (self.lng is None):
            raise ValueError("lat and lng must be given together")
        if self.lat is None and not self.address:
            raise ValueError("Please add an address or lat/lng coordinates")
        return self


class HotelCreate(HotelBase):
    pass


class HotelUpdate(BaseModel):
    """Partial update; the merged record is re-validated against HotelCreate."""
    name: Optional[str] = None
    description: Optional[str] = None
    address: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None


class HotelRead(BaseModel):
    id: int
    user_id: int
    name: str
    description: str
    address: Optional[str] = None
    formatted_address: Optional[str] = None
    zipcode: Optional[str] = None
    lat: float
    lng: float
    average_cost: Optional[float] = None
    average_rating: Optional[float] = None
    photo: Optional[str] = None
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class HotelWithRooms(HotelRead):
    rooms: List[RoomRead] = Field(default_factory=list)


class HotelInRadius(HotelRead):
    distance: float  # miles from the geocoded point
