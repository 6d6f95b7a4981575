import logging
import math
from typing import Optional, List

from fastapi import APIRouter, Depends, File, Request, UploadFile, status
from sqlalchemy.orm import Session

from hotel_api.api.hotels.models import Hotel
from hotel_api.api.hotels.schema import (
    HotelCreate,
    HotelUpdate,
    HotelRead,
    HotelWithRooms,
    HotelInRadius,
)
from hotel_api.api.users.models import User, ROLE_PUBLISHER, ROLE_ADMIN
from hotel_api.database.db import get_db
from hotel_api.utils.advanced_results import advanced_results
from hotel_api.utils.authorization import authorize, ensure_owner, ensure_can_publish_hotel
from hotel_api.utils.errors import BadRequest, NotFound
from hotel_api.utils.geocoder import Geocoder, get_geocoder
from hotel_api.utils.helper import (
    CommonResponse,
    safe_db_operation,
    central_angle,
    EARTH_RADIUS_MILES,
)
from hotel_api.utils.uploads import save_photo
from hotel_api.utils.validators import validate_entity, format_field_errors

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/hotels", tags=["Hotels"])

SEARCH_FIELDS = ["name", "description", "formatted_address"]
EDITABLE_FIELDS = ["name", "description", "address", "lat", "lng"]


def get_hotel_or_404(db: Session, hotel_id: int) -> Hotel:
    hotel = db.query(Hotel).filter(Hotel.id == hotel_id).first()
    if not hotel:
        raise NotFound(f"Hotel not found with id of {hotel_id}")
    return hotel


def geocode_address(geocoder: Geocoder, address: str) -> dict:
    results = geocoder.geocode(address)
    if not results:
        raise BadRequest(f"Could not geocode address '{address}'")
    loc = results[0]
    return {
        "lat": loc.latitude,
        "lng": loc.longitude,
        "formatted_address": loc.formatted_address,
        "zipcode": loc.zipcode,
    }


@router.get("", response_model=CommonResponse, response_model_exclude_unset=True)
@safe_db_operation("GetHotels")
def get_hotels(request: Request, db: Session = Depends(get_db)):
    """
    List hotels with their rooms embedded.

    Supports select, sort, page, limit, search and field filters such as
    ``average_cost[lte]=100``.
    """
    return advanced_results(
        db.query(Hotel), Hotel, request.query_params, HotelWithRooms, SEARCH_FIELDS
    )


@router.get(
    "/radius/{zipcode}/{distance}",
    response_model=CommonResponse[List[HotelInRadius]],
    response_model_exclude_unset=True,
)
@safe_db_operation("GetHotelsInRadius")
def get_hotels_in_radius(
    zipcode: str,
    distance: float,
    db: Session = Depends(get_db),
    geocoder: Geocoder = Depends(get_geocoder),
):
    """
    Hotels within ``distance`` miles of the zipcode's first geocoding result.
    """
    if distance < 0:
        raise BadRequest("Distance must not be negative")

    results = geocoder.geocode(zipcode)
    if not results:
        raise NotFound(f"Could not geocode zipcode {zipcode}")
    lat, lng = results[0].latitude, results[0].longitude

    # angular radius of the search circle
    radius = distance / EARTH_RADIUS_MILES

    # bounding box prefilter, exact spherical test below
    lat_delta = math.degrees(radius)
    base_query = db.query(Hotel).filter(Hotel.lat >= lat - lat_delta, Hotel.lat <= lat + lat_delta)
    if abs(lat) + lat_delta < 90:
        ratio = math.sin(radius) / math.cos(math.radians(lat))
        if ratio < 1:
            lng_delta = math.degrees(math.asin(ratio))
            if -180 <= lng - lng_delta and lng + lng_delta <= 180:
                base_query = base_query.filter(Hotel.lng >= lng - lng_delta, Hotel.lng <= lng + lng_delta)

    hotels = []
    for hotel in base_query.order_by(Hotel.id.asc()).all():
        angle = central_angle(lat, lng, hotel.lat, hotel.lng)
        if angle <= radius:
            item = HotelRead.model_validate(hotel).model_dump()
            item["distance"] = round(angle * EARTH_RADIUS_MILES, 2)
            hotels.append(HotelInRadius(**item))

    return CommonResponse.response_handler(data=hotels, count=len(hotels))


@router.get("/{hotel_id}", response_model=CommonResponse[HotelRead], response_model_exclude_unset=True)
@safe_db_operation("GetHotel")
def get_hotel(hotel_id: int, db: Session = Depends(get_db)):
    hotel = get_hotel_or_404(db, hotel_id)
    return CommonResponse.response_handler(data=HotelRead.model_validate(hotel))


@router.post(
    "",
    response_model=CommonResponse[HotelRead],
    status_code=status.HTTP_201_CREATED,
    response_model_exclude_unset=True,
)
@safe_db_operation("CreateHotel")
def create_hotel(
    hotel_req: HotelCreate,
    user: User = Depends(authorize(ROLE_PUBLISHER, ROLE_ADMIN)),
    db: Session = Depends(get_db),
    geocoder: Geocoder = Depends(get_geocoder),
):
    ensure_can_publish_hotel(db, user)

    data = hotel_req.model_dump()
    if data["lat"] is None:
        data.update(geocode_address(geocoder, data["address"]))

    hotel = Hotel(**data, user_id=user.id)
    hotel.save(db)
    logger.info("User %s created hotel %s", user.id, hotel.id)

    return CommonResponse.response_handler(data=HotelRead.model_validate(hotel))


@router.put("/{hotel_id}", response_model=CommonResponse[HotelRead], response_model_exclude_unset=True)
@safe_db_operation("UpdateHotel")
def update_hotel(
    hotel_id: int,
    update: HotelUpdate,
    user: User = Depends(authorize(ROLE_PUBLISHER, ROLE_ADMIN)),
    db: Session = Depends(get_db),
    geocoder: Geocoder = Depends(get_geocoder),
):
    hotel = get_hotel_or_404(db, hotel_id)
    ensure_owner(hotel.user_id, user, f"User {user.id} is not authorized to update this hotel")

    changes = update.model_dump(exclude_unset=True)
    merged = {field: getattr(hotel, field) for field in EDITABLE_FIELDS}
    merged.update(changes)
    errors = validate_entity(HotelCreate, merged)
    if errors:
        raise BadRequest(format_field_errors(errors), errors=errors)

    cleaned = HotelCreate.model_validate(merged).model_dump()
    changes = {field: cleaned[field] for field in changes}

    # coordinates follow the address unless the patch supplies them
    if cleaned["lat"] is None or (changes.get("address") and "lat" not in changes):
        changes.update(geocode_address(geocoder, cleaned["address"]))

    hotel.update(db, **changes)

    return CommonResponse.response_handler(data=HotelRead.model_validate(hotel))


@router.delete("/{hotel_id}", response_model=CommonResponse, response_model_exclude_unset=True)
@safe_db_operation("DeleteHotel")
def delete_hotel(
    hotel_id: int,
    user: User = Depends(authorize(ROLE_PUBLISHER, ROLE_ADMIN)),
    db: Session = Depends(get_db),
):
    """Delete a hotel together with its rooms and reviews."""
    hotel = get_hotel_or_404(db, hotel_id)
    ensure_owner(hotel.user_id, user, f"User {user.id} is not authorized to delete this hotel")

    hotel.delete(db)
    logger.info("User %s deleted hotel %s", user.id, hotel_id)

    return CommonResponse.response_handler(data={})


@router.put("/{hotel_id}/photo", response_model=CommonResponse[str], response_model_exclude_unset=True)
@safe_db_operation("HotelPhotoUpload")
def hotel_photo_upload(
    hotel_id: int,
    request: Request,
    file: Optional[UploadFile] = File(None),
    user: User = Depends(authorize(ROLE_PUBLISHER, ROLE_ADMIN)),
    db: Session = Depends(get_db),
):
    hotel = get_hotel_or_404(db, hotel_id)
    ensure_owner(hotel.user_id, user, f"User {user.id} is not authorized to update this hotel")

    filename = save_photo(file, hotel.id, request.app.state.config)
    hotel.update(db, photo=filename)

    return CommonResponse.response_handler(data=filename)
