import logging
from typing import Optional, List

from fastapi import APIRouter, Depends, File, Request, UploadFile, status
from sqlalchemy.orm import Session

from hotel_api.api.hotels.router import get_hotel_or_404
from hotel_api.api.rooms.models import Room
from hotel_api.api.rooms.schema import RoomCreate, RoomUpdate, RoomRead, RoomWithHotel
from hotel_api.api.rooms.service import update_average_cost
from hotel_api.api.users.models import User, ROLE_PUBLISHER, ROLE_ADMIN
from hotel_api.database.db import get_db
from hotel_api.utils.advanced_results import advanced_results
from hotel_api.utils.authorization import authorize, ensure_owner
from hotel_api.utils.errors import BadRequest, NotFound
from hotel_api.utils.helper import CommonResponse, safe_db_operation
from hotel_api.utils.uploads import save_photo
from hotel_api.utils.validators import validate_entity, format_field_errors

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rooms", tags=["Rooms"])
hotel_rooms_router = APIRouter(prefix="/hotels/{hotel_id}/rooms", tags=["Rooms"])

EDITABLE_FIELDS = ["title", "description", "available", "cost", "room_type", "minimum_occupancy"]


def get_room_or_404(db: Session, room_id: int) -> Room:
    room = db.query(Room).filter(Room.id == room_id).first()
    if not room:
        raise NotFound(f"No room with the id of {room_id}")
    return room


@router.get("", response_model=CommonResponse, response_model_exclude_unset=True)
@safe_db_operation("GetRooms")
def get_rooms(request: Request, db: Session = Depends(get_db)):
    return advanced_results(db.query(Room), Room, request.query_params, RoomWithHotel, ["title", "description"])


@hotel_rooms_router.get("", response_model=CommonResponse[List[RoomRead]], response_model_exclude_unset=True)
@safe_db_operation("GetHotelRooms")
def get_hotel_rooms(hotel_id: int, db: Session = Depends(get_db)):
    rooms = db.query(Room).filter(Room.hotel_id == hotel_id).order_by(Room.id.asc()).all()
    return CommonResponse.response_handler(
        data=[RoomRead.model_validate(r) for r in rooms],
        count=len(rooms),
    )


@router.get("/{room_id}", response_model=CommonResponse[RoomWithHotel], response_model_exclude_unset=True)
@safe_db_operation("GetRoom")
def get_room(room_id: int, db: Session = Depends(get_db)):
    room = get_room_or_404(db, room_id)
    return CommonResponse.response_handler(data=RoomWithHotel.model_validate(room))


@hotel_rooms_router.post(
    "",
    response_model=CommonResponse[RoomRead],
    status_code=status.HTTP_201_CREATED,
    response_model_exclude_unset=True,
)
@safe_db_operation("AddRoom")
def add_room(
    hotel_id: int,
    room_req: RoomCreate,
    user: User = Depends(authorize(ROLE_PUBLISHER, ROLE_ADMIN)),
    db: Session = Depends(get_db),
):
    hotel = get_hotel_or_404(db, hotel_id)
    ensure_owner(hotel.user_id, user, f"User {user.id} is not authorized to add a room to hotel {hotel.id}")

    room = Room(**room_req.model_dump(), hotel_id=hotel.id, user_id=user.id)
    room.save(db)
    update_average_cost(db, hotel.id)

    return CommonResponse.response_handler(data=RoomRead.model_validate(room))


@router.put("/{room_id}", response_model=CommonResponse[RoomRead], response_model_exclude_unset=True)
@safe_db_operation("UpdateRoom")
def update_room(
    room_id: int,
    update: RoomUpdate,
    user: User = Depends(authorize(ROLE_PUBLISHER, ROLE_ADMIN)),
    db: Session = Depends(get_db),
):
    room = get_room_or_404(db, room_id)
    ensure_owner(room.user_id, user, f"User {user.id} is not authorized to update room {room.id}")

    merged = {field: getattr(room, field) for field in EDITABLE_FIELDS}
    merged.update(update.model_dump(exclude_unset=True))
    errors = validate_entity(RoomCreate, merged)
    if errors:
        raise BadRequest(format_field_errors(errors), errors=errors)

    # store the normalised values (trimmed title etc.)
    cleaned = RoomCreate.model_validate(merged).model_dump()
    room.update(db, **cleaned)
    update_average_cost(db, room.hotel_id)

    return CommonResponse.response_handler(data=RoomRead.model_validate(room))


@router.delete("/{room_id}", response_model=CommonResponse, response_model_exclude_unset=True)
@safe_db_operation("DeleteRoom")
def delete_room(
    room_id: int,
    user: User = Depends(authorize(ROLE_PUBLISHER, ROLE_ADMIN)),
    db: Session = Depends(get_db),
):
    room = get_room_or_404(db, room_id)
    ensure_owner(room.user_id, user, f"User {user.id} is not authorized to delete room {room.id}")

    hotel_id = room.hotel_id
    room.delete(db)
    update_average_cost(db, hotel_id)

    return CommonResponse.response_handler(data={})


@router.post("/{room_id}/photo", response_model=CommonResponse[str], response_model_exclude_unset=True)
@safe_db_operation("RoomPhotoUpload")
def room_photo_upload(
    room_id: int,
    request: Request,
    file: Optional[UploadFile] = File(None),
    user: User = Depends(authorize(ROLE_PUBLISHER, ROLE_ADMIN)),
    db: Session = Depends(get_db),
):
    room = get_room_or_404(db, room_id)
    ensure_owner(room.user_id, user, f"User {user.id} is not authorized to update room {room.id}")

    filename = save_photo(file, room.id, request.app.state.config)
    room.update(db, photo=filename)

    return CommonResponse.response_handler(data=filename)
