import logging

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hotel_api.api.hotels.models import Hotel
from hotel_api.api.rooms.models import Room
from hotel_api.utils.helper import round_up_to_ten

logger = logging.getLogger(__name__)


def update_average_cost(db: Session, hotel_id: int):
    """
    Recompute ``Hotel.average_cost`` from the hotel's rooms, rounded up to the
    next multiple of 10. Skipped when the hotel has no rooms left. Failures are
    logged and swallowed so the room write that triggered this still succeeds.
    """
    try:
        average = db.query(func.avg(Room.cost)).filter(Room.hotel_id == hotel_id).scalar()
        if average is None:
            logger.info("Hotel %s has no rooms; average cost left unchanged", hotel_id)
            return None

        average_cost = round_up_to_ten(float(average))
        db.query(Hotel).filter(Hotel.id == hotel_id).update(
            {Hotel.average_cost: average_cost}, synchronize_session=False
        )
        db.commit()
        return average_cost
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Updating average cost for hotel %s failed: %s", hotel_id, e)
        return None
