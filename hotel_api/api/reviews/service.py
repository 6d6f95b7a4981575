import logging

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hotel_api.api.hotels.models import Hotel
from hotel_api.api.reviews.models import Review

logger = logging.getLogger(__name__)


def update_average_rating(db: Session, hotel_id: int):
    """Recompute ``Hotel.average_rating``; cleared when the last review goes away."""
    try:
        average = db.query(func.avg(Review.rating)).filter(Review.hotel_id == hotel_id).scalar()
        average_rating = round(float(average), 1) if average is not None else None
        db.query(Hotel).filter(Hotel.id == hotel_id).update(
            {Hotel.average_rating: average_rating}, synchronize_session=False
        )
        db.commit()
        return average_rating
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Updating average rating for hotel %s failed: %s", hotel_id, e)
        return None
