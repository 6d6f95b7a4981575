import logging
import math
from functools import wraps
from typing import TypeVar, Optional, Generic, Any

from pydantic import BaseModel
from pydantic.config import ConfigDict
from sqlalchemy.exc import SQLAlchemyError, IntegrityError

from hotel_api.utils.errors import BadRequest, InternalError

logger = logging.getLogger(__name__)

T = TypeVar("T")

EARTH_RADIUS_MILES = 3963.0


class CommonResponse(BaseModel, Generic[T]):
    success: bool = False
    data: Optional[T] = None
    count: Optional[int] = None
    pagination: Optional[dict] = None
    error: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def response_handler(
        cls,
        data: Any = None,
        success: bool = True,
        count: Optional[int] = None,
        pagination: Optional[dict] = None,
        error: Optional[str] = None,
    ) -> "CommonResponse[T]":
        # optional keys are left unset so routes drop them from the body
        extra = {"count": count, "pagination": pagination, "error": error}
        return cls(
            success=success,
            data=data,
            **{key: value for key, value in extra.items() if value is not None},
        )


def safe_db_operation(module_name: str = "UnknownModule"):
    """
    Roll the request session back on database errors and re-raise them as
    application errors. Constraint violations become ``BadRequest``.
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            db = kwargs.get("db")
            try:
                return func(*args, **kwargs)
            except IntegrityError as e:
                if db:
                    db.rollback()
                logger.warning("[%s] Integrity error: %s", module_name, e.orig)
                raise BadRequest(f"Duplicate or invalid value: {e.orig}")
            except SQLAlchemyError as e:
                if db:
                    db.rollback()
                logger.error("[%s] SQLAlchemy Error: %s", module_name, e)
                raise InternalError("Database error occurred")
        return wrapper
    return decorator


def central_angle(lat1, lon1, lat2, lon2):
    """Great-circle angle in radians between two points (haversine)."""
    rlat1, rlon1, rlat2, rlon2 = map(math.radians, [lat1, lon1, lat2, lon2])
    dlat = rlat2 - rlat1
    dlon = rlon2 - rlon1
    a = math.sin(dlat/2)**2 + math.cos(rlat1)*math.cos(rlat2)*math.sin(dlon/2)**2
    a = min(1.0, max(0.0, a))
    return 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def haversine_miles(lat1, lon1, lat2, lon2):
    return EARTH_RADIUS_MILES * central_angle(lat1, lon1, lat2, lon2)


def round_up_to_ten(value: float) -> float:
    return math.ceil(value / 10) * 10
