from typing import Any, Dict, List, Type

from pydantic import BaseModel, ValidationError

from hotel_api.api.rooms.models import ROOM_TYPES


def validate_room_types(value: List[str]) -> List[str]:
    if not value:
        raise ValueError("Please add at least one room type")
    invalid = [v for v in value if v not in ROOM_TYPES]
    if invalid:
        raise ValueError(f"Invalid room type(s) {invalid}; allowed: {', '.join(ROOM_TYPES)}")
    return value


def validate_not_blank(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


def validate_latitude(value: float) -> float:
    if not -90 <= value <= 90:
        raise ValueError("Latitude must be between -90 and 90")
    return value


def validate_longitude(value: float) -> float:
    if not -180 <= value <= 180:
        raise ValueError("Longitude must be between -180 and 180")
    return value


def validate_entity(schema: Type[BaseModel], data: Dict[str, Any]) -> Dict[str, str]:
    """
    Validate ``data`` against an entity schema.

    Returns:
        dict: field name -> first error message; empty when the data is valid.
    """
    try:
        schema.model_validate(data)
    except ValidationError as e:
        errors: Dict[str, str] = {}
        for err in e.errors():
            field = ".".join(str(part) for part in err.get("loc", ())) or "__root__"
            errors.setdefault(field, err.get("msg", "Invalid value"))
        return errors
    return {}


def format_field_errors(errors: Dict[str, str]) -> str:
    return ", ".join(f"{field}: {msg}" for field, msg in errors.items())
