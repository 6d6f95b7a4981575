"""
Generic list-query support for the collection endpoints.

Recognised query-string options:

- ``select=name,average_cost``: fields to return (``id`` is always kept)
- ``sort=-average_cost,name``: see :func:`apply_sorting`
- ``page`` / ``limit``: 1-based page number and page size
- ``search``: case-insensitive substring match over the endpoint's search fields
- ``field=value`` or ``field[op]=value`` with op in gt, gte, lt, lte, in
"""
import logging
import re
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Type

from pydantic import BaseModel as Schema
from sqlalchemy import or_
from sqlalchemy.orm import Query
from sqlalchemy.types import Boolean, DateTime, Float, Integer, String, Text

from hotel_api.utils.errors import BadRequest
from hotel_api.utils.pagination import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    MAX_LIMIT,
    get_pagination_metadata,
)
from hotel_api.utils.sorting import apply_sorting

logger = logging.getLogger(__name__)

RESERVED_PARAMS = {"select", "sort", "page", "limit", "search"}
OPERATORS = {"gt", "gte", "lt", "lte", "in"}
FILTER_KEY = re.compile(r"^(?P<field>\w+)(\[(?P<op>\w+)\])?$")


def _coerce(column, raw: str):
    col_type = column.type
    try:
        if isinstance(col_type, Boolean):
            if raw.lower() in ("true", "1"):
                return True
            if raw.lower() in ("false", "0"):
                return False
            raise ValueError(raw)
        if isinstance(col_type, Integer):
            return int(raw)
        if isinstance(col_type, Float):
            return float(raw)
        if isinstance(col_type, DateTime):
            return datetime.fromisoformat(raw)
    except ValueError:
        raise BadRequest(f"Invalid value '{raw}' for field '{column.key}'")
    return raw


def apply_filters(query: Query, model, params: Dict[str, str]) -> Query:
    """Apply ``field`` / ``field[op]`` filters on scalar columns; others are ignored."""
    columns = model.__table__.columns
    for key, raw in params.items():
        match = FILTER_KEY.match(key)
        if not match or match.group("field") in RESERVED_PARAMS:
            continue
        name, op = match.group("field"), match.group("op")
        if name not in columns or (op and op not in OPERATORS):
            continue
        column = columns[name]
        if not isinstance(column.type, (Boolean, Integer, Float, DateTime, String, Text)):
            continue
        attr = getattr(model, name)

        if op == "in":
            values = [_coerce(column, v.strip()) for v in raw.split(",") if v.strip()]
            query = query.filter(attr.in_(values))
            continue

        value = _coerce(column, raw)
        if op == "gt":
            query = query.filter(attr > value)
        elif op == "gte":
            query = query.filter(attr >= value)
        elif op == "lt":
            query = query.filter(attr < value)
        elif op == "lte":
            query = query.filter(attr <= value)
        else:
            query = query.filter(attr == value)
    return query


def apply_search(query: Query, model, search_fields: Iterable[str], keyword: Optional[str]) -> Query:
    if not keyword:
        return query
    clauses = [getattr(model, f).ilike(f"%{keyword}%") for f in search_fields if f in model.__table__.columns]
    return query.filter(or_(*clauses)) if clauses else query


def _positive_int(params: Dict[str, str], key: str, default: int) -> int:
    raw = params.get(key)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise BadRequest(f"'{key}' must be an integer")
    if value < 1:
        raise BadRequest(f"'{key}' must be greater than 0")
    return value


def select_fields(items: List[Dict[str, Any]], select: Optional[str]) -> List[Dict[str, Any]]:
    if not select:
        return items
    wanted = {f.strip() for f in select.split(",") if f.strip()}
    wanted.add("id")
    return [{k: v for k, v in item.items() if k in wanted} for item in items]


def advanced_results(
    query: Query,
    model,
    params: Dict[str, str],
    schema: Type[Schema],
    search_fields: Iterable[str] = (),
) -> Dict[str, Any]:
    """
    Run ``query`` with filtering, search, sorting, pagination and field selection.

    ``schema`` decides which related resources are embedded in each item.

    Returns:
        dict: ``{"success", "count", "pagination", "data"}``
    """
    params = dict(params)
    query = apply_filters(query, model, params)
    query = apply_search(query, model, search_fields, params.get("search"))

    total = query.count()

    query = apply_sorting(query, model, params.get("sort"))

    page = _positive_int(params, "page", DEFAULT_PAGE)
    limit = min(_positive_int(params, "limit", DEFAULT_LIMIT), MAX_LIMIT)
    skip = (page - 1) * limit
    rows = query.offset(skip).limit(limit).all()

    data = [schema.model_validate(row).model_dump(mode="json") for row in rows]
    data = select_fields(data, params.get("select"))

    logger.debug("%s advanced results: total=%d page=%d limit=%d", model.__tablename__, total, page, limit)

    return {
        "success": True,
        "count": len(data),
        "pagination": get_pagination_metadata(total, skip, limit),
        "data": data,
    }
