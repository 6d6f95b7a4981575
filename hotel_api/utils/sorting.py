from sqlalchemy.orm import Query
from typing import Optional


def apply_sorting(query: Query, model, sort: Optional[str]) -> Query:
    """
    Applies sorting to the SQLAlchemy query.

    Args:
        query (Query): SQLAlchemy query.
        model: SQLAlchemy model class.
        sort (str): Comma separated field names, a leading '-' sorts descending,
            e.g. "-average_cost,name". Unknown fields are ignored.

    Returns:
        Query: Sorted query.
    """
    default_sort = "-created_at,-id"
    sort = sort or default_sort
    for field in sort.split(","):
        field = field.strip()
        descending = field.startswith("-")
        name = field.lstrip("-+")
        if name in model.__table__.columns:
            column = getattr(model, name)
            query = query.order_by(column.desc() if descending else column.asc())
    # stable order for ties
    if not any(f.strip().lstrip("-+") == "id" for f in sort.split(",")):
        query = query.order_by(model.id.asc())
    return query
