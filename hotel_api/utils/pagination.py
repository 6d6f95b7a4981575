from typing import Dict

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 25
MAX_LIMIT = 100


def get_pagination_metadata(total: int, skip: int, limit: int) -> Dict:
    """
    Calculate and return pagination metadata.

    Args:
        total (int): Total number of records.
        skip (int): Number of records to skip.
        limit (int): Maximum number of records to return.

    Returns:
        dict: Pagination metadata, with ``next``/``prev`` page links when they exist.
    """
    current_page = (skip // limit) + 1
    total_pages = (total + limit - 1) // limit  # ceiling division
    has_next = skip + limit < total
    has_prev = skip > 0

    pagination = {
        "total": total,
        "page": current_page,
        "limit": limit,
        "pages": total_pages,
        "has_next": has_next,
        "has_prev": has_prev
    }
    if has_next:
        pagination["next"] = {"page": current_page + 1, "limit": limit}
    if has_prev:
        pagination["prev"] = {"page": current_page - 1, "limit": limit}
    return pagination
