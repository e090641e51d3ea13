import math
from datetime import date, datetime, time
from typing import Optional

from aqua_erp.logger_config import logger


def apply_date_range(query, column, start_date: Optional[date] = None, end_date: Optional[date] = None):
    """Restrict `column` to the inclusive [start_date, end_date] calendar range."""
    if start_date:
        query = query.filter(column >= datetime.combine(start_date, time.min))
        logger.debug(f"Filtering by start_date: {start_date}")

    if end_date:
        query = query.filter(column <= datetime.combine(end_date, time.max))
        logger.debug(f"Filtering by end_date: {end_date}")

    return query


def contains(column, value: str):
    return column.ilike(f"%{value}%")


def page_to_offset(page: int, limit: int) -> int:
    return (page - 1) * limit


def build_pagination(page: int, limit: int, total_count: int) -> dict:
    total_pages = math.ceil(total_count / limit) if limit else 0
    return {
        "current_page": page,
        "page_size": limit,
        "total_count": total_count,
        "total_pages": total_pages,
        "has_next_page": page < total_pages,
        "has_previous_page": page > 1,
    }
