"""Lenient parsing of list query parameters and page metadata."""

from __future__ import annotations

import math
from typing import Any

from .models import Pagination

# Largest offset every supported store accepts as a bound parameter.
MAX_OFFSET = 2**31 - 1


def _to_int(raw: Any) -> int | None:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        return None


def parse_limit(raw: Any, default: int = 10, maximum: int = 100) -> int:
    """Missing, malformed, zero or negative values fall back to ``default``."""
    value = _to_int(raw)
    if value is None or value <= 0:
        return default
    return min(value, maximum)


def parse_offset(raw: Any, maximum: int = MAX_OFFSET) -> int:
    value = _to_int(raw)
    if value is None or value < 0:
        return 0
    return min(value, maximum)


def build_pagination(total: int, limit: int, offset: int) -> Pagination:
    return Pagination(
        total=total,
        limit=limit,
        offset=offset,
        current_page=offset // limit + 1,
        total_pages=math.ceil(total / limit),
        has_more=offset + limit < total,
    )


__all__ = ["MAX_OFFSET", "build_pagination", "parse_limit", "parse_offset"]
