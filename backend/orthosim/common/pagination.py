"""Offset pagination helpers for history endpoints."""

from __future__ import annotations

from fastapi import Query
from pydantic import BaseModel, Field

DEFAULT_LIMIT = 50
MAX_LIMIT = 100


class OffsetPaginationParams(BaseModel):
    """limit/offset window over a newest-first listing."""

    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)
    offset: int = Field(default=0, ge=0)


def offset_pagination_params(
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT, description="Items per page"),
    offset: int = Query(0, ge=0, description="Items to skip"),
) -> OffsetPaginationParams:
    """Dependency for limit/offset pagination."""
    return OffsetPaginationParams(limit=limit, offset=offset)
