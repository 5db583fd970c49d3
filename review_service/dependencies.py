"""Shared FastAPI dependencies."""

from __future__ import annotations

from fastapi import Query

from review_service.config import settings
from review_service.database import get_db
from review_service.services.pagination import DEFAULT_SORT, PageRequest


def page_request(
    page: int = Query(default=0, ge=0, description="Zero-based page index"),
    size: int = Query(
        default=settings.default_page_size, ge=1, le=settings.max_page_size
    ),
    sort: list[str] = Query(
        default=list(DEFAULT_SORT),
        description="Sort tokens as field[,asc|desc]; repeat for secondary keys",
    ),
) -> PageRequest:
    """Build a PageRequest from ?page=&size=&sort= query parameters."""
    return PageRequest(page=page, size=size, sort=tuple(sort))


__all__ = ["get_db", "page_request"]
