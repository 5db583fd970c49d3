"""Generic page envelope returned by every listing endpoint."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """One slice of a sorted result set plus the total matching count."""

    items: list[T] = Field(default_factory=list)
    total: int = 0
    page: int = 0            # zero-based page index
    size: int = 10
    total_pages: int = 0
    first: bool = True
    last: bool = True
