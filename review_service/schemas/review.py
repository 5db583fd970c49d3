"""Pydantic schemas for review endpoints."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from review_service.models.enums import ReviewStatus, ReviewType


class ReviewCreate(BaseModel):
    """Body for POST /api/v1/reviews."""

    review_type: ReviewType
    title: str = Field(..., min_length=3, max_length=255)
    content: str = Field(..., min_length=10)
    ip_address: Optional[str] = Field(None, max_length=45)
    dept: Optional[str] = Field(None, max_length=100)
    role: Optional[str] = Field(None, max_length=100)
    company_name: Optional[str] = Field(None, max_length=255)
    website: Optional[str] = Field(None, max_length=2048)
    is_employee: Optional[bool] = None   # treated as False when omitted
    work_start_date: Optional[datetime] = None
    work_end_date: Optional[datetime] = None
    reviewer_name: Optional[str] = Field(None, max_length=100)

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("work_start_date", "work_end_date")
    @classmethod
    def past_or_present(cls, v: Optional[datetime]) -> Optional[datetime]:
        if v is None:
            return v
        aware = v if v.tzinfo else v.replace(tzinfo=timezone.utc)
        if aware > datetime.now(timezone.utc):
            raise ValueError("must be in the past or present")
        return v


class ReviewResponse(BaseModel):
    """External view of a review. Counts are always integers, never null."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    review_type: ReviewType
    title: str
    content_html: str
    ip_address: Optional[str] = None
    like_count: int = 0
    dislike_count: int = 0
    has_comment: bool = False
    status: ReviewStatus
    is_employee: bool = False
    dept: Optional[str] = None
    role: Optional[str] = None
    company_name: Optional[str] = None
    website: Optional[str] = None
    work_start_date: Optional[datetime] = None
    work_end_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    reviewer_name: str = "Anonymous"
    total_comments: int = 0
