"""Pydantic schemas for comment endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from review_service.models.enums import CommentStatus


class CommentCreate(BaseModel):
    """Body for POST /api/v1/reviews/{review_id}/comments."""

    content: str = Field(..., min_length=1, max_length=5000)
    commenter_name: Optional[str] = Field(None, max_length=100)

    @field_validator("content")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Comment content cannot be blank")
        return v


class CommentResponse(BaseModel):
    """
    External view of a comment.
    review_id and parent_id are plain identifiers. Replies are fetched
    through their own paginated endpoint, never nested here.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    content: str
    like_count: int = 0
    dislike_count: int = 0
    review_id: int
    parent_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    status: CommentStatus
    has_replies: bool = False
    commenter_name: str = "Anonymous"
    total_replies: int = 0
