"""Pydantic schemas package."""

from review_service.schemas.comment import CommentCreate, CommentResponse
from review_service.schemas.page import Page
from review_service.schemas.review import ReviewCreate, ReviewResponse

__all__ = [
    "ReviewCreate", "ReviewResponse",
    "CommentCreate", "CommentResponse",
    "Page",
]
