"""SQLAlchemy ORM models package."""

from review_service.database import Base
from review_service.models.enums import CommentStatus, ReviewStatus, ReviewType
from review_service.models.review import Review
from review_service.models.comment import Comment

__all__ = [
    "Base", "Review", "Comment",
    "ReviewType", "ReviewStatus", "CommentStatus",
]
