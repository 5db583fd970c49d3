"""Enumerations shared by the ORM models and the API schemas."""

import enum


class ReviewType(str, enum.Enum):
    """Overall tone of a workplace review."""

    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"
    MIXED = "MIXED"


class ReviewStatus(str, enum.Enum):
    """Moderation status. New reviews always start as PENDING."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class CommentStatus(str, enum.Enum):
    """Visibility of a comment. New comments start ACTIVE."""

    ACTIVE = "ACTIVE"
    HIDDEN = "HIDDEN"
