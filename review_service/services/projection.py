"""
Response projection: ORM rows to external views.

Substitutes the anonymous display name, turns a missing derived count into
0 and flattens relations to plain ids. A comment is never serialised with
its replies embedded.
"""

from __future__ import annotations

import math
from typing import Callable, Iterable, Optional, TypeVar

from review_service.models import Comment, Review
from review_service.schemas.comment import CommentResponse
from review_service.schemas.page import Page
from review_service.schemas.review import ReviewResponse
from review_service.services.pagination import PageRequest

ANONYMOUS = "Anonymous"

S = TypeVar("S")
T = TypeVar("T")


def display_name(name: Optional[str]) -> str:
    """Return the name, or "Anonymous" when it is missing or blank."""
    if name is None or not name.strip():
        return ANONYMOUS
    return name


def to_review_response(review: Review) -> ReviewResponse:
    total_comments = review.total_comments or 0
    return ReviewResponse(
        id=review.id,
        review_type=review.review_type,
        title=review.title,
        content_html=review.content_html,
        ip_address=review.ip_address,
        like_count=review.like_count or 0,
        dislike_count=review.dislike_count or 0,
        has_comment=total_comments > 0,
        status=review.status,
        is_employee=bool(review.is_employee),
        dept=review.dept,
        role=review.role,
        company_name=review.company_name,
        website=review.website,
        work_start_date=review.work_start_date,
        work_end_date=review.work_end_date,
        created_at=review.created_at,
        updated_at=review.updated_at,
        reviewer_name=display_name(review.reviewer_name),
        total_comments=total_comments,
    )


def to_comment_response(comment: Comment) -> CommentResponse:
    total_replies = comment.total_replies or 0
    return CommentResponse(
        id=comment.id,
        content=comment.content,
        like_count=comment.like_count or 0,
        dislike_count=comment.dislike_count or 0,
        review_id=comment.review_id,
        parent_id=comment.parent_id,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
        status=comment.status,
        has_replies=total_replies > 0,
        commenter_name=display_name(comment.commenter_name),
        total_replies=total_replies,
    )


def to_page(
    rows: Iterable[S],
    total: int,
    page_request: PageRequest,
    mapper: Callable[[S], T],
) -> Page[T]:
    """Wrap one projected slice in the page envelope."""
    total_pages = math.ceil(total / page_request.size) if total else 0
    return Page(
        items=[mapper(row) for row in rows],
        total=total,
        page=page_request.page,
        size=page_request.size,
        total_pages=total_pages,
        first=page_request.page == 0,
        last=page_request.page >= total_pages - 1,
    )
