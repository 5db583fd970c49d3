"""
Comment service: threaded comments on a review.

A comment is either top-level (parent_id is NULL) or a reply to another
comment of the same review. The parent/review match is checked explicitly
before insert; nothing on the parent or the review is updated when a comment
is added, because reply and comment totals are counted on read.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from review_service.exceptions import BadRequestError, NotFoundError
from review_service.models import Comment, CommentStatus
from review_service.schemas.comment import CommentCreate, CommentResponse
from review_service.schemas.page import Page
from review_service.services.pagination import PageRequest, build_order_by, paginate
from review_service.services.projection import display_name, to_comment_response, to_page
from review_service.services.review_service import review_exists

logger = logging.getLogger(__name__)

COMMENT_SORTABLE = {
    "id": Comment.id,
    "created_at": Comment.created_at,
    "updated_at": Comment.updated_at,
    "like_count": Comment.like_count,
    "dislike_count": Comment.dislike_count,
}


async def _require_review(db: AsyncSession, review_id: int) -> None:
    if not await review_exists(db, review_id):
        raise NotFoundError(f"Review not found with id: {review_id}")


async def create_comment(
    db: AsyncSession,
    review_id: int,
    body: CommentCreate,
    parent_id: Optional[int] = None,
) -> CommentResponse:
    """
    Add a comment to a review, or a reply when parent_id is given.

    Raises NotFoundError if the review or the parent comment does not exist,
    BadRequestError if the parent belongs to a different review.
    """
    if not await review_exists(db, review_id):
        raise NotFoundError(
            f"Review not found with id: {review_id} to add comment."
        )

    if parent_id is not None:
        parent_review_id = (
            await db.execute(select(Comment.review_id).where(Comment.id == parent_id))
        ).scalar_one_or_none()
        if parent_review_id is None:
            raise NotFoundError(f"Parent comment not found with id: {parent_id}")
        if parent_review_id != review_id:
            raise BadRequestError(
                f"Parent comment with id {parent_id} does not belong to review "
                f"with id {review_id}"
            )

    comment = Comment(
        review_id=review_id,
        parent_id=parent_id,
        content=body.content,
        commenter_name=display_name(body.commenter_name),
        like_count=0,
        dislike_count=0,
        status=CommentStatus.ACTIVE,
    )
    db.add(comment)
    await db.commit()
    await db.refresh(comment)

    logger.info(
        "Created comment %s on review %s (parent=%s)", comment.id, review_id, parent_id
    )
    return to_comment_response(comment)


async def get_comment(
    db: AsyncSession, review_id: int, comment_id: int
) -> CommentResponse:
    """Fetch one comment of a review. Raises NotFoundError if there is no such pair."""
    comment = (
        await db.execute(
            select(Comment)
            .where(Comment.id == comment_id, Comment.review_id == review_id)
            .execution_options(populate_existing=True)
        )
    ).scalar_one_or_none()
    if comment is None:
        raise NotFoundError(
            f"Comment not found with id: {comment_id} for review id: {review_id}"
        )
    return to_comment_response(comment)


async def get_comments_by_review_id(
    db: AsyncSession, review_id: int, page_request: PageRequest
) -> Page[CommentResponse]:
    """Top-level comments of a review only; replies are listed per parent."""
    await _require_review(db, review_id)

    conditions = [Comment.review_id == review_id, Comment.parent_id.is_(None)]
    order_by = build_order_by(page_request.sort, COMMENT_SORTABLE, Comment.id)

    stmt = select(Comment).where(*conditions).order_by(*order_by)
    count_stmt = select(func.count(Comment.id)).where(*conditions)

    rows, total = await paginate(db, stmt, count_stmt, page_request)
    return to_page(rows, total, page_request, to_comment_response)


async def get_replies_of_comment(
    db: AsyncSession, review_id: int, comment_id: int, page_request: PageRequest
) -> Page[CommentResponse]:
    """
    Direct replies of a comment.

    The comment must exist *and* belong to review_id. A comment reached
    through another review's URL is reported as not found, matching the
    ownership check the vote counters apply.
    """
    await _require_review(db, review_id)

    owner = (
        await db.execute(select(Comment.review_id).where(Comment.id == comment_id))
    ).scalar_one_or_none()
    if owner is None or owner != review_id:
        raise NotFoundError(f"Comment not found with id: {comment_id}")

    conditions = [Comment.parent_id == comment_id]
    order_by = build_order_by(page_request.sort, COMMENT_SORTABLE, Comment.id)

    stmt = select(Comment).where(*conditions).order_by(*order_by)
    count_stmt = select(func.count(Comment.id)).where(*conditions)

    rows, total = await paginate(db, stmt, count_stmt, page_request)
    return to_page(rows, total, page_request, to_comment_response)
