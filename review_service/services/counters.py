"""
Vote counters: like/dislike increments on reviews and comments.

Every increment is one conditional UPDATE:

    UPDATE <table> SET <counter> = <counter> + 1
    WHERE id = :id [AND review_id = :review_id]

The identity match (and, for comments, the review ownership match) and the
increment happen in the same statement, so concurrent voters never lose an
update and no row lock or in-process lock is needed. The affected row count
is the only success signal: 0 means the row does not exist or, for a
comment, belongs to a different review.

After a successful write the row is re-read to build the response. That read
is not atomic with the write, so it may already include other voters'
increments, so the response reports current state.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from review_service.exceptions import NotFoundError
from review_service.models import Comment, Review
from review_service.schemas.comment import CommentResponse
from review_service.schemas.review import ReviewResponse
from review_service.services.projection import to_comment_response, to_review_response

logger = logging.getLogger(__name__)


# ── Reviews ──────────────────────────────────────────────────────────────────


async def _increment_review(
    db: AsyncSession, review_id: int, counter: Any, label: str
) -> ReviewResponse:
    result = await db.execute(
        update(Review)
        .where(Review.id == review_id)
        # updated_at is pinned: a vote is not an edit of the review
        .values({counter: counter + 1, Review.updated_at: Review.updated_at})
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        await db.rollback()
        raise NotFoundError(
            f"Review not found with id: {review_id} to increment {label} count."
        )
    await db.commit()
    logger.debug("Incremented %s count on review %s", label, review_id)

    review = (
        await db.execute(
            select(Review)
            .where(Review.id == review_id)
            .execution_options(populate_existing=True)
        )
    ).scalar_one_or_none()
    if review is None:
        raise NotFoundError(f"Review not found with id: {review_id}")
    return to_review_response(review)


async def increment_review_like(db: AsyncSession, review_id: int) -> ReviewResponse:
    """Add one like to a review. Raises NotFoundError if the review does not exist."""
    return await _increment_review(db, review_id, Review.like_count, "like")


async def increment_review_dislike(db: AsyncSession, review_id: int) -> ReviewResponse:
    """Add one dislike to a review. Raises NotFoundError if the review does not exist."""
    return await _increment_review(db, review_id, Review.dislike_count, "dislike")


# ── Comments ─────────────────────────────────────────────────────────────────


async def _increment_comment(
    db: AsyncSession, review_id: int, comment_id: int, counter: Any, label: str
) -> CommentResponse:
    result = await db.execute(
        update(Comment)
        .where(Comment.id == comment_id, Comment.review_id == review_id)
        .values({counter: counter + 1, Comment.updated_at: Comment.updated_at})
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        await db.rollback()
        raise NotFoundError(
            f"Comment not found with id: {comment_id} for review id: {review_id} "
            f"to increment {label} count."
        )
    await db.commit()
    logger.debug(
        "Incremented %s count on comment %s (review %s)", label, comment_id, review_id
    )

    comment = (
        await db.execute(
            select(Comment)
            .where(Comment.id == comment_id)
            .execution_options(populate_existing=True)
        )
    ).scalar_one_or_none()
    if comment is None:
        raise NotFoundError(f"Comment not found with id: {comment_id}")
    return to_comment_response(comment)


async def increment_comment_like(
    db: AsyncSession, review_id: int, comment_id: int
) -> CommentResponse:
    """
    Add one like to a comment of the given review.
    Raises NotFoundError if the comment does not exist or belongs to another review.
    """
    return await _increment_comment(db, review_id, comment_id, Comment.like_count, "like")


async def increment_comment_dislike(
    db: AsyncSession, review_id: int, comment_id: int
) -> CommentResponse:
    """
    Add one dislike to a comment of the given review.
    Raises NotFoundError if the comment does not exist or belongs to another review.
    """
    return await _increment_comment(
        db, review_id, comment_id, Comment.dislike_count, "dislike"
    )
