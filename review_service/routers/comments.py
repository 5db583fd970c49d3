"""
Comments router: comments and one-level replies nested under a review.

Endpoints:
  POST /api/v1/reviews/{review_id}/comments?parent_id=  comment or reply
  GET  /api/v1/reviews/{review_id}/comments  top-level comments
  GET  /api/v1/reviews/{review_id}/comments/{comment_id}  single comment
  GET  /api/v1/reviews/{review_id}/comments/{comment_id}/replies
  PUT  /api/v1/reviews/{review_id}/comments/{comment_id}/like
  PUT  /api/v1/reviews/{review_id}/comments/{comment_id}/dislike
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from review_service.dependencies import get_db, page_request
from review_service.schemas.comment import CommentCreate, CommentResponse
from review_service.schemas.page import Page
from review_service.services import comment_service as comments
from review_service.services import counters
from review_service.services.pagination import PageRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/reviews/{review_id}/comments", tags=["comments"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CommentResponse)
async def create_comment(
    body: CommentCreate,
    request: Request,
    response: Response,
    review_id: int = Path(..., ge=1),
    parent_id: Optional[int] = Query(
        default=None, ge=1,
        description="Parent comment id for a reply; omit for a top-level comment",
    ),
    db: AsyncSession = Depends(get_db),
) -> CommentResponse:
    """Create a top-level comment, or a reply when parent_id is given."""
    comment = await comments.create_comment(db, review_id, body, parent_id=parent_id)
    response.headers["Location"] = str(
        request.url_for("get_comment", review_id=review_id, comment_id=comment.id)
    )
    return comment


@router.get("", response_model=Page[CommentResponse])
async def list_comments(
    review_id: int = Path(..., ge=1),
    pagination: PageRequest = Depends(page_request),
    db: AsyncSession = Depends(get_db),
) -> Page[CommentResponse]:
    """Top-level comments of a review, newest first by default."""
    return await comments.get_comments_by_review_id(db, review_id, pagination)


@router.get("/{comment_id}", response_model=CommentResponse)
async def get_comment(
    review_id: int = Path(..., ge=1),
    comment_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> CommentResponse:
    return await comments.get_comment(db, review_id, comment_id)


@router.get("/{comment_id}/replies", response_model=Page[CommentResponse])
async def list_replies(
    review_id: int = Path(..., ge=1),
    comment_id: int = Path(..., ge=1),
    pagination: PageRequest = Depends(page_request),
    db: AsyncSession = Depends(get_db),
) -> Page[CommentResponse]:
    """Direct replies of a comment."""
    return await comments.get_replies_of_comment(db, review_id, comment_id, pagination)


@router.put("/{comment_id}/like", response_model=CommentResponse)
async def like_comment(
    review_id: int = Path(..., ge=1),
    comment_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> CommentResponse:
    """Increment the like counter; 404 if the comment is not part of this review."""
    return await counters.increment_comment_like(db, review_id, comment_id)


@router.put("/{comment_id}/dislike", response_model=CommentResponse)
async def dislike_comment(
    review_id: int = Path(..., ge=1),
    comment_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> CommentResponse:
    """Increment the dislike counter; 404 if the comment is not part of this review."""
    return await counters.increment_comment_dislike(db, review_id, comment_id)
