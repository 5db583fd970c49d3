"""
Reviews router.

Endpoints:
  POST /api/v1/reviews  submit a review (201 + Location)
  GET  /api/v1/reviews  filtered, paginated listing
  GET  /api/v1/reviews/{review_id}  single review
  PUT  /api/v1/reviews/{review_id}/like  +1 like
  PUT  /api/v1/reviews/{review_id}/dislike  +1 dislike
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from review_service.dependencies import get_db, page_request
from review_service.models import ReviewType
from review_service.schemas.page import Page
from review_service.schemas.review import ReviewCreate, ReviewResponse
from review_service.services import counters
from review_service.services import review_service as reviews
from review_service.services.pagination import PageRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/reviews", tags=["reviews"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ReviewResponse)
async def create_review(
    body: ReviewCreate,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> ReviewResponse:
    """Create a review in PENDING status."""
    review = await reviews.create_review(db, body)
    response.headers["Location"] = str(request.url_for("get_review", review_id=review.id))
    return review


@router.get("", response_model=Page[ReviewResponse])
async def list_reviews(
    company_name: Optional[str] = Query(
        default=None, max_length=255,
        description="Case-insensitive partial match on company name",
    ),
    review_type: Optional[ReviewType] = Query(default=None),
    pagination: PageRequest = Depends(page_request),
    db: AsyncSession = Depends(get_db),
) -> Page[ReviewResponse]:
    """Paginated reviews, optionally filtered by company name and review type."""
    return await reviews.get_reviews(
        db, pagination, company_name=company_name, review_type=review_type
    )


@router.get("/{review_id}", response_model=ReviewResponse)
async def get_review(
    review_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> ReviewResponse:
    return await reviews.get_review_by_id(db, review_id)


@router.put("/{review_id}/like", response_model=ReviewResponse)
async def like_review(
    review_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> ReviewResponse:
    """Increment the like counter by one."""
    return await counters.increment_review_like(db, review_id)


@router.put("/{review_id}/dislike", response_model=ReviewResponse)
async def dislike_review(
    review_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db),
) -> ReviewResponse:
    """Increment the dislike counter by one."""
    return await counters.increment_review_dislike(db, review_id)
