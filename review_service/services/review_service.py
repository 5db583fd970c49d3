"""
Review service: create, fetch and list reviews.

Listing builds a conjunction of optional predicates: a filter that was not
supplied contributes nothing to the WHERE clause (it is omitted, not
replaced by a match-everything wildcard).
"""

from __future__ import annotations

import html
import logging
from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from review_service.exceptions import NotFoundError
from review_service.models import Review, ReviewStatus, ReviewType
from review_service.schemas.page import Page
from review_service.schemas.review import ReviewCreate, ReviewResponse
from review_service.services.pagination import PageRequest, build_order_by, paginate
from review_service.services.projection import display_name, to_page, to_review_response

logger = logging.getLogger(__name__)

REVIEW_SORTABLE = {
    "id": Review.id,
    "created_at": Review.created_at,
    "updated_at": Review.updated_at,
    "like_count": Review.like_count,
    "dislike_count": Review.dislike_count,
    "title": Review.title,
    "company_name": Review.company_name,
    "review_type": Review.review_type,
    "status": Review.status,
}


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input only ever matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def review_filters(
    company_name: Optional[str] = None,
    review_type: Optional[ReviewType] = None,
) -> list[Any]:
    """Return the predicates for the supplied filters only."""
    conditions: list[Any] = []
    if company_name is not None and company_name.strip():
        pattern = f"%{_escape_like(company_name.strip())}%"
        conditions.append(Review.company_name.ilike(pattern, escape="\\"))
    if review_type is not None:
        conditions.append(Review.review_type == review_type)
    return conditions


async def create_review(db: AsyncSession, body: ReviewCreate) -> ReviewResponse:
    """Persist a new PENDING review with zeroed vote counters."""
    review = Review(
        review_type=body.review_type,
        title=body.title,
        content_html=html.escape(body.content),
        ip_address=body.ip_address,
        is_employee=bool(body.is_employee),
        dept=body.dept,
        role=body.role,
        company_name=body.company_name,
        website=body.website,
        work_start_date=body.work_start_date,
        work_end_date=body.work_end_date,
        status=ReviewStatus.PENDING,
        reviewer_name=display_name(body.reviewer_name),
        like_count=0,
        dislike_count=0,
    )
    db.add(review)
    await db.commit()
    await db.refresh(review)

    logger.info("Created review %s (type=%s)", review.id, review.review_type.value)
    return to_review_response(review)


async def get_review_by_id(db: AsyncSession, review_id: int) -> ReviewResponse:
    """Plain lock-free read. Raises NotFoundError if the review does not exist."""
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


async def review_exists(db: AsyncSession, review_id: int) -> bool:
    result = await db.execute(select(Review.id).where(Review.id == review_id))
    return result.scalar_one_or_none() is not None


async def get_reviews(
    db: AsyncSession,
    page_request: PageRequest,
    company_name: Optional[str] = None,
    review_type: Optional[ReviewType] = None,
) -> Page[ReviewResponse]:
    """Filtered, sorted and paginated review listing with the total match count."""
    conditions = review_filters(company_name, review_type)
    order_by = build_order_by(page_request.sort, REVIEW_SORTABLE, Review.id)

    stmt = select(Review).where(*conditions).order_by(*order_by)
    count_stmt = select(func.count(Review.id)).where(*conditions)

    rows, total = await paginate(db, stmt, count_stmt, page_request)
    return to_page(rows, total, page_request, to_review_response)
