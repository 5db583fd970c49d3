"""Review ORM model: a workplace review and the root of its comment aggregate."""

from sqlalchemy import (
    Boolean, Column, Enum, Index, Integer, String, Text, TIMESTAMP, false, func,
)
from sqlalchemy.orm import relationship

from review_service.database import Base
from review_service.models.enums import ReviewStatus, ReviewType


class Review(Base):
    """
    A review of a workplace submitted by an (optionally anonymous) reviewer.

    like_count / dislike_count are only ever changed by the single-statement
    increments in services.counters. total_comments is not a column: it is a
    correlated COUNT attached in models.comment and evaluated on every load.
    """

    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, autoincrement=True)
    review_type = Column(
        Enum(ReviewType, name="review_type", native_enum=False, length=20),
        nullable=False,
    )
    title = Column(String(255), nullable=False)
    content_html = Column(Text, nullable=False)
    ip_address = Column(String(45), nullable=True)

    like_count = Column(Integer, nullable=False, default=0, server_default="0")
    dislike_count = Column(Integer, nullable=False, default=0, server_default="0")

    status = Column(
        Enum(ReviewStatus, name="review_status", native_enum=False, length=50),
        nullable=False,
        default=ReviewStatus.PENDING,
        server_default=ReviewStatus.PENDING.value,
    )

    # Reviewer's employment context
    is_employee = Column(Boolean, nullable=False, default=False, server_default=false())
    dept = Column(String(100), nullable=True)
    role = Column(String(100), nullable=True)
    company_name = Column(String(255), nullable=True)
    website = Column(String(2048), nullable=True)
    work_start_date = Column(TIMESTAMP(timezone=True), nullable=True)
    work_end_date = Column(TIMESTAMP(timezone=True), nullable=True)

    reviewer_name = Column(
        String(100), nullable=False, default="Anonymous", server_default="Anonymous"
    )

    created_at = Column(
        TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    # Relationships: the review exclusively owns every comment in its tree
    comments = relationship(
        "Comment",
        back_populates="review",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("idx_reviews_status", "status"),
        Index("idx_reviews_review_type", "review_type"),
        Index("idx_reviews_company_name", "company_name"),
        Index("idx_reviews_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Review(id={self.id}, company_name={self.company_name!r}, status={self.status})>"
