"""Comment ORM model and the read-time derived counts of the review aggregate."""

from sqlalchemy import (
    Column, Enum, ForeignKey, Index, Integer, String, Text, TIMESTAMP, func, select,
)
from sqlalchemy.orm import aliased, column_property, relationship

from review_service.database import Base
from review_service.models.enums import CommentStatus
from review_service.models.review import Review


class Comment(Base):
    """
    A comment on a review. A comment with parent_id set is a reply.

    review_id is written once at creation and never reassigned. parent_id is
    a weak back-reference: replies are found through the indexed parent_id
    column, never embedded in the parent, and ownership of the whole tree
    stays with the review.
    """

    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    review_id = Column(
        Integer,
        ForeignKey("reviews.id", ondelete="CASCADE"),
        nullable=False,
    )
    parent_id = Column(
        Integer,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
    )

    content = Column(Text, nullable=False)
    commenter_name = Column(
        String(100), nullable=False, default="Anonymous", server_default="Anonymous"
    )

    like_count = Column(Integer, nullable=False, default=0, server_default="0")
    dislike_count = Column(Integer, nullable=False, default=0, server_default="0")

    status = Column(
        Enum(CommentStatus, name="comment_status", native_enum=False, length=50),
        nullable=False,
        default=CommentStatus.ACTIVE,
        server_default=CommentStatus.ACTIVE.value,
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

    # Relationships
    review = relationship("Review", back_populates="comments")
    parent = relationship("Comment", remote_side=[id])

    __table_args__ = (
        Index("idx_comments_review_id", "review_id"),
        Index("idx_comments_parent_id", "parent_id"),
        Index("idx_comments_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, review_id={self.review_id}, parent_id={self.parent_id})>"


# ── Derived counts ───────────────────────────────────────────────────────────
# Computed per load from the source rows; nothing is ever stored or bumped.

_Reply = aliased(Comment)

Comment.total_replies = column_property(
    select(func.count(_Reply.id))
    .where(_Reply.parent_id == Comment.id)
    .correlate_except(_Reply)
    .scalar_subquery()
)

Review.total_comments = column_property(
    select(func.count(Comment.id))
    .where(Comment.review_id == Review.id)
    .correlate_except(Comment)
    .scalar_subquery()
)
