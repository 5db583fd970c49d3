"""Threaded comments: creation rules, listings and reply counts."""

import pytest

from factories import comment_body, review_body
from review_service.exceptions import BadRequestError, NotFoundError
from review_service.models import CommentStatus
from review_service.services import comment_service, review_service
from review_service.services.pagination import PageRequest


class TestCreateComment:
    async def _review(self, db, **overrides):
        return await review_service.create_review(db, review_body(**overrides))

    async def test_top_level_comment(self, db):
        review = await self._review(db)
        comment = await comment_service.create_comment(
            db, review.id, comment_body("hi", commenter_name="Sam")
        )

        assert comment.review_id == review.id
        assert comment.parent_id is None
        assert comment.status == CommentStatus.ACTIVE
        assert comment.like_count == 0
        assert comment.dislike_count == 0
        assert comment.commenter_name == "Sam"
        assert comment.total_replies == 0
        assert comment.has_replies is False

    async def test_reply_updates_parent_reply_count(self, db):
        review = await self._review(db)
        parent = await comment_service.create_comment(db, review.id, comment_body("hi"))
        reply = await comment_service.create_comment(
            db, review.id, comment_body("reply"), parent_id=parent.id
        )

        assert reply.parent_id == parent.id
        refreshed = await comment_service.get_comment(db, review.id, parent.id)
        assert refreshed.total_replies == 1
        assert refreshed.has_replies is True

    async def test_commenter_name_defaults_to_anonymous(self, db):
        review = await self._review(db)
        comment = await comment_service.create_comment(db, review.id, comment_body())
        assert comment.commenter_name == "Anonymous"

    async def test_missing_review_raises_not_found(self, db):
        with pytest.raises(NotFoundError, match="to add comment"):
            await comment_service.create_comment(db, 999, comment_body())

    async def test_missing_parent_raises_not_found(self, db):
        review = await self._review(db)
        with pytest.raises(NotFoundError, match="Parent comment not found"):
            await comment_service.create_comment(
                db, review.id, comment_body(), parent_id=999
            )

    async def test_parent_from_other_review_is_rejected(self, db):
        review_a = await self._review(db)
        review_b = await self._review(db)
        foreign = await comment_service.create_comment(db, review_b.id, comment_body())

        with pytest.raises(BadRequestError, match="does not belong to review"):
            await comment_service.create_comment(
                db, review_a.id, comment_body(), parent_id=foreign.id
            )

        page = await comment_service.get_comments_by_review_id(db, review_a.id, PageRequest())
        assert page.total == 0


class TestGetComment:
    async def test_comment_of_another_review_is_not_found(self, db):
        review_a = await review_service.create_review(db, review_body())
        review_b = await review_service.create_review(db, review_body())
        comment = await comment_service.create_comment(db, review_b.id, comment_body())

        with pytest.raises(NotFoundError):
            await comment_service.get_comment(db, review_a.id, comment.id)


class TestListComments:
    async def test_only_top_level_comments_listed(self, db):
        review = await review_service.create_review(db, review_body())
        top_1 = await comment_service.create_comment(db, review.id, comment_body("one"))
        top_2 = await comment_service.create_comment(db, review.id, comment_body("two"))
        await comment_service.create_comment(
            db, review.id, comment_body("reply"), parent_id=top_1.id
        )

        page = await comment_service.get_comments_by_review_id(db, review.id, PageRequest())
        assert page.total == 2
        assert [c.id for c in page.items] == [top_2.id, top_1.id]
        by_id = {c.id: c for c in page.items}
        assert by_id[top_1.id].total_replies == 1
        assert by_id[top_2.id].has_replies is False

    async def test_unknown_review_raises_not_found(self, db):
        with pytest.raises(NotFoundError):
            await comment_service.get_comments_by_review_id(db, 999, PageRequest())

    async def test_replies_listed_per_parent(self, db):
        review = await review_service.create_review(db, review_body())
        parent = await comment_service.create_comment(db, review.id, comment_body("top"))
        for i in range(3):
            await comment_service.create_comment(
                db, review.id, comment_body(f"reply {i}"), parent_id=parent.id
            )

        page = await comment_service.get_replies_of_comment(
            db, review.id, parent.id, PageRequest(size=2, sort=("id,asc",))
        )
        assert page.total == 3
        assert page.total_pages == 2
        assert [c.content for c in page.items] == ["reply 0", "reply 1"]
        assert all(c.parent_id == parent.id for c in page.items)

    async def test_replies_of_unknown_comment_raise_not_found(self, db):
        review = await review_service.create_review(db, review_body())
        with pytest.raises(NotFoundError):
            await comment_service.get_replies_of_comment(db, review.id, 999, PageRequest())

    async def test_replies_through_wrong_review_raise_not_found(self, db):
        review_a = await review_service.create_review(db, review_body())
        review_b = await review_service.create_review(db, review_body())
        comment = await comment_service.create_comment(db, review_b.id, comment_body())

        with pytest.raises(NotFoundError):
            await comment_service.get_replies_of_comment(
                db, review_a.id, comment.id, PageRequest()
            )
