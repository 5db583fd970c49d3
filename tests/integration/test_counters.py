"""Like/dislike counters: atomic increments and ownership checks."""

import asyncio

import pytest

from factories import comment_body, review_body
from review_service.exceptions import NotFoundError
from review_service.services import comment_service, counters, review_service


class TestReviewCounters:
    async def test_like_and_dislike_increment_independently(self, db):
        review = await review_service.create_review(db, review_body())

        liked = await counters.increment_review_like(db, review.id)
        assert liked.like_count == 1
        assert liked.dislike_count == 0

        disliked = await counters.increment_review_dislike(db, review.id)
        assert disliked.like_count == 1
        assert disliked.dislike_count == 1

    async def test_missing_review_raises_not_found(self, db):
        with pytest.raises(NotFoundError, match="to increment like count"):
            await counters.increment_review_like(db, 999)

    async def test_session_usable_after_not_found(self, db):
        review = await review_service.create_review(db, review_body())
        with pytest.raises(NotFoundError):
            await counters.increment_review_dislike(db, 999)

        assert (await counters.increment_review_dislike(db, review.id)).dislike_count == 1

    async def test_vote_does_not_touch_updated_at(self, db):
        review = await review_service.create_review(db, review_body())
        liked = await counters.increment_review_like(db, review.id)
        assert liked.updated_at == review.updated_at

    async def test_concurrent_likes_are_not_lost(self, db, session_factory):
        review = await review_service.create_review(db, review_body())
        voters = 20

        async def vote():
            async with session_factory() as session:
                await counters.increment_review_like(session, review.id)

        await asyncio.gather(*(vote() for _ in range(voters)))

        fetched = await review_service.get_review_by_id(db, review.id)
        assert fetched.like_count == voters
        assert fetched.dislike_count == 0


class TestCommentCounters:
    async def _comment(self, db):
        review = await review_service.create_review(db, review_body())
        comment = await comment_service.create_comment(db, review.id, comment_body())
        return review, comment

    async def test_like_and_dislike(self, db):
        review, comment = await self._comment(db)

        liked = await counters.increment_comment_like(db, review.id, comment.id)
        assert liked.like_count == 1

        disliked = await counters.increment_comment_dislike(db, review.id, comment.id)
        assert disliked.like_count == 1
        assert disliked.dislike_count == 1

    async def test_missing_comment_raises_not_found(self, db):
        review, _ = await self._comment(db)
        with pytest.raises(NotFoundError, match="Comment not found with id: 999"):
            await counters.increment_comment_like(db, review.id, 999)

    async def test_comment_of_other_review_is_not_incremented(self, db):
        review, comment = await self._comment(db)
        other = await review_service.create_review(db, review_body())

        with pytest.raises(NotFoundError, match=f"for review id: {other.id}"):
            await counters.increment_comment_like(db, other.id, comment.id)

        fetched = await comment_service.get_comment(db, review.id, comment.id)
        assert fetched.like_count == 0

    async def test_vote_does_not_touch_updated_at(self, db):
        review, comment = await self._comment(db)
        disliked = await counters.increment_comment_dislike(db, review.id, comment.id)
        assert disliked.updated_at == comment.updated_at

    async def test_concurrent_dislikes_are_not_lost(self, db, session_factory):
        review, comment = await self._comment(db)
        voters = 20

        async def vote():
            async with session_factory() as session:
                await counters.increment_comment_dislike(session, review.id, comment.id)

        await asyncio.gather(*(vote() for _ in range(voters)))

        fetched = await comment_service.get_comment(db, review.id, comment.id)
        assert fetched.dislike_count == voters
