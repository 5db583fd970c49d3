"""Request builders shared by the service and API tests."""

from review_service.models import ReviewType
from review_service.schemas.comment import CommentCreate
from review_service.schemas.review import ReviewCreate


def review_body(**overrides) -> ReviewCreate:
    defaults = {
        "review_type": ReviewType.POSITIVE,
        "title": "Great place to work",
        "content": "The company offers great benefits and a supportive team.",
        "company_name": "Acme Corp",
    }
    defaults.update(overrides)
    return ReviewCreate(**defaults)


def review_json(**overrides) -> dict:
    return review_body(**overrides).model_dump(mode="json", exclude_none=True)


def comment_body(content="Thanks for the detailed review!", **overrides) -> CommentCreate:
    return CommentCreate(content=content, **overrides)
