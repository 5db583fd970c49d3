"""Typed errors raised by the core operations.

The HTTP layer maps these onto status codes in ``review_service.main``;
services never return ``None`` for a row that does not exist.
"""


class ReviewServiceError(Exception):
    """Base class for errors the core signals to its callers."""

    status_code = 500
    error = "Internal Server Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ReviewServiceError):
    """A referenced review or comment does not exist (or a vote matched no row)."""

    status_code = 404
    error = "Not Found"


class BadRequestError(ReviewServiceError):
    """The request is well-formed but inconsistent, e.g. a reply to another review's comment."""

    status_code = 400
    error = "Bad Request"
