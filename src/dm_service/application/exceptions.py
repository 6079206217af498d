from __future__ import annotations


class AppError(Exception):
    """Base application error."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail)


class NotFoundError(AppError):
    pass


class ForbiddenError(AppError):
    pass


class UnauthorizedError(AppError):
    pass


class InvalidArgumentError(AppError):
    pass


class DependencyUnavailableError(AppError):
    """Message store or network failure; retried by the next poll."""
