"""
Application error types.
Every AppError is rendered by the handler in main.py as {"error": ..., "details": ...}.
"""
from typing import Any, Optional


class AppError(Exception):
    status_code: int = 500

    def __init__(self, error: str, details: Optional[Any] = None, status_code: Optional[int] = None):
        super().__init__(error)
        self.error = error
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        body = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body


class BadRequestError(AppError):
    status_code = 400


class UpstreamServiceError(AppError):
    """An external API (maps or LLM) failed or answered with an error."""
    status_code = 500


class PersistenceError(AppError):
    status_code = 500
