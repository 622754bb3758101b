"""Application error type raised by services and rendered by the global handler."""

from enum import Enum
from typing import NoReturn


class AppErrorCode(str, Enum):
    """Machine-readable codes clients can branch on."""

    INVALID_ACCESS_TOKEN = "InvalidAccessToken"


class AppError(Exception):
    """A business-rule failure carrying the HTTP status to respond with."""

    def __init__(self, status_code: int, message: str, error_code: AppErrorCode | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.error_code = error_code

    def to_dict(self) -> dict:
        """Body for the JSON error response."""
        body: dict = {"detail": self.message}
        if self.error_code is not None:
            body["errorCode"] = self.error_code.value
        return body


def app_assert(condition: object, status_code: int, message: str, error_code: AppErrorCode | None = None) -> None:
    """Raise :class:`AppError` unless ``condition`` is truthy."""
    if not condition:
        raise AppError(status_code, message, error_code)


def app_fail(status_code: int, message: str, error_code: AppErrorCode | None = None) -> NoReturn:
    """Raise :class:`AppError` unconditionally."""
    raise AppError(status_code, message, error_code)
