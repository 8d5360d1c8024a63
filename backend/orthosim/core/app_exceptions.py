"""Application-specific exceptions for consistent error handling."""

from typing import Any, NoReturn

from fastapi import HTTPException, status


class AppError(HTTPException):
    """HTTP error carrying a stable, machine-readable error code."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: dict[str, Any] | list[Any] | None = None,
    ):
        super().__init__(
            status_code=status_code,
            detail={
                "code": code,
                "message": message,
                "details": details,
            },
        )
        self.code = code
        self.message = message
        self.details = details


def raise_app_error(
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | list[Any] | None = None,
) -> NoReturn:
    """Raise an application error with standardized format."""
    raise AppError(status_code=status_code, code=code, message=message, details=details)


def raise_not_found(message: str, code: str = "NOT_FOUND") -> NoReturn:
    raise_app_error(status.HTTP_404_NOT_FOUND, code, message)
