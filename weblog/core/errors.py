"""HTTP error taxonomy.

Every error the API reports is an ``HTTPException`` subclass, so routes raise
them exactly like any other HTTP error and a single handler renders the body
as ``{"message": ...}`` or, for field-level validation, ``{"errors": [...]}``.
"""
from typing import Iterable, List, Optional, Union

from fastapi import HTTPException, status


class ValidationFailed(HTTPException):
    def __init__(self, detail: Union[str, List[dict]] = "Invalid request"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class Unauthenticated(HTTPException):
    def __init__(self, detail: str = "Not authorized, token failed or expired"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class Forbidden(HTTPException):
    def __init__(self, detail: str = "Not authorized to perform this action"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFound(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class UpstreamFailure(HTTPException):
    def __init__(self, detail: str = "Server error"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


def format_errors(errors: Iterable[dict]) -> List[dict]:
    """Flatten pydantic error dicts to ``{"field", "message"}`` pairs."""
    formatted = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query", "form")]
        message = error.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        formatted.append({"field": ".".join(loc) or None, "message": message})
    return formatted


def field_error(field: Optional[str], message: str) -> ValidationFailed:
    return ValidationFailed([{"field": field, "message": message}])
