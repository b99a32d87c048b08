"""Core schema definitions for standardized API responses.

Progress endpoints answer with a `success` flag plus either `data`,
a human-readable `message`, or both. Errors are rendered by the handlers
in `app.core.exceptions` using `ErrorResponse`.
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Standard API response envelope.

    Example success response:
        {
            "success": true,
            "data": { "3f9c...": 25 },
            "message": null
        }
    """

    success: bool = True
    data: T | None = None
    message: str | None = None


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str = Field(..., description="Error code for programmatic handling")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | None = Field(None, description="Additional error context")


class ErrorResponse(BaseModel):
    """Standard error response format."""

    success: bool = False
    error: ErrorDetail


def success_response(data: T | None = None, message: str | None = None) -> ApiResponse[T]:
    """Create a successful API response.

    Args:
        data: The response data.
        message: Optional acknowledgement text.

    Returns:
        ApiResponse with success=True.
    """
    return ApiResponse(success=True, data=data, message=message)
