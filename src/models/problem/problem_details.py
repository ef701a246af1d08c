from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

SERVER_ERROR_TYPE = "https://tools.ietf.org/html/rfc9110#section-15.6.1"
BAD_REQUEST_TYPE = "https://tools.ietf.org/html/rfc9110#section-15.5.1"


class ProblemDetails(BaseModel):
    """Machine-readable error body (RFC 9457)."""

    type: str = Field(default=SERVER_ERROR_TYPE, description="Problem type URI")
    title: str = Field(
        default="An error occurred while processing your request.",
        description="Short summary of the problem type",
    )
    status: int = Field(default=500, description="HTTP status code")
    detail: Optional[str] = Field(default=None, description="Explanation of this occurrence")
    instance: Optional[str] = Field(default=None, description="URI of the failing request")
    errors: Optional[Dict[str, Any]] = Field(default=None, description="Field validation errors")
