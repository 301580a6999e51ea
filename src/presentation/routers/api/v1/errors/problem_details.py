"""Problem Details (RFC 9457) body schemas.

These models only describe the JSON body; ErrorResponseBuilder fills them
in. Routes reference ProblemDetails in their OpenAPI error responses.
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """One invalid input field.

    Example:
        {"field": "slug", "code": "invalid_slug",
         "message": "Slug must be lowercase letters, digits and single hyphens"}
    """

    field: str = Field(..., description="Field name, dotted for nested input")
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")


class ProblemDetails(BaseModel):
    """Error body returned by every failing API call.

    ``errors`` is present only for validation failures that can name a
    field. ``trace_id`` matches the X-Trace-Id response header.
    """

    type: str = Field(
        ...,
        description="URI identifying the problem type",
        examples=["https://api.example.com/errors/not_found"],
    )
    title: str = Field(
        ...,
        description="Summary shared by all problems of this type",
        examples=["Resource Not Found"],
    )
    status: int = Field(..., description="HTTP status code", examples=[404])
    detail: str = Field(
        ...,
        description="Explanation of this occurrence",
        examples=["Organisation 'acme' not found"],
    )
    instance: str = Field(
        ...,
        description="Request path that produced the problem",
        examples=["/api/v1/organisations/acme"],
    )
    errors: list[ErrorDetail] | None = Field(
        None,
        description="Invalid fields, for validation failures",
    )
    trace_id: str | None = Field(None, description="Request trace ID")
