"""Error body returned by every failing endpoint."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class FieldErrorSchema(BaseModel):
    field: str = Field(..., description="Dotted location of the bad value, e.g. body.amount")
    message: str


class ErrorResponseSchema(BaseModel):
    """
    Same shape for rule violations, store outages and malformed requests.

    `fields` is only set for 422 responses, one entry per invalid value.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "error": "BILL_ALREADY_PAID",
                    "message": "Bill 5f0c9d2e has already been paid this month",
                    "request_id": "9b2f4e0c1d8a4c55",
                }
            ]
        }
    )

    error: str = Field(..., description="Stable error code", examples=["BILL_NOT_FOUND"])
    message: str = Field(..., description="Message safe to show to the user")
    request_id: Optional[str] = Field(None, description="X-Request-ID of the failed request")
    fields: Optional[list[FieldErrorSchema]] = None
