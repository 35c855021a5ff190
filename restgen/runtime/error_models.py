"""
Error response models for generated services.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .errors import BadRequestError


class ErrorResponse(BaseModel):
    """Standard error response model.

    The body of a bad request response lists every problem found in the request.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": "Bad request",
                "details": [
                    {
                        "type": "missing_param",
                        "loc": ["accountID"],
                        "msg": "missing required parameter 'accountID'",
                    }
                ],
            }
        }
    )

    error: str = Field(
        ...,
        description="Human-readable error message describing what went wrong"
    )

    details: Optional[List[Dict[str, Any]]] = Field(
        None,
        description="One entry per problem found in the request"
    )

    def model_dump_json(self, **kwargs):
        """Exclude unset optional fields by default for cleaner responses."""
        kwargs.setdefault("exclude_none", True)
        return super().model_dump_json(**kwargs)

    @classmethod
    def from_bad_request(cls, error: BadRequestError, message: str = "Bad request") -> "ErrorResponse":
        """Create an ErrorResponse from a rejected request."""
        return cls(error=message, details=error.details())
