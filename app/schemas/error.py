from datetime import datetime
from typing import Dict

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body returned for every failed request."""
    message: str
    status: int
    error: str
    timestamp: datetime = Field(default_factory=datetime.now)


class ValidationErrorResponse(ErrorResponse):
    """Error body for request payloads that fail schema validation."""
    field_errors: Dict[str, str] = Field(default_factory=dict, serialization_alias="fieldErrors")
