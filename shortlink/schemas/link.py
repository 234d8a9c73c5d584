from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from typing import Optional

MAX_SOURCE_LENGTH = 2048


# Request DTOs
class LinkCreateRequest(BaseModel):
    source: str = Field(..., min_length=1, max_length=MAX_SOURCE_LENGTH)

    @field_validator('source')
    def validate_source(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('source must not be blank')
        # Only allow http/https
        if not (v.startswith('http://') or v.startswith('https://')):
            raise ValueError('Only HTTP and HTTPS URLs are allowed')
        return v


# Response DTOs
class LinkResponse(BaseModel):
    id: int
    source: str
    code: str
    short_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class LinkEnvelope(BaseModel):
    data: LinkResponse


class ErrorEnvelope(BaseModel):
    error: str
