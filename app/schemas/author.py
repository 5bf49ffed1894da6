"""
API schemas for Author endpoints
"""

from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, Field

from app.schemas.common import ApiModel, NonBlankStr


class AuthorRequest(ApiModel):
    """Payload for creating or replacing an author"""
    first_name: NonBlankStr = Field(..., min_length=1, max_length=255)
    last_name: NonBlankStr = Field(..., min_length=1, max_length=255)


class AuthorResponse(ApiModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
