"""
API schemas for Document endpoints
"""

from datetime import datetime
from typing import List, Optional, Set

from pydantic import ConfigDict, Field

from app.schemas.author import AuthorResponse
from app.schemas.common import ApiModel, NonBlankStr


class DocumentRequest(ApiModel):
    """
    Payload for creating a document or fully replacing an existing one.

    ``author_ids`` must name at least one existing author.
    ``reference_doc_ids`` lists documents this one cites and may be omitted.
    """
    title: NonBlankStr = Field(..., min_length=1, max_length=255)
    body: NonBlankStr = Field(..., min_length=1)
    author_ids: Set[int] = Field(..., min_length=1)
    reference_doc_ids: Optional[Set[int]] = None


class DocumentResponse(ApiModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    body: str
    authors: List[AuthorResponse] = []
    reference_doc_ids: List[int] = Field(
        default_factory=list, validation_alias="reference_document_ids", serialization_alias="referenceDocIds"
    )
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
