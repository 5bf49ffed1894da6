"""
API schemas
"""

from .common import ApiModel, PageResponse
from .author import AuthorRequest, AuthorResponse
from .document import DocumentRequest, DocumentResponse

__all__ = [
    "ApiModel",
    "PageResponse",
    "AuthorRequest",
    "AuthorResponse",
    "DocumentRequest",
    "DocumentResponse",
]
