"""
Services module initialization
"""

from .author import AuthorService
from .document import DocumentService

__all__ = [
    "AuthorService",
    "DocumentService",
]
