"""
Repositories module initialization
"""

from .author import AuthorRepository
from .document import DocumentRepository

__all__ = [
    "AuthorRepository",
    "DocumentRepository",
]
