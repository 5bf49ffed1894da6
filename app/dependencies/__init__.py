"""
Dependencies module initialization
"""

from .auth import get_current_user, require_role, require_document_role, require_author_role
from .services import get_document_service, get_author_service

__all__ = [
    "get_current_user",
    "require_role",
    "require_document_role",
    "require_author_role",
    "get_document_service",
    "get_author_service",
]
