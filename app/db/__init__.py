"""
Database module initialization
"""

from .base import Base
from .models import Author, Document, document_authors, document_references
from .session import db, connect_to_database, close_database_connection, get_session, ping_database

__all__ = [
    "Base",
    "Author",
    "Document",
    "document_authors",
    "document_references",
    "db",
    "connect_to_database",
    "close_database_connection",
    "get_session",
    "ping_database",
]
