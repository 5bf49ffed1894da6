"""
API module initialization
"""

from . import documents, authors, health, operational, home

__all__ = ["documents", "authors", "health", "operational", "home"]
