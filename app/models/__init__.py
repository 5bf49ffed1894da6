"""
Models module initialization
"""

from .user import User

__all__ = [
    "User",
]
