"""
Authenticated principal
"""

from typing import List, Optional
from pydantic import BaseModel, EmailStr


class User(BaseModel):
    """Principal resolved from a JWT or the basic-auth service account"""

    id: str
    email: Optional[EmailStr] = None
    roles: List[str] = []

    def has_role(self, role: str) -> bool:
        """Roles match case-insensitively, with or without a ``ROLE_`` prefix"""
        wanted = role.upper().removeprefix("ROLE_")
        return any(r.upper().removeprefix("ROLE_") == wanted for r in self.roles)
