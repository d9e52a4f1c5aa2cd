"""
user.py

Signed-in user. Signatures, audit entries and compliance counts all refer
to users by `id`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class UserRole(Enum):
    WORKER = "Worker"
    SUPERVISOR = "Supervisor"
    ADMIN = "Admin"


@dataclass
class User:
    id: str
    username: str
    email: str
    role: UserRole = UserRole.WORKER
    full_name: Optional[str] = None
    is_active: bool = True

    @property
    def display_name(self) -> str:
        """Name shown in signature lists."""
        return self.full_name or self.username

    def __str__(self) -> str:
        return f"User({self.id}): {self.display_name} <{self.email}> [{self.role.value}]"
