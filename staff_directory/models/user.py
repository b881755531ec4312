"""User model definitions."""

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    ADMIN = "ADMIN"
    EMPLOYEE = "EMPLOYEE"


@dataclass(frozen=True)
class User:
    """Represents an account that can log in to the directory."""

    id: str
    username: str
    password_hash: str
    role: Role

    def public(self) -> "AuthUser":
        return AuthUser(id=self.id, username=self.username, role=self.role)


@dataclass(frozen=True)
class AuthUser:
    """Public projection of a user, as embedded in access tokens."""

    id: str
    username: str
    role: Role
