"""Domain entity: back-office user account."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from app.domain.identifiers import new_id


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    STANDARD = "STANDARD"


@dataclass
class User:
    """An account that can sign in. ``password_hash`` is never plaintext."""

    email: str
    password_hash: str
    name: str
    surname: str
    role: UserRole = UserRole.STANDARD
    active: bool = True
    last_access_at: datetime | None = None
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def touch_last_access(self) -> None:
        self.last_access_at = datetime.now(timezone.utc)
