"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Core attributes describing an application user."""

    id: str | None
    email: str
    first_name: str
    last_name: str
    is_active: bool = True
    created_at: datetime | None = None

    @property
    def full_name(self) -> str:
        """Return ``"first last"`` as shown in mentions and emails."""

        return f"{self.first_name} {self.last_name}".strip()
