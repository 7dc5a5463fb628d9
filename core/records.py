# core/records.py
"""
Plain records held in the application state.

Persisted JSON keeps the camelCase names of the browser tool so
backups and exports stay interchangeable; ``to_dict`` produces that shape.
"""
import secrets
import string
from dataclasses import dataclass, field
from typing import List, Optional

from django.utils import timezone

from .constants import (
    DEFAULT_MAX_TEAM_SIZE,
    DEFAULT_MIN_TEAM_SIZE,
    FIRST_RUN_EVENT_NAME,
    RESET_EVENT_NAME,
    ROLE_ADMIN,
    TYPE_SOLO,
    TYPE_TEAM,
)

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_id(prefix: str = "item") -> str:
    """
    <prefix>_<epoch millis>_<7 random chars>, e.g. team_1717171717171_k3j9x0a
    """
    millis = int(timezone.now().timestamp() * 1000)
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(7))
    return f"{prefix}_{millis}_{suffix}"


def today_iso() -> str:
    return timezone.localdate().isoformat()


def now_iso() -> str:
    return timezone.now().isoformat()


@dataclass
class EventSettings:
    event_name: str
    event_date: str
    min_team_size: int = DEFAULT_MIN_TEAM_SIZE
    max_team_size: int = DEFAULT_MAX_TEAM_SIZE

    @classmethod
    def first_run(cls) -> "EventSettings":
        return cls(event_name=FIRST_RUN_EVENT_NAME, event_date=today_iso())

    @classmethod
    def reset(cls) -> "EventSettings":
        return cls(event_name=RESET_EVENT_NAME, event_date=today_iso())

    @property
    def team_size_range(self) -> str:
        return f"{self.min_team_size}-{self.max_team_size}"

    def allows_team_size(self, count: int) -> bool:
        return self.min_team_size <= count <= self.max_team_size

    def to_dict(self) -> dict:
        return {
            "eventName": self.event_name,
            "eventDate": self.event_date,
            "minTeamSize": self.min_team_size,
            "maxTeamSize": self.max_team_size,
        }


@dataclass
class Member:
    name: str
    email: str = ""
    phone: str = ""

    def to_dict(self) -> dict:
        return {"name": self.name, "email": self.email, "phone": self.phone}


@dataclass
class Participant:
    id: str
    type: str
    name: str = ""
    email: str = ""
    phone: str = ""
    team_name: str = ""
    members: List[Member] = field(default_factory=list)
    present: bool = False
    registered_at: str = field(default_factory=now_iso)

    def __str__(self):
        return f"{self.type.upper()} - {self.label}"

    @property
    def is_team(self) -> bool:
        return self.type == TYPE_TEAM

    @property
    def label(self) -> str:
        """Name printed on QR labels and certificates."""
        return self.team_name if self.is_team else self.name

    @property
    def display_name(self) -> str:
        if self.is_team:
            return f"{self.team_name} ({len(self.members)} members)"
        return self.name

    @property
    def contact(self) -> str:
        return self.email or self.phone or "-"

    @property
    def member_count(self) -> int:
        return len([m for m in self.members if m.name])

    @property
    def search_text(self) -> str:
        if self.type == TYPE_SOLO:
            return self.name.lower()
        names = " ".join(m.name for m in self.members)
        return f"{self.team_name} {names}".lower()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "teamName": self.team_name,
            "members": [m.to_dict() for m in self.members],
            "present": self.present,
            "registeredAt": self.registered_at,
        }


@dataclass
class UserAccount:
    id: str
    name: str
    email: str
    password: str
    role: str
    created_at: str = field(default_factory=now_iso)

    def matches_email(self, email: str) -> bool:
        return self.email.lower() == (email or "").lower()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "password": self.password,
            "role": self.role,
            "createdAt": self.created_at,
        }


@dataclass
class Session:
    id: str
    email: str
    name: str
    role: str

    @classmethod
    def for_user(cls, user: UserAccount) -> "Session":
        return cls(id=user.id, email=user.email, name=user.name, role=user.role)

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def to_dict(self) -> dict:
        return {"id": self.id, "email": self.email, "name": self.name, "role": self.role}


def session_to_dict(session: Optional[Session]):
    return session.to_dict() if session is not None else None
