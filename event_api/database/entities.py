"""
Records exchanged between the repositories and the route handlers.

``User`` is the internal row and carries the password hash; it has no JSON
serializer on purpose. Anything sent to a client goes through ``PublicUser``.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Mapping, Optional


@dataclass
class PublicUser:
    id: int
    email: str
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "email": self.email, "name": self.name}


@dataclass
class User:
    email: str
    password: str
    name: str
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "User":
        return cls(
            id=row["id"],
            email=row["email"],
            password=row["password"],
            name=row["name"],
        )

    def public(self) -> PublicUser:
        return PublicUser(id=self.id, email=self.email, name=self.name)


@dataclass
class Event:
    owner_id: int
    name: str
    description: str
    date: date
    location: str
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Event":
        return cls(
            id=row["id"],
            owner_id=row["owner_id"],
            name=row["name"],
            description=row["description"],
            date=row["date"],
            location=row["location"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "ownerId": self.owner_id,
            "name": self.name,
            "description": self.description,
            "date": self.date.isoformat(),
            "location": self.location,
        }


@dataclass
class Attendee:
    event_id: int
    user_id: int
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Attendee":
        return cls(id=row["id"], event_id=row["event_id"], user_id=row["user_id"])

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "eventId": self.event_id, "userId": self.user_id}
