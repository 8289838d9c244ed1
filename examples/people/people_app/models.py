"""Host record types of the People service."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Person:
    id: int = 0
    first_name: str = ""
    last_name: str = ""
    bio: str = ""
    photo_url: str = ""


@dataclass
class GetAllPeopleRequest:
    pass


@dataclass
class GetPersonByIdRequest:
    id: int = 0


@dataclass
class PeopleReply:
    people: list[Person] = field(default_factory=list)
