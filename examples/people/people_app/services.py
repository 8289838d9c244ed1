"""People service contract and an in-memory implementation."""

from __future__ import annotations

from typing import Protocol

from people_app.models import GetAllPeopleRequest, GetPersonByIdRequest, PeopleReply, Person


class IPeopleService(Protocol):
    """Remote contract of the People service."""

    async def GetAll(self, request: GetAllPeopleRequest) -> PeopleReply: ...

    async def GetPersonById(self, request: GetPersonByIdRequest) -> Person: ...


class PeopleService:
    """In-memory IPeopleService."""

    def __init__(self) -> None:
        self._people = [
            Person(id=1, first_name="Isadora", last_name="Jarr"),
            Person(id=2, first_name="Ben", last_name="Drinkin"),
            Person(id=3, first_name="Amanda", last_name="Reckonwith"),
        ]

    async def GetAll(self, request: GetAllPeopleRequest) -> PeopleReply:
        return PeopleReply(people=list(self._people))

    async def GetPersonById(self, request: GetPersonByIdRequest) -> Person:
        for person in self._people:
            if person.id == request.id:
                return person
        raise LookupError(f"No person with id {request.id}")
