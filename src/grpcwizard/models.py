# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Intermediate representation shared by analysis and emission.

The analysed contract is a set of frozen dataclasses: records are referenced
by identity (``"<module>.<name>"``) rather than by object, so self-referential
and mutually-referential record graphs need no special handling.

Generation inputs and outputs (GenerationOptions, GeneratedArtifact,
ArtifactSet) are Pydantic models so they validate at construction.
"""

from __future__ import annotations

import keyword
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# ---------------------------------------------------------------------------
# Field kinds
# ---------------------------------------------------------------------------


class ScalarKind(str, Enum):
    """Supported scalar host kinds."""

    INT32 = "int32"
    FLOAT = "float"
    DOUBLE = "double"
    STRING = "string"


@dataclass(frozen=True)
class RecordKind:
    """Reference to a record type by identity."""

    identity: str


@dataclass(frozen=True)
class CollectionKind:
    """Ordered collection; ``type_name`` keeps the declared spelling."""

    element: FieldKind
    type_name: str


@dataclass(frozen=True)
class OpaqueKind:
    """A declared type the generator has no mapping for."""

    type_name: str


FieldKind = Union[ScalarKind, RecordKind, CollectionKind, OpaqueKind]


def referenced_record(kind: FieldKind) -> str | None:
    """Return the record identity a field kind references, directly or as element."""
    if isinstance(kind, RecordKind):
        return kind.identity
    if isinstance(kind, CollectionKind) and isinstance(kind.element, RecordKind):
        return kind.element.identity
    return None


# ---------------------------------------------------------------------------
# Contract
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FieldSpec:
    """One declared field of a record, in declaration order."""

    name: str
    kind: FieldKind


@dataclass(frozen=True, eq=False)
class RecordType:
    """A host record type. Equality and hashing are by identity only."""

    identity: str
    name: str
    module: str
    fields: tuple[FieldSpec, ...] = ()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecordType):
            return NotImplemented
        return self.identity == other.identity

    def __hash__(self) -> int:
        return hash(self.identity)


@dataclass(frozen=True)
class HostSymbol:
    """A named host type and the module it is importable from."""

    name: str
    module: str


@dataclass(frozen=True)
class Operation:
    """One contract operation: exactly one input record, one output record."""

    name: str
    input_type: str
    output_type: str


@dataclass(frozen=True)
class ServiceContract:
    """The located remote contract and everything it resolves against."""

    service: HostSymbol
    interface: HostSymbol
    operations: tuple[Operation, ...]
    records: dict[str, RecordType]

    @property
    def name(self) -> str:
        return self.interface.name

    def record(self, identity: str) -> RecordType:
        return self.records[identity]


class MessageTypeGraph:
    """Ordered, identity-deduplicated set of record types.

    Records keep their first-visited position; that order is the emission
    order of the schema document.
    """

    def __init__(self) -> None:
        self._records: dict[str, RecordType] = {}

    def add(self, record: RecordType) -> bool:
        """Register a record. Returns False if its identity is already present."""
        if record.identity in self._records:
            return False
        self._records[record.identity] = record
        return True

    def __contains__(self, item: object) -> bool:
        if isinstance(item, RecordType):
            return item.identity in self._records
        return item in self._records

    def __iter__(self) -> Iterator[RecordType]:
        return iter(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index: int) -> RecordType:
        return list(self._records.values())[index]

    def identities(self) -> list[str]:
        return list(self._records)

    def __repr__(self) -> str:
        return f"MessageTypeGraph({self.identities()})"


# ---------------------------------------------------------------------------
# Generation inputs and outputs
# ---------------------------------------------------------------------------


def _is_identifier(value: str) -> bool:
    return value.isidentifier() and not keyword.iskeyword(value)


class GenerationOptions(BaseModel):
    """Per-run inputs besides the manifest."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    namespace: str = Field(
        ...,
        description="Dotted Python package of the shared artifacts; also the proto package",
    )
    service_name: str = Field(..., description="Short service name used as naming prefix")
    proto_file_name: str = Field(..., description="Schema file name, e.g. people.proto")
    output_root: Path = Field(default=Path("."), description="Root folder for output")

    @field_validator("namespace")
    @classmethod
    def namespace_is_dotted_identifier(cls, v: str) -> str:
        """Ensure every namespace segment is a valid Python identifier."""
        if not v or not all(_is_identifier(part) for part in v.split(".")):
            raise ValueError(f"namespace must be a dotted Python package path, got {v!r}")
        return v

    @field_validator("service_name")
    @classmethod
    def service_name_is_identifier(cls, v: str) -> str:
        """Ensure the service name can prefix class names."""
        if not _is_identifier(v):
            raise ValueError(f"service_name must be an identifier, got {v!r}")
        return v

    @field_validator("proto_file_name")
    @classmethod
    def proto_file_name_is_importable(cls, v: str) -> str:
        """Ensure compiled modules (``<stem>_pb2``) will be importable."""
        if not v.endswith(".proto") or not _is_identifier(v[: -len(".proto")]):
            raise ValueError(
                f"proto_file_name must be '<identifier>.proto', got {v!r}"
            )
        return v


ArtifactRole = Literal["shared", "server", "client", "guide"]


class GeneratedArtifact(BaseModel):
    """One generated text file."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    role: ArtifactRole
    file_name: str
    content: str
    folder: str = ""

    @property
    def relative_path(self) -> str:
        return f"{self.folder}/{self.file_name}" if self.folder else self.file_name


class ArtifactSet(BaseModel):
    """The complete, ordered output of one generation run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    artifacts: tuple[GeneratedArtifact, ...] = ()

    @model_validator(mode="after")
    def relative_paths_unique(self) -> ArtifactSet:
        seen: set[str] = set()
        for artifact in self.artifacts:
            if artifact.relative_path in seen:
                raise ValueError(f"Duplicate artifact path: {artifact.relative_path}")
            seen.add(artifact.relative_path)
        return self

    def by_role(self, role: ArtifactRole) -> list[GeneratedArtifact]:
        return [artifact for artifact in self.artifacts if artifact.role == role]

    def get(self, file_name: str) -> GeneratedArtifact:
        """Return the artifact with the given file name.

        Raises:
            KeyError: If no artifact has that name.
        """
        for artifact in self.artifacts:
            if artifact.file_name == file_name:
                return artifact
        raise KeyError(file_name)

    def file_names(self) -> list[str]:
        return [artifact.file_name for artifact in self.artifacts]

    def as_files(self) -> dict[str, str]:
        """Map relative output paths to contents."""
        return {artifact.relative_path: artifact.content for artifact in self.artifacts}

    def __len__(self) -> int:
        return len(self.artifacts)
