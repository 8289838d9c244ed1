# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Pydantic models for the service manifest.

The manifest is the explicit description of a service that the generator
analyses: the implementation and the capabilities (interfaces) it exposes,
each interface's operations, and the record types those operations exchange.

Example manifest (YAML)::

    service:
      name: PeopleService
      module: people_app.services
      remote_contract: true
      implements: [IPeopleService]

    interfaces:
      - name: IPeopleService
        module: people_app.services
        remote_contract: true
        operations:
          - name: GetAll
            parameters:
              - {name: request, type: GetAllPeopleRequest}
            returns: Awaitable[PeopleReply]

    records:
      - name: PeopleReply
        module: people_app.models
        fields:
          - {name: People, type: "list[Person]"}

Structural checks live here (duplicate names, dangling ``implements``);
contract semantics (markers, arity, result shape, field kinds) are checked by
the ContractInspector.
"""

from __future__ import annotations

import keyword

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _require_identifier(value: str, what: str) -> str:
    if not value.isidentifier() or keyword.iskeyword(value):
        raise ValueError(f"{what} must be an identifier, got {value!r}")
    return value


def _require_module(value: str) -> str:
    if not value or not all(part.isidentifier() for part in value.split(".")):
        raise ValueError(f"module must be a dotted Python module path, got {value!r}")
    return value


class ModelParameter(BaseModel):
    """One declared operation parameter."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = "request"
    type: str

    @field_validator("type")
    @classmethod
    def type_nonempty(cls, v: str) -> str:
        """Ensure the type expression is non-empty."""
        if not v.strip():
            raise ValueError("parameter type must not be empty")
        return v.strip()


class ModelOperation(BaseModel):
    """One declared interface operation."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    parameters: list[ModelParameter] = Field(default_factory=list)
    returns: str = Field(..., description="Result type expression, e.g. Awaitable[Reply]")

    @field_validator("name")
    @classmethod
    def name_is_identifier(cls, v: str) -> str:
        """Operation names become method and rpc names."""
        return _require_identifier(v, "operation name")


class ModelInterface(BaseModel):
    """A capability the implementation exposes."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    module: str
    remote_contract: bool = False
    operations: list[ModelOperation] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def name_is_identifier(cls, v: str) -> str:
        """Interface names are imported into generated code."""
        return _require_identifier(v, "interface name")

    @field_validator("module")
    @classmethod
    def module_is_dotted(cls, v: str) -> str:
        """Ensure the module is importable."""
        return _require_module(v)

    @model_validator(mode="after")
    def operation_names_unique(self) -> ModelInterface:
        """Reject interfaces that declare an operation twice."""
        seen: set[str] = set()
        for operation in self.operations:
            if operation.name in seen:
                raise ValueError(
                    f"interface {self.name} declares operation {operation.name} twice"
                )
            seen.add(operation.name)
        return self


class ModelField(BaseModel):
    """One declared record field."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    type: str

    @field_validator("name")
    @classmethod
    def name_is_identifier(cls, v: str) -> str:
        """Field names are host attribute names."""
        return _require_identifier(v, "field name")


class ModelRecord(BaseModel):
    """A host record type: named, ordered fields."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    module: str
    fields: list[ModelField] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def name_is_identifier(cls, v: str) -> str:
        """Record names prefix schema messages and converters."""
        return _require_identifier(v, "record name")

    @field_validator("module")
    @classmethod
    def module_is_dotted(cls, v: str) -> str:
        """Ensure the module is importable."""
        return _require_module(v)

    @property
    def identity(self) -> str:
        return f"{self.module}.{self.name}"

    @model_validator(mode="after")
    def field_names_unique(self) -> ModelRecord:
        """Reject records that declare a field twice."""
        seen: set[str] = set()
        for field in self.fields:
            if field.name in seen:
                raise ValueError(f"record {self.name} declares field {field.name} twice")
            seen.add(field.name)
        return self


class ModelService(BaseModel):
    """The service implementation and the capabilities it declares."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    module: str
    remote_contract: bool = False
    implements: list[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def name_is_identifier(cls, v: str) -> str:
        """The implementation name is used in generated wiring code."""
        return _require_identifier(v, "service name")

    @field_validator("module")
    @classmethod
    def module_is_dotted(cls, v: str) -> str:
        """Ensure the module is importable."""
        return _require_module(v)


class ServiceManifest(BaseModel):
    """Top-level manifest: one service, its interfaces and records."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    service: ModelService
    interfaces: list[ModelInterface] = Field(default_factory=list)
    records: list[ModelRecord] = Field(default_factory=list)

    @model_validator(mode="after")
    def references_resolve(self) -> ServiceManifest:
        """Every implemented interface is declared; record identities are unique."""
        declared = {interface.name for interface in self.interfaces}
        for name in self.service.implements:
            if name not in declared:
                raise ValueError(
                    f"service {self.service.name} implements undeclared interface {name}"
                )

        identities: set[str] = set()
        for record in self.records:
            if record.identity in identities:
                raise ValueError(f"record {record.identity} is declared twice")
            identities.add(record.identity)
        return self

    def interface(self, name: str) -> ModelInterface:
        """Return the declared interface with the given name.

        Raises:
            KeyError: If no interface has that name.
        """
        for interface in self.interfaces:
            if interface.name == name:
                return interface
        raise KeyError(name)
