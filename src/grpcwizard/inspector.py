# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Contract inspection.

Turns a ServiceManifest into a ServiceContract: locates the remote contract
interface, checks every operation's arity and shape, and resolves every
declared type expression into a field kind.

Type expressions use Python subscription syntax:

    int32, float, double, string          scalars (aliases: int, float32,
                                          single, float64, str)
    list[T], List[T], Sequence[T]         ordered collections
    Awaitable[Record]                     asynchronous single-value result
    Person, people_app.models.Person      record references (bare or qualified)

Anything else resolves to an opaque kind; TypeMapper rejects those later.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from grpcwizard.errors import (
    ContractInterfaceMissingError,
    ContractTagMissingError,
    OperationArityError,
    OperationShapeError,
    RecordNameCollisionError,
)
from grpcwizard.manifest.models import ModelInterface, ModelOperation, ServiceManifest
from grpcwizard.models import (
    CollectionKind,
    FieldKind,
    FieldSpec,
    HostSymbol,
    OpaqueKind,
    Operation,
    RecordKind,
    RecordType,
    ScalarKind,
    ServiceContract,
    referenced_record,
)

logger = logging.getLogger(__name__)

SCALAR_ALIASES: dict[str, ScalarKind] = {
    "int32": ScalarKind.INT32,
    "int": ScalarKind.INT32,
    "float": ScalarKind.FLOAT,
    "float32": ScalarKind.FLOAT,
    "single": ScalarKind.FLOAT,
    "double": ScalarKind.DOUBLE,
    "float64": ScalarKind.DOUBLE,
    "string": ScalarKind.STRING,
    "str": ScalarKind.STRING,
}

COLLECTION_NAMES = frozenset({"list", "List", "Sequence"})
ASYNC_WRAPPER_NAMES = frozenset({"Awaitable"})

_TOKEN = re.compile(r"\s*(?:([A-Za-z_][\w.]*)|(\S))")


# ---------------------------------------------------------------------------
# Type expressions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TypeExpression:
    """A parsed type expression: a name and optional subscript arguments."""

    name: str
    args: tuple[TypeExpression, ...] = ()

    def __str__(self) -> str:
        if not self.args:
            return self.name
        return f"{self.name}[{', '.join(str(arg) for arg in self.args)}]"


def parse_type_expression(text: str) -> TypeExpression:
    """Parse ``Name`` / ``Name[Arg, ...]`` into a TypeExpression.

    Raises:
        ValueError: If the text is not a well-formed type expression.
    """
    tokens = _tokenize(text)
    expression, position = _parse(tokens, 0, text)
    if position != len(tokens):
        raise ValueError(f"Unexpected trailing input in type expression {text!r}")
    return expression


def _tokenize(text: str) -> list[str]:
    tokens: list[str] = []
    for match in _TOKEN.finditer(text):
        name, symbol = match.groups()
        if name:
            tokens.append(name)
        elif symbol:
            if symbol not in "[],":
                raise ValueError(f"Unexpected character {symbol!r} in type expression {text!r}")
            tokens.append(symbol)
    if not tokens:
        raise ValueError("Empty type expression")
    return tokens


def _parse(tokens: list[str], position: int, text: str) -> tuple[TypeExpression, int]:
    if position >= len(tokens) or tokens[position] in "[],":
        raise ValueError(f"Expected a type name in {text!r}")
    name = tokens[position]
    position += 1
    if position >= len(tokens) or tokens[position] != "[":
        return TypeExpression(name), position

    args: list[TypeExpression] = []
    position += 1
    while True:
        arg, position = _parse(tokens, position, text)
        args.append(arg)
        if position >= len(tokens):
            raise ValueError(f"Unclosed '[' in type expression {text!r}")
        if tokens[position] == ",":
            position += 1
            continue
        if tokens[position] == "]":
            return TypeExpression(name, tuple(args)), position + 1
        raise ValueError(f"Expected ',' or ']' in type expression {text!r}")


# ---------------------------------------------------------------------------
# Inspector
# ---------------------------------------------------------------------------


class ContractInspector:
    """Extracts the remote contract from a service manifest.

    Handles:
    - Implementation marker check (ContractTagMissingError)
    - Contract interface lookup among implemented interfaces
      (ContractInterfaceMissingError)
    - Operation arity (OperationArityError) and shape (OperationShapeError)
    - Resolution of record references, and of field kinds for the records
      reachable from the operations
    """

    def inspect(self, manifest: ServiceManifest) -> ServiceContract:
        """Build the ServiceContract for a manifest.

        Args:
            manifest: Validated service manifest.

        Returns:
            The located contract with operations in declaration order.

        Raises:
            ContractTagMissingError: If the implementation is not marked.
            ContractInterfaceMissingError: If no implemented interface is marked.
            OperationArityError: If an operation does not take exactly one parameter.
            OperationShapeError: If a parameter or result is not a single record.
            RecordNameCollisionError: If a bare record reference reachable from
                an operation is ambiguous.
        """
        service = manifest.service
        if not service.remote_contract:
            raise ContractTagMissingError(service.name)

        interface = self._locate_contract_interface(manifest)
        resolver = _RecordResolver(manifest)
        operations = tuple(
            self._inspect_operation(operation, resolver)
            for operation in interface.operations
        )
        records = resolver.build_records(
            identity
            for operation in operations
            for identity in (operation.input_type, operation.output_type)
        )
        if not operations:
            logger.warning("Contract interface %s declares no operations", interface.name)

        logger.info(
            "Located contract %s on %s with %d operation(s)",
            interface.name,
            service.name,
            len(operations),
        )
        return ServiceContract(
            service=HostSymbol(name=service.name, module=service.module),
            interface=HostSymbol(name=interface.name, module=interface.module),
            operations=operations,
            records=records,
        )

    def _locate_contract_interface(self, manifest: ServiceManifest) -> ModelInterface:
        marked = [
            manifest.interface(name)
            for name in manifest.service.implements
            if manifest.interface(name).remote_contract
        ]
        if not marked:
            raise ContractInterfaceMissingError(
                manifest.service.name, list(manifest.service.implements)
            )
        if len(marked) > 1:
            logger.warning(
                "Service %s implements %d remote contract interfaces; using %s",
                manifest.service.name,
                len(marked),
                marked[0].name,
            )
        return marked[0]

    def _inspect_operation(
        self, operation: ModelOperation, resolver: _RecordResolver
    ) -> Operation:
        if len(operation.parameters) != 1:
            raise OperationArityError(operation.name, len(operation.parameters))

        parameter_type = operation.parameters[0].type
        input_identity = resolver.resolve_reference(parameter_type)
        if input_identity is None:
            raise OperationShapeError(
                operation.name, "parameter must be a declared record type", parameter_type
            )

        output_identity = self._result_record(operation, resolver)

        logger.debug(
            "Operation %s: %s -> %s", operation.name, input_identity, output_identity
        )
        return Operation(
            name=operation.name, input_type=input_identity, output_type=output_identity
        )

    def _result_record(self, operation: ModelOperation, resolver: _RecordResolver) -> str:
        try:
            result = parse_type_expression(operation.returns)
        except ValueError:
            raise OperationShapeError(
                operation.name, "result is not a valid type expression", operation.returns
            ) from None

        if result.name not in ASYNC_WRAPPER_NAMES:
            raise OperationShapeError(
                operation.name, "result must be Awaitable[<record>]", operation.returns
            )
        if len(result.args) != 1:
            raise OperationShapeError(
                operation.name,
                "result must wrap exactly one record type",
                operation.returns,
            )

        identity = resolver.resolve_reference(str(result.args[0]))
        if identity is None:
            raise OperationShapeError(
                operation.name, "result must wrap a declared record type", operation.returns
            )
        return identity


class _RecordResolver:
    """Resolves record references and field kinds against a manifest."""

    def __init__(self, manifest: ServiceManifest) -> None:
        self._manifest = manifest
        self._identities = {record.identity for record in manifest.records}
        self._by_name: dict[str, list[str]] = {}
        for record in manifest.records:
            self._by_name.setdefault(record.name, []).append(record.identity)

    def build_records(self, roots: Iterable[str]) -> dict[str, RecordType]:
        """Resolve the records reachable from ``roots``, following record fields.

        Records no operation reaches are never resolved, so an ambiguous
        reference inside one of them does not fail the run.
        """
        declared = {record.identity: record for record in self._manifest.records}
        records: dict[str, RecordType] = {}
        pending = list(roots)
        while pending:
            identity = pending.pop()
            if identity in records:
                continue
            record = declared[identity]
            fields = tuple(
                FieldSpec(name=field.name, kind=self.resolve_kind(field.type))
                for field in record.fields
            )
            records[identity] = RecordType(
                identity=identity,
                name=record.name,
                module=record.module,
                fields=fields,
            )
            for field in fields:
                target = referenced_record(field.kind)
                if target is not None and target not in records:
                    pending.append(target)
        logger.debug(
            "Resolved %d of %d declared record(s)", len(records), len(declared)
        )
        return records

    def resolve_reference(self, text: str) -> str | None:
        """Return the record identity a type name refers to, or None."""
        name = text.strip()
        if name in self._identities:
            return name
        candidates = self._by_name.get(name, [])
        if len(candidates) > 1:
            raise RecordNameCollisionError(name, sorted(candidates))
        return candidates[0] if candidates else None

    def resolve_kind(self, text: str) -> FieldKind:
        try:
            expression = parse_type_expression(text)
        except ValueError:
            return OpaqueKind(text.strip())
        return self._kind_of(expression)

    def _kind_of(self, expression: TypeExpression) -> FieldKind:
        if not expression.args:
            if expression.name in SCALAR_ALIASES:
                return SCALAR_ALIASES[expression.name]
            identity = self.resolve_reference(expression.name)
            if identity is not None:
                return RecordKind(identity)
            return OpaqueKind(expression.name)

        if expression.name in COLLECTION_NAMES and len(expression.args) == 1:
            return CollectionKind(
                element=self._kind_of(expression.args[0]), type_name=str(expression)
            )
        return OpaqueKind(str(expression))
