# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Type Mapper for schema generation.

Maps host field kinds to proto3 type strings. The mapping is total over the
supported kinds and rejecting for everything else: an unmapped field raises
UnsupportedFieldTypeError, which aborts the whole generation run.
"""

from __future__ import annotations

import logging

from grpcwizard.errors import FieldNameCollisionError, UnsupportedFieldTypeError
from grpcwizard.models import (
    CollectionKind,
    FieldKind,
    FieldSpec,
    MessageTypeGraph,
    OpaqueKind,
    RecordKind,
    RecordType,
    ScalarKind,
    ServiceContract,
)
from grpcwizard.naming import json_field_name, lower_camel, schema_message_name

logger = logging.getLogger(__name__)


class TypeMapper:
    """
    Utility for mapping field kinds to schema type strings.

    Handles:
    - Scalar mapping (int32, float, double, string)
    - Collections of scalars or records (``repeated <T>``)
    - Field name conversion (first character lower-cased)
    - Rejection of every other kind
    """

    SCALAR_TYPE_MAPPING = {
        ScalarKind.INT32: "int32",
        ScalarKind.FLOAT: "float",
        ScalarKind.DOUBLE: "double",
        ScalarKind.STRING: "string",
    }

    def __init__(self, contract: ServiceContract) -> None:
        """
        Initialize the type mapper.

        Args:
            contract: Contract whose record table resolves record references
        """
        self.contract = contract

    def map_field(self, field: FieldSpec, record: RecordType | None = None) -> str:
        """
        Get the schema type string for a field.

        Args:
            field: Field to map
            record: Owning record, used in error context only

        Returns:
            Schema type string (e.g., "int32", "repeated Grpc_Person")

        Raises:
            UnsupportedFieldTypeError: If the field kind has no mapping
        """
        kind = field.kind

        if isinstance(kind, ScalarKind):
            return self.SCALAR_TYPE_MAPPING[kind]

        if isinstance(kind, CollectionKind):
            element = self._map_element(kind.element)
            if element is None:
                raise UnsupportedFieldTypeError(
                    field.name, kind.type_name, record.name if record else None
                )
            return f"repeated {element}"

        raise UnsupportedFieldTypeError(
            field.name, self.type_name(kind), record.name if record else None
        )

    def schema_field_name(self, field: FieldSpec) -> str:
        """Return the schema-side field name (``FirstName`` -> ``firstName``)."""
        return lower_camel(field.name)

    def validate_graph(self, graph: MessageTypeGraph) -> None:
        """
        Map every field of every record in the graph.

        Called during analysis so that an unsupported field or a schema field
        name clash fails the run before any emitter starts.

        Raises:
            UnsupportedFieldTypeError: On the first unmappable field
            FieldNameCollisionError: If two fields of a record share a schema
                field name or its JSON name
        """
        field_count = 0
        for record in graph:
            self._check_schema_names(record)
            for field in record.fields:
                self.map_field(field, record)
                field_count += 1
        logger.debug(
            "Validated %d field(s) across %d record(s)", field_count, len(graph)
        )

    def _check_schema_names(self, record: RecordType) -> None:
        # protoc rejects duplicate field names and, in proto3, duplicate JSON names
        seen: dict[str, str] = {}
        for field in record.fields:
            schema_name = self.schema_field_name(field)
            for key in dict.fromkeys((schema_name, json_field_name(schema_name))):
                if key in seen:
                    raise FieldNameCollisionError(record.name, key, [seen[key], field.name])
                seen[key] = field.name

    def type_name(self, kind: FieldKind) -> str:
        """Return the declared name of a kind, for messages and error context."""
        if isinstance(kind, ScalarKind):
            return kind.value
        if isinstance(kind, RecordKind):
            return self.contract.record(kind.identity).name
        if isinstance(kind, CollectionKind):
            return kind.type_name
        if isinstance(kind, OpaqueKind):
            return kind.type_name
        raise TypeError(f"Unknown field kind: {kind!r}")

    def _map_element(self, element: FieldKind) -> str | None:
        if isinstance(element, ScalarKind):
            return self.SCALAR_TYPE_MAPPING[element]
        if isinstance(element, RecordKind):
            return schema_message_name(self.contract.record(element.identity).name)
        return None
