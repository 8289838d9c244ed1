# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""
Converter emitter.

One module per record in the message type graph, holding a converter class
with four static methods:

    to_grpc(item)          host record -> schema message
    from_grpc(item)        schema message -> host record
    to_grpc_list(items)    element-wise to_grpc, order preserved
    from_grpc_list(items)  element-wise from_grpc, order preserved

Converters of other records are imported as modules and looked up when called,
so mutually-referential records import cleanly in any order.
"""

from __future__ import annotations

import ast
import logging

from grpcwizard.analysis import ContractAnalysis
from grpcwizard.emitters.ast_builder import ASTBuilder, ImportSet
from grpcwizard.models import (
    CollectionKind,
    FieldSpec,
    GeneratedArtifact,
    GenerationOptions,
    RecordKind,
    RecordType,
    ScalarKind,
)
from grpcwizard.naming import (
    converter_class_name,
    converter_module_name,
    messages_module_name,
    schema_message_name,
)

logger = logging.getLogger(__name__)


class ConverterEmitter:
    """
    Emit converter modules for every record of an analysed contract.

    Handles:
    - Scalar fields (copied by value)
    - Collections of scalars (bulk copy via extend/list)
    - Collections of records (delegation to the element's list converter)
    """

    def __init__(self) -> None:
        self.builder = ASTBuilder()

    def emit(
        self, analysis: ContractAnalysis, options: GenerationOptions
    ) -> list[GeneratedArtifact]:
        artifacts = [
            GeneratedArtifact(
                role="shared",
                file_name=f"{converter_module_name(record.name)}.py",
                content=self.render(record, analysis, options),
            )
            for record in analysis.graph
        ]
        logger.debug("Rendered %d converter module(s)", len(artifacts))
        return artifacts

    def render(
        self, record: RecordType, analysis: ContractAnalysis, options: GenerationOptions
    ) -> str:
        """Render the converter module source for one record."""
        contract = analysis.contract
        pb2 = messages_module_name(options.proto_file_name)
        message = f"{pb2}.{schema_message_name(record.name)}"
        class_name = converter_class_name(record.name)

        imports = ImportSet()
        imports.add("collections.abc", "Iterable")
        imports.add(record.module, record.name)
        imports.add(options.namespace, pb2)

        to_body: list[ast.stmt] = [
            self.builder.assign("result", self.builder.call(self.builder.expression(message)))
        ]
        from_keywords: list[ast.keyword] = []

        for field in record.fields:
            schema_field = analysis.mapper.schema_field_name(field)
            kind = field.kind
            if isinstance(kind, ScalarKind):
                to_body.append(
                    self.builder.assign_attribute(
                        "result", schema_field, self._host_value(field)
                    )
                )
                from_value = self._message_value(schema_field)
            elif isinstance(kind, CollectionKind) and isinstance(kind.element, RecordKind):
                element = contract.record(kind.element.identity)
                converter = self._converter_reference(element, record, imports, options)
                to_body.append(
                    self._extend(
                        schema_field,
                        self.builder.method_call(
                            converter, "to_grpc_list", [self._host_value(field)]
                        ),
                    )
                )
                from_value = self.builder.method_call(
                    converter, "from_grpc_list", [self._message_value(schema_field)]
                )
            else:
                # validate_graph guarantees only scalar collections remain
                to_body.append(self._extend(schema_field, self._host_value(field)))
                from_value = self.builder.call(
                    self.builder.name("list"), [self._message_value(schema_field)]
                )
            from_keywords.append(ast.keyword(arg=field.name, value=from_value))

        to_body.append(self.builder.return_(self.builder.name("result")))
        from_body: list[ast.stmt] = [
            self.builder.return_(
                self.builder.call(self.builder.name(record.name), keywords=from_keywords)
            )
        ]

        methods = [
            self._static_method(
                "to_grpc_list",
                [("items", f"Iterable[{record.name}]")],
                self._list_body(class_name, "to_grpc"),
                f"list[{message}]",
            ),
            self._static_method(
                "from_grpc_list",
                [("items", f"Iterable[{message}]")],
                self._list_body(class_name, "from_grpc"),
                f"list[{record.name}]",
            ),
            self._static_method("to_grpc", [("item", record.name)], to_body, message),
            self._static_method("from_grpc", [("item", message)], from_body, record.name),
        ]

        class_node = self.builder.class_def(
            class_name,
            methods,
            docstring=f"Convert {record.name} to and from {schema_message_name(record.name)}.",
        )
        module = self.builder.generate_module_with_imports(
            [class_node],
            imports,
            docstring=f"Converters for {record.identity}.",
        )
        return self.builder.unparse_node(module)

    # -----------------------------------------------------------------------
    # Helpers
    # -----------------------------------------------------------------------

    def _converter_reference(
        self,
        element: RecordType,
        owner: RecordType,
        imports: ImportSet,
        options: GenerationOptions,
    ) -> str:
        class_name = converter_class_name(element.name)
        if element.identity == owner.identity:
            return class_name
        module_name = converter_module_name(element.name)
        imports.add(options.namespace, module_name)
        return f"{module_name}.{class_name}"

    def _host_value(self, field: FieldSpec) -> ast.expr:
        return self.builder.attribute(self.builder.name("item"), field.name)

    def _message_value(self, schema_field: str) -> ast.expr:
        return self.builder.attribute(self.builder.name("item"), schema_field)

    def _extend(self, schema_field: str, value: ast.expr) -> ast.stmt:
        target = self.builder.attribute(self.builder.name("result"), schema_field)
        return ast.Expr(
            value=self.builder.call(self.builder.attribute(target, "extend"), [value])
        )

    def _list_body(self, class_name: str, method: str) -> list[ast.stmt]:
        element = self.builder.method_call(class_name, method, [self.builder.name("item")])
        return [
            self.builder.return_(
                self.builder.list_comprehension(element, "item", "items")
            )
        ]

    def _static_method(
        self,
        name: str,
        params: list[tuple[str, str | None]],
        body: list[ast.stmt],
        returns: str,
    ) -> ast.stmt:
        return self.builder.function(
            name, params, body, returns=returns, decorators=["staticmethod"]
        )
