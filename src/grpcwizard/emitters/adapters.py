# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""
Server and client adapter emitters.

The server adapter subclasses the compiled servicer base and forwards every
call to a held implementation of the contract interface. The client adapter
wraps a compiled stub and exposes the contract operations with host types.
Both convert at the boundary with the generated converters.
"""

from __future__ import annotations

import ast
import logging

from grpcwizard.analysis import ContractAnalysis
from grpcwizard.emitters.ast_builder import ASTBuilder, ImportSet
from grpcwizard.models import GeneratedArtifact, GenerationOptions, Operation, RecordType
from grpcwizard.naming import (
    client_adapter_class_name,
    client_adapter_module_name,
    converter_class_name,
    converter_module_name,
    messages_module_name,
    schema_message_name,
    schema_service_name,
    server_adapter_class_name,
    server_adapter_module_name,
    servicer_base_name,
    services_module_name,
    stub_class_name,
)

logger = logging.getLogger(__name__)


class _AdapterEmitter:
    """Shared plumbing for both adapter emitters."""

    def __init__(self) -> None:
        self.builder = ASTBuilder()

    def _records(
        self, analysis: ContractAnalysis, operation: Operation
    ) -> tuple[RecordType, RecordType]:
        contract = analysis.contract
        return contract.record(operation.input_type), contract.record(operation.output_type)

    def _converter(
        self, record: RecordType, imports: ImportSet, options: GenerationOptions
    ) -> str:
        class_name = converter_class_name(record.name)
        imports.add(f"{options.namespace}.{converter_module_name(record.name)}", class_name)
        return class_name

    def _constructor(self, param: str, annotation: str) -> ast.stmt:
        body: list[ast.stmt] = [
            self.builder.assign_attribute("self", f"_{param}", self.builder.name(param))
        ]
        return self.builder.function(
            "__init__", [("self", None), (param, annotation)], body, returns="None"
        )

    def _convert(self, converter: str, method: str, argument: str) -> ast.expr:
        return self.builder.method_call(converter, method, [self.builder.name(argument)])

    def _await_call(self, target: str, operation: str, argument: str) -> ast.expr:
        return ast.Await(
            value=self.builder.method_call(target, operation, [self.builder.name(argument)])
        )


class ServerAdapterEmitter(_AdapterEmitter):
    """Emit ``Grpc_<Service>Service``, the servicer forwarding to a host implementation."""

    def emit(self, analysis: ContractAnalysis, options: GenerationOptions) -> GeneratedArtifact:
        return GeneratedArtifact(
            role="server",
            file_name=f"{server_adapter_module_name(options.service_name)}.py",
            content=self.render(analysis, options),
        )

    def render(self, analysis: ContractAnalysis, options: GenerationOptions) -> str:
        contract = analysis.contract
        pb2 = messages_module_name(options.proto_file_name)
        pb2_grpc = services_module_name(options.proto_file_name)
        class_name = server_adapter_class_name(options.service_name)

        imports = ImportSet()
        imports.add_module("grpc")
        imports.add(contract.interface.module, contract.interface.name)
        imports.add(options.namespace, pb2)
        imports.add(options.namespace, pb2_grpc)

        methods: list[ast.stmt] = [self._constructor("service", contract.interface.name)]
        for operation in contract.operations:
            request_record, response_record = self._records(analysis, operation)
            request_converter = self._converter(request_record, imports, options)
            response_converter = self._converter(response_record, imports, options)
            body: list[ast.stmt] = [
                self.builder.assign(
                    "base_request", self._convert(request_converter, "from_grpc", "request")
                ),
                self.builder.assign(
                    "base_response",
                    self._await_call("self._service", operation.name, "base_request"),
                ),
                self.builder.return_(
                    self._convert(response_converter, "to_grpc", "base_response")
                ),
            ]
            methods.append(
                self.builder.function(
                    operation.name,
                    [
                        ("self", None),
                        ("request", f"{pb2}.{schema_message_name(request_record.name)}"),
                        ("context", "grpc.aio.ServicerContext"),
                    ],
                    body,
                    returns=f"{pb2}.{schema_message_name(response_record.name)}",
                    is_async=True,
                )
            )

        class_node = self.builder.class_def(
            class_name,
            methods,
            bases=[f"{pb2_grpc}.{servicer_base_name(options.service_name)}"],
            docstring=(
                f"Serve {schema_service_name(options.service_name)} by delegating "
                f"to a {contract.interface.name} implementation."
            ),
        )
        module = self.builder.generate_module_with_imports(
            [class_node],
            imports,
            docstring=f"Server adapter for {schema_service_name(options.service_name)}.",
        )
        logger.debug("Rendered server adapter %s", class_name)
        return self.builder.unparse_node(module)


class ClientAdapterEmitter(_AdapterEmitter):
    """Emit ``Grpc<Service>Client``, the host-typed wrapper around the stub."""

    def emit(self, analysis: ContractAnalysis, options: GenerationOptions) -> GeneratedArtifact:
        return GeneratedArtifact(
            role="client",
            file_name=f"{client_adapter_module_name(options.service_name)}.py",
            content=self.render(analysis, options),
        )

    def render(self, analysis: ContractAnalysis, options: GenerationOptions) -> str:
        contract = analysis.contract
        pb2_grpc = services_module_name(options.proto_file_name)
        class_name = client_adapter_class_name(options.service_name)

        imports = ImportSet()
        imports.add(options.namespace, pb2_grpc)

        methods: list[ast.stmt] = [
            self._constructor("stub", f"{pb2_grpc}.{stub_class_name(options.service_name)}")
        ]
        for operation in contract.operations:
            request_record, response_record = self._records(analysis, operation)
            imports.add(request_record.module, request_record.name)
            imports.add(response_record.module, response_record.name)
            request_converter = self._converter(request_record, imports, options)
            response_converter = self._converter(response_record, imports, options)
            body: list[ast.stmt] = [
                self.builder.assign(
                    "grpc_request", self._convert(request_converter, "to_grpc", "request")
                ),
                self.builder.assign(
                    "grpc_response",
                    self._await_call("self._stub", operation.name, "grpc_request"),
                ),
                self.builder.return_(
                    self._convert(response_converter, "from_grpc", "grpc_response")
                ),
            ]
            methods.append(
                self.builder.function(
                    operation.name,
                    [("self", None), ("request", request_record.name)],
                    body,
                    returns=response_record.name,
                    is_async=True,
                )
            )

        class_node = self.builder.class_def(
            class_name,
            methods,
            docstring=(
                f"Call {schema_service_name(options.service_name)} with host record types."
            ),
        )
        module = self.builder.generate_module_with_imports(
            [class_node],
            imports,
            docstring=f"Client adapter for {schema_service_name(options.service_name)}.",
        )
        logger.debug("Rendered client adapter %s", class_name)
        return self.builder.unparse_node(module)
