# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Wiring emitter: dependency snippets, compile command and start-up fragments.

Everything here is static text with resolved versions and names substituted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from grpcwizard.analysis import ContractAnalysis
from grpcwizard.models import GenerationOptions
from grpcwizard.naming import (
    add_servicer_function_name,
    client_adapter_class_name,
    client_adapter_module_name,
    server_adapter_class_name,
    server_adapter_module_name,
    services_module_name,
    stub_class_name,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WiringText:
    """Rendered wiring snippets consumed by the instructions composer."""

    shared_requirements: str
    server_requirements: str
    client_requirements: str
    protoc_command: str
    server_fragment: str
    client_fragment: str


class WiringEmitter:
    """
    Render the integration text for each role.

    Handles:
    - Requirements-style dependency lines (``name==version``)
    - The grpc_tools.protoc command for the schema
    - Server start-up and client set-up fragments
    """

    def __init__(
        self,
        shared_packages: list[str],
        server_packages: list[str],
        client_packages: list[str],
        server_listen_address: str = "[::]:50051",
        client_target: str = "localhost:50051",
    ) -> None:
        self.shared_packages = shared_packages
        self.server_packages = server_packages
        self.client_packages = client_packages
        self.server_listen_address = server_listen_address
        self.client_target = client_target

    def package_names(self) -> list[str]:
        """Distinct package names across all roles, first occurrence first."""
        names: list[str] = []
        for name in [*self.shared_packages, *self.server_packages, *self.client_packages]:
            if name not in names:
                names.append(name)
        return names

    def render(
        self,
        analysis: ContractAnalysis,
        options: GenerationOptions,
        versions: dict[str, str],
    ) -> WiringText:
        """
        Render all wiring snippets.

        Args:
            analysis: Analysed contract
            options: Generation options
            versions: Resolved version per package name

        Returns:
            WiringText with every snippet filled in
        """
        wiring = WiringText(
            shared_requirements=self.requirements(self.shared_packages, versions),
            server_requirements=self.requirements(self.server_packages, versions),
            client_requirements=self.requirements(self.client_packages, versions),
            protoc_command=self.protoc_command(options),
            server_fragment=self.server_fragment(analysis, options),
            client_fragment=self.client_fragment(analysis, options),
        )
        logger.debug("Rendered wiring for %s", options.service_name)
        return wiring

    def requirements(self, packages: list[str], versions: dict[str, str]) -> str:
        """
        Render requirements lines.

        Raises:
            KeyError: If a package has no resolved version
        """
        return "\n".join(f"{name}=={versions[name]}" for name in packages)

    def protoc_command(self, options: GenerationOptions) -> str:
        """Command compiling the schema in place, run from the project root."""
        schema_path = "/".join([*options.namespace.split("."), options.proto_file_name])
        return (
            "python -m grpc_tools.protoc -I . --python_out=. --grpc_python_out=. "
            f"{schema_path}"
        )

    def server_fragment(self, analysis: ContractAnalysis, options: GenerationOptions) -> str:
        contract = analysis.contract
        pb2_grpc = services_module_name(options.proto_file_name)
        adapter = server_adapter_class_name(options.service_name)
        lines = [
            "import asyncio",
            "",
            "import grpc",
            "",
            f"from {contract.service.module} import {contract.service.name}",
            f"from {options.namespace} import {pb2_grpc}",
            f"from {server_adapter_module_name(options.service_name)} import {adapter}",
            "",
            "",
            "async def serve() -> None:",
            "    server = grpc.aio.server()",
            f"    {pb2_grpc}.{add_servicer_function_name(options.service_name)}(",
            f"        {adapter}({contract.service.name}()), server",
            "    )",
            f'    server.add_insecure_port("{self.server_listen_address}")',
            "    await server.start()",
            "    await server.wait_for_termination()",
            "",
            "",
            'if __name__ == "__main__":',
            "    asyncio.run(serve())",
        ]
        return "\n".join(lines)

    def client_fragment(self, analysis: ContractAnalysis, options: GenerationOptions) -> str:
        pb2_grpc = services_module_name(options.proto_file_name)
        client = client_adapter_class_name(options.service_name)
        lines = [
            "import grpc",
            "",
            f"from {options.namespace} import {pb2_grpc}",
            f"from {client_adapter_module_name(options.service_name)} import {client}",
            "",
            "",
            "async def main() -> None:",
            f'    async with grpc.aio.insecure_channel("{self.client_target}") as channel:',
            f"        client = {client}({pb2_grpc}.{stub_class_name(options.service_name)}(channel))",
        ]
        for operation in analysis.contract.operations:
            request = analysis.contract.record(operation.input_type).name
            lines.append(f"        # reply = await client.{operation.name}({request}(...))")
        return "\n".join(lines)
