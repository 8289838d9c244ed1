# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Instructions composer: the integration guide written at the output root."""

from __future__ import annotations

from grpcwizard.emitters.wiring import WiringText
from grpcwizard.models import GeneratedArtifact, GenerationOptions
from grpcwizard.naming import schema_service_name


def _section(title: str) -> list[str]:
    return [title, "=" * len(title)]


def _indented(text: str, prefix: str = "    ") -> list[str]:
    return [f"{prefix}{line}" if line else "" for line in text.splitlines()]


class InstructionsComposer:
    """Concatenate wiring text and file lists into the guide. No decisions."""

    def compose(
        self,
        options: GenerationOptions,
        wiring: WiringText,
        shared_files: list[str],
        server_files: list[str],
        client_files: list[str],
    ) -> str:
        namespace_path = "/".join(options.namespace.split("."))
        lines = [
            "Instructions for adding the "
            f"{schema_service_name(options.service_name)} gRPC service to your application",
            "",
            *_section("Shared Package:"),
            "1) Add the following to the shared package requirements:",
            "",
            *_indented(wiring.shared_requirements),
            "",
            f"2) Add the following files to the {options.namespace} package "
            f"({namespace_path}/):",
            "",
            *[f"   {name}" for name in shared_files],
            "",
            f"3) Compile {options.proto_file_name} from the project root:",
            "",
            *_indented(wiring.protoc_command),
            "",
            "",
            *_section("Server Project:"),
            "1) Add the following to the server requirements:",
            "",
            *_indented(wiring.server_requirements),
            "",
            "2) Add the following files to the server project:",
            "",
            *[f"   {name}" for name in server_files],
            "",
            "3) Start the server with the following:",
            "",
            *_indented(wiring.server_fragment),
            "",
            "",
            *_section("Client Project:"),
            "1) Add the following to the client requirements:",
            "",
            *_indented(wiring.client_requirements),
            "",
            "2) Add the following files to the client project:",
            "",
            *[f"   {name}" for name in client_files],
            "",
            "3) Create the client with the following:",
            "",
            *_indented(wiring.client_fragment),
            "",
        ]
        return "\n".join(lines)

    def emit(
        self,
        guide_file_name: str,
        options: GenerationOptions,
        wiring: WiringText,
        shared_files: list[str],
        server_files: list[str],
        client_files: list[str],
    ) -> GeneratedArtifact:
        return GeneratedArtifact(
            role="guide",
            file_name=guide_file_name,
            content=self.compose(options, wiring, shared_files, server_files, client_files),
        )
