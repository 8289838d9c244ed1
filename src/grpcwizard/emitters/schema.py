# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Schema emitter: renders the proto3 document for an analysed contract."""

from __future__ import annotations

import logging

from grpcwizard.analysis import ContractAnalysis
from grpcwizard.models import GeneratedArtifact, GenerationOptions, RecordType
from grpcwizard.naming import schema_message_name, schema_service_name

logger = logging.getLogger(__name__)

INDENT = "    "


class SchemaEmitter:
    """
    Render the service schema document.

    Handles:
    - Syntax and package declarations
    - One service block, one rpc line per operation in contract order
    - One message block per record in graph order, ordinals from 1
    """

    def render(self, analysis: ContractAnalysis, options: GenerationOptions) -> str:
        contract = analysis.contract
        lines = [
            'syntax = "proto3";',
            "",
            f"package {options.namespace};",
            "",
            f"service {schema_service_name(options.service_name)} {{",
        ]
        for operation in contract.operations:
            request = schema_message_name(contract.record(operation.input_type).name)
            response = schema_message_name(contract.record(operation.output_type).name)
            lines.append(f"{INDENT}rpc {operation.name}({request}) returns ({response});")
        lines.append("}")

        for record in analysis.graph:
            lines.append("")
            lines.extend(self._message_block(record, analysis))

        return "\n".join(lines) + "\n"

    def emit(self, analysis: ContractAnalysis, options: GenerationOptions) -> GeneratedArtifact:
        content = self.render(analysis, options)
        logger.debug(
            "Rendered schema %s with %d message(s)",
            options.proto_file_name,
            len(analysis.graph),
        )
        return GeneratedArtifact(
            role="shared", file_name=options.proto_file_name, content=content
        )

    def _message_block(self, record: RecordType, analysis: ContractAnalysis) -> list[str]:
        mapper = analysis.mapper
        block = [f"message {schema_message_name(record.name)} {{"]
        for ordinal, field in enumerate(record.fields, start=1):
            block.append(
                f"{INDENT}{mapper.map_field(field, record)} "
                f"{mapper.schema_field_name(field)} = {ordinal};"
            )
        block.append("}")
        return block
