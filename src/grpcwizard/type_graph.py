# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Message type graph construction.

Computes the closure of record types reachable from a contract's operations,
deduplicated by identity and ordered by first visit.
"""

from __future__ import annotations

import logging

from grpcwizard.errors import RecordNameCollisionError
from grpcwizard.models import MessageTypeGraph, ServiceContract, referenced_record
from grpcwizard.naming import converter_module_name

logger = logging.getLogger(__name__)


class TypeGraphBuilder:
    """Builds the MessageTypeGraph for a ServiceContract.

    For each operation, the input type is visited before the output type. A
    record is registered before its fields are followed, so self-referential
    and mutually-referential records terminate without separate cycle
    detection.
    """

    def build(self, contract: ServiceContract) -> MessageTypeGraph:
        """Return the ordered, deduplicated closure of reachable records.

        Args:
            contract: The analysed service contract.

        Returns:
            MessageTypeGraph in first-visited order.
        """
        graph = MessageTypeGraph()
        for operation in contract.operations:
            self._visit(operation.input_type, contract, graph)
            self._visit(operation.output_type, contract, graph)

        logger.info(
            "Built message type graph with %d record(s) from %d operation(s)",
            len(graph),
            len(contract.operations),
        )
        return graph

    def _visit(
        self, identity: str, contract: ServiceContract, graph: MessageTypeGraph
    ) -> None:
        record = contract.record(identity)
        if not graph.add(record):
            return
        logger.debug("Registered record %s", identity)

        for field in record.fields:
            target = referenced_record(field.kind)
            if target is not None:
                self._visit(target, contract, graph)


def ensure_unique_names(graph: MessageTypeGraph) -> None:
    """Reject graphs in which two identities share a generated name.

    Schema messages and converter classes are named after the bare record
    name, and converter modules after its snake_case form, so ``HTTPReply``
    and ``HttpReply`` collide on ``http_reply_converter`` even though their
    names differ.

    Raises:
        RecordNameCollisionError: On the first shared name.
    """
    seen: dict[str, str] = {}
    seen_modules: dict[str, str] = {}
    for record in graph:
        if record.name in seen:
            raise RecordNameCollisionError(record.name, [seen[record.name], record.identity])
        seen[record.name] = record.identity

        module_name = converter_module_name(record.name)
        if module_name in seen_modules:
            raise RecordNameCollisionError(
                module_name,
                [seen_modules[module_name], record.identity],
                label="Converter module",
            )
        seen_modules[module_name] = record.identity
