# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Contract analysis: inspection, type graph and field validation in one step.

Every failure mode of a generation run that depends on the manifest surfaces
here, before any emitter runs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from grpcwizard.inspector import ContractInspector
from grpcwizard.manifest.models import ServiceManifest
from grpcwizard.models import MessageTypeGraph, ServiceContract
from grpcwizard.type_graph import TypeGraphBuilder, ensure_unique_names
from grpcwizard.type_mapper import TypeMapper

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContractAnalysis:
    """Validated contract, its message type graph and the mapper over both."""

    contract: ServiceContract
    graph: MessageTypeGraph
    mapper: TypeMapper


def analyze_manifest(manifest: ServiceManifest) -> ContractAnalysis:
    """Inspect a manifest and validate everything the emitters rely on.

    Raises:
        GrpcWizardError: Any analysis error; the first one found aborts.
    """
    contract = ContractInspector().inspect(manifest)
    graph = TypeGraphBuilder().build(contract)
    ensure_unique_names(graph)

    mapper = TypeMapper(contract)
    mapper.validate_graph(graph)

    logger.info(
        "Analysed %s: %d operation(s), %d record(s)",
        contract.name,
        len(contract.operations),
        len(graph),
    )
    return ContractAnalysis(contract=contract, graph=graph, mapper=mapper)
