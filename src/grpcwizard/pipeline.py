# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""
GrpcWizard: the end-to-end generation pipeline.

    manifest -> analysis -> version lookup -> emitters -> ArtifactSet -> writer

Analysis runs to completion before anything else happens, so an analysis
error produces no artifacts and touches no files.
"""

from __future__ import annotations

import logging
from pathlib import Path

from grpcwizard.analysis import ContractAnalysis, analyze_manifest
from grpcwizard.config import ConfigGrpcWizard, get_settings
from grpcwizard.emitters import (
    ClientAdapterEmitter,
    ConverterEmitter,
    InstructionsComposer,
    SchemaEmitter,
    ServerAdapterEmitter,
    WiringEmitter,
)
from grpcwizard.manifest import ManifestLoader, ServiceManifest
from grpcwizard.models import ArtifactSet, GeneratedArtifact, GenerationOptions
from grpcwizard.versions import PackageVersionResolver, VersionResolver
from grpcwizard.writer import ArtifactWriter, ArtifactWriteResult

logger = logging.getLogger(__name__)


class GrpcWizard:
    """
    Generate gRPC artifacts from a service manifest.

    Collaborators (settings, version resolver, writer) are injectable; the
    defaults come from ConfigGrpcWizard.
    """

    def __init__(
        self,
        settings: ConfigGrpcWizard | None = None,
        version_resolver: VersionResolver | None = None,
        writer: ArtifactWriter | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.version_resolver = version_resolver or PackageVersionResolver(
            index_url=self.settings.package_index_url,
            timeout=self.settings.lookup_timeout_seconds,
        )
        self.writer = writer or ArtifactWriter()
        self.loader = ManifestLoader()
        self.wiring = WiringEmitter(
            shared_packages=self.settings.shared_packages,
            server_packages=self.settings.server_packages,
            client_packages=self.settings.client_packages,
            server_listen_address=self.settings.server_listen_address,
            client_target=self.settings.client_target,
        )

    # -----------------------------------------------------------------------
    # Stages
    # -----------------------------------------------------------------------

    def load(self, manifest: ServiceManifest | Path | str) -> ServiceManifest:
        if isinstance(manifest, ServiceManifest):
            return manifest
        return self.loader.load(Path(manifest))

    def analyze(self, manifest: ServiceManifest | Path | str) -> ContractAnalysis:
        """Load (if needed) and analyse a manifest. Raises on the first error."""
        return analyze_manifest(self.load(manifest))

    def render(
        self,
        analysis: ContractAnalysis,
        options: GenerationOptions,
        versions: dict[str, str],
    ) -> ArtifactSet:
        """Run every emitter over an analysed contract. Pure."""
        folders = self.settings.role_folders()

        shared = [SchemaEmitter().emit(analysis, options)]
        shared.extend(ConverterEmitter().emit(analysis, options))
        server = [ServerAdapterEmitter().emit(analysis, options)]
        client = [ClientAdapterEmitter().emit(analysis, options)]

        guide = InstructionsComposer().emit(
            self.settings.guide_file_name,
            options,
            self.wiring.render(analysis, options, versions),
            shared_files=[artifact.file_name for artifact in shared],
            server_files=[artifact.file_name for artifact in server],
            client_files=[artifact.file_name for artifact in client],
        )

        artifacts: list[GeneratedArtifact] = [
            artifact.model_copy(update={"folder": folders[artifact.role]})
            for artifact in [*shared, *server, *client, guide]
        ]
        logger.info("Produced %d artifact(s) for %s", len(artifacts), options.service_name)
        return ArtifactSet(artifacts=tuple(artifacts))

    # -----------------------------------------------------------------------
    # Entry points
    # -----------------------------------------------------------------------

    async def generate(
        self, manifest: ServiceManifest | Path | str, options: GenerationOptions
    ) -> ArtifactSet:
        """
        Analyse, resolve package versions and render all artifacts.

        Raises:
            GrpcWizardError: Analysis, manifest or version lookup failure
        """
        logger.info("Generating %s into %s", options.service_name, options.output_root)
        analysis = self.analyze(manifest)
        versions = await self.version_resolver.resolve_many(self.wiring.package_names())
        return self.render(analysis, options, versions)

    async def generate_and_write(
        self, manifest: ServiceManifest | Path | str, options: GenerationOptions
    ) -> tuple[ArtifactSet, ArtifactWriteResult]:
        """Generate and persist; files created by a failing write are rolled back."""
        artifacts = await self.generate(manifest, options)
        with self.writer.atomic_write_context():
            result = self.writer.write_artifacts(
                options.output_root,
                artifacts,
                allow_overwrite=self.settings.allow_overwrite,
            )
        return artifacts, result
