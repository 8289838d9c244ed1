"""grpcwizard - gRPC artifacts from a service manifest.

Reads a manifest describing a service implementation, its remote contract
interface and the record types it exchanges, and generates a proto3 schema,
converters between host records and schema messages, a grpc.aio servicer
adapter, a client adapter and an integration guide.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from grpcwizard.analysis import ContractAnalysis, analyze_manifest
from grpcwizard.config import ConfigGrpcWizard, get_settings
from grpcwizard.errors import GrpcWizardError
from grpcwizard.manifest import ManifestLoader, ServiceManifest
from grpcwizard.models import ArtifactSet, GeneratedArtifact, GenerationOptions
from grpcwizard.pipeline import GrpcWizard

try:
    __version__ = version("grpc-wizard")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

__all__ = [
    "ArtifactSet",
    "ConfigGrpcWizard",
    "ContractAnalysis",
    "GeneratedArtifact",
    "GenerationOptions",
    "GrpcWizard",
    "GrpcWizardError",
    "ManifestLoader",
    "ServiceManifest",
    "__version__",
    "analyze_manifest",
    "get_settings",
]
