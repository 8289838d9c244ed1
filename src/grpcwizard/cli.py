# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""CLI command group for artifact generation.

Commands
--------
  grpcwizard generate MANIFEST --namespace NS --service-name NAME
                      --proto-file FILE [--output DIR] [--dry-run] [--verbose]
  grpcwizard inspect MANIFEST
  grpcwizard versions PACKAGE...

The version resolver is injected via ``make_cli()`` so tests run without
network access.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from grpcwizard.analysis import ContractAnalysis
from grpcwizard.config import ConfigGrpcWizard, get_settings
from grpcwizard.errors import GrpcWizardError
from grpcwizard.models import ArtifactSet, GenerationOptions
from grpcwizard.naming import schema_message_name
from grpcwizard.pipeline import GrpcWizard
from grpcwizard.versions import PackageVersionResolver, VersionResolver

logger = logging.getLogger(__name__)

console = Console()
error_console = Console(stderr=True)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_LEXERS = {".proto": "protobuf", ".py": "python"}


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------


def _render_artifacts(artifacts: ArtifactSet) -> None:
    for artifact in artifacts.artifacts:
        console.rule(artifact.relative_path)
        lexer = _LEXERS.get(Path(artifact.file_name).suffix, "text")
        console.print(Syntax(artifact.content, lexer, line_numbers=False))
        console.print()


def _render_analysis(analysis: ContractAnalysis) -> None:
    contract = analysis.contract
    console.print(
        f"[bold]{contract.service.name}[/bold] implements "
        f"[bold]{contract.interface.name}[/bold] ({contract.interface.module})"
    )

    operations = Table(title="Operations")
    operations.add_column("Operation")
    operations.add_column("Request")
    operations.add_column("Response")
    for operation in contract.operations:
        operations.add_row(
            operation.name,
            contract.record(operation.input_type).name,
            contract.record(operation.output_type).name,
        )
    console.print(operations)

    messages = Table(title="Message type graph")
    messages.add_column("#", justify="right")
    messages.add_column("Message")
    messages.add_column("Record")
    messages.add_column("Fields", justify="right")
    for index, record in enumerate(analysis.graph, start=1):
        messages.add_row(
            str(index),
            schema_message_name(record.name),
            record.identity,
            str(len(record.fields)),
        )
    console.print(messages)


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)


# ---------------------------------------------------------------------------
# Click command group factory
# ---------------------------------------------------------------------------


def make_cli(
    version_resolver: VersionResolver | None = None,
    settings: ConfigGrpcWizard | None = None,
) -> click.Group:
    """Construct the ``grpcwizard`` Click group with injected collaborators.

    Args:
        version_resolver: Resolver for package versions (defaults to PyPI).
        settings: Settings instance (defaults to ``get_settings()``).

    Returns:
        Configured Click group.
    """

    def _settings() -> ConfigGrpcWizard:
        return settings or get_settings()

    def _wizard() -> GrpcWizard:
        return GrpcWizard(settings=_settings(), version_resolver=version_resolver)

    @click.group("grpcwizard")
    @click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
    def cli(verbose: bool) -> None:
        """Generate gRPC schema, converters and adapters from a service manifest."""
        _configure_logging("DEBUG" if verbose else _settings().log_level)

    @cli.command("generate")
    @click.argument("manifest", type=click.Path(exists=True, dir_okay=False, path_type=Path))
    @click.option("--namespace", required=True, help="Python package of the shared artifacts.")
    @click.option("--service-name", required=True, help="Short service name, e.g. People.")
    @click.option("--proto-file", required=True, help="Schema file name, e.g. people.proto.")
    @click.option(
        "--output",
        "output_root",
        default=".",
        type=click.Path(file_okay=False, path_type=Path),
        help="Output folder.",
    )
    @click.option("--dry-run", is_flag=True, help="Print artifacts instead of writing them.")
    def generate(
        manifest: Path,
        namespace: str,
        service_name: str,
        proto_file: str,
        output_root: Path,
        dry_run: bool,
    ) -> None:
        """Generate all artifacts for MANIFEST."""
        try:
            options = GenerationOptions(
                namespace=namespace,
                service_name=service_name,
                proto_file_name=proto_file,
                output_root=output_root,
            )
        except ValidationError as e:
            messages = "; ".join(error["msg"] for error in e.errors())
            raise click.ClickException(f"Invalid options: {messages}") from e

        wizard = _wizard()
        try:
            if dry_run:
                artifacts = asyncio.run(wizard.generate(manifest, options))
                _render_artifacts(artifacts)
                return
            artifacts, result = asyncio.run(wizard.generate_and_write(manifest, options))
        except GrpcWizardError as e:
            logger.debug("Generation failed: %s", e.details)
            raise click.ClickException(str(e)) from e

        console.print(
            f"[green]Wrote {len(result.files_written)} file(s)[/green] to {result.output_path}"
        )
        for relative in result.files_written:
            console.print(f"  {relative}")

    @cli.command("inspect")
    @click.argument("manifest", type=click.Path(exists=True, dir_okay=False, path_type=Path))
    def inspect_manifest(manifest: Path) -> None:
        """Analyse MANIFEST and print its operations and message graph."""
        try:
            analysis = _wizard().analyze(manifest)
        except GrpcWizardError as e:
            raise click.ClickException(str(e)) from e
        _render_analysis(analysis)

    @cli.command("versions")
    @click.argument("packages", nargs=-1, required=True)
    def versions(packages: tuple[str, ...]) -> None:
        """Print the latest stable version of each PACKAGE."""
        config = _settings()
        resolver = version_resolver or PackageVersionResolver(
            index_url=config.package_index_url,
            timeout=config.lookup_timeout_seconds,
        )
        try:
            resolved = asyncio.run(resolver.resolve_many(list(packages)))
        except GrpcWizardError as e:
            raise click.ClickException(str(e)) from e
        for name, version in resolved.items():
            console.print(f"{name}=={version}")

    return cli


#: Default ``grpcwizard`` group resolving versions against the configured index.
cli = make_cli()


def main() -> None:
    """Console-script entry point."""
    cli()
