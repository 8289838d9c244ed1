# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Manifest loader.

Reads a YAML service manifest and validates it against ServiceManifest.

Usage:
    >>> from pathlib import Path
    >>> from grpcwizard.manifest.loader import ManifestLoader
    >>>
    >>> manifest = ManifestLoader().load(Path("examples/people/manifest.yaml"))
    >>> print(manifest.service.name)
    PeopleService
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from grpcwizard.errors import ManifestLoadError
from grpcwizard.manifest.models import ServiceManifest

logger = logging.getLogger(__name__)


class ManifestLoader:
    """Loader for YAML service manifests."""

    def load(self, path: Path) -> ServiceManifest:
        """Load and validate a manifest file.

        Args:
            path: Path to the manifest YAML file.

        Returns:
            Validated ServiceManifest instance.

        Raises:
            ManifestLoadError: If the file cannot be read or parsed, or fails
                validation.
        """
        logger.debug("Loading manifest from: %s", path)

        try:
            with open(path, encoding="utf-8") as f:
                raw_data = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise ManifestLoadError(
                f"Manifest file not found: {path}", path=path, cause=e
            ) from e
        except yaml.YAMLError as e:
            raise ManifestLoadError(
                f"Invalid YAML in manifest file: {path}", path=path, cause=e
            ) from e

        if raw_data is None:
            raise ManifestLoadError(f"Manifest file is empty: {path}", path=path)

        manifest = self.load_data(raw_data, path=path)
        logger.info(
            "Loaded manifest for %s (%d interface(s), %d record(s)) from %s",
            manifest.service.name,
            len(manifest.interfaces),
            len(manifest.records),
            path.name,
        )
        return manifest

    def load_data(self, raw_data: Any, path: Path | None = None) -> ServiceManifest:
        """Validate already-parsed manifest data.

        Args:
            raw_data: Parsed YAML/JSON data.
            path: Optional source path, used in error messages only.

        Returns:
            Validated ServiceManifest instance.

        Raises:
            ManifestLoadError: If the data is not a mapping or fails validation.
        """
        source = str(path) if path else "<data>"
        if not isinstance(raw_data, dict):
            raise ManifestLoadError(
                f"Manifest must be a mapping, got {type(raw_data).__name__}: {source}",
                path=path,
            )

        try:
            return ServiceManifest.model_validate(raw_data)
        except ValidationError as e:
            error_details = []
            for error in e.errors():
                loc = ".".join(str(x) for x in error["loc"])
                error_details.append(f"  - {loc}: {error['msg']}")
            raise ManifestLoadError(
                f"Manifest validation failed for {source}:\n" + "\n".join(error_details),
                path=path,
                cause=e,
            ) from e


__all__ = [
    "ManifestLoader",
]
