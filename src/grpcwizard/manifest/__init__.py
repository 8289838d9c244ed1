# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Service manifest models and loader.

The manifest replaces runtime reflection: it states the implementation, the
interfaces it exposes (with explicit remote_contract markers), each
operation's parameters and result, and every record's ordered fields.
"""

from __future__ import annotations

from grpcwizard.manifest.loader import ManifestLoader
from grpcwizard.manifest.models import (
    ModelField,
    ModelInterface,
    ModelOperation,
    ModelParameter,
    ModelRecord,
    ModelService,
    ServiceManifest,
)

__all__ = [
    "ManifestLoader",
    "ModelField",
    "ModelInterface",
    "ModelOperation",
    "ModelParameter",
    "ModelRecord",
    "ModelService",
    "ServiceManifest",
]
