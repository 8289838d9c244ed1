# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Builders and fakes shared by the test modules."""

from __future__ import annotations

from typing import Any

# -------------------------------------------------------------------------
# Manifest builders
# -------------------------------------------------------------------------


def make_manifest_data(
    operations: list[dict[str, Any]],
    records: list[dict[str, Any]],
    module: str = "app.models",
) -> dict[str, Any]:
    """Build manifest data for a single marked interface ``IService``."""
    return {
        "service": {
            "name": "Service",
            "module": "app.services",
            "remote_contract": True,
            "implements": ["IService"],
        },
        "interfaces": [
            {
                "name": "IService",
                "module": "app.services",
                "remote_contract": True,
                "operations": operations,
            }
        ],
        "records": [{"module": module, **record} for record in records],
    }


def operation(name: str, parameter: str | None, returns: str) -> dict[str, Any]:
    """Declare an operation with one parameter (or none when parameter is None)."""
    parameters = [] if parameter is None else [{"name": "request", "type": parameter}]
    return {"name": name, "parameters": parameters, "returns": returns}


def record(name: str, /, **fields: str) -> dict[str, Any]:
    """Declare a record; keyword order is field order."""
    return {
        "name": name,
        "fields": [{"name": field, "type": type_} for field, type_ in fields.items()],
    }


# -------------------------------------------------------------------------
# Fakes
# -------------------------------------------------------------------------


class FakeVersionResolver:
    """In-memory VersionResolver."""

    def __init__(self, versions: dict[str, str] | None = None, error: Exception | None = None):
        self.versions = versions or {}
        self.error = error
        self.requested: list[list[str]] = []

    async def resolve_many(self, names: list[str]) -> dict[str, str]:
        self.requested.append(list(names))
        if self.error is not None:
            raise self.error
        return {name: self.versions.get(name, "1.0.0") for name in dict.fromkeys(names)}

