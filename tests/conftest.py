# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Shared fixtures: the People manifest, options, settings and a fake resolver.

Provides:
- people_manifest_data / people_manifest / people_analysis
- people_options (namespace ``people_grpc``, service ``People``)
- settings: ConfigGrpcWizard ignoring any .env file
- fake_resolver: FakeVersionResolver with fixed versions
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import pytest

from grpcwizard.analysis import ContractAnalysis, analyze_manifest
from grpcwizard.config import ConfigGrpcWizard
from grpcwizard.manifest import ServiceManifest
from grpcwizard.models import GenerationOptions
from tests.helpers import FakeVersionResolver

EXAMPLES_DIR = Path(__file__).parent.parent / "examples"
PEOPLE_DIR = EXAMPLES_DIR / "people"

# -------------------------------------------------------------------------
# Manifest data
# -------------------------------------------------------------------------

PEOPLE_MANIFEST: dict[str, Any] = {
    "service": {
        "name": "PeopleService",
        "module": "people_app.services",
        "remote_contract": True,
        "implements": ["IPeopleService"],
    },
    "interfaces": [
        {
            "name": "IPeopleService",
            "module": "people_app.services",
            "remote_contract": True,
            "operations": [
                {
                    "name": "GetAll",
                    "parameters": [{"name": "request", "type": "GetAllPeopleRequest"}],
                    "returns": "Awaitable[PeopleReply]",
                },
                {
                    "name": "GetPersonById",
                    "parameters": [{"name": "request", "type": "GetPersonByIdRequest"}],
                    "returns": "Awaitable[Person]",
                },
            ],
        }
    ],
    "records": [
        {
            "name": "Person",
            "module": "people_app.models",
            "fields": [
                {"name": "id", "type": "int"},
                {"name": "first_name", "type": "str"},
                {"name": "last_name", "type": "str"},
                {"name": "bio", "type": "str"},
                {"name": "photo_url", "type": "str"},
            ],
        },
        {"name": "GetAllPeopleRequest", "module": "people_app.models", "fields": []},
        {
            "name": "GetPersonByIdRequest",
            "module": "people_app.models",
            "fields": [{"name": "id", "type": "int"}],
        },
        {
            "name": "PeopleReply",
            "module": "people_app.models",
            "fields": [{"name": "people", "type": "list[Person]"}],
        },
    ],
}


# -------------------------------------------------------------------------
# Fixtures
# -------------------------------------------------------------------------


@pytest.fixture
def people_manifest_data() -> dict[str, Any]:
    """Mutable copy of the People manifest."""
    return copy.deepcopy(PEOPLE_MANIFEST)


@pytest.fixture
def people_manifest(people_manifest_data: dict[str, Any]) -> ServiceManifest:
    return ServiceManifest.model_validate(people_manifest_data)


@pytest.fixture
def people_analysis(people_manifest: ServiceManifest) -> ContractAnalysis:
    return analyze_manifest(people_manifest)


@pytest.fixture
def people_options(tmp_path: Path) -> GenerationOptions:
    return GenerationOptions(
        namespace="people_grpc",
        service_name="People",
        proto_file_name="people.proto",
        output_root=tmp_path / "out",
    )


@pytest.fixture
def settings() -> ConfigGrpcWizard:
    """Settings without .env overrides."""
    return ConfigGrpcWizard(_env_file=None)


@pytest.fixture
def fake_resolver() -> FakeVersionResolver:
    return FakeVersionResolver(
        {"protobuf": "5.28.2", "grpcio": "1.66.1", "grpcio-tools": "1.66.1"}
    )
