# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for ConfigGrpcWizard."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from grpcwizard.config import ConfigGrpcWizard, get_settings

pytestmark = pytest.mark.unit


class TestConfigGrpcWizard:
    def test_defaults(self, settings: ConfigGrpcWizard) -> None:
        assert settings.package_index_url == "https://pypi.org/pypi"
        assert settings.shared_packages == ["protobuf", "grpcio", "grpcio-tools"]
        assert settings.server_packages == ["grpcio"]
        assert settings.client_packages == ["grpcio"]
        assert settings.role_folders() == {
            "shared": "shared",
            "server": "server",
            "client": "client",
            "guide": "",
        }
        assert settings.guide_file_name == "README.txt"
        assert settings.server_listen_address == "[::]:50051"
        assert settings.allow_overwrite is True

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GRPCWIZARD_SERVER_FOLDER", "api")
        monkeypatch.setenv("GRPCWIZARD_SERVER_PACKAGES", '["grpcio", "grpcio-reflection"]')
        monkeypatch.setenv("GRPCWIZARD_LOG_LEVEL", "debug")

        settings = ConfigGrpcWizard(_env_file=None)

        assert settings.server_folder == "api"
        assert settings.server_packages == ["grpcio", "grpcio-reflection"]
        assert settings.log_level == "DEBUG"

    def test_rejects_unknown_log_level(self) -> None:
        with pytest.raises(ValidationError):
            ConfigGrpcWizard(_env_file=None, log_level="LOUD")

    def test_timeout_bounds(self) -> None:
        with pytest.raises(ValidationError):
            ConfigGrpcWizard(_env_file=None, lookup_timeout_seconds=0)

    def test_get_settings_is_cached(self) -> None:
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
