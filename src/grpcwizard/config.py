# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Configuration for artifact generation.

Loads from environment variables with the GRPCWIZARD_ prefix and an optional
.env file. List-valued settings are given as JSON, e.g.
GRPCWIZARD_SERVER_PACKAGES='["grpcio", "grpcio-reflection"]'.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from grpcwizard.versions import DEFAULT_INDEX_URL


class ConfigGrpcWizard(BaseSettings):
    """Configuration for a generation run.

    Environment variables use the GRPCWIZARD_ prefix.
    Example: GRPCWIZARD_SERVER_LISTEN_ADDRESS=0.0.0.0:50051
    """

    model_config = SettingsConfigDict(
        env_prefix="GRPCWIZARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Package index
    package_index_url: str = Field(
        default=DEFAULT_INDEX_URL,
        description="Base URL of a PyPI-compatible JSON API",
    )
    lookup_timeout_seconds: float = Field(
        default=10.0,
        ge=0.5,
        le=120.0,
        description="Per-request timeout for version lookups",
    )

    # Dependencies recommended per role
    shared_packages: list[str] = Field(
        default_factory=lambda: ["protobuf", "grpcio", "grpcio-tools"],
        description="Packages the shared package needs",
    )
    server_packages: list[str] = Field(
        default_factory=lambda: ["grpcio"],
        description="Packages the server project needs",
    )
    client_packages: list[str] = Field(
        default_factory=lambda: ["grpcio"],
        description="Packages the client project needs",
    )

    # Output layout
    shared_folder: str = Field(default="shared", min_length=1)
    server_folder: str = Field(default="server", min_length=1)
    client_folder: str = Field(default="client", min_length=1)
    guide_file_name: str = Field(default="README.txt", min_length=1)

    # Wiring fragments
    server_listen_address: str = Field(
        default="[::]:50051",
        description="Address the server start-up fragment listens on",
    )
    client_target: str = Field(
        default="localhost:50051",
        description="Target the client set-up fragment connects to",
    )

    allow_overwrite: bool = Field(
        default=True,
        description="Replace existing files in the output folder",
    )
    log_level: str = Field(default="INFO", description="Root log level for the CLI")

    @field_validator("log_level")
    @classmethod
    def log_level_is_known(cls, v: str) -> str:
        """Normalize and check the level name."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v!r}")
        return level

    def role_folders(self) -> dict[str, str]:
        """Output folder per artifact role; the guide sits at the root."""
        return {
            "shared": self.shared_folder,
            "server": self.server_folder,
            "client": self.client_folder,
            "guide": "",
        }


@lru_cache(maxsize=1)
def get_settings() -> ConfigGrpcWizard:
    """Return the process-wide settings, loaded once."""
    return ConfigGrpcWizard()
