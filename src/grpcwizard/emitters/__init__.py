# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Artifact emitters. Each is a pure function of the analysed contract."""

from __future__ import annotations

from grpcwizard.emitters.adapters import ClientAdapterEmitter, ServerAdapterEmitter
from grpcwizard.emitters.converters import ConverterEmitter
from grpcwizard.emitters.instructions import InstructionsComposer
from grpcwizard.emitters.schema import SchemaEmitter
from grpcwizard.emitters.wiring import WiringEmitter, WiringText

__all__ = [
    "ClientAdapterEmitter",
    "ConverterEmitter",
    "InstructionsComposer",
    "SchemaEmitter",
    "ServerAdapterEmitter",
    "WiringEmitter",
    "WiringText",
]
