# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Naming conventions shared by every emitter.

All functions are pure: a derived name depends on the input name only, so
schema-side and host-side artifacts can always be paired by name.
"""

from __future__ import annotations

import re

SCHEMA_PREFIX = "Grpc_"

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")


def lower_camel(name: str) -> str:
    """Lower-case the first character only (``FirstName`` -> ``firstName``)."""
    return name[:1].lower() + name[1:]


def json_field_name(name: str) -> str:
    """Return the JSON name protoc derives for a schema field (``first_name`` -> ``firstName``)."""
    parts = name.split("_")
    return parts[0] + "".join(part[:1].upper() + part[1:] for part in parts[1:])


def snake_case(name: str) -> str:
    """Convert a PascalCase or camelCase name to snake_case.

    Examples:
        >>> snake_case("GetAllPeopleRequest")
        'get_all_people_request'
        >>> snake_case("HTTPReply")
        'http_reply'
    """
    converted = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    converted = _WORD_BOUNDARY.sub(r"\1_\2", converted)
    return converted.replace("-", "_").lower()


# ---------------------------------------------------------------------------
# Schema names
# ---------------------------------------------------------------------------


def schema_service_name(service_name: str) -> str:
    return f"{SCHEMA_PREFIX}{service_name}"


def schema_message_name(record_name: str) -> str:
    return f"{SCHEMA_PREFIX}{record_name}"


# ---------------------------------------------------------------------------
# Host-side artifact names
# ---------------------------------------------------------------------------


def converter_class_name(record_name: str) -> str:
    return f"{record_name}Converter"


def converter_module_name(record_name: str) -> str:
    return f"{snake_case(record_name)}_converter"


def server_adapter_class_name(service_name: str) -> str:
    return f"{SCHEMA_PREFIX}{service_name}Service"


def server_adapter_module_name(service_name: str) -> str:
    return f"grpc_{snake_case(service_name)}_service"


def client_adapter_class_name(service_name: str) -> str:
    return f"Grpc{service_name}Client"


def client_adapter_module_name(service_name: str) -> str:
    return f"grpc_{snake_case(service_name)}_client"


# ---------------------------------------------------------------------------
# Names produced by the protobuf/grpc compilers for a schema file
# ---------------------------------------------------------------------------


def proto_module_stem(proto_file_name: str) -> str:
    """Return the file stem of a ``.proto`` file name (``people.proto`` -> ``people``)."""
    return proto_file_name[: -len(".proto")] if proto_file_name.endswith(".proto") else proto_file_name


def messages_module_name(proto_file_name: str) -> str:
    return f"{proto_module_stem(proto_file_name)}_pb2"


def services_module_name(proto_file_name: str) -> str:
    return f"{proto_module_stem(proto_file_name)}_pb2_grpc"


def servicer_base_name(service_name: str) -> str:
    return f"{schema_service_name(service_name)}Servicer"


def stub_class_name(service_name: str) -> str:
    return f"{schema_service_name(service_name)}Stub"


def add_servicer_function_name(service_name: str) -> str:
    return f"add_{servicer_base_name(service_name)}_to_server"
