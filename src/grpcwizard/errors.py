# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Error taxonomy for grpcwizard.

Every failure the generator reports derives from GrpcWizardError, which
carries a code from EnumWizardErrorCode, a human-readable message and a
details dictionary naming the offending operation, type or field.

Analysis errors (raised before any artifact is emitted, never retried):

- ContractTagMissingError: the implementation is not marked as remote contract
- ContractInterfaceMissingError: no implemented interface is marked
- OperationArityError: an operation does not take exactly one parameter
- OperationShapeError: an operation's parameter or result has the wrong shape
- UnsupportedFieldTypeError: a field type cannot be mapped to the schema
- RecordNameCollisionError: two record identities share one generated name
- FieldNameCollisionError: two fields of a record share one schema field name

Collaborator errors:

- ManifestLoadError: the manifest file cannot be read or validated
- VersionLookupError: the package index could not resolve a version
- ArtifactWriteError: persisting the generated artifacts failed
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

__all__ = [
    "ArtifactWriteError",
    "ContractInterfaceMissingError",
    "ContractTagMissingError",
    "EnumWizardErrorCode",
    "FieldNameCollisionError",
    "GrpcWizardError",
    "ManifestLoadError",
    "OperationArityError",
    "OperationShapeError",
    "RecordNameCollisionError",
    "UnsupportedFieldTypeError",
    "VersionLookupError",
]


class EnumWizardErrorCode(str, Enum):
    """Error codes reported by the generator."""

    # Analysis
    CONTRACT_TAG_MISSING = "CONTRACT_TAG_MISSING"
    CONTRACT_INTERFACE_MISSING = "CONTRACT_INTERFACE_MISSING"
    OPERATION_ARITY = "OPERATION_ARITY"
    OPERATION_SHAPE = "OPERATION_SHAPE"
    UNSUPPORTED_FIELD_TYPE = "UNSUPPORTED_FIELD_TYPE"
    RECORD_NAME_COLLISION = "RECORD_NAME_COLLISION"
    FIELD_NAME_COLLISION = "FIELD_NAME_COLLISION"

    # Collaborators
    MANIFEST_LOAD_FAILED = "MANIFEST_LOAD_FAILED"
    VERSION_LOOKUP_FAILED = "VERSION_LOOKUP_FAILED"
    ARTIFACT_WRITE_FAILED = "ARTIFACT_WRITE_FAILED"


class GrpcWizardError(Exception):
    """Base exception for all generator failures.

    Attributes:
        code: Error code from EnumWizardErrorCode
        message: Human-readable error message
        details: Additional error context (operation, type, field names)
    """

    def __init__(
        self,
        code: EnumWizardErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            code: Error code enum
            message: Error message
            details: Optional error details dictionary
        """
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(code={self.code}, message={self.message!r}, "
            f"details={self.details})"
        )


# ---------------------------------------------------------------------------
# Analysis errors
# ---------------------------------------------------------------------------


class ContractTagMissingError(GrpcWizardError):
    """Raised when the service implementation is not marked as a remote contract."""

    def __init__(self, service_name: str) -> None:
        self.service_name = service_name
        super().__init__(
            EnumWizardErrorCode.CONTRACT_TAG_MISSING,
            f"Service {service_name} is missing the remote_contract marker",
            {"service": service_name},
        )


class ContractInterfaceMissingError(GrpcWizardError):
    """Raised when none of the implemented interfaces is marked as a remote contract."""

    def __init__(self, service_name: str, implements: list[str]) -> None:
        self.service_name = service_name
        self.implements = implements
        super().__init__(
            EnumWizardErrorCode.CONTRACT_INTERFACE_MISSING,
            f"Can not find an interface with the remote_contract marker "
            f"among those implemented by {service_name}: {implements}",
            {"service": service_name, "implements": implements},
        )


class OperationArityError(GrpcWizardError):
    """Raised when an operation does not declare exactly one parameter."""

    def __init__(self, operation: str, parameter_count: int) -> None:
        self.operation = operation
        self.parameter_count = parameter_count
        if parameter_count == 0:
            message = f"Service method {operation} requires one input parameter"
        else:
            message = (
                f"Service method {operation} has more than one parameter "
                f"({parameter_count})"
            )
        super().__init__(
            EnumWizardErrorCode.OPERATION_ARITY,
            message,
            {"operation": operation, "parameter_count": parameter_count},
        )


class OperationShapeError(GrpcWizardError):
    """Raised when an operation's parameter or result is not a single record.

    The result must be ``Awaitable[<Record>]``; the parameter must name a
    declared record.
    """

    def __init__(self, operation: str, reason: str, type_name: str) -> None:
        self.operation = operation
        self.reason = reason
        self.type_name = type_name
        super().__init__(
            EnumWizardErrorCode.OPERATION_SHAPE,
            f"Service method {operation}: {reason} (got {type_name!r})",
            {"operation": operation, "type": type_name},
        )


class UnsupportedFieldTypeError(GrpcWizardError):
    """Raised when a field's type has no schema mapping."""

    def __init__(self, field_name: str, type_name: str, record: str | None = None) -> None:
        self.field_name = field_name
        self.type_name = type_name
        self.record = record
        location = f"{record}.{field_name}" if record else field_name
        super().__init__(
            EnumWizardErrorCode.UNSUPPORTED_FIELD_TYPE,
            f"Unknown Property Type: {type_name} (field {location})",
            {"field": field_name, "type": type_name, "record": record},
        )


class RecordNameCollisionError(GrpcWizardError):
    """Raised when distinct record identities would share one generated name.

    Covers the bare record name (schema message, converter class) and the
    converter module name derived from it.
    """

    def __init__(
        self, name: str, identities: list[str], label: str = "Record name"
    ) -> None:
        self.name = name
        self.identities = identities
        super().__init__(
            EnumWizardErrorCode.RECORD_NAME_COLLISION,
            f"{label} {name} is shared by {len(identities)} distinct types: "
            f"{', '.join(identities)}. Rename one of them.",
            {"name": name, "identities": identities, "label": label},
        )


class FieldNameCollisionError(GrpcWizardError):
    """Raised when two fields of one record map to the same schema field name."""

    def __init__(self, record: str, schema_name: str, fields: list[str]) -> None:
        self.record = record
        self.schema_name = schema_name
        self.fields = fields
        super().__init__(
            EnumWizardErrorCode.FIELD_NAME_COLLISION,
            f"Fields {' and '.join(fields)} of {record} both map to schema "
            f"field {schema_name}. Rename one of them.",
            {"record": record, "field": schema_name, "fields": fields},
        )


# ---------------------------------------------------------------------------
# Collaborator errors
# ---------------------------------------------------------------------------


class ManifestLoadError(GrpcWizardError):
    """Raised when a manifest fails to load or validate.

    Attributes:
        path: Path to the manifest file that failed (None for in-memory data).
        cause: The underlying exception that caused the failure.
    """

    def __init__(
        self, message: str, path: Path | None = None, cause: Exception | None = None
    ) -> None:
        self.path = path
        self.cause = cause
        super().__init__(
            EnumWizardErrorCode.MANIFEST_LOAD_FAILED,
            message,
            {"path": str(path) if path else None},
        )


class VersionLookupError(GrpcWizardError):
    """Raised when the package index cannot resolve a stable version."""

    def __init__(self, package: str, reason: str) -> None:
        self.package = package
        self.reason = reason
        super().__init__(
            EnumWizardErrorCode.VERSION_LOOKUP_FAILED,
            f"Could not resolve latest version of {package}: {reason}",
            {"package": package},
        )


class ArtifactWriteError(GrpcWizardError):
    """Raised when generated artifacts cannot be persisted."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        super().__init__(
            EnumWizardErrorCode.ARTIFACT_WRITE_FAILED,
            message,
            {"path": str(path) if path else None},
        )
