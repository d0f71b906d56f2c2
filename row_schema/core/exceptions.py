"""RowSchema exception hierarchy.

Mapping defects are reported as strings by the validator and never raised.
Exceptions are reserved for unusable input: a metadata snapshot that cannot
be resolved, an unknown storage type, or a missing collaborator.
"""

from __future__ import annotations


class RowSchemaError(Exception):
    """Base exception for all RowSchema errors."""


# --- Metadata ---


class MetadataError(RowSchemaError):
    """Base for metadata registry errors."""


class ClassNotFoundError(MetadataError):
    """Raised when a class name cannot be resolved to a descriptor."""

    def __init__(self, class_name: str) -> None:
        self.class_name = class_name
        super().__init__(f"Class '{class_name}' is not a mapped class")


class DuplicateClassError(MetadataError):
    """Raised when two descriptors are registered under the same class name."""

    def __init__(self, class_name: str) -> None:
        self.class_name = class_name
        super().__init__(f"Duplicate class descriptor for '{class_name}'")


class MetadataBuildError(MetadataError):
    """Raised when a ClassDescriptorBuilder is used inconsistently."""


# --- Types ---


class TypeRegistryError(RowSchemaError):
    """Base for storage type registry errors."""


class UnknownTypeError(TypeRegistryError):
    """Raised when a storage type name is not registered."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f"Unknown storage type '{type_name}'")


class DuplicateTypeError(TypeRegistryError):
    """Raised when a storage type name is registered twice."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(
            f"Storage type '{type_name}' is already registered, use override_type() to replace it"
        )


# --- Schema sync ---


class SchemaSyncError(RowSchemaError):
    """Raised when a schema sync check cannot be performed."""
