"""RowSchema - consistency validation for object-relational mapping metadata."""

from __future__ import annotations

from row_schema.core.config import ValidatorConfig
from row_schema.core.enums import AssociationType, InheritanceType, OrderDirection
from row_schema.core.exceptions import (
    ClassNotFoundError,
    DuplicateClassError,
    DuplicateTypeError,
    MetadataBuildError,
    MetadataError,
    RowSchemaError,
    SchemaSyncError,
    TypeRegistryError,
    UnknownTypeError,
)
from row_schema.core.registry import MetadataRegistry
from row_schema.core.types import StorageType, TypeRegistry
from row_schema.mapping.builder import embeddable, entity, mapped_superclass
from row_schema.mapping.metadata import (
    AssociationMapping,
    ClassDescriptor,
    FieldMapping,
    JoinColumn,
    JoinTable,
)
from row_schema.mapping.protocol import MetadataProvider, SchemaDiffer
from row_schema.validation.validator import SchemaValidator, ValidationSummary

__all__ = [
    # Config
    "ValidatorConfig",
    # Registries
    "MetadataRegistry",
    "TypeRegistry",
    "StorageType",
    # Metadata
    "ClassDescriptor",
    "FieldMapping",
    "AssociationMapping",
    "JoinColumn",
    "JoinTable",
    "entity",
    "embeddable",
    "mapped_superclass",
    # Protocols
    "MetadataProvider",
    "SchemaDiffer",
    # Validation
    "SchemaValidator",
    "ValidationSummary",
    # Enums
    "AssociationType",
    "InheritanceType",
    "OrderDirection",
    # Exceptions
    "RowSchemaError",
    "MetadataError",
    "ClassNotFoundError",
    "DuplicateClassError",
    "MetadataBuildError",
    "TypeRegistryError",
    "UnknownTypeError",
    "DuplicateTypeError",
    "SchemaSyncError",
]
