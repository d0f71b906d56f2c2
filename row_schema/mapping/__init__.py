"""Mapping layer - class descriptors and the DSL that builds them."""

from __future__ import annotations

from row_schema.mapping.builder import (
    ClassDescriptorBuilder,
    embeddable,
    entity,
    mapped_superclass,
)
from row_schema.mapping.metadata import (
    AssociationMapping,
    ClassDescriptor,
    FieldMapping,
    JoinColumn,
    JoinTable,
)
from row_schema.mapping.protocol import MetadataProvider, SchemaDiffer

__all__ = [
    "ClassDescriptor",
    "FieldMapping",
    "AssociationMapping",
    "JoinColumn",
    "JoinTable",
    "ClassDescriptorBuilder",
    "entity",
    "embeddable",
    "mapped_superclass",
    "MetadataProvider",
    "SchemaDiffer",
]
