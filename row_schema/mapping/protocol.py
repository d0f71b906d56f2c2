"""Collaborator protocols.

The validator reads metadata through a MetadataProvider and delegates live
schema comparison to a SchemaDiffer. Both are supplied by the caller.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from row_schema.mapping.metadata import ClassDescriptor


@runtime_checkable
class MetadataProvider(Protocol):
    """Read-only source of class descriptors."""

    def all_classes(self) -> list[ClassDescriptor]:
        """Return every registered class descriptor."""
        ...

    def has_class(self, class_name: str) -> bool:
        """Check if a class name is known at all, mapped or transient."""
        ...

    def is_transient(self, class_name: str) -> bool:
        """Check if a class name is not a mapped class."""
        ...

    def metadata_for(self, class_name: str) -> ClassDescriptor:
        """Resolve a class name to its descriptor."""
        ...


@runtime_checkable
class SchemaDiffer(Protocol):
    """Compares mapping metadata against a live database schema."""

    def diff(self, classes: Sequence[ClassDescriptor]) -> list[Any]:
        """Return the changes needed to bring the schema in line, empty if in sync."""
        ...
