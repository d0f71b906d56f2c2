"""Property/storage type cross-check.

Compares the storage type of every field mapping with the annotation of the
matching attribute on the mapped Python class. Only exact built-in storage
types are checked; custom types and subclasses of built-ins are skipped.
"""

from __future__ import annotations

from row_schema.core.types import TypeRegistry
from row_schema.mapping.metadata import ClassDescriptor, FieldMapping
from row_schema.mapping.reflection import (
    enum_backing_type,
    native_type_name,
    property_annotation,
    qualified_name,
    resolve_class,
)

# Scalars a json column may decode to besides arrays
_JSON_SCALARS = frozenset({"string", "int", "float", "bool", "true", "false", "null"})


class PropertyTypeChecker:
    """Reports fields whose attribute annotation disagrees with the storage type."""

    def __init__(self, type_registry: TypeRegistry) -> None:
        self._types = type_registry

    def check(self, descriptor: ClassDescriptor) -> list[str]:
        """Return at most one error per field, in field declaration order."""
        errors = []
        for mapping in descriptor.fields.values():
            error = self._check_field(descriptor, mapping)
            if error is not None:
                errors.append(error)
        return errors

    def _check_field(self, descriptor: ClassDescriptor, mapping: FieldMapping) -> str | None:
        if not self._types.has_type(mapping.type):
            return None

        annotation = property_annotation(descriptor.entity_class, mapping.field_name)
        if annotation is None:
            return None
        property_type = native_type_name(annotation)
        if property_type is None or property_type == "mixed":
            return None

        expected = self._types.resolve_native_type(mapping.type)
        if expected is None:
            return None

        if property_type == expected:
            return None

        property_class = resolve_class(annotation)
        if enum_backing_type(property_class) == expected:
            if mapping.enum_type is None or qualified_name(mapping.enum_type) == property_type:
                return None
            return (
                f"The field '{descriptor.name}#{mapping.field_name}' has the property type "
                f"'{property_type}' that differs from the metadata enumType "
                f"'{qualified_name(mapping.enum_type)}'."
            )

        if mapping.type == "json" and property_type in _JSON_SCALARS:
            return None

        return (
            f"The field '{descriptor.name}#{mapping.field_name}' has the property type "
            f"'{property_type}' that differs from the metadata field type '{expected}' "
            f"returned by the '{mapping.type}' storage type."
        )
