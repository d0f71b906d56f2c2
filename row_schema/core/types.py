"""Storage type registry.

Storage types are the column-level types a field is mapped to (``integer``,
``string``, ``json``...). The registry knows which type names exist and, for
the built-in types, which Python-side type a column value decodes to.
"""

from __future__ import annotations

import logging

from row_schema.core.exceptions import DuplicateTypeError, UnknownTypeError

logger = logging.getLogger(__name__)


class StorageType:
    """Base class for storage types."""

    name: str = ""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} '{self.name}'>"


class AsciiStringType(StorageType):
    name = "ascii_string"


class BigIntType(StorageType):
    name = "bigint"


class BooleanType(StorageType):
    name = "boolean"


class DecimalType(StorageType):
    name = "decimal"


class FloatType(StorageType):
    name = "float"


class GuidType(StorageType):
    name = "guid"


class IntegerType(StorageType):
    name = "integer"


class JsonType(StorageType):
    name = "json"


class SimpleArrayType(StorageType):
    name = "simple_array"


class SmallIntType(StorageType):
    name = "smallint"


class StringType(StorageType):
    name = "string"


class TextType(StorageType):
    name = "text"


class DateType(StorageType):
    name = "date"


class DateTimeType(StorageType):
    name = "datetime"


class DateTimeTzType(StorageType):
    name = "datetimetz"


class TimeType(StorageType):
    name = "time"


class BinaryType(StorageType):
    name = "binary"


class BlobType(StorageType):
    name = "blob"


# Keyed on the exact class: subclasses may redefine conversion semantics.
BUILTIN_NATIVE_TYPES: dict[type[StorageType], str] = {
    AsciiStringType: "string",
    BigIntType: "string",
    BooleanType: "bool",
    DecimalType: "string",
    FloatType: "float",
    GuidType: "string",
    IntegerType: "int",
    JsonType: "array",
    SimpleArrayType: "array",
    SmallIntType: "int",
    StringType: "string",
    TextType: "string",
}

_BUILTIN_TYPES: tuple[type[StorageType], ...] = (
    *BUILTIN_NATIVE_TYPES,
    DateType,
    DateTimeType,
    DateTimeTzType,
    TimeType,
    BinaryType,
    BlobType,
)


class TypeRegistry:
    """Name-keyed registry of storage types.

    Registration happens at bootstrap; during a validation run the registry
    is only read, so it can be shared between worker threads.
    """

    def __init__(self) -> None:
        self._types: dict[str, StorageType] = {}

    @classmethod
    def with_builtin_types(cls) -> TypeRegistry:
        """Create a registry holding every built-in storage type."""
        registry = cls()
        for type_class in _BUILTIN_TYPES:
            registry.add_type(type_class.name, type_class)
        return registry

    def add_type(self, name: str, type_class: type[StorageType]) -> None:
        """Register a new storage type.

        Raises:
            DuplicateTypeError: If the name is already registered.
        """
        if name in self._types:
            raise DuplicateTypeError(name)
        self._types[name] = type_class()
        logger.debug("Registered storage type '%s' (%s)", name, type_class.__name__)

    def override_type(self, name: str, type_class: type[StorageType]) -> None:
        """Replace the implementation of an existing storage type.

        Raises:
            UnknownTypeError: If the name is not registered.
        """
        if name not in self._types:
            raise UnknownTypeError(name)
        self._types[name] = type_class()
        logger.debug("Overrode storage type '%s' with %s", name, type_class.__name__)

    def has_type(self, name: str) -> bool:
        """Check if a storage type name is registered."""
        return name in self._types

    def get_type(self, name: str) -> StorageType:
        """Look up a storage type instance by name.

        Raises:
            UnknownTypeError: If the name is not registered.
        """
        try:
            return self._types[name]
        except KeyError:
            raise UnknownTypeError(name) from None

    def resolve_native_type(self, name: str) -> str | None:
        """Return the native type name a built-in storage type decodes to.

        Returns None for custom types and for subclasses of built-in types.
        """
        return BUILTIN_NATIVE_TYPES.get(type(self.get_type(name)))

    @property
    def type_names(self) -> list[str]:
        """List all registered type names, sorted alphabetically."""
        return sorted(self._types)

    def __len__(self) -> int:
        return len(self._types)
