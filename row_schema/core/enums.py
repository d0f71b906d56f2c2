"""Mapping metadata enumerations."""

from __future__ import annotations

from enum import Enum


class AssociationType(Enum):
    """Association cardinalities."""

    ONE_TO_ONE = "one-to-one"
    MANY_TO_ONE = "many-to-one"
    ONE_TO_MANY = "one-to-many"
    MANY_TO_MANY = "many-to-many"

    @property
    def is_to_one(self) -> bool:
        return self in (AssociationType.ONE_TO_ONE, AssociationType.MANY_TO_ONE)

    @property
    def is_to_many(self) -> bool:
        return self in (AssociationType.ONE_TO_MANY, AssociationType.MANY_TO_MANY)


class InheritanceType(Enum):
    """Inheritance mapping strategies."""

    NONE = "none"
    SINGLE_TABLE = "single_table"
    JOINED = "joined"
    TABLE_PER_CLASS = "table_per_class"


class OrderDirection(Enum):
    """Sort direction for ordered collections."""

    ASC = "ASC"
    DESC = "DESC"
