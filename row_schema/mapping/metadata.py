"""Mapping metadata data classes.

Frozen dataclasses describing mapped classes, their fields and their
associations. Associations reference their target by class name only; the
descriptors themselves live in a flat name-keyed registry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from row_schema.core.enums import AssociationType, InheritanceType, OrderDirection


@dataclass(frozen=True)
class FieldMapping:
    """Mapping of a scalar attribute to a column."""

    field_name: str
    type: str
    column_name: str = ""
    id: bool = False
    enum_type: type | str | None = None

    def __post_init__(self) -> None:
        if not self.column_name:
            object.__setattr__(self, "column_name", self.field_name)


@dataclass(frozen=True)
class JoinColumn:
    """Foreign key column and the column it references."""

    name: str
    referenced_column_name: str = "id"


@dataclass(frozen=True)
class JoinTable:
    """Link table of a many-to-many association."""

    name: str
    join_columns: list[JoinColumn] = field(default_factory=list)
    inverse_join_columns: list[JoinColumn] = field(default_factory=list)


@dataclass(frozen=True)
class AssociationMapping:
    """Mapping of an attribute that references another mapped class."""

    field_name: str
    type: AssociationType
    target_entity: str
    is_owning_side: bool = True
    mapped_by: str | None = None
    inversed_by: str | None = None
    id: bool = False
    join_columns: list[JoinColumn] = field(default_factory=list)
    join_table: JoinTable | None = None
    # join table column name -> referenced identifier column
    relation_to_source_key_columns: dict[str, str] = field(default_factory=dict)
    relation_to_target_key_columns: dict[str, str] = field(default_factory=dict)
    order_by: dict[str, OrderDirection] | None = None

    @property
    def is_to_one(self) -> bool:
        return self.type.is_to_one

    @property
    def is_to_many(self) -> bool:
        return self.type.is_to_many


@dataclass(frozen=True)
class ClassDescriptor:
    """Mapping metadata of one entity, embeddable or mapped superclass."""

    name: str
    fields: dict[str, FieldMapping] = field(default_factory=dict)
    associations: dict[str, AssociationMapping] = field(default_factory=dict)
    identifier_column_names: list[str] = field(default_factory=list)
    inheritance_type: InheritanceType = InheritanceType.NONE
    root_entity_name: str = ""
    discriminator_map: dict[str, str] = field(default_factory=dict)
    subclasses: list[str] = field(default_factory=list)
    parent_classes: list[str] = field(default_factory=list)
    is_mapped_superclass: bool = False
    is_embeddable: bool = False
    is_abstract: bool = False
    entity_class: Any = None

    def __post_init__(self) -> None:
        if not self.root_entity_name:
            object.__setattr__(self, "root_entity_name", self.name)

    @property
    def is_root_entity(self) -> bool:
        return self.name == self.root_entity_name

    @property
    def is_inheritance_type_none(self) -> bool:
        return self.inheritance_type is InheritanceType.NONE

    @property
    def contains_foreign_identifier(self) -> bool:
        """True if any association is part of the identifier."""
        return any(assoc.id for assoc in self.associations.values())

    def has_field(self, field_name: str) -> bool:
        return field_name in self.fields

    def has_association(self, field_name: str) -> bool:
        return field_name in self.associations

    def is_collection_valued_association(self, field_name: str) -> bool:
        assoc = self.associations.get(field_name)
        return assoc is not None and assoc.is_to_many

    def is_association_inverse_side(self, field_name: str) -> bool:
        assoc = self.associations.get(field_name)
        return assoc is not None and not assoc.is_owning_side
