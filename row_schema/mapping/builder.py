"""Class descriptor DSL builder.

Provides a fluent builder for declaring mapping metadata:

    descriptor = (
        entity("app.Post", Post)
        .id("id")
        .field("title", "string")
        .many_to_one("author", "app.User", inversed_by="posts")
        .build()
    )

The builder only rejects misuse of the builder itself (duplicate names).
Mapping mistakes, such as a dangling ``mapped_by``, are built as declared so
that the validator can report them.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from row_schema.core.enums import AssociationType, InheritanceType, OrderDirection
from row_schema.core.exceptions import MetadataBuildError
from row_schema.mapping.metadata import (
    AssociationMapping,
    ClassDescriptor,
    FieldMapping,
    JoinColumn,
    JoinTable,
)

JoinColumnsArg = Sequence[JoinColumn | tuple[str, str]]


def _short_name(class_name: str) -> str:
    """Lowercase unqualified class name: 'app.BlogPost' -> 'blogpost'."""
    return class_name.rsplit(".", 1)[-1].lower()


def _join_columns(columns: JoinColumnsArg) -> list[JoinColumn]:
    """Normalize JoinColumn instances and (name, referenced) pairs."""
    return [jc if isinstance(jc, JoinColumn) else JoinColumn(*jc) for jc in columns]


def _order_by(
    order_by: Mapping[str, OrderDirection | str] | None,
) -> dict[str, OrderDirection] | None:
    if order_by is None:
        return None
    return {
        name: direction
        if isinstance(direction, OrderDirection)
        else OrderDirection(direction.upper())
        for name, direction in order_by.items()
    }


def entity(name: str, entity_class: type | None = None) -> ClassDescriptorBuilder:
    """Entry point for declaring an entity.

    Args:
        name: Qualified class name the descriptor is registered under.
        entity_class: The mapped Python class, used for property type checks.
    """
    return ClassDescriptorBuilder(name, entity_class)


def embeddable(name: str, entity_class: type | None = None) -> ClassDescriptorBuilder:
    """Entry point for declaring an embeddable (value object) class."""
    return ClassDescriptorBuilder(name, entity_class, is_embeddable=True)


def mapped_superclass(name: str, entity_class: type | None = None) -> ClassDescriptorBuilder:
    """Entry point for declaring a mapped superclass."""
    return ClassDescriptorBuilder(name, entity_class, is_mapped_superclass=True)


class ClassDescriptorBuilder:
    """Fluent builder for ClassDescriptor definitions."""

    def __init__(
        self,
        name: str,
        entity_class: type | None = None,
        *,
        is_embeddable: bool = False,
        is_mapped_superclass: bool = False,
    ) -> None:
        self._name = name
        self._entity_class = entity_class
        self._is_embeddable = is_embeddable
        self._is_mapped_superclass = is_mapped_superclass
        self._is_abstract = False
        self._fields: dict[str, FieldMapping] = {}
        self._associations: dict[str, AssociationMapping] = {}
        self._identifier: list[str] = []  # field names, in declaration order
        self._identifier_columns: list[str] | None = None
        self._inheritance_type = InheritanceType.NONE
        self._root_entity_name = ""
        self._discriminator_map: dict[str, str] = {}
        self._subclasses: list[str] = []
        self._parent_classes: list[str] = []

    def _check_unique(self, field_name: str) -> None:
        if field_name in self._fields or field_name in self._associations:
            raise MetadataBuildError(
                f"Duplicate mapping '{field_name}' on class '{self._name}'"
            )

    # --- Fields ---

    def field(
        self,
        field_name: str,
        type_name: str = "string",
        *,
        column: str | None = None,
        enum_type: type | str | None = None,
    ) -> ClassDescriptorBuilder:
        """Map a scalar attribute to a column."""
        self._check_unique(field_name)
        self._fields[field_name] = FieldMapping(
            field_name=field_name,
            type=type_name,
            column_name=column or field_name,
            enum_type=enum_type,
        )
        return self

    def id(
        self,
        field_name: str,
        type_name: str = "integer",
        *,
        column: str | None = None,
    ) -> ClassDescriptorBuilder:
        """Map an identifier attribute. Call repeatedly for composite keys."""
        self._check_unique(field_name)
        self._fields[field_name] = FieldMapping(
            field_name=field_name,
            type=type_name,
            column_name=column or field_name,
            id=True,
        )
        self._identifier.append(field_name)
        return self

    # --- Associations ---

    def _to_one(
        self,
        assoc_type: AssociationType,
        field_name: str,
        target: str,
        *,
        mapped_by: str | None,
        inversed_by: str | None,
        join_columns: JoinColumnsArg | None,
        id: bool,  # noqa: A002
    ) -> ClassDescriptorBuilder:
        self._check_unique(field_name)
        is_owning_side = mapped_by is None or assoc_type is AssociationType.MANY_TO_ONE
        columns: list[JoinColumn] = []
        if is_owning_side:
            columns = (
                _join_columns(join_columns)
                if join_columns is not None
                else [JoinColumn(f"{field_name}_id", "id")]
            )
        self._associations[field_name] = AssociationMapping(
            field_name=field_name,
            type=assoc_type,
            target_entity=target,
            is_owning_side=is_owning_side,
            mapped_by=mapped_by,
            inversed_by=inversed_by,
            id=id,
            join_columns=columns,
        )
        if id:
            self._identifier.append(field_name)
        return self

    def one_to_one(
        self,
        field_name: str,
        target: str,
        *,
        mapped_by: str | None = None,
        inversed_by: str | None = None,
        join_columns: JoinColumnsArg | None = None,
        id: bool = False,  # noqa: A002
    ) -> ClassDescriptorBuilder:
        """Declare a one-to-one association. Owning unless mapped_by is set."""
        return self._to_one(
            AssociationType.ONE_TO_ONE,
            field_name,
            target,
            mapped_by=mapped_by,
            inversed_by=inversed_by,
            join_columns=join_columns,
            id=id,
        )

    def many_to_one(
        self,
        field_name: str,
        target: str,
        *,
        inversed_by: str | None = None,
        mapped_by: str | None = None,
        join_columns: JoinColumnsArg | None = None,
        id: bool = False,  # noqa: A002
    ) -> ClassDescriptorBuilder:
        """Declare a many-to-one association. Always the owning side."""
        return self._to_one(
            AssociationType.MANY_TO_ONE,
            field_name,
            target,
            mapped_by=mapped_by,
            inversed_by=inversed_by,
            join_columns=join_columns,
            id=id,
        )

    def one_to_many(
        self,
        field_name: str,
        target: str,
        *,
        mapped_by: str | None = None,
        inversed_by: str | None = None,
        order_by: Mapping[str, OrderDirection | str] | None = None,
    ) -> ClassDescriptorBuilder:
        """Declare a one-to-many association. Always the inverse side."""
        self._check_unique(field_name)
        self._associations[field_name] = AssociationMapping(
            field_name=field_name,
            type=AssociationType.ONE_TO_MANY,
            target_entity=target,
            is_owning_side=False,
            mapped_by=mapped_by,
            inversed_by=inversed_by,
            order_by=_order_by(order_by),
        )
        return self

    def many_to_many(
        self,
        field_name: str,
        target: str,
        *,
        mapped_by: str | None = None,
        inversed_by: str | None = None,
        join_table: str | None = None,
        join_columns: JoinColumnsArg | None = None,
        inverse_join_columns: JoinColumnsArg | None = None,
        order_by: Mapping[str, OrderDirection | str] | None = None,
    ) -> ClassDescriptorBuilder:
        """Declare a many-to-many association. Owning unless mapped_by is set.

        The owning side defaults to a ``<source>_<target>`` join table with
        ``<source>_id`` and ``<target>_id`` columns referencing ``id``. A
        self-referencing association uses ``<source>_source_id`` and
        ``<source>_target_id`` instead.
        """
        self._check_unique(field_name)
        is_owning_side = mapped_by is None
        table: JoinTable | None = None
        source_keys: dict[str, str] = {}
        target_keys: dict[str, str] = {}
        if is_owning_side:
            source, other = _short_name(self._name), _short_name(target)
            source_column, target_column = f"{source}_id", f"{other}_id"
            if source == other:
                source_column, target_column = f"{source}_source_id", f"{other}_target_id"
            table = JoinTable(
                name=join_table or f"{source}_{other}",
                join_columns=(
                    _join_columns(join_columns)
                    if join_columns is not None
                    else [JoinColumn(source_column, "id")]
                ),
                inverse_join_columns=(
                    _join_columns(inverse_join_columns)
                    if inverse_join_columns is not None
                    else [JoinColumn(target_column, "id")]
                ),
            )
            source_keys = {jc.name: jc.referenced_column_name for jc in table.join_columns}
            target_keys = {
                jc.name: jc.referenced_column_name for jc in table.inverse_join_columns
            }
        self._associations[field_name] = AssociationMapping(
            field_name=field_name,
            type=AssociationType.MANY_TO_MANY,
            target_entity=target,
            is_owning_side=is_owning_side,
            mapped_by=mapped_by,
            inversed_by=inversed_by,
            join_table=table,
            relation_to_source_key_columns=source_keys,
            relation_to_target_key_columns=target_keys,
            order_by=_order_by(order_by),
        )
        return self

    # --- Inheritance ---

    def inheritance(
        self,
        kind: InheritanceType | str,
        root: str | None = None,
    ) -> ClassDescriptorBuilder:
        """Set the inheritance strategy and, for subclasses, the root entity."""
        self._inheritance_type = InheritanceType(kind)
        if root is not None:
            self._root_entity_name = root
        return self

    def root(self, class_name: str) -> ClassDescriptorBuilder:
        """Set the root entity of the hierarchy this class belongs to."""
        self._root_entity_name = class_name
        return self

    def discriminator(self, mapping: Mapping[str, str]) -> ClassDescriptorBuilder:
        """Set the discriminator map: discriminator value -> class name."""
        self._discriminator_map = dict(mapping)
        return self

    def subclasses(self, *class_names: str) -> ClassDescriptorBuilder:
        """Declare the direct subclasses of this class."""
        self._subclasses.extend(class_names)
        return self

    def parents(self, *class_names: str) -> ClassDescriptorBuilder:
        """Declare the ancestor chain of this class, nearest first."""
        self._parent_classes.extend(class_names)
        return self

    def abstract(self, enabled: bool = True) -> ClassDescriptorBuilder:
        """Mark the class as abstract (never instantiated)."""
        self._is_abstract = enabled
        return self

    def identifier_columns(self, *columns: str) -> ClassDescriptorBuilder:
        """Override the derived identifier column names."""
        self._identifier_columns = list(columns)
        return self

    def _derive_identifier_columns(self) -> list[str]:
        columns: list[str] = []
        for name in self._identifier:
            if name in self._fields:
                columns.append(self._fields[name].column_name)
            else:
                columns.extend(jc.name for jc in self._associations[name].join_columns)
        return columns

    def build(self) -> ClassDescriptor:
        """Compile the declarations into a ClassDescriptor."""
        if self._is_embeddable and self._is_mapped_superclass:
            raise MetadataBuildError(
                f"Class '{self._name}' cannot be both an embeddable and a mapped superclass"
            )

        identifier_columns = (
            list(self._identifier_columns)
            if self._identifier_columns is not None
            else self._derive_identifier_columns()
        )

        return ClassDescriptor(
            name=self._name,
            fields=dict(self._fields),
            associations=dict(self._associations),
            identifier_column_names=identifier_columns,
            inheritance_type=self._inheritance_type,
            root_entity_name=self._root_entity_name,
            discriminator_map=dict(self._discriminator_map),
            subclasses=list(self._subclasses),
            parent_classes=list(self._parent_classes),
            is_mapped_superclass=self._is_mapped_superclass,
            is_embeddable=self._is_embeddable,
            is_abstract=self._is_abstract,
            entity_class=self._entity_class,
        )
