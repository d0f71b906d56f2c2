"""Per-class mapping rule engine.

Checks one class descriptor against the rest of the model and returns the
mapping errors it finds as human-readable strings. Each association runs an
ordered sequence of checks; a check that makes the remaining ones meaningless
(unresolvable target) ends that association only.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from row_schema.core.enums import AssociationType
from row_schema.core.types import TypeRegistry
from row_schema.mapping.metadata import AssociationMapping, ClassDescriptor
from row_schema.mapping.protocol import MetadataProvider
from row_schema.validation.property_types import PropertyTypeChecker

logger = logging.getLogger(__name__)

# Owning side type -> type the inverse side must have
_INVERSE_TYPES: dict[AssociationType, AssociationType] = {
    AssociationType.ONE_TO_ONE: AssociationType.ONE_TO_ONE,
    AssociationType.MANY_TO_ONE: AssociationType.ONE_TO_MANY,
    AssociationType.MANY_TO_MANY: AssociationType.MANY_TO_MANY,
}

_INVERSE_WORDING: dict[AssociationType, str] = {
    AssociationType.ONE_TO_ONE: "one-to-one as well",
    AssociationType.MANY_TO_ONE: "one-to-many",
    AssociationType.MANY_TO_MANY: "many-to-many as well",
}


@dataclass
class _AssociationContext:
    """State shared by the checks of a single association."""

    descriptor: ClassDescriptor
    assoc: AssociationMapping
    errors: list[str]
    target: ClassDescriptor = field(init=False)

    @property
    def source(self) -> str:
        return f"{self.descriptor.name}#{self.assoc.field_name}"


_AssociationCheck = Callable[[_AssociationContext], bool]


class ClassValidator:
    """Validates the mapping of a single class.

    Args:
        provider: Source of the other class descriptors in the model.
        type_registry: Registry of known storage types.
        check_property_types: Cross-check attribute annotations against
            storage types.
    """

    def __init__(
        self,
        provider: MetadataProvider,
        type_registry: TypeRegistry,
        check_property_types: bool = True,
    ) -> None:
        self._provider = provider
        self._types = type_registry
        self._property_checker = (
            PropertyTypeChecker(type_registry) if check_property_types else None
        )
        # Each returns False to skip the remaining checks of the association
        self._association_checks: tuple[_AssociationCheck, ...] = (
            self._check_target_exists,
            self._check_target_not_mapped_superclass,
            self._check_owning_and_inverse,
            self._check_foreign_identifier,
            self._check_mapped_by,
            self._check_inversed_by,
            self._check_inverse_cardinality,
            self._check_join_columns,
            self._check_order_by,
        )

    def validate(self, descriptor: ClassDescriptor) -> list[str]:
        """Return the mapping errors of one class, in check order."""
        errors: list[str] = []

        for field_name, mapping in descriptor.fields.items():
            if not self._types.has_type(mapping.type):
                errors.append(
                    f"The field '{descriptor.name}#{field_name}' uses a non-existent "
                    f"type '{mapping.type}'."
                )

        if self._property_checker is not None:
            errors.extend(self._property_checker.check(descriptor))

        if descriptor.is_embeddable and descriptor.associations:
            errors.append(f"Embeddable '{descriptor.name}' does not support associations")
            return errors

        for assoc in descriptor.associations.values():
            ctx = _AssociationContext(descriptor, assoc, errors)
            for check in self._association_checks:
                if not check(ctx):
                    break

        self._check_discriminator_map(descriptor, errors)
        self._check_subclasses(descriptor, errors)

        logger.debug("Validated class '%s': %d error(s)", descriptor.name, len(errors))
        return errors

    # --- Association checks ---

    def _check_target_exists(self, ctx: _AssociationContext) -> bool:
        target_name = ctx.assoc.target_entity
        if not self._provider.has_class(target_name) or self._provider.is_transient(target_name):
            ctx.errors.append(
                f"The target entity '{target_name}' specified on {ctx.source} "
                "is unknown or not an entity."
            )
            return False
        ctx.target = self._provider.metadata_for(target_name)
        return True

    def _check_target_not_mapped_superclass(self, ctx: _AssociationContext) -> bool:
        if ctx.target.is_mapped_superclass:
            ctx.errors.append(
                f"The target entity '{ctx.assoc.target_entity}' specified on {ctx.source} "
                "is a mapped superclass. This is not possible since there is no table "
                "that a foreign key could refer to."
            )
            return False
        return True

    def _check_owning_and_inverse(self, ctx: _AssociationContext) -> bool:
        if ctx.assoc.mapped_by and ctx.assoc.inversed_by:
            ctx.errors.append(
                f"The association {ctx.source} cannot be defined as both inverse and owning."
            )
        return True

    def _check_foreign_identifier(self, ctx: _AssociationContext) -> bool:
        if ctx.assoc.id and ctx.target.contains_foreign_identifier:
            ctx.errors.append(
                f"Cannot map association '{ctx.source}' as identifier, because the target "
                f"entity '{ctx.target.name}' also maps an association as identifier."
            )
        return True

    def _check_mapped_by(self, ctx: _AssociationContext) -> bool:
        mapped_by = ctx.assoc.mapped_by
        if not mapped_by:
            return True
        target_field = f"{ctx.assoc.target_entity}#{mapped_by}"

        if ctx.target.has_field(mapped_by):
            ctx.errors.append(
                f"The association {ctx.source} refers to the owning side field {target_field} "
                "which is not defined as association, but as field."
            )

        if not ctx.target.has_association(mapped_by):
            ctx.errors.append(
                f"The association {ctx.source} refers to the owning side field {target_field} "
                "which does not exist."
            )
        elif ctx.target.associations[mapped_by].inversed_by is None:
            ctx.errors.append(
                f"The field {ctx.source} is on the inverse side of a bi-directional "
                "relationship, but the specified mappedBy association on the target-entity "
                f"{target_field} does not contain the required "
                f"'inversedBy=\"{ctx.assoc.field_name}\"' attribute."
            )
        elif ctx.target.associations[mapped_by].inversed_by != ctx.assoc.field_name:
            ctx.errors.append(
                f"The mappings {ctx.source} and {target_field} are inconsistent with each other."
            )
        return True

    def _check_inversed_by(self, ctx: _AssociationContext) -> bool:
        inversed_by = ctx.assoc.inversed_by
        if not inversed_by:
            return True
        target_field = f"{ctx.assoc.target_entity}#{inversed_by}"

        if ctx.target.has_field(inversed_by):
            ctx.errors.append(
                f"The association {ctx.source} refers to the inverse side field {target_field} "
                "which is not defined as association."
            )

        if not ctx.target.has_association(inversed_by):
            ctx.errors.append(
                f"The association {ctx.source} refers to the inverse side field {target_field} "
                "which does not exist."
            )
        elif ctx.target.associations[inversed_by].mapped_by is None:
            ctx.errors.append(
                f"The field {ctx.source} is on the owning side of a bi-directional "
                "relationship, but the specified inversedBy association on the target-entity "
                f"{target_field} does not contain the required "
                f"'mappedBy=\"{ctx.assoc.field_name}\"' attribute."
            )
        elif ctx.target.associations[inversed_by].mapped_by != ctx.assoc.field_name:
            ctx.errors.append(
                f"The mappings {ctx.source} and {target_field} are inconsistent with each other."
            )
        return True

    def _check_inverse_cardinality(self, ctx: _AssociationContext) -> bool:
        inversed_by = ctx.assoc.inversed_by
        if not inversed_by or not ctx.target.has_association(inversed_by):
            return True
        required = _INVERSE_TYPES.get(ctx.assoc.type)
        if required is not None and ctx.target.associations[inversed_by].type is not required:
            ctx.errors.append(
                f"If association {ctx.source} is {ctx.assoc.type.value}, then the inversed "
                f"side {ctx.target.name}#{inversed_by} has to be "
                f"{_INVERSE_WORDING[ctx.assoc.type]}."
            )
        return True

    def _check_join_columns(self, ctx: _AssociationContext) -> bool:
        if not ctx.assoc.is_owning_side:
            return True
        if ctx.assoc.type is AssociationType.MANY_TO_MANY:
            self._check_join_table(ctx)
        elif ctx.assoc.is_to_one:
            self._check_to_one_join_columns(ctx)
        return True

    def _check_join_table(self, ctx: _AssociationContext) -> None:
        assoc, descriptor, target = ctx.assoc, ctx.descriptor, ctx.target
        if assoc.join_table is None:
            return
        join_table = assoc.join_table

        source_ids = descriptor.identifier_column_names
        for column in join_table.join_columns:
            if column.referenced_column_name not in source_ids:
                ctx.errors.append(
                    f"The referenced column name '{column.referenced_column_name}' has to be "
                    f"a primary key column on the target entity class '{descriptor.name}'."
                )
                break

        target_ids = target.identifier_column_names
        for column in join_table.inverse_join_columns:
            if column.referenced_column_name not in target_ids:
                ctx.errors.append(
                    f"The referenced column name '{column.referenced_column_name}' has to be "
                    f"a primary key column on the target entity class '{target.name}'."
                )
                break

        # Missing columns are reported from the relation key maps, not the join table
        if len(target_ids) != len(join_table.inverse_join_columns):
            referenced = set(assoc.relation_to_target_key_columns.values())
            missing = ", ".join(c for c in target_ids if c not in referenced)
            ctx.errors.append(
                f"The inverse join columns of the many-to-many table '{join_table.name}' "
                "have to contain to ALL identifier columns of the target entity "
                f"'{target.name}', however '{missing}' are missing."
            )

        if len(source_ids) != len(join_table.join_columns):
            referenced = set(assoc.relation_to_source_key_columns.values())
            missing = ", ".join(c for c in source_ids if c not in referenced)
            ctx.errors.append(
                f"The join columns of the many-to-many table '{join_table.name}' "
                "have to contain to ALL identifier columns of the source entity "
                f"'{descriptor.name}', however '{missing}' are missing."
            )

    def _check_to_one_join_columns(self, ctx: _AssociationContext) -> None:
        target = ctx.target
        target_ids = target.identifier_column_names
        for column in ctx.assoc.join_columns:
            if column.referenced_column_name not in target_ids:
                ctx.errors.append(
                    f"The referenced column name '{column.referenced_column_name}' has to be "
                    f"a primary key column on the target entity class '{target.name}'."
                )

        if len(target_ids) != len(ctx.assoc.join_columns):
            local_names = {column.name for column in ctx.assoc.join_columns}
            missing = ", ".join(c for c in target_ids if c not in local_names)
            ctx.errors.append(
                f"The join columns of the association '{ctx.assoc.field_name}' have to match "
                f"to ALL identifier columns of the target entity '{target.name}', "
                f"however '{missing}' are missing."
            )

    def _check_order_by(self, ctx: _AssociationContext) -> bool:
        if not ctx.assoc.order_by:
            return True
        target = ctx.target
        for order_field in ctx.assoc.order_by:
            if not target.has_field(order_field) and not target.has_association(order_field):
                ctx.errors.append(
                    f"The association {ctx.source} is ordered by a foreign field {order_field} "
                    f"that is not a field on the target entity {target.name}."
                )
            elif target.is_collection_valued_association(order_field):
                ctx.errors.append(
                    f"The association {ctx.source} is ordered by a field {order_field} on "
                    f"{target.name} that is a collection-valued association."
                )
            elif target.is_association_inverse_side(order_field):
                ctx.errors.append(
                    f"The association {ctx.source} is ordered by a field {order_field} on "
                    f"{target.name} that is the inverse side of an association."
                )
        return True

    # --- Inheritance checks ---

    def _check_discriminator_map(self, descriptor: ClassDescriptor, errors: list[str]) -> None:
        if (
            descriptor.is_inheritance_type_none
            or descriptor.is_root_entity
            or descriptor.is_abstract
            or descriptor.is_mapped_superclass
        ):
            return
        root = self._provider.metadata_for(descriptor.root_entity_name)
        if descriptor.name not in root.discriminator_map.values():
            errors.append(
                f"Entity class '{descriptor.name}' is part of inheritance hierarchy, but is "
                f"not mapped in the root entity '{descriptor.root_entity_name}' discriminator "
                "map. All subclasses must be listed in the discriminator map."
            )

    def _check_subclasses(self, descriptor: ClassDescriptor, errors: list[str]) -> None:
        for subclass in descriptor.subclasses:
            if descriptor.name not in self._provider.metadata_for(subclass).parent_classes:
                errors.append(
                    f"According to the discriminator map class '{subclass}' has to be a child "
                    f"of '{descriptor.name}' but these entities are not related through "
                    "inheritance."
                )
