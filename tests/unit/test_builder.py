"""Unit tests for metadata data classes and the ClassDescriptorBuilder DSL."""

from __future__ import annotations

import pytest

from row_schema.core.enums import AssociationType, InheritanceType, OrderDirection
from row_schema.core.exceptions import MetadataBuildError
from row_schema.mapping.builder import embeddable, entity, mapped_superclass
from row_schema.mapping.metadata import ClassDescriptor, FieldMapping, JoinColumn


class TestMetadataDataClasses:
    def test_field_mapping_frozen(self) -> None:
        mapping = FieldMapping(field_name="name", type="string")
        with pytest.raises(AttributeError):
            mapping.type = "text"  # type: ignore[misc]

    def test_field_mapping_column_defaults_to_field(self) -> None:
        assert FieldMapping(field_name="name", type="string").column_name == "name"

    def test_descriptor_frozen(self) -> None:
        descriptor = ClassDescriptor(name="app.User")
        with pytest.raises(AttributeError):
            descriptor.name = "app.Other"  # type: ignore[misc]

    def test_root_entity_defaults_to_self(self) -> None:
        descriptor = ClassDescriptor(name="app.User")
        assert descriptor.root_entity_name == "app.User"
        assert descriptor.is_root_entity is True
        assert descriptor.is_inheritance_type_none is True


class TestClassDescriptorBuilder:
    def test_fields_and_identifier(self) -> None:
        user = entity("app.User").id("id").field("name", "string", column="user_name").build()
        assert list(user.fields) == ["id", "name"]
        assert user.fields["id"].id is True
        assert user.fields["name"].column_name == "user_name"
        assert user.identifier_column_names == ["id"]

    def test_composite_identifier_order(self) -> None:
        line = entity("app.Line").id("order_id").id("position", column="pos").build()
        assert line.identifier_column_names == ["order_id", "pos"]

    def test_identifier_columns_override(self) -> None:
        user = entity("app.User").id("id").identifier_columns("uid").build()
        assert user.identifier_column_names == ["uid"]

    def test_duplicate_mapping_raises(self) -> None:
        builder = entity("app.User").field("name")
        with pytest.raises(MetadataBuildError, match="Duplicate mapping 'name'"):
            builder.many_to_one("name", "app.Group")

    def test_many_to_one_default_join_column(self) -> None:
        post = entity("app.Post").many_to_one("author", "app.User", inversed_by="posts").build()
        assoc = post.associations["author"]
        assert assoc.type is AssociationType.MANY_TO_ONE
        assert assoc.is_owning_side is True
        assert assoc.inversed_by == "posts"
        assert assoc.join_columns == [JoinColumn("author_id", "id")]

    def test_join_columns_from_pairs(self) -> None:
        post = (
            entity("app.Post")
            .many_to_one("author", "app.User", join_columns=[("uid", "pk")])
            .build()
        )
        assert post.associations["author"].join_columns == [JoinColumn("uid", "pk")]

    def test_one_to_many_is_inverse(self) -> None:
        user = entity("app.User").one_to_many("posts", "app.Post", mapped_by="author").build()
        assoc = user.associations["posts"]
        assert assoc.is_owning_side is False
        assert assoc.is_to_many is True
        assert assoc.join_columns == []
        assert user.is_collection_valued_association("posts") is True
        assert user.is_association_inverse_side("posts") is True

    def test_one_to_one_inverse_has_no_join_columns(self) -> None:
        user = entity("app.User").one_to_one("profile", "app.Profile", mapped_by="user").build()
        assoc = user.associations["profile"]
        assert assoc.is_owning_side is False
        assert assoc.join_columns == []

    def test_many_to_many_default_join_table(self) -> None:
        post = entity("app.Post").many_to_many("tags", "app.Tag", inversed_by="posts").build()
        assoc = post.associations["tags"]
        assert assoc.join_table is not None
        assert assoc.join_table.name == "post_tag"
        assert assoc.join_table.join_columns == [JoinColumn("post_id", "id")]
        assert assoc.join_table.inverse_join_columns == [JoinColumn("tag_id", "id")]
        assert assoc.relation_to_source_key_columns == {"post_id": "id"}
        assert assoc.relation_to_target_key_columns == {"tag_id": "id"}

    def test_self_referencing_many_to_many_columns(self) -> None:
        user = entity("app.User").id("id").many_to_many("friends", "app.User").build()
        table = user.associations["friends"].join_table
        assert table is not None
        assert table.name == "user_user"
        assert table.join_columns == [JoinColumn("user_source_id", "id")]
        assert table.inverse_join_columns == [JoinColumn("user_target_id", "id")]

    def test_many_to_many_inverse_has_no_join_table(self) -> None:
        tag = entity("app.Tag").many_to_many("posts", "app.Post", mapped_by="tags").build()
        assoc = tag.associations["posts"]
        assert assoc.is_owning_side is False
        assert assoc.join_table is None

    def test_order_by_normalized(self) -> None:
        user = (
            entity("app.User")
            .one_to_many("posts", "app.Post", mapped_by="author", order_by={"title": "asc"})
            .build()
        )
        assert user.associations["posts"].order_by == {"title": OrderDirection.ASC}

    def test_association_identifier(self) -> None:
        line = (
            entity("app.Line")
            .many_to_one("order", "app.Order", id=True, join_columns=[("order_id", "id")])
            .id("position")
            .build()
        )
        assert line.identifier_column_names == ["order_id", "position"]
        assert line.contains_foreign_identifier is True

    def test_inheritance(self) -> None:
        car = (
            entity("app.Car")
            .inheritance("single_table", root="app.Vehicle")
            .parents("app.Vehicle")
            .build()
        )
        assert car.inheritance_type is InheritanceType.SINGLE_TABLE
        assert car.root_entity_name == "app.Vehicle"
        assert car.is_root_entity is False
        assert car.parent_classes == ["app.Vehicle"]

    def test_root(self) -> None:
        car = entity("app.Car").id("id").inheritance("joined").root("app.Vehicle").build()
        assert car.root_entity_name == "app.Vehicle"
        assert car.is_root_entity is False

    def test_root_with_discriminator(self) -> None:
        vehicle = (
            entity("app.Vehicle")
            .inheritance(InheritanceType.JOINED)
            .discriminator({"car": "app.Car"})
            .subclasses("app.Car")
            .abstract()
            .build()
        )
        assert vehicle.is_root_entity is True
        assert vehicle.discriminator_map == {"car": "app.Car"}
        assert vehicle.subclasses == ["app.Car"]
        assert vehicle.is_abstract is True

    def test_embeddable_and_mapped_superclass_flags(self) -> None:
        assert embeddable("app.Address").build().is_embeddable is True
        assert mapped_superclass("app.Base").build().is_mapped_superclass is True

    def test_entity_class_attached(self) -> None:
        class User:
            id: int

        assert entity("app.User", User).build().entity_class is User
