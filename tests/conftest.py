"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Iterable

import pytest

from row_schema.core.registry import MetadataRegistry
from row_schema.core.types import TypeRegistry
from row_schema.mapping.metadata import ClassDescriptor
from row_schema.validation.class_validator import ClassValidator


@pytest.fixture
def type_registry() -> TypeRegistry:
    """Registry with the built-in storage types."""
    return TypeRegistry.with_builtin_types()


@pytest.fixture
def make_validator(type_registry: TypeRegistry):
    """Helper to build a ClassValidator over a set of descriptors.

    Usage:
        validator = make_validator(user, post, transient=["app.Helper"])
    """

    def _make(*classes: ClassDescriptor, transient: Iterable[str] = ()) -> ClassValidator:
        return ClassValidator(MetadataRegistry(classes, transient=transient), type_registry)

    return _make
