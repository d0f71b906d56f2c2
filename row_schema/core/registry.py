"""Metadata Registry - flat, name-keyed store of class descriptors.

Associations refer to their targets by class name, so self-references and
mutual references are plain lookups:

    registry.metadata_for("app.Post").associations["author"].target_entity
        -> "app.User"
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from row_schema.core.exceptions import ClassNotFoundError, DuplicateClassError
from row_schema.mapping.metadata import ClassDescriptor

logger = logging.getLogger(__name__)


class MetadataRegistry:
    """Holds the class descriptors of one model.

    The registry is immutable after loading: descriptors are registered once,
    then read for the lifetime of the validation run.

    Args:
        classes: Descriptors of every mapped class, in registration order.
        transient: Names of classes that exist but are not mapped.

    Raises:
        DuplicateClassError: If two descriptors share a class name.
    """

    def __init__(
        self,
        classes: Iterable[ClassDescriptor] = (),
        transient: Iterable[str] = (),
    ) -> None:
        self._classes: dict[str, ClassDescriptor] = {}
        self._transient: set[str] = set(transient)
        for descriptor in classes:
            self._register(descriptor)

    def _register(self, descriptor: ClassDescriptor) -> None:
        if descriptor.name in self._classes:
            raise DuplicateClassError(descriptor.name)
        self._classes[descriptor.name] = descriptor
        logger.debug("Registered class descriptor '%s'", descriptor.name)

    def all_classes(self) -> list[ClassDescriptor]:
        """Return every descriptor in registration order."""
        return list(self._classes.values())

    def has_class(self, class_name: str) -> bool:
        """Check if a class name is known, mapped or transient."""
        return class_name in self._classes or class_name in self._transient

    def is_transient(self, class_name: str) -> bool:
        """Check if a class name has no mapping."""
        return class_name not in self._classes

    def metadata_for(self, class_name: str) -> ClassDescriptor:
        """Look up the descriptor of a mapped class.

        Raises:
            ClassNotFoundError: If the class is not mapped.
        """
        try:
            return self._classes[class_name]
        except KeyError:
            raise ClassNotFoundError(class_name) from None

    @property
    def class_names(self) -> list[str]:
        """List all mapped class names, sorted alphabetically."""
        return sorted(self._classes)

    def __len__(self) -> int:
        """Number of mapped classes."""
        return len(self._classes)

    def __contains__(self, class_name: object) -> bool:
        return class_name in self._classes
