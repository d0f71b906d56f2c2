"""Property type introspection.

Reads attribute annotations from mapped Python classes (dataclasses,
Pydantic models, or plain annotated classes) and reduces them to the native
type names the storage type table speaks: ``string``, ``int``, ``float``,
``bool``, ``array``, ``null``, ``true``, ``false``, ``mixed``, or the
qualified name of any other class.
"""

from __future__ import annotations

import inspect
import logging
import sys
import types
import typing
from enum import Enum
from functools import lru_cache
from typing import Any, Literal, Union

logger = logging.getLogger(__name__)

_SCALAR_NAMES: dict[Any, str] = {
    str: "string",
    int: "int",
    float: "float",
    bool: "bool",
    type(None): "null",
}

_ARRAY_TYPES = (list, dict, tuple, set, frozenset)


def qualified_name(tp: type | str) -> str:
    """Return the dotted module path of a class, or the string unchanged."""
    if isinstance(tp, str):
        return tp
    return f"{tp.__module__}.{tp.__qualname__}"


def native_type_name(annotation: Any) -> str | None:
    """Reduce an annotation to a single native type name.

    Returns None when the annotation does not name exactly one type, e.g.
    ``int | str`` or an unresolved forward reference. ``Optional[X]`` is
    treated as ``X``.
    """
    if annotation is Any:
        return "mixed"
    if annotation is None:
        return "null"
    if annotation in _SCALAR_NAMES:
        return _SCALAR_NAMES[annotation]
    if annotation in _ARRAY_TYPES:
        return "array"

    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)

    if origin is Union or origin is types.UnionType:
        members = [arg for arg in args if arg is not type(None)]
        if len(members) != 1:
            return None
        return native_type_name(members[0])
    if origin is typing.Annotated:
        return native_type_name(args[0])
    if origin is Literal:
        # Literal[1] == Literal[True] by value, compare by identity
        if len(args) == 1 and args[0] is True:
            return "true"
        if len(args) == 1 and args[0] is False:
            return "false"
        return None
    if origin in _ARRAY_TYPES:
        return "array"

    if isinstance(annotation, type):
        return qualified_name(annotation)
    return None


def resolve_class(annotation: Any) -> type | None:
    """Return the single class an annotation names, unwrapping ``Optional``."""
    origin = typing.get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        members = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        return resolve_class(members[0]) if len(members) == 1 else None
    if origin is typing.Annotated:
        return resolve_class(typing.get_args(annotation)[0])
    return annotation if isinstance(annotation, type) else None


def enum_backing_type(tp: Any) -> str | None:
    """Return the backing scalar name of a backed enum, or None.

    ``class Suit(str, Enum)`` and ``StrEnum`` are backed by ``string``,
    ``IntEnum`` and ``class Level(int, Enum)`` by ``int``. Plain enums have
    no backing type.
    """
    if not isinstance(tp, type) or not issubclass(tp, Enum):
        return None
    if issubclass(tp, str):
        return "string"
    if issubclass(tp, int):
        return "int"
    return None


def _evaluate(annotation: Any, globalns: dict[str, Any], localns: dict[str, Any]) -> Any:
    if not isinstance(annotation, str):
        return annotation
    return eval(annotation, globalns, localns)  # noqa: S307


@lru_cache(maxsize=256)
def _annotations_of(cls: type) -> dict[str, Any]:
    # Pydantic model
    if hasattr(cls, "model_fields"):
        return {name: info.annotation for name, info in cls.model_fields.items()}

    # Dataclass or plain annotated class, base classes first so subclasses win.
    # Each annotation resolves on its own: an unresolvable one (e.g. a name
    # imported under TYPE_CHECKING) drops only that attribute.
    hints: dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        module = sys.modules.get(klass.__module__)
        globalns = dict(vars(module)) if module is not None else {}
        localns = dict(vars(klass))
        for name, annotation in inspect.get_annotations(klass).items():
            try:
                hints[name] = _evaluate(annotation, globalns, localns)
            except (NameError, AttributeError, TypeError, SyntaxError):
                logger.debug("Cannot resolve annotation of %s.%s", klass.__qualname__, name)
                hints.pop(name, None)
    return hints


def property_annotation(entity_class: type | None, field_name: str) -> Any:
    """Return the annotation of an attribute, or None when it has none."""
    if entity_class is None:
        return None
    return _annotations_of(entity_class).get(field_name)
