"""Validation layer - check mapping metadata for consistency."""

from __future__ import annotations

from row_schema.validation.class_validator import ClassValidator
from row_schema.validation.property_types import PropertyTypeChecker
from row_schema.validation.validator import (
    ErrorReport,
    SchemaValidator,
    ValidationSummary,
)

__all__ = [
    "SchemaValidator",
    "ClassValidator",
    "PropertyTypeChecker",
    "ValidationSummary",
    "ErrorReport",
]
