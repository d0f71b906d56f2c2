"""Validator configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ValidatorConfig(BaseModel):
    """Configuration for a SchemaValidator run.

    Args:
        skip_mapping: Skip the mapping consistency checks.
        skip_property_types: Skip the property/storage type cross-check.
        skip_sync: Skip the live schema sync check.
        max_workers: Number of threads used to validate classes. 1 validates
            sequentially.
    """

    skip_mapping: bool = False
    skip_property_types: bool = False
    skip_sync: bool = False
    max_workers: int = Field(default=1, ge=1)
