"""Schema validator - validates every class of a model.

The SchemaValidator runs the ClassValidator over all descriptors supplied by
the metadata provider, aggregates a per-class error report, and delegates
the live schema comparison to an optional SchemaDiffer.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

from row_schema.core.config import ValidatorConfig
from row_schema.core.exceptions import SchemaSyncError
from row_schema.core.types import TypeRegistry
from row_schema.mapping.metadata import ClassDescriptor
from row_schema.mapping.protocol import MetadataProvider, SchemaDiffer
from row_schema.validation.class_validator import ClassValidator

logger = logging.getLogger(__name__)

ErrorReport = dict[str, list[str]]

EXIT_MAPPING_INVALID = 1
EXIT_SCHEMA_OUT_OF_SYNC = 2


@dataclass(frozen=True)
class ValidationSummary:
    """Outcome of a full validation run."""

    errors: ErrorReport = field(default_factory=dict)
    mapping_checked: bool = True
    in_sync: bool | None = None  # None when the sync check was skipped
    pending_changes: list[Any] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors and self.in_sync is not False

    @property
    def exit_code(self) -> int:
        """Bit 1: mapping has errors. Bit 2: schema out of sync."""
        code = 0
        if self.errors:
            code |= EXIT_MAPPING_INVALID
        if self.in_sync is False:
            code |= EXIT_SCHEMA_OUT_OF_SYNC
        return code


class SchemaValidator:
    """Validates the internal consistency of a mapping model.

    Args:
        provider: Source of all class descriptors.
        type_registry: Storage types known to the model. Defaults to the
            built-in types.
        differ: Compares the model with a live schema. Required only for
            the sync checks.
        config: Run options. Defaults to ValidatorConfig().
    """

    def __init__(
        self,
        provider: MetadataProvider,
        type_registry: TypeRegistry | None = None,
        differ: SchemaDiffer | None = None,
        config: ValidatorConfig | None = None,
    ) -> None:
        self._provider = provider
        self._differ = differ
        self._config = config or ValidatorConfig()
        self._class_validator = ClassValidator(
            provider,
            type_registry or TypeRegistry.with_builtin_types(),
            check_property_types=not self._config.skip_property_types,
        )

    @property
    def config(self) -> ValidatorConfig:
        return self._config

    def validate_class(self, descriptor: ClassDescriptor) -> list[str]:
        """Return the mapping errors of a single class."""
        return self._class_validator.validate(descriptor)

    def validate_mapping(self) -> ErrorReport:
        """Validate every class and report the ones with errors.

        Returns:
            Class name -> ordered error messages. Classes without errors
            are absent.

        Raises:
            ClassNotFoundError: If the metadata references a class the
                provider cannot resolve.
        """
        classes = self._provider.all_classes()
        logger.debug("Validating mapping of %d classes", len(classes))

        if self._config.max_workers > 1 and len(classes) > 1:
            with ThreadPoolExecutor(max_workers=self._config.max_workers) as pool:
                results = list(pool.map(self.validate_class, classes))
        else:
            results = [self.validate_class(descriptor) for descriptor in classes]

        report: ErrorReport = {
            descriptor.name: errors
            for descriptor, errors in zip(classes, results, strict=True)
            if errors
        }
        logger.info(
            "Mapping validation finished: %d classes, %d with errors", len(classes), len(report)
        )
        return report

    def pending_schema_changes(self) -> list[Any]:
        """Return the changes the live schema needs to match the mapping.

        Raises:
            SchemaSyncError: If no SchemaDiffer is configured.
        """
        if self._differ is None:
            raise SchemaSyncError("No schema differ configured, cannot compare with live schema")
        classes = self._provider.all_classes()
        logger.debug("Delegating schema diff of %d classes", len(classes))
        return list(self._differ.diff(classes))

    def is_in_sync_with_schema(self) -> bool:
        """True when the live schema needs no changes."""
        return len(self.pending_schema_changes()) == 0

    def validate(self) -> ValidationSummary:
        """Run the mapping and sync checks allowed by the config."""
        errors: ErrorReport = {}
        if not self._config.skip_mapping:
            errors = self.validate_mapping()

        if self._config.skip_sync:
            return ValidationSummary(errors=errors, mapping_checked=not self._config.skip_mapping)

        changes = self.pending_schema_changes()
        return ValidationSummary(
            errors=errors,
            mapping_checked=not self._config.skip_mapping,
            in_sync=not changes,
            pending_changes=changes,
        )
