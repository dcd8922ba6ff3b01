# src/dbpool/config_validator.py
"""
Connection Pool Configuration Review for dbpool.

The builder already rejects every invalid value, so a built
ConnectionPoolConfiguration is always usable. This module looks for
combinations that are legal but probably not what the caller meant, and
reports them the way a startup validation report would.

Key Checks:
- Warm-up count larger than the pool can hold
- Unusually large pools
- Blank validation queries
- Creation timeout that can never fire because the acquire timeout is shorter
- Disabled idle eviction and disabled acquire timeout (informational)
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .configuration import NO_TIMEOUT, ConnectionPoolConfiguration

logger = logging.getLogger(__name__)

LARGE_POOL_THRESHOLD = 100


# =============================================================================
# VALIDATION TYPES
# =============================================================================


class ValidationSeverity(str, Enum):
    """Severity levels for validation issues."""

    ERROR = "error"  # Configuration cannot be used
    WARNING = "warning"  # Configuration may not behave as intended
    INFO = "info"  # Informational notice


@dataclass
class ValidationIssue:
    """Represents a single validation issue."""

    severity: ValidationSeverity
    field: str
    message: str
    suggestion: Optional[str] = None

    def __str__(self) -> str:
        result = f"[{self.severity.value.upper()}] {self.field}: {self.message}"
        if self.suggestion:
            result += f"\n  → Suggestion: {self.suggestion}"
        return result


@dataclass
class ValidationResult:
    """Result of a configuration review."""

    valid: bool = True
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> List[ValidationIssue]:
        """Get only error-level issues."""
        return [i for i in self.issues if i.severity == ValidationSeverity.ERROR]

    @property
    def warnings(self) -> List[ValidationIssue]:
        """Get only warning-level issues."""
        return [i for i in self.issues if i.severity == ValidationSeverity.WARNING]

    @property
    def notices(self) -> List[ValidationIssue]:
        """Get only info-level issues."""
        return [i for i in self.issues if i.severity == ValidationSeverity.INFO]

    def add_issue(self, issue: ValidationIssue) -> None:
        """Add a validation issue."""
        self.issues.append(issue)
        if issue.severity == ValidationSeverity.ERROR:
            self.valid = False

    def format_report(self) -> str:
        """Format validation issues as a human-readable report."""
        if not self.issues:
            return "✓ Connection pool configuration is valid"

        lines = ["Connection Pool Configuration Report", "=" * 40]

        errors = self.errors
        if errors:
            lines.append(f"\n❌ {len(errors)} Error(s):")
            for issue in errors:
                lines.append(f"  • {issue}")

        warnings = self.warnings
        if warnings:
            lines.append(f"\n⚠ {len(warnings)} Warning(s):")
            for issue in warnings:
                lines.append(f"  • {issue}")

        notices = self.notices
        if notices:
            lines.append(f"\nℹ {len(notices)} Notice(s):")
            for issue in notices:
                lines.append(f"  • {issue}")

        return "\n".join(lines)


# =============================================================================
# MAIN VALIDATOR CLASS
# =============================================================================


class PoolConfigValidator:
    """
    Reviews a built connection pool configuration.

    Usage:
        validator = PoolConfigValidator()
        result = validator.validate(config)

        for issue in result.warnings:
            logger.warning(str(issue))
    """

    def __init__(self, strict: bool = False):
        """
        Initialize validator.

        Args:
            strict: If True, report warnings as errors
        """
        self.strict = strict

    def validate(self, config: ConnectionPoolConfiguration) -> ValidationResult:
        """
        Review a configuration.

        Args:
            config: Configuration produced by the builder

        Returns:
            ValidationResult listing every finding
        """
        result = ValidationResult()

        self._check_sizes(config, result)
        self._check_timeouts(config, result)
        self._check_validation_query(config, result)

        if self.strict:
            for issue in result.warnings:
                issue.severity = ValidationSeverity.ERROR
            result.valid = not result.errors

        if result.issues:
            logger.debug(result.format_report())
        return result

    def _warn(
        self,
        result: ValidationResult,
        field_name: str,
        message: str,
        suggestion: Optional[str] = None,
    ) -> None:
        result.add_issue(
            ValidationIssue(
                severity=ValidationSeverity.WARNING,
                field=field_name,
                message=message,
                suggestion=suggestion,
            )
        )

    def _check_sizes(self, config: ConnectionPoolConfiguration, result: ValidationResult) -> None:
        if config.initial_size > config.max_size:
            self._warn(
                result,
                "initial_size",
                f"initial_size ({config.initial_size}) exceeds max_size ({config.max_size}); "
                f"warm-up is capped at {config.max_size} connections",
                suggestion="Lower initial_size or raise max_size",
            )

        if config.max_size > LARGE_POOL_THRESHOLD:
            self._warn(
                result,
                "max_size",
                f"max_size ({config.max_size}) is above {LARGE_POOL_THRESHOLD}",
                suggestion="Check the database server's connection limit",
            )

    def _check_timeouts(self, config: ConnectionPoolConfiguration, result: ValidationResult) -> None:
        create_time = config.max_create_connection_time
        acquire_time = config.max_acquire_time

        if create_time > NO_TIMEOUT and acquire_time > NO_TIMEOUT and create_time > acquire_time:
            self._warn(
                result,
                "max_create_connection_time",
                f"max_create_connection_time ({create_time}) is longer than "
                f"max_acquire_time ({acquire_time}); the acquire timeout fires first",
                suggestion="Set max_create_connection_time below max_acquire_time",
            )

        if config.max_idle_time == NO_TIMEOUT:
            result.add_issue(
                ValidationIssue(
                    severity=ValidationSeverity.INFO,
                    field="max_idle_time",
                    message="Idle eviction is disabled; idle connections are kept indefinitely",
                )
            )

        if acquire_time == NO_TIMEOUT:
            result.add_issue(
                ValidationIssue(
                    severity=ValidationSeverity.INFO,
                    field="max_acquire_time",
                    message="Acquire timeout is disabled; acquire may wait indefinitely",
                    suggestion="Set max_acquire_time to bound waits on an exhausted pool",
                )
            )

    def _check_validation_query(
        self, config: ConnectionPoolConfiguration, result: ValidationResult
    ) -> None:
        query = config.validation_query
        if query is not None and not query.strip():
            self._warn(
                result,
                "validation_query",
                "validation_query is blank",
                suggestion="Use a cheap statement such as 'SELECT 1'",
            )


# =============================================================================
# CONVENIENCE FUNCTION
# =============================================================================


def validate_pool_configuration(
    config: ConnectionPoolConfiguration, strict: bool = False
) -> ValidationResult:
    """
    Review a connection pool configuration.

    Args:
        config: Configuration produced by the builder
        strict: If True, report warnings as errors

    Returns:
        ValidationResult with the findings
    """
    validator = PoolConfigValidator(strict=strict)
    return validator.validate(config)


__all__ = [
    "ValidationSeverity",
    "ValidationIssue",
    "ValidationResult",
    "PoolConfigValidator",
    "validate_pool_configuration",
    "LARGE_POOL_THRESHOLD",
]
