"""Configuration validation for startup checks.

Validates that the values stamped into generated documents are present
and sane before the generator is wired up.

Usage:
    from appdoc.config.validation import validate_configuration

    # During startup
    errors = validate_configuration()
    if errors:
        for error in errors:
            logger.error(f"Configuration error: {error}")
        sys.exit(1)
"""

import logging
from dataclasses import dataclass
from enum import Enum

from appdoc.config.settings import EMAIL_PATTERN, Settings, get_settings
from appdoc.utils.exceptions import ConfigurationError

logger = logging.getLogger("appdoc.config")


class ValidationSeverity(str, Enum):
    """Severity of configuration validation issues."""

    ERROR = "error"  # Must be fixed, documents cannot be generated
    WARNING = "warning"  # Should be fixed, generation works but may surprise


@dataclass
class ValidationResult:
    """Result of a configuration validation check."""

    field: str
    severity: ValidationSeverity
    message: str
    suggestion: str | None = None

    def __str__(self) -> str:
        prefix = "ERROR" if self.severity == ValidationSeverity.ERROR else "WARNING"
        result = f"[{prefix}] {self.field}: {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result


def validate_configuration(settings: Settings | None = None) -> list[ValidationResult]:
    """Validate application configuration.

    Args:
        settings: Settings to validate (default: global settings)

    Returns:
        List of validation results (empty if all checks pass)
    """
    if settings is None:
        settings = get_settings()

    results: list[ValidationResult] = []

    results.extend(_validate_contact(settings))
    results.extend(_validate_tax_rate(settings))
    results.extend(_validate_templates(settings))

    return results


def validate_or_raise(settings: Settings | None = None) -> None:
    """Validate configuration and raise if errors found.

    Args:
        settings: Settings to validate

    Raises:
        ConfigurationError: If any validation errors are found
    """
    results = validate_configuration(settings)
    errors = [r for r in results if r.severity == ValidationSeverity.ERROR]

    if errors:
        error_messages = "\n".join(str(e) for e in errors)
        raise ConfigurationError(f"Configuration validation failed:\n{error_messages}")

    warnings = [r for r in results if r.severity == ValidationSeverity.WARNING]
    for warning in warnings:
        logger.warning(str(warning))


# =============================================================================
# Validators
# =============================================================================


def _validate_contact(settings: Settings) -> list[ValidationResult]:
    """Validate support contact and signature."""
    results: list[ValidationResult] = []

    if not settings.support_email:
        results.append(
            ValidationResult(
                field="SUPPORT_EMAIL",
                severity=ValidationSeverity.ERROR,
                message="Support email is not configured",
                suggestion="Set SUPPORT_EMAIL environment variable",
            )
        )
    elif not EMAIL_PATTERN.match(settings.support_email.strip()):
        results.append(
            ValidationResult(
                field="SUPPORT_EMAIL",
                severity=ValidationSeverity.ERROR,
                message=f"Support email is not a valid address: {settings.support_email}",
            )
        )

    if settings.signature is None or not settings.signature.strip():
        results.append(
            ValidationResult(
                field="SIGNATURE",
                severity=ValidationSeverity.ERROR,
                message="Signature is not configured",
                suggestion="Set SIGNATURE environment variable",
            )
        )

    return results


def _validate_tax_rate(settings: Settings) -> list[ValidationResult]:
    """Validate the tax rate applied to portfolio totals."""
    results: list[ValidationResult] = []
    tax_rate = settings.tax_rate

    if tax_rate is None:
        results.append(
            ValidationResult(
                field="TAX_RATE",
                severity=ValidationSeverity.ERROR,
                message="Tax rate is not configured",
                suggestion="Set TAX_RATE environment variable (e.g. 0.15)",
            )
        )
    elif not tax_rate.is_finite() or tax_rate < 0:
        results.append(
            ValidationResult(
                field="TAX_RATE",
                severity=ValidationSeverity.ERROR,
                message=f"Tax rate must be a finite, non-negative number: {tax_rate}",
            )
        )
    elif tax_rate > 1:
        results.append(
            ValidationResult(
                field="TAX_RATE",
                severity=ValidationSeverity.WARNING,
                message=f"Tax rate {tax_rate} is greater than 1",
                suggestion="Tax rate is a multiplier; 15% is written as 0.15",
            )
        )

    return results


def _validate_templates(settings: Settings) -> list[ValidationResult]:
    """Validate template location."""
    results: list[ValidationResult] = []

    if not settings.template_base_uri:
        results.append(
            ValidationResult(
                field="TEMPLATE_BASE_URI",
                severity=ValidationSeverity.WARNING,
                message="Template base URI is not configured",
                suggestion="Set TEMPLATE_BASE_URI; the bundled templates are used until then",
            )
        )

    return results
