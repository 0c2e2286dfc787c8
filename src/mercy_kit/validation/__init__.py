"""Integration validation -- rule-table security scan and 100-point scoring."""

from mercy_kit.validation.report import format_json, format_report
from mercy_kit.validation.result import IntegrationValidationResult, RuleHit
from mercy_kit.validation.validator import (
    EXPORT_MARKER,
    LOAD_HOOK_MARKER,
    validate_integration,
)

__all__ = [
    "EXPORT_MARKER",
    "IntegrationValidationResult",
    "LOAD_HOOK_MARKER",
    "RuleHit",
    "format_json",
    "format_report",
    "validate_integration",
]
