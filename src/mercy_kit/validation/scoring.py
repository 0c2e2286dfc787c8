"""Penalty table, complexity heuristic and pass verdict for integration validation.

Every finding subtracts a fixed penalty from a score that starts at 100.
A security rule costs its severity penalty once no matter how often it
matches; dependency violations cost per offending package.
"""

from __future__ import annotations

import re

from mercy_kit.policy.models import Severity
from mercy_kit.validation.result import IntegrationValidationResult

PASS_THRESHOLD = 70
COMPLEXITY_LIMIT = 1000
MIN_README_LENGTH = 100

MISSING_FILE_PENALTY = 20

INVALID_METADATA_PENALTY = 25
MISSING_FIELD_PENALTY = 10
VERSION_FORMAT_PENALTY = 5
ID_FORMAT_PENALTY = 15
CATEGORY_PENALTY = 5

INVALID_MANIFEST_PENALTY = 20
MANIFEST_FIELD_PENALTY = 5
UNAUTHORIZED_DEPENDENCY_PENALTY = 15

UNREADABLE_SOURCE_PENALTY = 30
MISSING_EXPORT_PENALTY = 25
MISSING_LOAD_HOOK_PENALTY = 5
COMPLEXITY_PENALTY = 10

SHORT_README_PENALTY = 5
MISSING_TESTS_PENALTY = 5

SEVERITY_PENALTIES: dict[Severity, int] = {
    Severity.CRITICAL: 30,
    Severity.HIGH: 20,
    Severity.MEDIUM: 10,
}

# Severities that fail validation outright; anything else is a warning.
BLOCKING_SEVERITIES = frozenset({Severity.CRITICAL, Severity.HIGH})

_FUNCTION_KEYWORDS = re.compile(r"\b(?:def|lambda)\b")


def compute_complexity(content: str) -> int:
    """Line count plus two per ``def``/``lambda`` keyword."""
    lines = len(content.split("\n"))
    functions = len(_FUNCTION_KEYWORDS.findall(content))
    return lines + functions * 2


def finalize(result: IntegrationValidationResult) -> IntegrationValidationResult:
    """Set the verdict: no errors and a score of at least 70."""
    result.is_valid = not result.errors and result.score >= PASS_THRESHOLD
    return result
