"""Integration validator -- structural, schema, dependency and security checks.

Phases run in a fixed order and each appends to the same result:
  - Required files exist
  - Metadata (mercy-integration.json) parses and carries the required fields
  - Manifest (manifest.json) parses and declares only allow-listed dependencies
  - Source (src/integration.py) is free of forbidden API patterns and exports
    its class
  - README length and test directory (advisory only)

A phase whose file was reported missing is skipped; read and parse failures
inside a phase become result entries instead of exceptions.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

from mercy_kit.models import (
    MANIFEST_FILE,
    METADATA_FILE,
    README_FILE,
    SOURCE_FILE,
    TEST_DIR,
)
from mercy_kit.policy.loader import load_builtin_policy
from mercy_kit.policy.models import ValidationPolicy
from mercy_kit.validation import scoring
from mercy_kit.validation.result import IntegrationValidationResult, RuleHit

logger = logging.getLogger(__name__)

EXPORT_MARKER = "__integration__ = "
LOAD_HOOK_MARKER = "async def on_load("

_VERSION_RE = re.compile(r"\d+\.\d+\.\d+", re.ASCII)
_ID_RE = re.compile(r"[a-z0-9_-]+")


def _is_blank(value: Any) -> bool:
    """Missing-field test: None, False, 0 and "" are blank; empty containers are not."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)):
        return value == 0
    return False


def _read_json_object(path: Path) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError("root must be a JSON object")
    return data


def check_required_files(
    root: Path, policy: ValidationPolicy, result: IntegrationValidationResult
) -> None:
    for rel_path in policy.required_files:
        present = (root / rel_path).exists()
        result.files[rel_path] = present
        if not present:
            result.add_error(
                f"Missing required file: {rel_path}", scoring.MISSING_FILE_PENALTY
            )


def check_metadata(
    root: Path, policy: ValidationPolicy, result: IntegrationValidationResult
) -> None:
    try:
        config = _read_json_object(root / METADATA_FILE)
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        result.add_error(
            f"Invalid {METADATA_FILE}: {exc}", scoring.INVALID_METADATA_PENALTY
        )
        return

    for field_name in policy.required_metadata_fields:
        if _is_blank(config.get(field_name)):
            result.add_error(
                f"Missing required config field: {field_name}",
                scoring.MISSING_FIELD_PENALTY,
            )

    version = config.get("version")
    if not _is_blank(version) and not _VERSION_RE.fullmatch(str(version)):
        result.add_warning(
            "Invalid version format, use semantic versioning (x.y.z)",
            scoring.VERSION_FORMAT_PENALTY,
        )

    integration_id = config.get("id")
    if not _is_blank(integration_id) and not _ID_RE.fullmatch(str(integration_id)):
        result.add_error(
            "Invalid ID format, use lowercase letters, numbers, hyphens, "
            "and underscores only",
            scoring.ID_FORMAT_PENALTY,
        )

    category = config.get("category")
    if not _is_blank(category) and category not in policy.categories:
        result.add_warning(
            f"Invalid category: {category}. Use one of: {', '.join(policy.categories)}",
            scoring.CATEGORY_PENALTY,
        )


def check_manifest(
    root: Path, policy: ValidationPolicy, result: IntegrationValidationResult
) -> None:
    try:
        manifest = _read_json_object(root / MANIFEST_FILE)
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        result.add_error(
            f"Invalid {MANIFEST_FILE}: {exc}", scoring.INVALID_MANIFEST_PENALTY
        )
        return

    if _is_blank(manifest.get("name")):
        result.add_warning("Missing package name", scoring.MANIFEST_FIELD_PENALTY)
    if _is_blank(manifest.get("version")):
        result.add_warning("Missing package version", scoring.MANIFEST_FIELD_PENALTY)
    if manifest.get("type") != policy.module_type:
        result.add_warning(
            f'Package should declare type "{policy.module_type}"',
            scoring.MANIFEST_FIELD_PENALTY,
        )

    dependencies = manifest.get("dependencies")
    if _is_blank(dependencies):
        return
    if not isinstance(dependencies, dict):
        result.add_error(
            "Unauthorized dependency declaration: dependencies must map "
            "package names to versions",
            scoring.UNAUTHORIZED_DEPENDENCY_PENALTY,
        )
        return
    for dep in dependencies:
        if dep not in policy.allowed_dependencies:
            result.add_error(
                f"Unauthorized dependency: {dep}",
                scoring.UNAUTHORIZED_DEPENDENCY_PENALTY,
            )


def scan_source(
    root: Path, policy: ValidationPolicy, result: IntegrationValidationResult
) -> None:
    try:
        content = (root / SOURCE_FILE).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        result.add_error(
            f"Cannot read integration code: {exc}", scoring.UNREADABLE_SOURCE_PENALTY
        )
        return

    for rule in policy.rules:
        count = rule.count_matches(content)
        if not count:
            continue
        result.rule_hits.append(RuleHit(rule.severity, rule.message, count))
        label = rule.severity.value.upper()
        message = f"{label}: {rule.message} ({count} instances)"
        penalty = scoring.SEVERITY_PENALTIES[rule.severity]
        if rule.severity in scoring.BLOCKING_SEVERITIES:
            result.add_error(message, penalty)
        else:
            result.add_warning(message, penalty)

    if EXPORT_MARKER not in content:
        result.add_error(
            "Integration must export its class via __integration__",
            scoring.MISSING_EXPORT_PENALTY,
        )
    if LOAD_HOOK_MARKER not in content:
        result.add_warning(
            "Integration should implement on_load() method",
            scoring.MISSING_LOAD_HOOK_PENALTY,
        )

    complexity = scoring.compute_complexity(content)
    result.complexity = complexity
    if complexity > scoring.COMPLEXITY_LIMIT:
        result.add_warning(
            f"High code complexity: {complexity} (consider simplifying)",
            scoring.COMPLEXITY_PENALTY,
        )


def check_auxiliary(root: Path, result: IntegrationValidationResult) -> None:
    try:
        readme = (root / README_FILE).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        result.notes.append(f"{README_FILE} missing or unreadable")
    else:
        if len(readme) < scoring.MIN_README_LENGTH:
            result.add_warning(
                f"{README_FILE} is very short, consider adding more documentation",
                scoring.SHORT_README_PENALTY,
            )

    if not (root / TEST_DIR).exists():
        result.add_warning(
            "No test directory found, consider adding tests",
            scoring.MISSING_TESTS_PENALTY,
        )


def validate_integration(
    directory: str | Path = ".", policy: ValidationPolicy | None = None
) -> IntegrationValidationResult:
    """Validate the integration project rooted at *directory*.

    Returns the finalised result; never raises for problems in the project
    itself.
    """
    root = Path(directory).resolve()
    policy = policy or load_builtin_policy()
    result = IntegrationValidationResult(directory=root.name)

    check_required_files(root, policy, result)
    if not result.missing(METADATA_FILE):
        check_metadata(root, policy, result)
    if not result.missing(MANIFEST_FILE):
        check_manifest(root, policy, result)
    if not result.missing(SOURCE_FILE):
        scan_source(root, policy, result)
    check_auxiliary(root, result)

    scoring.finalize(result)
    logger.info(
        "Validated %s: score=%d errors=%d warnings=%d valid=%s",
        root,
        result.score,
        len(result.errors),
        len(result.warnings),
        result.is_valid,
    )
    return result
