"""Output formatters for validation results: console report and JSON."""

from __future__ import annotations

import json
from typing import Any

from mercy_kit.validation.result import IntegrationValidationResult
from mercy_kit.validation.scoring import COMPLEXITY_LIMIT


def format_report(result: IntegrationValidationResult) -> str:
    lines: list[str] = []

    lines.append("🔍 M.E.R.C.Y Integration Validator")
    lines.append("=" * 35)
    lines.append(f"📁 Validating: {result.directory}")
    lines.append("")

    # --- File structure ---
    lines.append("📋 File structure")
    for path, present in result.files.items():
        lines.append(f"  ✅ {path}" if present else f"  ❌ {path} (missing)")
    lines.append("")

    # --- Security analysis ---
    lines.append("🔒 Security analysis")
    if result.rule_hits:
        for hit in result.rule_hits:
            lines.append(f"  ⚠️  {hit.severity.value.upper()}: {hit.message} x{hit.count}")
    else:
        lines.append("  ✅ No security violations detected")
    if result.complexity is not None and result.complexity <= COMPLEXITY_LIMIT:
        lines.append(f"  ✅ Code complexity: {result.complexity} (acceptable)")
    for note in result.notes:
        lines.append(f"  ⚠️  {note}")
    lines.append("")

    # --- Findings ---
    lines.append("📊 Validation Results")
    lines.append("=" * 20)
    if result.errors:
        lines.append("")
        lines.append("❌ ERRORS:")
        lines.extend(f"  • {error}" for error in result.errors)
    if result.warnings:
        lines.append("")
        lines.append("⚠️  WARNINGS:")
        lines.extend(f"  • {warning}" for warning in result.warnings)

    lines.append("")
    lines.append(f"📈 Security Score: {result.score}/100")
    lines.append("")
    if result.is_valid:
        lines.append("🎉 Integration validation passed!")
        lines.append("✅ Ready for submission to M.E.R.C.Y marketplace")
    else:
        lines.append("❌ Integration validation failed")
        lines.append("Please fix all errors before submitting")

    return "\n".join(lines)


def result_to_dict(result: IntegrationValidationResult) -> dict[str, Any]:
    return {
        "directory": result.directory,
        "is_valid": result.is_valid,
        "score": result.score,
        "errors": list(result.errors),
        "warnings": list(result.warnings),
        "files": dict(result.files),
        "rule_hits": [
            {"severity": hit.severity.value, "message": hit.message, "count": hit.count}
            for hit in result.rule_hits
        ],
        "complexity": result.complexity,
    }


def format_json(result: IntegrationValidationResult) -> str:
    return json.dumps(result_to_dict(result), indent=2)
